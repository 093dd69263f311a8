from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union
import importlib
import traceback
from ..config import RunConfig
from ..logging import setup_logging
from ..tree import Body, Case, Group, GroupKind, Hook, HookKind

class SuiteLoadError(LookupError):
    """A suite module could not be imported or has no usable ``discover()``."""

class Status(str, Enum):
    PASSING = "passing"
    FAILING = "failing"
    PENDING = "pending"
    SKIPPED = "skipped"

def _type_identity(exc_type: type) -> str:
    if exc_type.__module__ in ("builtins", "__main__"):
        return exc_type.__qualname__
    return f"{exc_type.__module__}.{exc_type.__qualname__}"

@dataclass(frozen=True)
class CapturedError:
    type_name: str
    message: Optional[str] = None
    traceback: Tuple[str, ...] = ()

    @classmethod
    def from_exception(cls, exc: BaseException) -> "CapturedError":
        # str() of a TracebackException never raises, even when str(exc) does
        te = traceback.TracebackException.from_exception(exc)
        lines = []
        for chunk in te.stack.format():
            lines.extend(chunk.rstrip("\n").splitlines())
        return cls(
            type_name=_type_identity(type(exc)),
            message=str(te) or None,
            traceback=tuple(lines),
        )

    def __str__(self) -> str:
        return f"{self.type_name}: {self.message}" if self.message else self.type_name

@dataclass(frozen=True)
class Outcome:
    status: Status
    error: Optional[CapturedError] = None

    @property
    def failed(self) -> bool: return self.status is Status.FAILING

@dataclass(frozen=True)
class FailureRecord:
    number: int
    path: Tuple[str, ...]
    label: str
    error: CapturedError

    @property
    def full_title(self) -> str:
        return " ".join(self.path + (self.label,))

@dataclass
class RunTotals:
    passing: int = 0
    failing: int = 0
    pending: int = 0

    def record(self, outcome: Outcome) -> None:
        # failing is counted per FailureRecord, not per case
        if outcome.status is Status.PASSING:
            self.passing += 1
        elif outcome.status in (Status.PENDING, Status.SKIPPED):
            self.pending += 1

@dataclass(frozen=True)
class RunSummary:
    totals: RunTotals
    failures: Tuple[FailureRecord, ...]
    @property
    def ok(self) -> bool: return not self.failures

# Result Stream events, emitted synchronously in traversal order.

@dataclass(frozen=True)
class RunStarted:
    pass

@dataclass(frozen=True)
class GroupEntered:
    name: str
    kind: GroupKind
    depth: int
    title: str

@dataclass(frozen=True)
class HookFailed:
    record: FailureRecord
    depth: int

@dataclass(frozen=True)
class CaseConcluded:
    name: str
    path: Tuple[str, ...]
    depth: int
    outcome: Outcome
    number: Optional[int] = None

@dataclass(frozen=True)
class RunFinished:
    totals: RunTotals
    failures: Tuple[FailureRecord, ...]

Event = Union[RunStarted, GroupEntered, HookFailed, CaseConcluded, RunFinished]

class Reporter:
    def emit(self, event: Event) -> None:
        raise NotImplementedError

@dataclass
class _Frame:
    group: Group
    depth: int
    path: Tuple[str, ...]
    entered: bool = False

@dataclass
class _RunState:
    reporter: Reporter
    totals: RunTotals = field(default_factory=RunTotals)
    failures: List[FailureRecord] = field(default_factory=list)
    spent_hooks: set = field(default_factory=set)

HookChain = Tuple[Tuple[Hook, Tuple[str, ...]], ...]

def _invoke(body: Body) -> Outcome:
    try:
        body()
    except Exception as e:
        return Outcome(Status.FAILING, CapturedError.from_exception(e))
    return Outcome(Status.PASSING)

class TestRunner:
    """Depth-first execution engine.

    Every case reachable from the root produces exactly one outcome. Errors
    raised by case or hook bodies are captured as failure records and never
    abort traversal. No state survives between calls to :meth:`run`.
    """
    __test__ = False

    def __init__(self, cfg: Optional[RunConfig] = None):
        self.cfg = cfg or RunConfig()
        self.log = setup_logging(self.cfg.log_level)

    def _load_suite_module(self, suite: str):
        name = suite if "." in suite else f"describekit.testsuites.{suite}"
        try:
            return importlib.import_module(name)
        except ModuleNotFoundError as e:
            raise SuiteLoadError(f"cannot import suite {suite!r}: {e}") from e

    def discover(self, suite: str) -> Group:
        mod = self._load_suite_module(suite)
        discover = getattr(mod, "discover", None)
        if not callable(discover):
            raise SuiteLoadError(f"suite {suite!r} has no discover() function")
        root = discover()
        if not isinstance(root, Group):
            raise SuiteLoadError(f"discover() in {suite!r} returned {type(root).__name__}, not Group")
        return root

    def run(self, root: Group, reporter: Reporter) -> RunSummary:
        state = _RunState(reporter)
        reporter.emit(RunStarted())
        self._run_group([_Frame(root, 0, ())], (), (), state, blocked=False)
        summary = RunSummary(totals=state.totals, failures=tuple(state.failures))
        self.log.debug("Run finished: %s", summary.totals)
        reporter.emit(RunFinished(totals=summary.totals, failures=summary.failures))
        return summary

    def _run_group(self, frames: List[_Frame], befores: HookChain, afters: HookChain,
                   state: _RunState, blocked: bool) -> None:
        frame = frames[-1]
        group = frame.group
        if not group.has_cases():
            self.log.debug("Group %r has no cases, nothing to run", group.name)
            return

        # before/after-all hooks of a group blocked by an ancestor never run
        owns_hooks = not blocked
        if owns_hooks:
            for hook in group.hooks_of(HookKind.BEFORE_ALL):
                outcome = _invoke(hook.body)
                if outcome.failed:
                    self._enter(frames, state)
                    self._hook_failed(hook, frame.path, outcome.error, frame.depth, state)
                    blocked = True
                    break

        befores = befores + tuple((h, frame.path) for h in group.hooks_of(HookKind.BEFORE_EACH))
        afters = tuple((h, frame.path) for h in group.hooks_of(HookKind.AFTER_EACH)) + afters
        for child in group.children:
            if isinstance(child, Case):
                self._run_case(child, frames, befores, afters, state, blocked)
            else:
                child_frame = _Frame(child, frame.depth + 1, frame.path + (child.title,))
                self._run_group(frames + [child_frame], befores, afters, state, blocked)

        if owns_hooks:
            self._run_after_hooks(
                tuple((h, frame.path) for h in group.hooks_of(HookKind.AFTER_ALL)),
                frame.depth, state)

    def _run_case(self, case: Case, frames: List[_Frame], befores: HookChain, afters: HookChain,
                  state: _RunState, blocked: bool) -> None:
        parent = frames[-1]
        self._enter(frames, state)
        if blocked or case.skipped or case.is_pending:
            status = Status.SKIPPED if case.skipped else Status.PENDING
            self._conclude(case, parent, Outcome(status), state)
            return

        if self._run_before_each(befores, parent.depth, state):
            outcome = _invoke(case.body)
        else:
            outcome = Outcome(Status.PENDING)
        self._conclude(case, parent, outcome, state)
        self._run_after_hooks(afters, parent.depth, state)

    def _run_before_each(self, befores: HookChain, depth: int, state: _RunState) -> bool:
        """Run the before-each chain; False when a hook failed and the case must not run."""
        for hook, path in befores:
            if (id(hook), path) in state.spent_hooks:
                return False
            outcome = _invoke(hook.body)
            if outcome.failed:
                self._hook_failed(hook, path, outcome.error, depth, state)
                if self.cfg.before_each_failure == "once":
                    state.spent_hooks.add((id(hook), path))
                return False
        return True

    def _run_after_hooks(self, hooks: HookChain, depth: int, state: _RunState) -> None:
        for hook, path in hooks:
            outcome = _invoke(hook.body)
            if outcome.failed:
                self._hook_failed(hook, path, outcome.error, depth, state)

    def _enter(self, frames: List[_Frame], state: _RunState) -> None:
        # the root frame is an anonymous container and is never announced
        for frame in frames[1:]:
            if not frame.entered:
                frame.entered = True
                state.reporter.emit(GroupEntered(frame.group.name, frame.group.kind, frame.depth, frame.group.title))

    def _record(self, path: Tuple[str, ...], label: str, error: CapturedError,
                state: _RunState) -> FailureRecord:
        record = FailureRecord(len(state.failures) + 1, path, label, error)
        state.failures.append(record)
        state.totals.failing += 1
        self.log.info("Failure %d: %s (%s)", record.number, record.full_title, error)
        return record

    def _hook_failed(self, hook: Hook, path: Tuple[str, ...], error: CapturedError,
                     depth: int, state: _RunState) -> None:
        record = self._record(path, hook.label, error, state)
        state.reporter.emit(HookFailed(record=record, depth=depth))

    def _conclude(self, case: Case, parent: _Frame, outcome: Outcome, state: _RunState) -> None:
        number = None
        if outcome.failed:
            number = self._record(parent.path, case.name, outcome.error, state).number
        state.totals.record(outcome)
        self.log.debug("%s %s", outcome.status.value, " ".join(parent.path + (case.name,)))
        state.reporter.emit(CaseConcluded(case.name, parent.path, parent.depth, outcome, number))

def run(tree: Group, reporter: Reporter, cfg: Optional[RunConfig] = None) -> RunSummary:
    """Run every case under ``tree``, reporting to ``reporter``; returns once the recap is written."""
    return TestRunner(cfg).run(tree, reporter)
