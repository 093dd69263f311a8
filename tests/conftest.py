import io
import pytest

from describekit.config import RunConfig
from describekit.reporters.console import ConsoleReporter
from describekit.runners.runner import Reporter, TestRunner
from describekit.tree import Group, GroupKind


class RecordingReporter(Reporter):
    """Keeps every emitted event in order."""

    def __init__(self):
        self.events = []

    def emit(self, event):
        self.events.append(event)

    def of(self, event_type):
        return [e for e in self.events if isinstance(e, event_type)]


def describe_when(*children, hooks=(), outer_hooks=()):
    """Root -> describe "describe" -> when "when" -> children."""
    inner = Group("when", GroupKind.WHEN, children=tuple(children), hooks=tuple(hooks))
    outer = Group("describe", children=(inner,), hooks=tuple(outer_hooks))
    return Group("", children=(outer,))


def expected(*lines):
    return "\n".join(lines) + "\n"


@pytest.fixture
def recorder():
    return RecordingReporter()


@pytest.fixture
def render():
    """Run a tree through the console reporter and return the transcript."""
    def _render(root, cfg=None):
        stream = io.StringIO()
        cfg = cfg or RunConfig()
        TestRunner(cfg).run(root, ConsoleReporter(stream, show_traceback=cfg.show_traceback))
        return stream.getvalue()
    return _render
