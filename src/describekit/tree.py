from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, Optional, Tuple, Union

Body = Callable[[], None]

class GroupKind(str, Enum):
    DESCRIBE = "describe"
    WHEN = "when"

class HookKind(str, Enum):
    BEFORE_ALL = "before"
    AFTER_ALL = "after"
    BEFORE_EACH = "beforeEach"
    AFTER_EACH = "afterEach"

@dataclass(frozen=True)
class Hook:
    kind: HookKind
    body: Body
    name: Optional[str] = None

    @property
    def label(self) -> str:
        label = f'"{self.kind.value}" hook'
        return f'{label} "{self.name}"' if self.name else label

@dataclass(frozen=True)
class Case:
    name: str
    body: Optional[Body] = None
    skipped: bool = False

    @property
    def is_pending(self) -> bool:
        return self.body is None

@dataclass(frozen=True)
class Group:
    """A named container of child groups and cases plus the hooks scoped to them.

    The group passed to a run is the root: its name is never rendered and
    its children sit at depth 1.
    """
    name: str
    kind: GroupKind = GroupKind.DESCRIBE
    children: Tuple[Union["Group", Case], ...] = ()
    hooks: Tuple[Hook, ...] = ()

    @property
    def title(self) -> str:
        if self.kind is GroupKind.WHEN:
            return f"when {self.name}"
        return self.name

    def hooks_of(self, kind: HookKind) -> Tuple[Hook, ...]:
        return tuple(h for h in self.hooks if h.kind is kind)

    def has_cases(self) -> bool:
        return any(isinstance(c, Case) or c.has_cases() for c in self.children)

    def iter_cases(self, path: Tuple[str, ...] = ()) -> Iterator[Tuple[Tuple[str, ...], Case]]:
        """Yield ``(title path, case)`` pairs depth-first, left to right."""
        for child in self.children:
            if isinstance(child, Case):
                yield path, child
            else:
                yield from child.iter_cases(path + (child.title,))
