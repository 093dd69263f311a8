# Lightweight package init: avoid eager imports that can fail at console start.
__all__ = ["run", "TestRunner", "ConsoleReporter", "Group", "GroupKind", "Case", "Hook", "HookKind"]

def __getattr__(name):
    if name in ("run", "TestRunner"):
        from .runners import runner as _runner
        return getattr(_runner, name)
    if name == "ConsoleReporter":
        from .reporters.console import ConsoleReporter as _ConsoleReporter
        return _ConsoleReporter
    if name in ("Group", "GroupKind", "Case", "Hook", "HookKind"):
        from . import tree as _tree
        return getattr(_tree, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
