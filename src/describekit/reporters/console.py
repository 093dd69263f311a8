import sys
from typing import Optional, TextIO
from ..runners.runner import (CaseConcluded, Event, FailureRecord, GroupEntered,
                              HookFailed, Reporter, RunFinished, RunStarted, RunTotals, Status)

PASS_MARK = "✓"
PENDING_MARK = "-"
ERROR_INDENT = " " * 5

class ConsoleReporter(Reporter):
    """Renders the result stream as an indented tree, then totals and a failure recap."""

    def __init__(self, stream: Optional[TextIO] = None, show_traceback: bool = False):
        self.stream = stream if stream is not None else sys.stdout
        self.show_traceback = show_traceback

    def _line(self, text: str = "") -> None:
        print(text, file=self.stream)

    def emit(self, event: Event) -> None:
        if isinstance(event, RunStarted):
            self._line(); self._line()
        elif isinstance(event, GroupEntered):
            self._line("  " * event.depth + event.title)
        elif isinstance(event, HookFailed):
            self._line("  " * (event.depth + 1) + f"{event.record.number}) {event.record.label}")
        elif isinstance(event, CaseConcluded):
            self._line("  " * (event.depth + 1) + self._case_text(event))
        elif isinstance(event, RunFinished):
            self._summary(event.totals)
            self._recap(event.failures)
        self.stream.flush()

    def _case_text(self, event: CaseConcluded) -> str:
        status = event.outcome.status
        if status is Status.PASSING:
            return f"{PASS_MARK} {event.name}"
        if status is Status.FAILING:
            return f"{event.number}) {event.name}"
        return f"{PENDING_MARK} {event.name}"

    def _summary(self, totals: RunTotals) -> None:
        self._line(); self._line()
        self._line(f"  {totals.passing} passing")
        if totals.failing:
            self._line(f"  {totals.failing} failing")
        if totals.pending:
            self._line(f"  {totals.pending} pending")

    def _recap(self, failures) -> None:
        if not failures:
            return
        self._line()
        for record in sorted(failures, key=lambda r: r.number):
            self._failure(record)

    def _failure(self, record: FailureRecord) -> None:
        self._line(f"  {record.number}) {record.full_title}:")
        for text in str(record.error).splitlines():
            self._line(ERROR_INDENT + text)
        if self.show_traceback:
            for text in record.error.traceback:
                self._line(ERROR_INDENT + text)

