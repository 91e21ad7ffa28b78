"""Rule interface evaluated against every captured entry."""

from typing import Protocol, runtime_checkable

from logspy.models.log_entry import LogEntry


@runtime_checkable
class LogRule(Protocol):
    """Predicate over a log entry plus the message reported when it fires."""

    def is_violated_by(self, entry: LogEntry) -> bool:
        """Return True when ``entry`` breaks this rule."""
        ...

    @property
    def violation_message(self) -> str:
        """Human-readable description of the violation."""
        ...
