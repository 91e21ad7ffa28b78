"""Formatter interface for rendering entries to sink text."""

from typing import Protocol, runtime_checkable

from logspy.models.log_entry import LogEntry


@runtime_checkable
class LogFormatter(Protocol):
    """Pure renderer from a log entry to text."""

    def format(self, entry: LogEntry) -> str:
        """Render ``entry``; must not raise for well-formed entries."""
        ...
