"""Query helpers for assertions over captured entries."""

from __future__ import annotations

from datetime import datetime, timedelta

from logspy.models.levels import LogLevel
from logspy.models.log_entry import LogEntry

from .service import LogCaptureService


def get_by_level(capture: LogCaptureService, level: LogLevel) -> list[LogEntry]:
    level = LogLevel.parse(level)
    return [entry for entry in capture.entries if entry.level == level]


def get_by_message_contains(
    capture: LogCaptureService,
    substring: str,
    case_sensitive: bool = False,
) -> list[LogEntry]:
    """Entries whose message contains ``substring`` (case-insensitive by default)."""
    if case_sensitive:
        return [entry for entry in capture.entries if substring in entry.message]
    needle = substring.casefold()
    return [entry for entry in capture.entries if needle in entry.message.casefold()]


def get_by_category(capture: LogCaptureService, category: str) -> list[LogEntry]:
    """Entries whose category equals ``category``, ignoring case."""
    wanted = category.casefold()
    return [entry for entry in capture.entries if entry.category.casefold() == wanted]


def get_by_timestamp_range(
    capture: LogCaptureService, start: datetime, end: datetime
) -> list[LogEntry]:
    """Entries captured between ``start`` and ``end``, both inclusive."""
    return [entry for entry in capture.entries if start <= entry.timestamp <= end]


def has_error_within(
    capture: LogCaptureService, window: timedelta, reference_time: datetime
) -> bool:
    """Whether an ERROR entry was captured no later than ``reference_time + window``."""
    cutoff = reference_time + window
    return any(
        entry.level == LogLevel.ERROR and entry.timestamp <= cutoff
        for entry in capture.entries
    )
