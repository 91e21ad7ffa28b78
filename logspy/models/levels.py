"""Log severity levels and event identifiers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Any


class LogLevel(IntEnum):
    """Ordered log severity. ``NONE`` disables a category entirely."""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARNING = 3
    ERROR = 4
    CRITICAL = 5
    NONE = 6

    @classmethod
    def parse(cls, value: Any) -> LogLevel:
        """Parse a level from a member, an int, or a case-insensitive name.

        Raises:
            ValueError: If the value does not name a level
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        if isinstance(value, str):
            key = value.strip().upper()
            key = _LEVEL_ALIASES.get(key, key)
            try:
                return cls[key]
            except KeyError:
                pass
        raise ValueError(f"Invalid log level: {value!r}")

    @classmethod
    def from_stdlib(cls, levelno: int) -> LogLevel:
        """Map a :mod:`logging` numeric level onto the nearest LogLevel."""
        if levelno >= logging.CRITICAL:
            return cls.CRITICAL
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARNING
        if levelno >= logging.INFO:
            return cls.INFO
        if levelno >= logging.DEBUG:
            return cls.DEBUG
        return cls.TRACE

    def __str__(self) -> str:
        return self.name


_LEVEL_ALIASES = {
    "INFORMATION": "INFO",
    "WARN": "WARNING",
    "FATAL": "CRITICAL",
    "VERBOSE": "TRACE",
}


@dataclass(frozen=True, slots=True)
class EventId:
    """Numeric event identifier with an optional name."""

    id: int = 0
    name: str | None = None

    def __str__(self) -> str:
        return self.name or str(self.id)
