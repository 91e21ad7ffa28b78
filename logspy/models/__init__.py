"""Value objects for captured log output."""

from .levels import EventId, LogLevel
from .log_entry import LogEntry, render_exception
from .properties import EMPTY_PROPERTIES, PropertyMap


__all__ = [
    "EventId",
    "LogLevel",
    "LogEntry",
    "PropertyMap",
    "EMPTY_PROPERTIES",
    "render_exception",
]
