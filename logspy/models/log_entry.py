"""Immutable captured log record."""

from __future__ import annotations

import traceback
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from .levels import EventId, LogLevel
from .properties import EMPTY_PROPERTIES, PropertyMap


@dataclass(frozen=True, slots=True)
class LogEntry:
    """
    One captured log record.

    Built exactly once per enabled log call and never mutated afterwards, so
    sinks, rules and assertions may share it freely across threads.
    """

    level: LogLevel
    message: str
    category: str
    event_id: EventId = field(default_factory=EventId)
    exception: BaseException | None = None
    scopes: tuple[str, ...] = ()
    properties: PropertyMap = field(default_factory=lambda: EMPTY_PROPERTIES)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    correlation_id: str = ""
    thread_id: int = 0
    task_id: int | None = None
    trace_id: str | None = None
    span_id: str | None = None

    @property
    def has_exception(self) -> bool:
        return self.exception is not None

    def format_exception(self) -> str | None:
        """Render the attached exception with its traceback, if any."""
        if self.exception is None:
            return None
        return render_exception(self.exception)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dict carrying every field."""
        exception: dict[str, Any] | None = None
        if self.exception is not None:
            exc_type = type(self.exception)
            exception = {
                "type": f"{exc_type.__module__}.{exc_type.__qualname__}",
                "message": str(self.exception),
                "traceback": render_exception(self.exception),
            }

        return {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.name,
            "level_value": int(self.level),
            "event_id": {"id": self.event_id.id, "name": self.event_id.name},
            "category": self.category,
            "message": self.message,
            "exception": exception,
            "scopes": list(self.scopes),
            "properties": json_safe_keys(self.properties.to_dict()),
            "correlation_id": self.correlation_id,
            "thread_id": self.thread_id,
            "task_id": self.task_id,
            "trace_id": self.trace_id,
            "span_id": self.span_id,
        }


_JSON_KEY_TYPES = (str, int, float, bool, type(None))


def json_safe_keys(value: Any) -> Any:
    """Copy ``value`` with every mapping key a JSON object key can hold.

    Keys of other types become their ``str()``; values are left for the
    serializer to handle.
    """
    if isinstance(value, Mapping):
        return {
            key if isinstance(key, _JSON_KEY_TYPES) else str(key): json_safe_keys(item)
            for key, item in value.items()
        }
    if type(value) in (list, tuple):
        return type(value)(json_safe_keys(item) for item in value)
    return value


def render_exception(exc: BaseException) -> str:
    """Format an exception the way the interpreter prints it."""
    return "".join(
        traceback.format_exception(type(exc), exc, exc.__traceback__)
    ).rstrip("\n")
