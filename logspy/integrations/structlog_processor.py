"""structlog processor that captures events into a provider."""

from __future__ import annotations

import sys
from collections.abc import MutableMapping
from typing import Any

from logspy.core.logging import DIAGNOSTIC_NAME_KEY, is_diagnostic_logger
from logspy.logger import SpyLoggerProvider
from logspy.models.levels import LogLevel
from logspy.templates import StructuredFields

from ._guard import forwarding, is_forwarding


EventDict = MutableMapping[str, Any]

_METHOD_LEVELS = {
    "trace": LogLevel.TRACE,
    "debug": LogLevel.DEBUG,
    "info": LogLevel.INFO,
    "msg": LogLevel.INFO,
    "warning": LogLevel.WARNING,
    "warn": LogLevel.WARNING,
    "error": LogLevel.ERROR,
    "exception": LogLevel.ERROR,
    "critical": LogLevel.CRITICAL,
    "fatal": LogLevel.CRITICAL,
}

# Keys added by structlog's own processors rather than by the caller
_RESERVED_KEYS = frozenset(
    {"event", "logger", "level", "timestamp", "exc_info", "stack_info", "_record", "_from_structlog"}
)


def _resolve_exception(exc_info: Any) -> BaseException | None:
    if isinstance(exc_info, BaseException):
        return exc_info
    if isinstance(exc_info, tuple) and len(exc_info) == 3:
        return exc_info[1]
    if exc_info:
        return sys.exc_info()[1]
    return None


class _EventState(StructuredFields):
    def __init__(self, event: str, pairs: list[tuple[str, Any]]) -> None:
        super().__init__(pairs)
        self.event = event

    def __str__(self) -> str:
        return self.event


class CaptureProcessor:
    """
    Processor that captures every structlog event and passes it on unchanged.

    The category is the bound ``logger`` name (or ``default_category``), the
    message is the ``event`` string, remaining keys become properties and
    ``exc_info`` becomes the exception. Place it before renderers and before
    ``format_exc_info`` so the exception object is still available.

    Example:
        structlog.configure(processors=[
            structlog.stdlib.add_logger_name,
            CaptureProcessor(provider),
            structlog.processors.JSONRenderer(),
        ])
    """

    def __init__(self, provider: SpyLoggerProvider, default_category: str = "structlog"):
        self.provider = provider
        self.default_category = default_category

    def __call__(self, logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        category = event_dict.get("logger") or self.default_category
        if (
            is_diagnostic_logger(str(category))
            or is_diagnostic_logger(event_dict.get(DIAGNOSTIC_NAME_KEY))
            or is_forwarding()
        ):
            return event_dict

        level = _METHOD_LEVELS.get(method_name, LogLevel.INFO)
        if "level" in event_dict and isinstance(event_dict["level"], str):
            try:
                level = LogLevel.parse(event_dict["level"])
            except ValueError:
                pass

        spy_logger = self.provider.create_logger(str(category))
        if not spy_logger.is_enabled(level):
            return event_dict

        event = str(event_dict.get("event", ""))
        pairs = [
            (str(key), value)
            for key, value in event_dict.items()
            if key not in _RESERVED_KEYS
        ]
        exception = _resolve_exception(event_dict.get("exc_info"))

        with forwarding():
            spy_logger.log(level, None, _EventState(event, pairs), exception)

        return event_dict
