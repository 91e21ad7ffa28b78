"""Bridge from the standard :mod:`logging` module into a capture provider."""

from __future__ import annotations

import logging
from typing import Any

from logspy.core.logging import is_diagnostic_logger
from logspy.logger import SpyLoggerProvider
from logspy.models.levels import EventId, LogLevel
from logspy.templates import StructuredFields

from ._guard import forwarding, is_forwarding


# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "taskName"}


def record_properties(record: logging.LogRecord) -> list[tuple[str, Any]]:
    """Structured pairs for a record: ``extra`` attributes, then %-style args."""
    pairs = [
        (key, value)
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRIBUTES and not key.startswith("_")
    ]
    if isinstance(record.args, dict):
        pairs.extend((str(key), value) for key, value in record.args.items())
    elif record.args:
        pairs.extend((str(index), value) for index, value in enumerate(record.args))
    pairs.append(("{OriginalFormat}", record.msg))
    return pairs


class _RecordState(StructuredFields):
    def __init__(self, record: logging.LogRecord) -> None:
        super().__init__(record_properties(record))
        self.record = record

    def __str__(self) -> str:
        return self.record.getMessage()


class CaptureHandler(logging.Handler):
    """
    ``logging.Handler`` that forwards records to :class:`SpyLogger` instances.

    The record's logger name becomes the entry category and ``exc_info``
    becomes the entry exception. Rule violations raised in IMMEDIATE_FAIL mode
    propagate to the code that logged.

    Example:
        handler = CaptureHandler(provider)
        logging.getLogger().addHandler(handler)
    """

    def __init__(self, provider: SpyLoggerProvider, level: int = logging.NOTSET):
        super().__init__(level)
        self.provider = provider

    def emit(self, record: logging.LogRecord) -> None:
        if is_diagnostic_logger(record.name) or is_forwarding():
            return

        spy_logger = self.provider.create_logger(record.name or "root")
        level = LogLevel.from_stdlib(record.levelno)
        if not spy_logger.is_enabled(level):
            return

        exception = record.exc_info[1] if record.exc_info else None
        with forwarding():
            spy_logger.log(
                level,
                EventId(0, record.funcName),
                _RecordState(record),
                exception,
            )
