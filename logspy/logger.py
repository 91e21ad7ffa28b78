"""
Structured loggers that feed a capture service.

:class:`SpyLoggerProvider` is the factory the host logging setup talks to: it
resolves each category's minimum level once and hands out cached
:class:`SpyLogger` instances. Every enabled log call builds one immutable
:class:`~logspy.models.LogEntry` tagged with the ambient correlation id,
scopes, thread, asyncio task and OpenTelemetry span, passes it to the capture
service, and only then renders it to the optional sink.
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from types import TracebackType
from typing import Any

from logspy.capture.service import LogCaptureService
from logspy.config.settings import DEFAULT_CATEGORY, LoggerOptions, parse_log_levels
from logspy.context.correlation import get_correlation_id
from logspy.context.execution import (
    current_task_id,
    current_thread_id,
    current_trace_ids,
)
from logspy.context.scopes import NULL_SCOPE, NullScope, ScopeHandle, ScopeStack
from logspy.core.errors import ConfigurationError
from logspy.core.logging import get_logger
from logspy.formatters import LogFormatter, resolve_formatter
from logspy.models.levels import EventId, LogLevel
from logspy.models.log_entry import LogEntry
from logspy.sinks import LogSink
from logspy.templates import FormattedLogValues, extract_properties, format_state


logger = get_logger(__name__)

MessageFormatter = Callable[[Any, BaseException | None], str]


def _coerce_event_id(event_id: EventId | int | None) -> EventId:
    if event_id is None:
        return EventId()
    if isinstance(event_id, EventId):
        return event_id
    return EventId(int(event_id))


class SpyLogger:
    """Logging endpoint for one category."""

    def __init__(
        self,
        category: str,
        min_level: LogLevel,
        capture_service: LogCaptureService,
        scope_stack: ScopeStack,
        options: LoggerOptions,
        formatter: LogFormatter | None = None,
        sink: LogSink | None = None,
    ):
        self.category = category
        self.min_level = min_level
        self.options = options
        self._capture = capture_service
        self._scope_stack = scope_stack
        self._formatter = formatter
        self._sink = sink

    def __repr__(self) -> str:
        return f"SpyLogger(category={self.category!r}, min_level={self.min_level.name})"

    def is_enabled(self, level: LogLevel) -> bool:
        return level != LogLevel.NONE and level >= self.min_level

    def log(
        self,
        level: LogLevel,
        event_id: EventId | int | None,
        state: Any,
        exception: BaseException | None = None,
        formatter: MessageFormatter | None = None,
    ) -> None:
        """
        Capture one log call.

        Disabled levels return immediately without calling ``formatter``.

        Raises:
            RuleViolationError: When the capture service runs in
                IMMEDIATE_FAIL mode and the entry breaks a rule
        """
        if not self.is_enabled(level):
            return

        message = (
            formatter(state, exception)
            if formatter is not None
            else format_state(state, exception)
        )
        scopes = self._scope_stack.current() if self.options.scopes_enabled else ()
        trace_id, span_id = current_trace_ids()

        entry = LogEntry(
            level=LogLevel(level),
            event_id=_coerce_event_id(event_id),
            message=message,
            category=self.category,
            exception=exception,
            scopes=scopes,
            properties=extract_properties(state),
            timestamp=datetime.now(UTC),
            correlation_id=get_correlation_id(),
            thread_id=current_thread_id(),
            task_id=current_task_id(),
            trace_id=trace_id,
            span_id=span_id,
        )

        self._capture.add_entry(entry)

        if self._sink is not None and self._formatter is not None:
            self._write_to_sink(entry)

    def _write_to_sink(self, entry: LogEntry) -> None:
        # The entry is already captured; nothing here may fail the log call.
        try:
            self._sink.write(self._formatter.format(entry))  # type: ignore[union-attr]
        except Exception as e:
            logger.warning(
                "sink_output_failed",
                category=self.category,
                error=str(e),
                error_type=type(e).__name__,
            )

    def begin_scope(self, state: Any) -> ScopeHandle | NullScope:
        """Open a scope attached to every entry logged until it is closed.

        Example:
            with logger.begin_scope({"OrderId": 42}):
                logger.info("processing")  # scopes == ("OrderId: 42",)
        """
        if not self.options.scopes_enabled or state is None:
            return NULL_SCOPE
        if isinstance(state, str | Mapping) and not state:
            return NULL_SCOPE
        return self._scope_stack.push(state)

    def _log_template(
        self,
        level: LogLevel,
        template: str,
        args: tuple[Any, ...],
        exception: BaseException | None,
        event_id: EventId | int | None,
    ) -> None:
        if not self.is_enabled(level):
            return
        self.log(level, event_id, FormattedLogValues(template, *args), exception)

    def trace(
        self,
        template: str,
        *args: Any,
        exception: BaseException | None = None,
        event_id: EventId | int | None = None,
    ) -> None:
        self._log_template(LogLevel.TRACE, template, args, exception, event_id)

    def debug(
        self,
        template: str,
        *args: Any,
        exception: BaseException | None = None,
        event_id: EventId | int | None = None,
    ) -> None:
        self._log_template(LogLevel.DEBUG, template, args, exception, event_id)

    def info(
        self,
        template: str,
        *args: Any,
        exception: BaseException | None = None,
        event_id: EventId | int | None = None,
    ) -> None:
        """Log a message template at INFO.

        Example:
            logger.info("User {UserId} logged in from {IPAddress}", 123, "10.0.0.1")
        """
        self._log_template(LogLevel.INFO, template, args, exception, event_id)

    def warning(
        self,
        template: str,
        *args: Any,
        exception: BaseException | None = None,
        event_id: EventId | int | None = None,
    ) -> None:
        self._log_template(LogLevel.WARNING, template, args, exception, event_id)

    def error(
        self,
        template: str,
        *args: Any,
        exception: BaseException | None = None,
        event_id: EventId | int | None = None,
    ) -> None:
        self._log_template(LogLevel.ERROR, template, args, exception, event_id)

    def critical(
        self,
        template: str,
        *args: Any,
        exception: BaseException | None = None,
        event_id: EventId | int | None = None,
    ) -> None:
        self._log_template(LogLevel.CRITICAL, template, args, exception, event_id)

    def exception(
        self,
        template: str,
        *args: Any,
        event_id: EventId | int | None = None,
    ) -> None:
        """Log at ERROR with the exception currently being handled attached."""
        self._log_template(
            LogLevel.ERROR, template, args, sys.exc_info()[1], event_id
        )


class SpyLoggerProvider:
    """
    Factory for :class:`SpyLogger` instances sharing one capture service.

    Each category's minimum level is resolved once: the longest configured
    prefix that the category starts with wins (a trailing ``*`` on a key is
    ignored), and unmatched categories use the mandatory ``"Default"`` entry.
    """

    def __init__(
        self,
        capture_service: LogCaptureService,
        log_levels: Mapping[str, LogLevel | str | int],
        options: LoggerOptions | None = None,
        formatter: LogFormatter | None = None,
        sink: LogSink | None = None,
    ):
        if capture_service is None:
            raise ConfigurationError(
                "capture_service is required", setting="capture_service"
            )
        try:
            self.log_levels = parse_log_levels(log_levels)
        except ValueError as e:
            raise ConfigurationError(str(e), setting="log_levels", cause=e) from e

        self.capture_service = capture_service
        self.default_level = self.log_levels[DEFAULT_CATEGORY]
        self.options = options or LoggerOptions()
        self.formatter = formatter or resolve_formatter(self.options)
        self.sink = sink
        self.scope_stack = ScopeStack()

        self._loggers: dict[str, SpyLogger] = {}
        self._lock = threading.Lock()
        self._closed = False

        logger.debug(
            "provider_created",
            default_level=self.default_level.name,
            categories=len(self.log_levels) - 1,
            scopes_enabled=self.options.scopes_enabled,
            output_format=self.options.output_format.value,
            has_sink=sink is not None,
        )

    def resolve_min_level(self, category: str) -> LogLevel:
        """Minimum level for ``category`` by longest matching prefix."""
        best_level = self.default_level
        best_length = -1
        for key, level in self.log_levels.items():
            if key == DEFAULT_CATEGORY:
                continue
            prefix = key.rstrip("*")
            if category.startswith(prefix) and len(prefix) > best_length:
                best_level = level
                best_length = len(prefix)
        return best_level

    def create_logger(self, category: str) -> SpyLogger:
        if category is None:
            raise ConfigurationError("category is required", setting="category")
        with self._lock:
            spy_logger = self._loggers.get(category)
            if spy_logger is None:
                spy_logger = SpyLogger(
                    category=category,
                    min_level=self.resolve_min_level(category),
                    capture_service=self.capture_service,
                    scope_stack=self.scope_stack,
                    options=self.options,
                    formatter=self.formatter,
                    sink=self.sink,
                )
                self._loggers[category] = spy_logger
            return spy_logger

    def close(self) -> None:
        """Close the sink; later calls are no-ops."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        if self.sink is not None:
            self.sink.close()

    def __enter__(self) -> SpyLoggerProvider:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
