"""
logspy: capture structured log output in tests and assert on it.

Typical use:

    capture = LogCaptureService()
    capture.add_rule(ErrorWithoutExceptionRule())
    provider = SpyLoggerProvider(capture, {"Default": LogLevel.DEBUG})
    logger = provider.create_logger("orders")

    with begin_correlation_scope("test-42"):
        logger.info("Order {OrderId} placed", 7)

    capture.assert_no_violations()
"""

from logspy.capture import (
    LogCaptureService,
    RuleViolationMode,
    get_by_category,
    get_by_level,
    get_by_message_contains,
    get_by_timestamp_range,
    has_error_within,
)
from logspy.config import LoggerOptions, LogSpySettings, OutputFormat
from logspy.context import (
    begin_correlation_scope,
    get_correlation_id,
    set_correlation_id,
)
from logspy.core.errors import ConfigurationError, LogSpyError, RuleViolationError
from logspy.formatters import (
    JsonLogFormatter,
    LogFormatter,
    MinimalPlainTextLogFormatter,
    PlainTextLogFormatter,
    VerbosePlainTextLogFormatter,
)
from logspy.logger import SpyLogger, SpyLoggerProvider
from logspy.models import EventId, LogEntry, LogLevel
from logspy.rules import (
    ErrorWithoutExceptionRule,
    ExceptionTypeRule,
    ForbiddenCategoryRule,
    ForbiddenSubstringRule,
    LogRule,
    MaxLogLevelRule,
    RegexLogRule,
)
from logspy.sinks import BackgroundSink, CallbackSink, FileSink, LogSink, StreamSink
from logspy.templates import FormattedLogValues, StructuredFields


__version__ = "0.1.0"

__all__ = [
    # Capture
    "LogCaptureService",
    "RuleViolationMode",
    "get_by_level",
    "get_by_message_contains",
    "get_by_category",
    "get_by_timestamp_range",
    "has_error_within",
    # Loggers
    "SpyLogger",
    "SpyLoggerProvider",
    "LoggerOptions",
    "LogSpySettings",
    "OutputFormat",
    # Context
    "begin_correlation_scope",
    "get_correlation_id",
    "set_correlation_id",
    # Models
    "EventId",
    "LogEntry",
    "LogLevel",
    "FormattedLogValues",
    "StructuredFields",
    # Rules
    "LogRule",
    "ErrorWithoutExceptionRule",
    "ExceptionTypeRule",
    "ForbiddenCategoryRule",
    "ForbiddenSubstringRule",
    "MaxLogLevelRule",
    "RegexLogRule",
    # Formatters
    "LogFormatter",
    "JsonLogFormatter",
    "MinimalPlainTextLogFormatter",
    "PlainTextLogFormatter",
    "VerbosePlainTextLogFormatter",
    # Sinks
    "LogSink",
    "BackgroundSink",
    "CallbackSink",
    "FileSink",
    "StreamSink",
    # Errors
    "LogSpyError",
    "ConfigurationError",
    "RuleViolationError",
]
