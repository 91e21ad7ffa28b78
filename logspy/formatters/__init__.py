"""Formatters for rendering captured entries."""

from logspy.config.settings import LoggerOptions, OutputFormat

from .base import LogFormatter
from .json_formatter import JsonLogFormatter
from .plain import (
    MinimalPlainTextLogFormatter,
    PlainTextLogFormatter,
    VerbosePlainTextLogFormatter,
)


def resolve_formatter(options: LoggerOptions | None = None) -> LogFormatter:
    """Default formatter for the configured output format."""
    if options is not None and options.output_format is OutputFormat.JSON:
        return JsonLogFormatter()
    return PlainTextLogFormatter()


__all__ = [
    "LogFormatter",
    "JsonLogFormatter",
    "MinimalPlainTextLogFormatter",
    "PlainTextLogFormatter",
    "VerbosePlainTextLogFormatter",
    "resolve_formatter",
]
