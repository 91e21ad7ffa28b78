"""Configuration module for logspy."""

from .settings import (
    DEFAULT_CATEGORY,
    LoggerOptions,
    LogSpySettings,
    OutputFormat,
    parse_log_levels,
)


__all__ = [
    "DEFAULT_CATEGORY",
    "LoggerOptions",
    "LogSpySettings",
    "OutputFormat",
    "parse_log_levels",
]
