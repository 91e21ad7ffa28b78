"""Capture service and query helpers."""

from .queries import (
    get_by_category,
    get_by_level,
    get_by_message_contains,
    get_by_timestamp_range,
    has_error_within,
)
from .service import LogCaptureService, RuleViolationMode


__all__ = [
    "LogCaptureService",
    "RuleViolationMode",
    "get_by_level",
    "get_by_message_contains",
    "get_by_category",
    "get_by_timestamp_range",
    "has_error_within",
]
