"""Bridges from host logging libraries into a capture provider."""

from .stdlib import CaptureHandler
from .structlog_processor import CaptureProcessor


__all__ = ["CaptureHandler", "CaptureProcessor"]
