"""Core abstractions shared across logspy."""

from logspy.core.errors import ConfigurationError, LogSpyError, RuleViolationError
from logspy.core.logging import get_logger, setup_logging


__all__ = [
    # Errors
    "LogSpyError",
    "ConfigurationError",
    "RuleViolationError",
    # Diagnostics
    "get_logger",
    "setup_logging",
]
