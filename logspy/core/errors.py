"""Core error types for the log capture system."""

from collections.abc import Iterable


class LogSpyError(Exception):
    """Base exception for all logspy errors."""

    def __init__(self, message: str, cause: Exception | None = None):
        """Initialize with a message and optional cause.

        Args:
            message: The error message
            cause: The underlying exception that caused this error
        """
        super().__init__(message)
        self.cause = cause
        if cause:
            # Use Python's exception chaining
            self.__cause__ = cause


class ConfigurationError(LogSpyError):
    """Error raised when a provider, logger or settings object is misconfigured."""

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        cause: Exception | None = None,
    ):
        """Initialize with a message, the offending setting, and cause.

        Args:
            message: The error message
            setting: Name of the setting or argument that is invalid
            cause: The underlying exception
        """
        super().__init__(message, cause)
        self.setting = setting


class RuleViolationError(LogSpyError, AssertionError):
    """Error raised when captured log entries violate registered rules.

    Subclasses ``AssertionError`` so test runners report it as a test failure
    rather than an error in the code under test.
    """

    def __init__(
        self,
        violations: Iterable[str],
        prefix: str = "Immediate rule violation",
        cause: Exception | None = None,
    ):
        """Initialize with the violation messages.

        Args:
            violations: Messages produced by the violated rules
            prefix: Leading text of the combined error message
            cause: The underlying exception
        """
        self.violations = tuple(violations)
        combined = "\n".join(self.violations)
        super().__init__(f"{prefix}: {combined}", cause)
