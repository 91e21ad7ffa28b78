"""Configuration for capture providers and loggers."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from logspy.capture.service import LogCaptureService, RuleViolationMode
from logspy.models.levels import LogLevel


if TYPE_CHECKING:
    from logspy.formatters.base import LogFormatter
    from logspy.logger import SpyLoggerProvider
    from logspy.sinks import LogSink


__all__ = [
    "DEFAULT_CATEGORY",
    "OutputFormat",
    "LoggerOptions",
    "LogSpySettings",
    "parse_log_levels",
]


DEFAULT_CATEGORY = "Default"


class OutputFormat(str, Enum):
    """Default rendering used for the sink when no formatter is given."""

    PLAIN_TEXT = "plain_text"
    JSON = "json"


class LoggerOptions(BaseModel):
    """Options shared by every logger a provider creates."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    scopes_enabled: bool = Field(
        default=True,
        description="Maintain the scope stack and include scopes in entries and output",
    )

    output_format: OutputFormat = Field(
        default=OutputFormat.PLAIN_TEXT,
        description="Default formatter for sink output: 'plain_text' or 'json'",
    )

    @field_validator("output_format", mode="before")
    @classmethod
    def validate_output_format(cls, v: Any) -> Any:
        """Accept format names in any case, with '-' or '_'."""
        if isinstance(v, str):
            normalized = v.strip().lower().replace("-", "_")
            if normalized == "plaintext":
                normalized = OutputFormat.PLAIN_TEXT.value
            return normalized
        return v


def parse_log_levels(levels: Any) -> dict[str, LogLevel]:
    """Validate a category -> minimum level mapping.

    Raises:
        ValueError: If the mapping is missing, has no ``"Default"`` entry or
            names an unknown level
    """
    if levels is None:
        raise ValueError("log_levels mapping is required")
    parsed = {str(category): LogLevel.parse(level) for category, level in dict(levels).items()}
    if DEFAULT_CATEGORY not in parsed:
        raise ValueError(
            f"log_levels must contain a '{DEFAULT_CATEGORY}' entry, got {sorted(parsed)}"
        )
    return parsed


class LogSpySettings(BaseSettings):
    """
    Settings for building a capture service and logger provider.

    Values are loaded from keyword arguments, environment variables prefixed
    with ``LOGSPY_`` (``LOGSPY_OPTIONS__SCOPES_ENABLED=false``), and a
    ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="LOGSPY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    log_levels: dict[str, LogLevel] = Field(
        default_factory=lambda: {DEFAULT_CATEGORY: LogLevel.INFO},
        description="Minimum level per category prefix; must include 'Default'",
    )

    options: LoggerOptions = Field(
        default_factory=LoggerOptions,
        description="Logger behaviour shared by all categories",
    )

    mode: RuleViolationMode = Field(
        default=RuleViolationMode.DEFERRED_FAIL,
        description="Whether rule violations fail at log time or are deferred",
    )

    @field_validator("log_levels", mode="before")
    @classmethod
    def validate_log_levels(cls, v: Any) -> dict[str, LogLevel]:
        return parse_log_levels(v)

    @field_validator("mode", mode="before")
    @classmethod
    def validate_mode(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower().replace("-", "_")
        return v

    def create_capture_service(self) -> LogCaptureService:
        return LogCaptureService(mode=self.mode)

    def create_provider(
        self,
        capture_service: LogCaptureService,
        formatter: LogFormatter | None = None,
        sink: LogSink | None = None,
    ) -> SpyLoggerProvider:
        """Build a provider wired to ``capture_service`` with these settings."""
        from logspy.logger import SpyLoggerProvider

        return SpyLoggerProvider(
            capture_service,
            self.log_levels,
            options=self.options,
            formatter=formatter,
            sink=sink,
        )
