import logging
import sys

import structlog
from structlog.stdlib import BoundLogger


# Loggers under this prefix carry logspy's own diagnostics and are never
# fed back into a capture service.
DIAGNOSTIC_LOGGER_PREFIX = "logspy"

# Event key carrying the module name on every diagnostic event, whatever
# logger factory structlog is configured with. ``logger`` cannot be used, it
# names the wrapped logger in ``structlog.get_logger``.
DIAGNOSTIC_NAME_KEY = "logger_name"


def configure_structlog(json_logs: bool = False) -> None:
    """Configure structlog processors for logspy diagnostics."""
    timestamper = structlog.processors.TimeStamper(fmt="iso")

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        timestamper,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        # This wrapper passes the event dictionary to the ProcessorFormatter
        # so we don't double-render
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]

    structlog.configure(
        processors=processors,  # type: ignore[arg-type]
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,  # Don't cache to allow reconfiguration
    )


def setup_logging(json_logs: bool = False, log_level: str = "INFO") -> BoundLogger:
    """
    Setup diagnostic logging for logspy itself.

    Only the ``logspy`` logger hierarchy is touched; the host application's
    root logger and handlers are left alone so capture handlers keep working.
    Returns a structlog logger instance.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    configure_structlog(json_logs=json_logs)

    handler = logging.StreamHandler(sys.stderr)

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )

    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.add_logger_name,
                structlog.processors.TimeStamper(fmt="iso"),
            ],
        )
    )

    package_logger = logging.getLogger(DIAGNOSTIC_LOGGER_PREFIX)
    package_logger.handlers = [handler]
    package_logger.propagate = False
    package_logger.setLevel(level)

    return structlog.get_logger(DIAGNOSTIC_LOGGER_PREFIX)  # type: ignore[no-any-return]


def is_diagnostic_logger(name: object) -> bool:
    """Check whether a logger name belongs to logspy's own diagnostics."""
    if not isinstance(name, str) or not name:
        return False
    return name == DIAGNOSTIC_LOGGER_PREFIX or name.startswith(
        DIAGNOSTIC_LOGGER_PREFIX + "."
    )


# Create a convenience function for getting loggers
def get_logger(name: str | None = None) -> BoundLogger:
    """Get a structlog logger instance.

    The name is also bound as ``logger_name`` so capture bridges
    recognise logspy diagnostics.
    """
    if name is None:
        return structlog.get_logger()  # type: ignore[no-any-return]
    return structlog.get_logger(name, logger_name=name)  # type: ignore[no-any-return]
