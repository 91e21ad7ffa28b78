"""Shared test fixtures and configuration for logspy tests.

Fixtures build real components (capture service, provider, sinks) with no
mocking; each test gets a fresh capture service so nothing leaks between
tests.
"""

from collections.abc import Generator

import pytest

from logspy.capture.service import LogCaptureService, RuleViolationMode
from logspy.config.settings import LoggerOptions
from logspy.logger import SpyLogger, SpyLoggerProvider
from logspy.models.levels import LogLevel
from logspy.sinks import CallbackSink


@pytest.fixture
def capture_service() -> Generator[LogCaptureService, None, None]:
    """Fresh capture service in DEFERRED_FAIL mode, cleared after the test."""
    service = LogCaptureService(mode=RuleViolationMode.DEFERRED_FAIL)
    yield service
    service.clear()


@pytest.fixture
def output_lines() -> list[str]:
    """Collects text written to the provider's sink."""
    return []


@pytest.fixture
def provider(
    capture_service: LogCaptureService, output_lines: list[str]
) -> Generator[SpyLoggerProvider, None, None]:
    """Provider capturing everything from DEBUG up, with a list-backed sink."""
    spy_provider = SpyLoggerProvider(
        capture_service,
        {"Default": LogLevel.DEBUG},
        options=LoggerOptions(scopes_enabled=True),
        sink=CallbackSink(output_lines.append),
    )
    yield spy_provider
    spy_provider.close()


@pytest.fixture
def spy_logger(provider: SpyLoggerProvider) -> SpyLogger:
    return provider.create_logger("IntegrationTest")


# Pytest configuration
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark tests outside tests/integration as unit tests."""
    for item in items:
        if "integration" not in item.nodeid and not any(
            marker.name == "unit" for marker in item.iter_markers()
        ):
            item.add_marker(pytest.mark.unit)
