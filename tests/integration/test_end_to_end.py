"""End-to-end: settings, provider, rules, sinks and queries wired together."""

import json
from datetime import timedelta
from pathlib import Path

import pytest

from logspy.capture import get_by_category, get_by_level, has_error_within
from logspy.config import LogSpySettings
from logspy.context import begin_correlation_scope
from logspy.core.errors import RuleViolationError
from logspy.models import LogLevel
from logspy.rules import (
    ErrorWithoutExceptionRule,
    ExceptionTypeRule,
    ForbiddenCategoryRule,
    MaxLogLevelRule,
)
from logspy.sinks import BackgroundSink, FileSink


@pytest.fixture(autouse=True)
def isolated_cwd(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)


@pytest.mark.integration
class TestEndToEnd:
    def test_json_file_output_and_deferred_assertions(self, tmp_path: Path) -> None:
        settings = LogSpySettings(
            log_levels={"Default": "INFO", "Orders.Repository": "DEBUG", "Legacy": "NONE"},
            options={"output_format": "json"},
        )
        capture = settings.create_capture_service()
        capture.add_rules(
            ErrorWithoutExceptionRule(),
            ForbiddenCategoryRule("Legacy"),
            ExceptionTypeRule(KeyError),
        )
        log_file = tmp_path / "out" / "capture.jsonl"

        with settings.create_provider(capture, sink=BackgroundSink(FileSink(log_file))) as provider:
            service = provider.create_logger("Orders.Service")
            repository = provider.create_logger("Orders.Repository")
            legacy = provider.create_logger("Legacy.Adapter")

            with begin_correlation_scope("e2e-1"), service.begin_scope({"OrderId": 42}):
                service.debug("filtered by Default=INFO")
                repository.debug("Loaded {Rows} rows", 3)
                service.info("Order {OrderId} accepted", 42)
                legacy.error("never captured")
                try:
                    {}["missing"]
                except KeyError:
                    service.exception("Lookup failed for {Key}", "missing")

        entries = capture.entries
        assert [e.message for e in entries] == [
            "Loaded 3 rows",
            "Order 42 accepted",
            "Lookup failed for missing",
        ]
        assert all(e.correlation_id == "e2e-1" for e in entries)
        assert all(e.scopes == ("OrderId: 42",) for e in entries)
        assert len(get_by_category(capture, "orders.repository")) == 1
        assert len(get_by_level(capture, LogLevel.ERROR)) == 1
        assert has_error_within(capture, timedelta(minutes=5), entries[0].timestamp)

        assert capture.violations == (ExceptionTypeRule(KeyError).violation_message,)
        with pytest.raises(RuleViolationError, match="forbidden type"):
            capture.assert_no_violations()

        lines = log_file.read_text(encoding="utf-8").splitlines()
        records = [json.loads(line) for line in lines]
        assert [r["message"] for r in records] == [e.message for e in entries]
        assert records[2]["exception"]["type"] == "builtins.KeyError"
        assert records[0]["properties"]["Rows"] == 3
        assert records[1]["scopes"] == ["OrderId: 42"]

    def test_immediate_mode_fails_at_call_site(self) -> None:
        settings = LogSpySettings(mode="immediate_fail")
        capture = settings.create_capture_service()
        capture.add_rule(MaxLogLevelRule(LogLevel.WARNING))

        with settings.create_provider(capture) as provider:
            spy_logger = provider.create_logger("Strict")
            spy_logger.warning("allowed")
            with pytest.raises(RuleViolationError, match="Immediate rule violation"):
                spy_logger.error("too loud", exception=RuntimeError("x"))

        assert [e.message for e in capture.entries] == ["allowed"]
        assert capture.violations == ()
