"""
Thread-safe capture service: the sink of record for every log entry.

Entries, rules and the violation ledger each sit behind their own short-held
lock; nothing serializes the whole logging pipeline.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from enum import Enum

from logspy.core.errors import RuleViolationError
from logspy.core.logging import get_logger
from logspy.models.log_entry import LogEntry
from logspy.rules.base import LogRule


logger = get_logger(__name__)


class RuleViolationMode(str, Enum):
    """How rule violations are surfaced."""

    # Store the violation; the test inspects the ledger and fails at the end.
    DEFERRED_FAIL = "deferred_fail"
    # Raise from the logging call site and drop the offending entry.
    IMMEDIATE_FAIL = "immediate_fail"


class LogCaptureService:
    """In-memory store of captured entries plus the rules evaluated on them."""

    def __init__(self, mode: RuleViolationMode = RuleViolationMode.DEFERRED_FAIL):
        self.mode = RuleViolationMode(mode)

        self._entries: list[LogEntry] = []
        self._rules: list[LogRule] = []
        self._violations: list[str] = []

        self._entries_lock = threading.Lock()
        self._rules_lock = threading.Lock()
        self._violations_lock = threading.Lock()

    @property
    def entries(self) -> tuple[LogEntry, ...]:
        """Snapshot of captured entries in capture order."""
        with self._entries_lock:
            return tuple(self._entries)

    @property
    def violations(self) -> tuple[str, ...]:
        """Snapshot of recorded violation messages."""
        with self._violations_lock:
            return tuple(self._violations)

    @property
    def rules(self) -> tuple[LogRule, ...]:
        with self._rules_lock:
            return tuple(self._rules)

    def add_rule(self, rule: LogRule) -> None:
        """Register a rule; it applies to every entry added after this returns."""
        with self._rules_lock:
            self._rules.append(rule)
        logger.debug("rule_registered", rule=type(rule).__name__)

    def add_rules(self, *rules: LogRule) -> None:
        with self._rules_lock:
            self._rules.extend(rules)
        logger.debug(
            "rules_registered", rules=[type(rule).__name__ for rule in rules]
        )

    def add_entry(self, entry: LogEntry) -> None:
        """
        Evaluate rules against ``entry`` and store it.

        Raises:
            RuleViolationError: In IMMEDIATE_FAIL mode when any rule is
                violated; the entry is not stored.
        """
        violations = self.evaluate(entry)

        if violations:
            if self.mode is RuleViolationMode.IMMEDIATE_FAIL:
                logger.warning(
                    "immediate_rule_violation",
                    category=entry.category,
                    violations=violations,
                )
                raise RuleViolationError(violations)

            with self._violations_lock:
                self._violations.extend(violations)

        with self._entries_lock:
            self._entries.append(entry)

    def evaluate(self, entry: LogEntry) -> list[str]:
        """Violation messages of every registered rule ``entry`` breaks."""
        with self._rules_lock:
            rules = list(self._rules)
        return [rule.violation_message for rule in rules if rule.is_violated_by(entry)]

    def clear(self) -> None:
        """Drop all entries, rules and violations."""
        with self._entries_lock:
            self._entries = []
        with self._rules_lock:
            self._rules = []
        with self._violations_lock:
            self._violations = []
        logger.debug("capture_cleared")

    def assert_no_violations(self) -> None:
        """
        Fail when the deferred violation ledger is not empty.

        Raises:
            RuleViolationError: Listing every recorded violation
        """
        violations = self.violations
        if violations:
            raise RuleViolationError(
                violations, prefix="Some log rule was violated"
            )

    def __len__(self) -> int:
        with self._entries_lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self.entries)
