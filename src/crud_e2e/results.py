"""Assertion primitives and result types.

A ScenarioResult collects the outcome of every assertion made while a
scenario runs. The runner hands finished results to a RunReport, which
owns the pass/fail tally for the whole run.
"""

from __future__ import annotations

from collections.abc import Awaitable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .client import CrudClientError


class Severity(str, Enum):
    """Severity of a result entry, used for the console tag."""

    INFO = "info"
    ERROR = "error"


class ScenarioStatus(str, Enum):
    """Overall status of a scenario."""

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class LogEntry:
    """One line of scenario output.

    ``outcome`` is True/False for assertions and None for plain notes.
    """

    severity: Severity
    message: str
    outcome: bool | None = None


@dataclass
class ScenarioResult:
    """Outcome of one scenario: its entries and its pass/fail counts."""

    number: int
    title: str
    entries: list[LogEntry] = field(default_factory=list)
    passed: int = 0
    failed: int = 0
    skipped: bool = False
    missing: list[str] = field(default_factory=list)

    @property
    def status(self) -> ScenarioStatus:
        if self.skipped:
            return ScenarioStatus.SKIPPED
        if self.failed:
            return ScenarioStatus.FAILED
        return ScenarioStatus.PASSED

    @property
    def assertions(self) -> int:
        return self.passed + self.failed

    def _pass(self, label: str) -> bool:
        self.passed += 1
        self.entries.append(LogEntry(Severity.INFO, f"✓ Test passed: {label}", outcome=True))
        return True

    def _fail(self, label: str, detail: str | None = None) -> bool:
        self.failed += 1
        message = f"✗ Test failed: {label}"
        if detail:
            message = f"{message} ({detail})"
        self.entries.append(LogEntry(Severity.ERROR, message, outcome=False))
        return False

    def assert_true(self, condition: Any, label: str) -> bool:
        """Record a pass if condition is truthy, else a failure."""
        if condition:
            return self._pass(label)
        return self._fail(label)

    def assert_equals(self, expected: Any, actual: Any, label: str) -> bool:
        """Record a pass if expected == actual, else a failure with both values."""
        if expected == actual:
            return self._pass(label)
        return self._fail(label, f"expected: {expected!r}, got: {actual!r}")

    async def expect_status(self, call: Awaitable[Any], status: int, label: str) -> bool:
        """Await a call that must fail with the given HTTP status.

        Succeeding, failing with another status, or failing at the
        transport level are all recorded as a failure.
        """
        try:
            await call
        except CrudClientError as e:
            if e.status_code == status:
                return self._pass(label)
            return self._fail(label, f"expected status {status}, got: {e}")
        return self._fail(label, f"expected status {status} but request succeeded")

    def record_error(self, message: str) -> None:
        """Record an unexpected error as one failure."""
        self.failed += 1
        self.entries.append(LogEntry(Severity.ERROR, message, outcome=False))

    def note(self, message: str) -> None:
        """Add an informational line; does not affect the tally."""
        self.entries.append(LogEntry(Severity.INFO, message))

    def warn(self, message: str) -> None:
        """Add an error line that is not counted as a failure."""
        self.entries.append(LogEntry(Severity.ERROR, message))


@dataclass
class RunReport:
    """Aggregated results of a run."""

    base_url: str
    results: list[ScenarioResult] = field(default_factory=list)

    def add(self, result: ScenarioResult) -> None:
        self.results.append(result)

    @property
    def passed(self) -> int:
        return sum(r.passed for r in self.results)

    @property
    def failed(self) -> int:
        return sum(r.failed for r in self.results)

    @property
    def total(self) -> int:
        return self.passed + self.failed

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.results if r.skipped)

    @property
    def success(self) -> bool:
        return self.failed == 0

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1
