"""Console output for the test report.

Lines carry a colored severity tag ([INFO] green, [ERROR] red, [TEST]
yellow). Messages are written as plain text so that brackets in server
error messages are never taken for rich markup.
"""

from collections.abc import Sequence

from rich.console import Console
from rich.text import Text

from .results import LogEntry, RunReport, ScenarioResult, Severity
from .scenarios import Scenario

SEPARATOR = "========================================="

TAG_STYLES = {
    "INFO": "green",
    "ERROR": "red",
    "TEST": "yellow",
}


class Reporter:
    """Render scenario results and the run summary."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console(highlight=False)

    def _line(self, tag: str, message: str) -> None:
        line = Text.assemble((f"[{tag}]", TAG_STYLES[tag]), " ", message)
        self.console.print(line, soft_wrap=True)

    def info(self, message: str) -> None:
        self._line("INFO", message)

    def error(self, message: str) -> None:
        self._line("ERROR", message)

    def test(self, message: str) -> None:
        self._line("TEST", message)

    def entry(self, entry: LogEntry) -> None:
        if entry.severity is Severity.ERROR:
            self.error(entry.message)
        else:
            self.info(entry.message)

    def start(self, base_url: str) -> None:
        self.info(f"Starting E2E tests against {base_url}")
        self.info(SEPARATOR)

    def scenario(self, result: ScenarioResult) -> None:
        """Print one finished scenario."""
        self.test(f"Test {result.number}: {result.title}")
        if result.skipped:
            self.info(f"Skipped: requires {', '.join(result.missing)}")
            return
        for entry in result.entries:
            self.entry(entry)

    def summary(self, report: RunReport) -> None:
        """Print the summary block."""
        self.console.print()
        self.info(SEPARATOR)
        self.info("E2E Test Results")
        self.info(SEPARATOR)
        self.info(f"Total tests: {report.total}")
        self.info(f"Passed: {report.passed}")
        self.info(f"Failed: {report.failed}")
        if report.skipped:
            self.info(f"Skipped scenarios: {report.skipped}")
        self.info(SEPARATOR)

        if report.success:
            self.info("All E2E tests PASSED ✓")
        else:
            self.error("E2E tests FAILED")

    def plan(self, scenarios: Sequence[Scenario]) -> None:
        """Print the scenario sequence without running it."""
        for scenario in scenarios:
            requires = f" (requires: {', '.join(scenario.requires)})" if scenario.requires else ""
            self.test(f"Test {scenario.number}: {scenario.title}{requires}")
