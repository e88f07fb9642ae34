"""Sequential scenario runner.

Runs the scenarios one after another against a single client, gating
each on its session prerequisites, and aggregates their results into a
RunReport. An exception escaping a scenario is scored as one failure on
that scenario and the run moves on to the next one.
"""

from collections.abc import Callable, Sequence

from .client import CrudClient
from .results import RunReport, ScenarioResult
from .scenarios import SCENARIOS, Scenario
from .session import SessionContext
from .shared.logging import get_logger

logger = get_logger(__name__)


class ScenarioRunner:
    """Run a fixed scenario sequence and collect the results."""

    def __init__(
        self,
        client: CrudClient,
        scenarios: Sequence[Scenario] = SCENARIOS,
        on_result: Callable[[ScenarioResult], None] | None = None,
    ):
        """Initialize runner.

        Args:
            client: Entered CrudClient used by every scenario
            scenarios: Scenarios to run, in order
            on_result: Optional callback invoked with each finished result
        """
        self.client = client
        self.scenarios = list(scenarios)
        self.on_result = on_result

    async def run(self, session: SessionContext | None = None) -> RunReport:
        """Run all scenarios in order.

        Args:
            session: Session context to thread through the run (fresh if None)

        Returns:
            RunReport with one result per scenario
        """
        session = session if session is not None else SessionContext()
        report = RunReport(base_url=self.client.base_url)

        for scenario in self.scenarios:
            result = await self.run_scenario(scenario, session)
            report.add(result)
            if self.on_result:
                self.on_result(result)

        logger.info(
            "run_complete",
            passed=report.passed,
            failed=report.failed,
            skipped=report.skipped,
        )
        return report

    async def run_scenario(self, scenario: Scenario, session: SessionContext) -> ScenarioResult:
        """Run one scenario, or skip it if its prerequisites are unset."""
        result = ScenarioResult(number=scenario.number, title=scenario.title)

        missing = session.missing(scenario.requires)
        if missing:
            result.skipped = True
            result.missing = missing
            logger.debug("scenario_skipped", scenario=scenario.number, missing=missing)
            return result

        logger.debug("scenario_start", scenario=scenario.number, title=scenario.title)
        try:
            await scenario.func(self.client, session, result)
        except Exception as e:
            logger.debug("scenario_error", scenario=scenario.number, error=str(e))
            result.record_error(f"{scenario.title} failed: {e}")

        return result
