"""CLI main entry point."""

import asyncio
import sys

import click

from . import __version__
from .client import CrudClient
from .config import RunnerConfig, load_config
from .formatters import Reporter
from .results import RunReport
from .runner import ScenarioRunner
from .scenarios import SCENARIOS
from .shared.logging import configure_logging, get_logger

logger = get_logger(__name__)


def build_client(config: RunnerConfig) -> CrudClient:
    """Create the API client for a run.

    Raises:
        ValueError: If the configured base URL is invalid
    """
    return CrudClient(config.base_url, timeout=config.timeout, insecure=config.insecure)


async def run_e2e(config: RunnerConfig, reporter: Reporter) -> RunReport:
    """Run the scenario sequence and print results as they finish."""
    client = build_client(config)
    reporter.start(client.base_url)
    async with client:
        runner = ScenarioRunner(client, on_result=reporter.scenario)
        report = await runner.run()
    reporter.summary(report)
    return report


@click.command("crud-e2e")
@click.option("--base-url", help="Base URL of the API under test (env: BASE_URL)")
@click.option("--timeout", type=float, help="Request timeout in seconds (env: E2E_TIMEOUT)")
@click.option(
    "--insecure",
    is_flag=True,
    help="Skip TLS certificate verification (env: E2E_INSECURE)",
)
@click.option("-v", "--verbose", is_flag=True, help="Log requests and scenario flow to stderr")
@click.option("--list", "list_only", is_flag=True, help="Print the scenario sequence and exit")
@click.version_option(__version__, prog_name="crud-e2e")
def cli(
    base_url: str | None,
    timeout: float | None,
    insecure: bool,
    verbose: bool,
    list_only: bool,
) -> None:
    """Run the end-to-end scenario sequence against a CRUD API.

    Exits 0 when every evaluated assertion passed, 1 otherwise.
    """
    configure_logging("debug" if verbose else "warning")
    reporter = Reporter()

    if list_only:
        reporter.plan(SCENARIOS)
        return

    config = load_config()
    config.override("base_url", base_url)
    config.override("timeout", timeout)
    if insecure:
        config.override("insecure", True)
    logger.debug(
        "config_loaded",
        base_url=config.base_url,
        base_url_source=config.get_source("base_url"),
        timeout=config.timeout,
    )

    try:
        report = asyncio.run(run_e2e(config, reporter))
    except Exception as e:
        reporter.error(f"Unexpected error during E2E tests: {e}")
        sys.exit(1)

    sys.exit(report.exit_code)


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
