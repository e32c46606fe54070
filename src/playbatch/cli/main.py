"""
playbatch CLI - run browser automation work items from the command line.
"""
import sys
import logging
from pathlib import Path
from typing import Optional

import click
from rich.logging import RichHandler

from . import PlaybatchCLI, console, print_results_table
from ..automation.exceptions import OrchestratorError
from ..automation.playwright_engine import PlaywrightEngine
from ..automation.types import EngineType
from ..core.config import BatchConfig, DEFAULT_SELECTOR_TIMEOUT_MS, default_install_root

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True)]
)
logger = logging.getLogger("playbatch")

BROWSER_CHOICES = [e.value for e in EngineType]


@click.group(invoke_without_command=True)
@click.option(
    "--install-root",
    type=click.Path(file_okay=False, dir_okay=True),
    default=None,
    help="Directory holding the browser binaries (defaults to the Playwright cache)",
)
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Enable debug output",
    show_default=True
)
@click.pass_context
def cli(ctx: click.Context, install_root: Optional[str], debug: bool) -> None:
    """playbatch - run Playwright operations over a batch of work items."""
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Debug mode enabled")

    config = BatchConfig(
        install_root=Path(install_root).expanduser() if install_root else default_install_root()
    )
    ctx.obj = PlaybatchCLI(engine_factory=PlaywrightEngine, config=config, debug=debug)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("items_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--continue-on-fail", is_flag=True, default=False, help="Record failed items instead of aborting")
@click.option(
    "--selector-timeout",
    type=click.IntRange(min=0),
    default=DEFAULT_SELECTOR_TIMEOUT_MS,
    show_default=True,
    help="Milliseconds to wait for a selector to appear",
)
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None, help="Write results as JSON")
@click.option("--binary-dir", type=click.Path(file_okay=False), default=None, help="Directory for screenshots")
@click.pass_obj
def run(
    cli: PlaybatchCLI,
    items_file: str,
    continue_on_fail: bool,
    selector_timeout: int,
    output: Optional[str],
    binary_dir: Optional[str],
) -> None:
    """Run every work item in ITEMS_FILE, one browser session per item."""
    cli.config.continue_on_fail = continue_on_fail
    cli.config.selector_timeout_ms = selector_timeout
    items = cli.load_items(items_file)
    try:
        results = cli.run_batch(items)
    except Exception as e:
        console.print(f"[red]✗[/] Batch aborted: {e}")
        if cli.debug:
            import traceback
            console.print(traceback.format_exc())
        sys.exit(1)

    print_results_table(results)
    exported = cli.export_results(results, output_file=output, binary_dir=binary_dir)
    if not output:
        click.echo(click.style(f"{len(exported)} result(s)", bold=True))


@cli.command()
@click.argument("browser", type=click.Choice(BROWSER_CHOICES))
@click.pass_obj
def resolve(cli: PlaybatchCLI, browser: str) -> None:
    """Print the path of the installed BROWSER binary."""
    try:
        path = cli.resolve(browser)
    except OrchestratorError as e:
        console.print(f"[red]✗[/] {e}")
        sys.exit(1)
    click.echo(str(path))


@cli.command()
@click.argument("browser", type=click.Choice(BROWSER_CHOICES))
@click.pass_obj
def install(cli: PlaybatchCLI, browser: str) -> None:
    """Install BROWSER into the install root."""
    try:
        cli.install(browser)
        console.print(f"[green]✓[/] Installed {browser} into {cli.config.install_root}")
    except OrchestratorError as e:
        console.print(f"[red]✗[/] {e}")
        sys.exit(1)


def main() -> None:
    """Entry point for the playbatch CLI."""
    try:
        cli()
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
