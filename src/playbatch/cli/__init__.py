"""
playbatch CLI - Command Line Interface for running browser automation batches.
"""
from typing import Optional, List, Dict, Any, Callable
import base64
import logging
import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn

from ..automation.engine import AutomationEngine
from ..automation.installer import PlaywrightInstaller
from ..automation.resolver import ExecutableResolver
from ..automation.runner import BatchExecutor
from ..automation.types import BatchEntry, EngineType, ErrorRecord
from ..core.config import BatchConfig

logger = logging.getLogger(__name__)

# Create console for rich output
console = Console()


class PlaybatchCLI:
    """State shared by the CLI commands."""

    def __init__(
        self,
        engine_factory: Callable[[], AutomationEngine],
        config: Optional[BatchConfig] = None,
        debug: bool = False,
    ):
        self.engine_factory = engine_factory
        self.config = config or BatchConfig()
        self.debug = debug

    def _progress_spinner(self, description: str):
        """Create a transient progress spinner."""
        progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True
        )
        progress.add_task(description, total=None)
        return progress

    def load_items(self, items_file: str) -> List[Dict[str, Any]]:
        """Read work items from a JSON file holding a list or a single object."""
        input_path = Path(items_file).expanduser().resolve()
        try:
            data = json.loads(input_path.read_text())
        except json.JSONDecodeError as e:
            raise click.ClickException(f"Invalid JSON in {input_path}: {e}")
        if isinstance(data, dict):
            data = [data]
        if not isinstance(data, list) or not all(isinstance(i, dict) for i in data):
            raise click.ClickException("Items file must contain an object or a list of objects")
        logger.debug(f"Loaded {len(data)} item(s) from {input_path}")
        return data

    def run_batch(self, items: List[Dict[str, Any]]) -> List[BatchEntry]:
        executor = BatchExecutor(self.engine_factory, config=self.config)
        with self._progress_spinner(f"Running {len(items)} item(s)..."):
            return executor.run(items)

    def export_results(
        self,
        results: List[BatchEntry],
        output_file: Optional[str] = None,
        binary_dir: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Turn results into JSON-safe output items, writing attachments to disk if asked."""
        binary_path = Path(binary_dir).expanduser() if binary_dir else None
        if binary_path:
            binary_path.mkdir(parents=True, exist_ok=True)

        exported: List[Dict[str, Any]] = []
        for index, result in enumerate(results):
            output = result.to_output()
            if "binary" in output:
                files: Dict[str, str] = {}
                for name, data in output["binary"].items():
                    if binary_path:
                        target = binary_path / f"{index}-{name}.png"
                        target.write_bytes(data)
                        files[name] = str(target)
                    else:
                        files[name] = base64.b64encode(data).decode("ascii")
                output["binary"] = files
            exported.append(output)

        if output_file:
            output_path = Path(output_file).expanduser().resolve()
            output_path.write_text(json.dumps(exported, indent=2, default=str))
            console.print(f"[green]✓[/] Wrote {len(exported)} result(s) to {output_path}")
        return exported

    def resolve(self, browser: str) -> Path:
        resolver = ExecutableResolver(self.config.host_platform)
        return resolver.resolve(EngineType(browser), Path(self.config.install_root))

    def install(self, browser: str) -> None:
        installer = PlaywrightInstaller(self.config.install_root, timeout_s=self.config.install_timeout_s)
        with self._progress_spinner(f"Installing {browser}..."):
            installer.ensure_installed(EngineType(browser))


def print_results_table(results: List[BatchEntry]) -> None:
    """Print a summary table of batch results."""
    if not results:
        console.print("[yellow]No results.[/]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=4)
    table.add_column("Status")
    table.add_column("Details")
    table.add_column("Attachments", style="dim")

    for index, result in enumerate(results):
        if isinstance(result, ErrorRecord):
            table.add_row(
                str(index),
                "[red]failed[/]",
                f"{result.engine_type}: {result.message}",
                "",
            )
        else:
            table.add_row(
                str(index),
                "[green]ok[/]",
                json.dumps(result.payload, default=str),
                ", ".join(result.binary),
            )

    console.print(table)


__all__ = ["PlaybatchCLI", "print_results_table"]
