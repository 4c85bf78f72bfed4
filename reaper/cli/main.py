"""Main CLI entry point using Typer."""

import logging
import sys
from typing import List, Optional

import requests
import typer
from rich.console import Console
from rich.table import Table

from ..api.client import ApiClient
from ..api.resource_types import RESOURCE_KINDS, get_resource_kind
from ..cleanup.cleaner import ResourceCleaner
from ..reporting.reporter import OutcomeReporter
from ..reporting.storage import ReportStorage
from ..utils.logging import setup_logging
from .config import ConfigurationError, load_run_config, parse_cutoff

logger = logging.getLogger(__name__)

# Create Typer app
app = typer.Typer(
    name="reaper",
    help="Stale Resource Reaper - delete stale projects, groups and users from a GitLab-style API",
    add_completion=False,
)

# Create Rich console for output
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output except errors"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
):
    """Stale Resource Reaper - delete stale resources left behind by test runs."""
    # Setup logging
    log_level = "ERROR" if quiet else ("DEBUG" if verbose else "INFO")
    setup_logging(level=log_level, verbose=verbose)

    # Disable colors if requested
    if no_color:
        console.no_color = True


@app.command()
def version():
    """Show version information."""
    from .. import __version__

    console.print(f"stale-resource-reaper version {__version__}")
    console.print(f"Python {sys.version.split()[0]}")
    console.print(f"requests {requests.__version__}")


@app.command("types")
def list_types():
    """List supported resource types."""
    table = Table(title="Resource Types", show_header=True, header_style="bold magenta")
    table.add_column("Type", style="cyan")
    table.add_column("Listing Endpoints")
    table.add_column("Description", style="dim")

    for name, kind in sorted(RESOURCE_KINDS.items()):
        paths = kind.list_paths if len(kind.list_paths) <= 2 else (kind.list_paths[0], "...")
        table.add_row(name, "\n".join(paths), kind.description)

    console.print(table)


@app.command()
def delete(
    resource_types: List[str] = typer.Argument(..., help="Resource types to clean up (see 'reaper types')"),
    dry_run: Optional[bool] = typer.Option(
        None, "--dry-run/--no-dry-run", help="List what would be deleted without deleting (env: DRY_RUN)"
    ),
    permanently_delete: Optional[bool] = typer.Option(
        None,
        "--permanently-delete/--no-permanently-delete",
        help="Permanently remove resources after marking them for deletion (env: PERMANENTLY_DELETE)",
    ),
    delete_before: Optional[str] = typer.Option(
        None, "--delete-before", help="Delete resources created before this date, YYYY-MM-DD (env: DELETE_BEFORE)"
    ),
    report_dir: Optional[str] = typer.Option(None, "--report-dir", help="Write a YAML run report to this directory"),
):
    """Delete resources created before the cutoff date.

    Requires API_BASE and API_TOKEN environment variables. Exits with code 1
    when any deletion failed.
    """
    try:
        for name in resource_types:
            get_resource_kind(name)

        run_config = load_run_config(
            dry_run=dry_run,
            permanently_delete=permanently_delete,
            delete_before=parse_cutoff(delete_before) if delete_before else None,
        )

    except KeyError as e:
        console.print(f"✗ Error: {e.args[0]}", style="bold red")
        raise typer.Exit(code=2)
    except ConfigurationError as e:
        console.print(f"✗ Error: {e}", style="bold red")
        raise typer.Exit(code=2)

    logger.debug(f"Run configuration: {run_config}")

    mode = "[yellow]dry run[/yellow]" if run_config.dry_run else "[red]live[/red]"
    console.print(
        f"🧹 Cleaning up {', '.join(resource_types)} created before "
        f"[bold]{run_config.delete_before}[/bold] on {run_config.api_base} ({mode})\n"
    )

    try:
        cleaner = ResourceCleaner(
            ApiClient.from_config(run_config),
            run_config,
            reporter=OutcomeReporter(console),
            storage=ReportStorage(report_dir) if report_dir else None,
        )
        report = cleaner.clean(resource_types)

    except requests.RequestException as e:
        console.print(f"✗ Error communicating with {run_config.api_base}: {e}", style="bold red")
        raise typer.Exit(code=3)
    except KeyboardInterrupt:
        console.print("\nInterrupted", style="yellow")
        raise typer.Exit(code=130)

    if report.has_failures:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
