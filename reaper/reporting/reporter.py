"""Outcome aggregation and run report display."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from rich.console import Console
from rich.table import Table

from ..models.outcome import Outcome, OutcomeKind
from ..models.resource_ref import ResourceRef
from ..models.run_report import RunReport

MAX_BODY_LENGTH = 500


class OutcomeReporter:
    """Aggregate deletion outcomes and display run reports."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize outcome reporter.

        Args:
            console: Rich console instance (creates new one if not provided)
        """
        self.console = console or Console()

    def summarize(self, outcomes: Iterable[Outcome]) -> RunReport:
        """Group outcomes by kind and count successes per resource type.

        Args:
            outcomes: Outcomes in processing order

        Returns:
            RunReport with per-type counts and the failure list

        Raises:
            ValueError: If the counts do not add up to the number of outcomes
        """
        report = RunReport()

        for outcome in outcomes:
            report.outcomes.append(outcome)
            resource_type = outcome.resource.resource_type

            if outcome.kind == OutcomeKind.MARKED_FOR_DELETION:
                report.marked_counts[resource_type] = report.marked_counts.get(resource_type, 0) + 1
            elif outcome.kind == OutcomeKind.PERMANENTLY_DELETED:
                report.deleted_counts[resource_type] = report.deleted_counts.get(resource_type, 0) + 1
            else:
                report.failures.append(outcome)

        report.validate()
        return report

    def display(self, report: RunReport, dry_run: bool = False) -> None:
        """Display a run report.

        Args:
            report: Report to display
            dry_run: Whether the run was a dry run (the listing was already shown)
        """
        self.console.print()

        if dry_run:
            self.console.print("[green]✓ Dry run complete[/green]")
            return

        if report.is_empty:
            self.console.print("[yellow]No results to report[/yellow]")
            return

        self._display_summary(report)
        self._display_failures(report.failures)

        self.console.print("Done")

    def display_dry_run(self, resources: Sequence[ResourceRef], resource_type: str) -> None:
        """List resources that would be deleted.

        Args:
            resources: Resources selected for deletion
            resource_type: Resource kind name
        """
        if not resources:
            self.console.print(f"No {resource_type}s would be deleted")
            return

        self.console.print(f"[bold]The following {len(resources)} {resource_type}s would be deleted:[/bold]")

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Path", style="cyan")
        table.add_column("Created At", style="dim")

        for resource in resources:
            table.add_row(resource.path or "(unknown)", resource.created_at)

        self.console.print(table)

    def _display_summary(self, report: RunReport) -> None:
        """Display per-type success counts."""
        table = Table(title="Cleanup Summary", show_header=True, header_style="bold magenta")
        table.add_column("Resource Type", style="cyan")
        table.add_column("Marked for Deletion", justify="right", style="yellow")
        table.add_column("Deleted", justify="right", style="green")
        table.add_column("Failed", justify="right", style="red")

        failed_counts: dict[str, int] = {}
        for outcome in report.failures:
            resource_type = outcome.resource.resource_type
            failed_counts[resource_type] = failed_counts.get(resource_type, 0) + 1

        resource_types = sorted(set(report.marked_counts) | set(report.deleted_counts) | set(failed_counts))
        for resource_type in resource_types:
            table.add_row(
                resource_type,
                str(report.marked_counts.get(resource_type, 0)),
                str(report.deleted_counts.get(resource_type, 0)),
                str(failed_counts.get(resource_type, 0)),
            )

        self.console.print(table)

        if report.total_marked:
            self.console.print(f"Marked {report.total_marked} resource(s) for deletion")
        if report.total_deleted:
            self.console.print(f"Deleted {report.total_deleted} resource(s)")

    def _display_failures(self, failures: list[Outcome]) -> None:
        """Display every failed deletion attempt with its last response."""
        if not failures:
            self.console.print("[green]No failed deletion attempts to report![/green]")
            return

        self.console.print()
        self.console.print(f"[bold red]There were {len(failures)} failed deletion attempts:[/bold red]")

        for outcome in failures:
            body = outcome.response_body
            if len(body) > MAX_BODY_LENGTH:
                body = body[: MAX_BODY_LENGTH - 3] + "..."

            self.console.print(f"Resource: {outcome.resource.path}", markup=False)
            if outcome.reason:
                self.console.print(f"  Reason: {outcome.reason}", markup=False)
            self.console.print(f"  Response: {outcome.status_code} {body}", markup=False, style="red")
