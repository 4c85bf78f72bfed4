"""Report storage for cleanup runs.

Writes run reports as YAML files for later triage.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

import yaml

from ..models.run_config import RunConfig
from ..models.run_report import RunReport


class ReportStorage:
    """Run report storage and retrieval.

    Storage structure:
        <report_dir>/
            2025/
                11/
                    run-run_123.yaml

    Attributes:
        report_dir: Base directory for reports
    """

    def __init__(self, report_dir: Optional[str] = None) -> None:
        """Initialize report storage.

        Args:
            report_dir: Base directory for reports (default: ~/.reaper/reports)
        """
        if report_dir is None:
            report_dir = str(Path.home() / ".reaper" / "reports")

        self.report_dir = Path(report_dir)
        self.report_dir.mkdir(parents=True, exist_ok=True)

    def save_report(
        self,
        report: RunReport,
        config: RunConfig,
        resource_types: list[str],
        run_id: Optional[str] = None,
        timestamp: Optional[datetime] = None,
    ) -> Path:
        """Write a run report.

        Args:
            report: Aggregated run report
            config: Run configuration (credentials are not written)
            resource_types: Resource kinds processed in the run
            run_id: Run identifier (generated if not provided)
            timestamp: Run timestamp (default: now, UTC)

        Returns:
            Path of the written file
        """
        run_id = run_id or f"run_{uuid.uuid4()}"
        timestamp = timestamp or datetime.utcnow()

        year_month_dir = self.report_dir / str(timestamp.year) / f"{timestamp.month:02d}"
        year_month_dir.mkdir(parents=True, exist_ok=True)

        report_data = {
            "metadata": {
                "version": "1.0",
                "log_type": "resource_cleanup",
                "created_at": datetime.utcnow().isoformat() + "Z",
            },
            "run": {
                "run_id": run_id,
                "timestamp": timestamp.isoformat() + "Z",
                "resource_types": list(resource_types),
                "status": report.status.value,
                "settings": config.to_dict(),
                "marked_counts": dict(report.marked_counts),
                "deleted_counts": dict(report.deleted_counts),
                "failed_count": len(report.failures),
            },
            "outcomes": [outcome.to_dict() for outcome in report.outcomes],
        }

        report_file = year_month_dir / f"run-{run_id}.yaml"
        with open(report_file, "w") as f:
            yaml.dump(report_data, f, default_flow_style=False, sort_keys=False)

        return report_file

    def get_report(self, run_id: str) -> Optional[dict]:
        """Retrieve a run report by ID.

        Args:
            run_id: Run ID to retrieve

        Returns:
            Report dictionary if found, None otherwise
        """
        for report_file in self.report_dir.glob(f"*/*/run-{run_id}.yaml"):
            with open(report_file, "r") as f:
                return yaml.safe_load(f)

        return None

    def list_reports(self) -> list[Path]:
        """List report files, newest first."""
        return sorted(self.report_dir.glob("*/*/run-*.yaml"), key=lambda p: p.stat().st_mtime, reverse=True)
