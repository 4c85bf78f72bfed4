"""Run report model.

Aggregated outcomes of a complete cleanup run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .outcome import Outcome


class ReportStatus(Enum):
    """Overall run status derived from outcomes."""

    EMPTY = "empty"
    COMPLETED = "completed"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass
class RunReport:
    """Run report entity.

    Status rules:
        no outcomes → empty
        no failures → completed
        failures and successes → partial
        only failures → failed

    Attributes:
        outcomes: All outcomes in processing order
        marked_counts: Resources marked for deletion, per resource type
        deleted_counts: Resources permanently deleted, per resource type
        failures: Failed outcomes in processing order
    """

    outcomes: list[Outcome] = field(default_factory=list)
    marked_counts: dict[str, int] = field(default_factory=dict)
    deleted_counts: dict[str, int] = field(default_factory=dict)
    failures: list[Outcome] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.outcomes

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)

    @property
    def total_marked(self) -> int:
        return sum(self.marked_counts.values())

    @property
    def total_deleted(self) -> int:
        return sum(self.deleted_counts.values())

    @property
    def status(self) -> ReportStatus:
        if self.is_empty:
            return ReportStatus.EMPTY
        if not self.failures:
            return ReportStatus.COMPLETED
        if len(self.failures) < len(self.outcomes):
            return ReportStatus.PARTIAL
        return ReportStatus.FAILED

    def validate(self) -> bool:
        """Validate report invariants.

        Validation rules:
            - marked + deleted + failed == total outcomes

        Returns:
            True if validation passes

        Raises:
            ValueError: If counts don't add up
        """
        if self.total_marked + self.total_deleted + len(self.failures) != len(self.outcomes):
            raise ValueError("Outcome counts don't match total")

        return True
