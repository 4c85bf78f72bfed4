"""Run configuration model.

Immutable per-run parameters, constructed once at process start.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

ITEMS_PER_PAGE = 100
PAGE_CUTOFF = 10
POLL_TIMEOUT_SECONDS = 60.0
POLL_INTERVAL_SECONDS = 1.0
REQUEST_TIMEOUT_SECONDS = 30.0


def default_delete_before() -> date:
    """Default cutoff date: yesterday."""
    return date.today() - timedelta(days=1)


@dataclass(frozen=True)
class RunConfig:
    """Run configuration entity.

    Resources created strictly before ``delete_before`` are eligible for
    cleanup. The token is excluded from the repr so it never ends up in logs.

    Attributes:
        api_base: Target host (e.g. https://gitlab.example.com)
        api_token: Personal access token
        delete_before: Cutoff date (default: yesterday)
        dry_run: Report what would be deleted without deleting (default: False)
        permanently_delete: Hard-delete resources after marking them (default: False)
        items_per_page: Listing page size (default: 100)
        page_cutoff: Maximum number of listing pages to fetch (default: 10)
        poll_timeout: Seconds to wait for a deletion to converge (default: 60)
        poll_interval: Seconds between convergence checks (default: 1)
        request_timeout: HTTP request timeout in seconds (default: 30)
    """

    api_base: str
    api_token: str = field(repr=False)
    delete_before: date = field(default_factory=default_delete_before)
    dry_run: bool = False
    permanently_delete: bool = False
    items_per_page: int = ITEMS_PER_PAGE
    page_cutoff: int = PAGE_CUTOFF
    poll_timeout: float = POLL_TIMEOUT_SECONDS
    poll_interval: float = POLL_INTERVAL_SECONDS
    request_timeout: float = REQUEST_TIMEOUT_SECONDS

    def validate(self) -> bool:
        """Validate configuration invariants.

        Returns:
            True if validation passes

        Raises:
            ValueError: If any validation rule fails
        """
        if not self.api_base:
            raise ValueError("api_base is required")

        if not self.api_token:
            raise ValueError("api_token is required")

        # datetime is a date subclass; the cutoff must be a plain calendar date
        if isinstance(self.delete_before, datetime) or not isinstance(self.delete_before, date):
            raise ValueError("delete_before must be a calendar date")

        if self.items_per_page < 1 or self.page_cutoff < 1:
            raise ValueError("items_per_page and page_cutoff must be positive")

        if self.poll_timeout < 0 or self.poll_interval <= 0:
            raise ValueError("Invalid polling settings")

        return True

    def to_dict(self) -> dict:
        """Settings for report metadata (credentials excluded)."""
        return {
            "api_base": self.api_base,
            "delete_before": self.delete_before.isoformat(),
            "dry_run": self.dry_run,
            "permanently_delete": self.permanently_delete,
            "items_per_page": self.items_per_page,
            "page_cutoff": self.page_cutoff,
        }
