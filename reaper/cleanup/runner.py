"""Batch execution of resource deletions."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..models.outcome import Outcome
from ..models.resource_ref import ResourceRef
from ..models.run_config import RunConfig
from ..reporting.reporter import OutcomeReporter
from .deleter import ResourceDeleter

logger = logging.getLogger(__name__)


class BatchRunner:
    """Applies the deletion state machine to a list of resources.

    Resources are processed sequentially in input order. A failed deletion is
    recorded and processing moves on to the next resource. In dry-run mode the
    deleter is never called and the resources are only listed.

    Attributes:
        deleter: Resource deleter (state machine)
        reporter: Reporter used for the dry-run listing
        dry_run: Whether to skip all deletions
    """

    def __init__(
        self,
        deleter: ResourceDeleter,
        config: RunConfig,
        reporter: Optional[OutcomeReporter] = None,
    ) -> None:
        """Initialize batch runner.

        Args:
            deleter: Resource deleter
            config: Run configuration
            reporter: Reporter for the dry-run listing (creates new one if not provided)
        """
        self.deleter = deleter
        self.reporter = reporter or OutcomeReporter()
        self.dry_run = config.dry_run

    def run(self, resources: Iterable[ResourceRef], resource_type: Optional[str] = None) -> list[Outcome]:
        """Delete resources and collect their outcomes.

        Args:
            resources: Resources to delete
            resource_type: Resource kind name for messages (optional)

        Returns:
            One outcome per resource in input order (empty in dry-run mode)
        """
        resources = list(resources)
        label = resource_type or "resource"

        if self.dry_run:
            self.reporter.display_dry_run(resources, label)
            return []

        logger.info(f"Deleting {len(resources)} {label}s...")

        outcomes = []
        for resource in resources:
            logger.info(f"Deleting {resource.resource_type} {resource.path}...")
            outcomes.append(self.deleter.apply(resource))

        return outcomes
