"""Resource cleaner for cleanup runs.

Main orchestrator tying discovery, deletion and reporting together.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..api.client import ApiClient
from ..api.resource_types import get_resource_kind
from ..models.outcome import Outcome
from ..models.run_config import RunConfig
from ..models.run_report import RunReport
from ..reporting.reporter import OutcomeReporter
from ..reporting.storage import ReportStorage
from .deleter import ResourceDeleter
from .fetcher import ResourceFetcher
from .runner import BatchRunner

logger = logging.getLogger(__name__)


class ResourceCleaner:
    """Resource cleaner orchestrator.

    Fetches stale resources of each requested kind, deletes them (or lists
    them in dry-run mode), and reports the aggregated outcomes.

    Attributes:
        config: Run configuration
        fetcher: Paginated resource fetcher
        runner: Batch runner driving the deleter
        reporter: Outcome reporter
        storage: Report storage (optional)
    """

    def __init__(
        self,
        client: ApiClient,
        config: RunConfig,
        reporter: Optional[OutcomeReporter] = None,
        storage: Optional[ReportStorage] = None,
        deleter: Optional[ResourceDeleter] = None,
    ) -> None:
        """Initialize resource cleaner.

        Args:
            client: API client
            config: Run configuration
            reporter: Outcome reporter (creates new one if not provided)
            storage: Report storage; reports are only written when provided
            deleter: Resource deleter (built from client and config if not provided)
        """
        self.config = config
        self.reporter = reporter or OutcomeReporter()
        self.storage = storage
        self.fetcher = ResourceFetcher(client, config)
        self.runner = BatchRunner(deleter or ResourceDeleter(client, config), config, self.reporter)

    def clean(self, resource_types: list[str]) -> RunReport:
        """Run a cleanup for the given resource kinds.

        Args:
            resource_types: Resource kind names (e.g. ["project", "group"])

        Returns:
            Aggregated run report (empty in dry-run mode)

        Raises:
            KeyError: If a resource kind is not supported
            requests.RequestException: On transport failures
        """
        kinds = [get_resource_kind(name) for name in resource_types]

        outcomes: list[Outcome] = []
        for kind in kinds:
            resources = []
            for api_path in kind.list_paths:
                resources.extend(
                    self.fetcher.fetch(api_path, self.config.delete_before, kind.name, params=kind.list_params)
                )

            outcomes.extend(self.runner.run(resources, kind.name))

        report = RunReport() if self.config.dry_run else self.reporter.summarize(outcomes)
        self.reporter.display(report, dry_run=self.config.dry_run)

        if self.storage is not None and not self.config.dry_run:
            report_file = self.storage.save_report(report, self.config, resource_types)
            logger.info(f"Report written to {report_file}")

        return report
