"""Paginated resource discovery."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

from ..api.client import ApiClient
from ..models.resource_ref import ResourceRef
from ..models.run_config import RunConfig

logger = logging.getLogger(__name__)

NEXT_PAGE_HEADER = "X-Next-Page"


class ResourceFetcher:
    """Walks a listing endpoint page by page and keeps resources older than a cutoff.

    Pagination follows the next-page header and stops early at the configured
    page cutoff. A failed page is logged and skipped; results from other pages
    are kept.

    Attributes:
        client: API client
        items_per_page: Listing page size
        page_cutoff: Last page number that will be requested
    """

    def __init__(self, client: ApiClient, config: RunConfig) -> None:
        """Initialize resource fetcher.

        Args:
            client: API client
            config: Run configuration (page size and cutoff)
        """
        self.client = client
        self.items_per_page = config.items_per_page
        self.page_cutoff = config.page_cutoff

    def fetch(
        self,
        api_path: str,
        cutoff_date: date,
        resource_type: str,
        params: Optional[dict[str, Any]] = None,
    ) -> list[ResourceRef]:
        """Fetch resources created before the cutoff date.

        Args:
            api_path: Listing endpoint path
            cutoff_date: Only resources created strictly before this date are returned
            resource_type: Resource kind name to tag references with
            params: Extra query parameters (optional)

        Returns:
            List of resources in listing order (possibly empty)

        Raises:
            requests.RequestException: On transport failures
        """
        logger.info(f"Fetching {resource_type}s created before {cutoff_date} from {api_path}...")

        page_no = "1"
        resources: list[ResourceRef] = []

        while page_no:
            query = {**(params or {}), "page": page_no, "per_page": self.items_per_page}
            response = self.client.get(api_path, params=query)

            if response.status_code == 200:
                try:
                    records = response.json()
                except ValueError:
                    logger.error(f"Request for {resource_type}s returned an undecodable body: `{response.text[:200]}`")
                else:
                    resources.extend(self._select_older(records, cutoff_date, resource_type))
            else:
                logger.error(f"Request for {resource_type}s returned ({response.status_code}): `{response.text}`")

            page_no = str(response.headers.get(NEXT_PAGE_HEADER) or "").strip()

            if page_no and not page_no.isdigit():
                logger.warning(f"Invalid next page cursor `{page_no}` for {resource_type}s, stopping")
                break

            if page_no and int(page_no) > self.page_cutoff:
                logger.warning(
                    f"Stopping at page {self.page_cutoff} to avoid timeout, "
                    f"{resource_type}s per page: {self.items_per_page}"
                )
                break

        logger.debug(f"Fetched {len(resources)} {resource_type}s from {api_path}")
        return resources

    def _select_older(self, records: Any, cutoff_date: date, resource_type: str) -> list[ResourceRef]:
        """Convert records to references, keeping those created before the cutoff."""
        if not isinstance(records, list):
            logger.error(f"Unexpected listing payload for {resource_type}s: {type(records).__name__}")
            return []

        selected = []

        for record in records:
            if not isinstance(record, dict):
                logger.warning(f"Skipping malformed {resource_type} record: {record!r}")
                continue

            resource = ResourceRef.from_record(resource_type, record)
            try:
                created = resource.created_date
            except ValueError:
                logger.warning(f"Skipping {resource_type} {resource.path} with unparseable created_at")
                continue

            if created < cutoff_date:
                selected.append(resource)

        return selected
