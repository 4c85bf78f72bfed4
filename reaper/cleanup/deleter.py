"""Resource deletion state machine.

Drives one resource through soft deletion, convergence polling and optional
permanent deletion:

    active → (DELETE) → marked or gone → [DELETE permanently_remove] → gone

Terminal states are reported as an Outcome: marked for deletion, permanently
deleted, or failed.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from requests import Response

from ..api.client import ApiClient, is_success
from ..api.resource_types import get_resource_kind
from ..models.outcome import Outcome
from ..models.resource_ref import MARKED_FOR_DELETION_KEY, ResourceRef
from ..models.run_config import RunConfig
from .waiter import wait_until

logger = logging.getLogger(__name__)

ALREADY_MARKED_MESSAGE = "already marked for deletion"


def is_already_marked(response: Response) -> bool:
    """Check whether a delete response reports an earlier soft deletion.

    The API signals this only through its message text, so this is a substring
    match on the body. A 404 never matches: a resource that vanished between
    discovery and deletion is reported as a failure.
    """
    if response.status_code == 404:
        return False
    return ALREADY_MARKED_MESSAGE in (response.text or "").lower()


class ResourceDeleter:
    """Resource deletion orchestrator.

    Issues the delete requests for a single resource and verifies the result by
    polling the resource until the remote state converges.

    Attributes:
        client: API client
        config: Run configuration
    """

    def __init__(
        self,
        client: ApiClient,
        config: RunConfig,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize resource deleter.

        Args:
            client: API client
            config: Run configuration
            clock: Time source for polling (default: time.monotonic)
            sleep: Sleep function for polling (default: time.sleep)
        """
        self.client = client
        self.config = config
        self._clock = clock
        self._sleep = sleep

    def apply(self, resource: ResourceRef) -> Outcome:
        """Delete a resource and report the terminal state.

        If the remote does not stage deletions the first delete removes the
        resource outright. Otherwise it is marked for deletion, and removed
        permanently when the run is configured to do so.

        Args:
            resource: Resource to delete

        Returns:
            Outcome for the resource

        Raises:
            requests.RequestException: On transport failures
        """
        response = self.client.delete(self._endpoint(resource))

        if not (is_success(response.status_code) or is_already_marked(response)):
            return self._failure(resource, response)

        converged = self.wait_for_deletion(resource)

        if self.permanently_deleted(resource):
            return self._permanent_deletion(resource)

        if not resource.supports_marked_deletion:
            return self._failure(resource, response, "Marked deletion is not supported")

        if not converged:
            return self._failure(resource, response, "Timed out waiting for deletion")

        if self.config.permanently_delete:
            return self.delete_permanently(resource)

        return self._marked_for_deletion(resource)

    def delete_permanently(self, resource: ResourceRef) -> Outcome:
        """Permanently delete a resource that is marked for deletion.

        Marking a resource for deletion can rename it, so the resource is
        fetched again and the fresh path is sent along with the request.

        Args:
            resource: Resource marked for deletion

        Returns:
            Outcome for the resource
        """
        fresh, response = self.get_resource(resource)
        if fresh is None:
            return self._failure(resource, response, "Could not fetch resource before permanent deletion")

        response = self.client.delete(
            self._endpoint(fresh),
            params={"permanently_remove": "true", "full_path": fresh.path},
        )

        if is_success(response.status_code):
            self.wait_for_deletion(fresh, permanent=True)

        if is_success(response.status_code) and self.permanently_deleted(fresh):
            return self._permanent_deletion(fresh)

        return self._failure(fresh, response)

    def get_resource(self, resource: ResourceRef) -> tuple[Optional[ResourceRef], Response]:
        """Fetch the current state of a resource.

        Args:
            resource: Resource to fetch

        Returns:
            Tuple of (fresh resource or None if the request failed, response)
        """
        response = self.client.get(self._endpoint(resource))

        if not is_success(response.status_code):
            logger.warning(f"Get {resource.path}, returned {response.status_code}")
            return None, response

        try:
            record = response.json()
        except ValueError:
            record = None

        if not isinstance(record, dict):
            logger.warning(f"Get {resource.path}, returned an unexpected body")
            return None, response

        return ResourceRef.from_record(resource.resource_type, record), response

    def permanently_deleted(self, resource: ResourceRef) -> bool:
        """Check whether the resource is gone (GET returns 404)."""
        return self.client.get(self._endpoint(resource)).status_code == 404

    def wait_for_deletion(self, resource: ResourceRef, permanent: bool = False) -> bool:
        """Wait until the resource is gone or, unless permanent, marked for deletion.

        Args:
            resource: Resource to poll
            permanent: Only accept the resource being gone

        Returns:
            True if the deletion converged before the timeout
        """

        def converged() -> bool:
            response = self.client.get(self._endpoint(resource))
            if response.status_code == 404:
                return True
            if permanent or not is_success(response.status_code):
                return False
            try:
                body = response.json()
            except ValueError:
                return False
            return isinstance(body, dict) and bool(body.get(MARKED_FOR_DELETION_KEY))

        return wait_until(
            converged,
            max_duration=self.config.poll_timeout,
            sleep_interval=self.config.poll_interval,
            clock=self._clock,
            sleep=self._sleep,
        )

    def _endpoint(self, resource: ResourceRef) -> str:
        return get_resource_kind(resource.resource_type).resource_endpoint(resource)

    def _failure(self, resource: ResourceRef, response: Optional[Response], reason: Optional[str] = None) -> Outcome:
        status = response.status_code if response is not None else "no response"
        detail = f" ({reason})" if reason else ""
        logger.error(
            f"FAILED to delete {resource.resource_type} {resource.path} with {status}{detail}. Resource still exists."
        )
        return Outcome.failed(resource, response, reason)

    def _marked_for_deletion(self, resource: ResourceRef) -> Outcome:
        logger.info(f"SUCCESS: Marked {resource.resource_type} {resource.path} for deletion")
        return Outcome.marked(resource)

    def _permanent_deletion(self, resource: ResourceRef) -> Outcome:
        logger.info(f"SUCCESS: Permanently deleted {resource.resource_type} {resource.path}")
        return Outcome.deleted(resource)
