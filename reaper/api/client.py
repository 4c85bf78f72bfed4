"""HTTP client for the remote REST API."""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from ..models.run_config import REQUEST_TIMEOUT_SECONDS, RunConfig

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v4"


def is_success(status_code: Optional[int]) -> bool:
    """Check whether a status code is 2xx."""
    return status_code is not None and 200 <= status_code < 300


class ApiClient:
    """Thin wrapper around a requests session.

    Non-2xx responses are returned to the caller, never raised. Transport
    failures (DNS, connection refused, timeouts) propagate as
    ``requests.RequestException``.

    Attributes:
        base_url: API root (host + /api/v4)
        timeout: Request timeout in seconds
        session: Underlying requests session carrying the auth header
    """

    def __init__(
        self,
        api_base: str,
        token: str,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize API client.

        Args:
            api_base: Target host (e.g. https://gitlab.example.com)
            token: Personal access token
            timeout: Request timeout in seconds (default: 30)
            session: Session to use (creates new one if not provided)
        """
        self.base_url = api_base.rstrip("/") + API_PREFIX
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"PRIVATE-TOKEN": token})

    @classmethod
    def from_config(cls, config: RunConfig) -> ApiClient:
        return cls(config.api_base, config.api_token, timeout=config.request_timeout)

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def get(self, path: str, params: Optional[dict[str, Any]] = None) -> requests.Response:
        return self._request("GET", path, params)

    def delete(self, path: str, params: Optional[dict[str, Any]] = None) -> requests.Response:
        return self._request("DELETE", path, params)

    def _request(self, method: str, path: str, params: Optional[dict[str, Any]]) -> requests.Response:
        url = self.url(path)
        logger.debug(f"{method} {url} params={params or {}}")

        response = self.session.request(method, url, params=params, timeout=self.timeout)

        logger.debug(f"{method} {url} returned {response.status_code}")
        return response
