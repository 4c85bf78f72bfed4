"""Test fixtures for fake API responses, resources and clocks."""

from __future__ import annotations

import json
from typing import Any, Callable, Optional, Union

import requests
from requests.structures import CaseInsensitiveDict

from reaper.models.resource_ref import ResourceRef

Handler = Callable[[dict[str, Any]], requests.Response]


def make_response(
    status_code: int = 200,
    body: Any = None,
    headers: Optional[dict[str, str]] = None,
) -> requests.Response:
    """Build a real requests Response without touching the network.

    Args:
        status_code: HTTP status code
        body: JSON-serializable body, or a str for a raw text body
        headers: Response headers

    Returns:
        Response instance
    """
    response = requests.Response()
    response.status_code = status_code
    response.encoding = "utf-8"
    response.headers = CaseInsensitiveDict(headers or {})

    if body is None:
        response._content = b""
    elif isinstance(body, str):
        response._content = body.encode("utf-8")
    else:
        response._content = json.dumps(body).encode("utf-8")

    return response


def not_found() -> requests.Response:
    return make_response(404, {"message": "404 Not found"})


def project_record(
    project_id: int = 1,
    path: str = "qa/project-1",
    created_at: str = "2024-01-01T10:00:00.000Z",
    marked_for_deletion_on: Optional[str] = None,
) -> dict[str, Any]:
    """Create a project record as returned by the API (supports marked deletion)."""
    return {
        "id": project_id,
        "path_with_namespace": path,
        "web_url": f"https://gitlab.example.com/{path}",
        "created_at": created_at,
        "marked_for_deletion_on": marked_for_deletion_on,
    }


def user_record(
    user_id: int = 10,
    username: str = "qa-user-1",
    created_at: str = "2024-01-01T10:00:00.000Z",
) -> dict[str, Any]:
    """Create a user record as returned by the API (no marked deletion)."""
    return {
        "id": user_id,
        "username": username,
        "web_url": f"https://gitlab.example.com/{username}",
        "created_at": created_at,
    }


def create_project(**kwargs: Any) -> ResourceRef:
    return ResourceRef.from_record("project", project_record(**kwargs))


def create_user(**kwargs: Any) -> ResourceRef:
    return ResourceRef.from_record("user", user_record(**kwargs))


class FakeApiClient:
    """In-memory stand-in for ApiClient that records every request.

    Routes map (method, path) to either a list of responses, served in order
    with the last one repeating, or a handler called with the query params.
    Unrouted requests return 404.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, dict[str, Any]]] = []
        self._routes: dict[tuple[str, str], Union[list[requests.Response], Handler]] = {}

    def on(self, method: str, path: str, *responses: requests.Response) -> FakeApiClient:
        self._routes[(method, path)] = list(responses)
        return self

    def on_call(self, method: str, path: str, handler: Handler) -> FakeApiClient:
        self._routes[(method, path)] = handler
        return self

    def get(self, path: str, params: Optional[dict[str, Any]] = None) -> requests.Response:
        return self._dispatch("GET", path, params)

    def delete(self, path: str, params: Optional[dict[str, Any]] = None) -> requests.Response:
        return self._dispatch("DELETE", path, params)

    def requests_for(self, method: str, path: Optional[str] = None) -> list[tuple[str, str, dict[str, Any]]]:
        return [call for call in self.calls if call[0] == method and (path is None or call[1] == path)]

    def _dispatch(self, method: str, path: str, params: Optional[dict[str, Any]]) -> requests.Response:
        query = dict(params or {})
        self.calls.append((method, path, query))

        route = self._routes.get((method, path))
        if route is None:
            return not_found()

        if callable(route):
            return route(query)

        return route.pop(0) if len(route) > 1 else route[0]


class FakeClock:
    """Manual clock; sleeping advances time instantly."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def time(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
