"""Tests for ResourceFetcher class.

Test coverage for pagination, the page cutoff and the age filter.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import pytest
import requests

from reaper.cleanup.fetcher import ResourceFetcher
from reaper.models.run_config import RunConfig
from tests.fixtures.api import FakeApiClient, make_response, project_record

CUTOFF = date(2024, 1, 10)


def paged_listing(total_pages: int, per_page: int = 100):
    """Handler serving `total_pages` full pages of old projects."""

    def handler(params: dict[str, Any]) -> requests.Response:
        page = int(params["page"])
        records = [
            project_record(project_id=page * 1000 + i, path=f"qa/page-{page}-{i}", created_at="2023-06-01T00:00:00Z")
            for i in range(per_page)
        ]
        next_page = str(page + 1) if page < total_pages else ""
        return make_response(200, records, headers={"X-Next-Page": next_page})

    return handler


class TestResourceFetcher:
    """Test suite for ResourceFetcher."""

    def test_init_reads_page_settings(self, fake_api: FakeApiClient, run_config: RunConfig) -> None:
        fetcher = ResourceFetcher(fake_api, run_config)

        assert fetcher.items_per_page == 100
        assert fetcher.page_cutoff == 10

    def test_age_filter_is_strictly_before_cutoff(self, fake_api: FakeApiClient, run_config: RunConfig) -> None:
        """Test a resource created on the cutoff date is excluded."""
        records = [
            project_record(project_id=1, path="qa/old", created_at="2024-01-09T23:59:59.000Z"),
            project_record(project_id=2, path="qa/on-cutoff", created_at="2024-01-10T00:00:00.000Z"),
            project_record(project_id=3, path="qa/new", created_at="2024-01-11T08:00:00.000Z"),
        ]
        fake_api.on("GET", "/projects", make_response(200, records))

        resources = ResourceFetcher(fake_api, run_config).fetch("/projects", CUTOFF, "project")

        assert [r.path for r in resources] == ["qa/old"]
        assert all(r.created_date < CUTOFF for r in resources)

    def test_requests_page_size_and_extra_params(self, fake_api: FakeApiClient, run_config: RunConfig) -> None:
        fake_api.on("GET", "/projects", make_response(200, []))

        ResourceFetcher(fake_api, run_config).fetch("/projects", CUTOFF, "project", params={"owned": "true"})

        assert fake_api.calls == [("GET", "/projects", {"owned": "true", "page": "1", "per_page": 100})]

    def test_follows_next_page_header(self, fake_api: FakeApiClient, run_config: RunConfig) -> None:
        fake_api.on_call("GET", "/projects", paged_listing(total_pages=3, per_page=2))

        resources = ResourceFetcher(fake_api, run_config).fetch("/projects", CUTOFF, "project")

        assert len(resources) == 6
        assert [call[2]["page"] for call in fake_api.calls] == ["1", "2", "3"]
        assert resources[0].path == "qa/page-1-0"
        assert resources[-1].path == "qa/page-3-1"

    def test_stops_at_page_cutoff(
        self, fake_api: FakeApiClient, run_config: RunConfig, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test 15 pages of 100 items yield pages 1-10 only and page 11 is never requested."""
        fake_api.on_call("GET", "/projects", paged_listing(total_pages=15))

        with caplog.at_level(logging.WARNING):
            resources = ResourceFetcher(fake_api, run_config).fetch("/projects", CUTOFF, "project")

        assert len(resources) == 1000
        assert [call[2]["page"] for call in fake_api.calls] == [str(n) for n in range(1, 11)]
        assert "Stopping at page 10" in caplog.text

    def test_failed_page_is_skipped(
        self, fake_api: FakeApiClient, run_config: RunConfig, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test a non-success page contributes nothing while other pages are kept."""

        def handler(params: dict[str, Any]) -> requests.Response:
            if params["page"] == "1":
                return make_response(500, {"message": "500 Internal Server Error"}, headers={"X-Next-Page": "2"})
            return make_response(200, [project_record(project_id=2, path="qa/page-2")])

        fake_api.on_call("GET", "/projects", handler)

        with caplog.at_level(logging.ERROR):
            resources = ResourceFetcher(fake_api, run_config).fetch("/projects", CUTOFF, "project")

        assert [r.path for r in resources] == ["qa/page-2"]
        assert "returned (500)" in caplog.text

    def test_undecodable_page_is_skipped(
        self, fake_api: FakeApiClient, run_config: RunConfig, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test a 200 page with an HTML body is logged and the cursor is still followed."""

        def handler(params: dict[str, Any]) -> requests.Response:
            if params["page"] == "1":
                return make_response(200, [project_record(project_id=1, path="qa/page-1")], headers={"X-Next-Page": "2"})
            if params["page"] == "2":
                return make_response(200, "<html>Bad Gateway</html>", headers={"X-Next-Page": "3"})
            return make_response(200, [project_record(project_id=3, path="qa/page-3")])

        fake_api.on_call("GET", "/projects", handler)

        with caplog.at_level(logging.ERROR):
            resources = ResourceFetcher(fake_api, run_config).fetch("/projects", CUTOFF, "project")

        assert [r.path for r in resources] == ["qa/page-1", "qa/page-3"]
        assert "undecodable body" in caplog.text

    def test_malformed_records_are_skipped(self, fake_api: FakeApiClient, run_config: RunConfig) -> None:
        fake_api.on("GET", "/projects", make_response(200, [None, "qa/odd", project_record(path="qa/kept")]))

        resources = ResourceFetcher(fake_api, run_config).fetch("/projects", CUTOFF, "project")

        assert [r.path for r in resources] == ["qa/kept"]

    def test_failed_page_without_cursor_ends_fetch(self, fake_api: FakeApiClient, run_config: RunConfig) -> None:
        fake_api.on("GET", "/projects", make_response(502, "Bad Gateway"))

        resources = ResourceFetcher(fake_api, run_config).fetch("/projects", CUTOFF, "project")

        assert resources == []
        assert len(fake_api.calls) == 1

    def test_skips_unparseable_created_at(self, fake_api: FakeApiClient, run_config: RunConfig) -> None:
        records = [
            project_record(project_id=1, path="qa/broken", created_at="not-a-date"),
            project_record(project_id=2, path="qa/ok"),
        ]
        fake_api.on("GET", "/projects", make_response(200, records))

        resources = ResourceFetcher(fake_api, run_config).fetch("/projects", CUTOFF, "project")

        assert [r.path for r in resources] == ["qa/ok"]

    def test_tags_resources_with_type(self, fake_api: FakeApiClient, run_config: RunConfig) -> None:
        fake_api.on("GET", "/groups/g/subgroups", make_response(200, [{"id": 5, "full_path": "g/s", "created_at": "2024-01-01"}]))

        resources = ResourceFetcher(fake_api, run_config).fetch("/groups/g/subgroups", CUTOFF, "subgroup")

        assert resources[0].resource_type == "subgroup"
        assert resources[0].supports_marked_deletion is False

    def test_transport_error_propagates(self, run_config: RunConfig) -> None:
        class BrokenClient:
            def get(self, path: str, params: dict[str, Any] = None) -> requests.Response:
                raise requests.ConnectionError("Name or service not known")

        with pytest.raises(requests.ConnectionError):
            ResourceFetcher(BrokenClient(), run_config).fetch("/projects", CUTOFF, "project")
