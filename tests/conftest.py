"""Shared pytest fixtures."""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterator

import pytest

from reaper.models.run_config import RunConfig
from tests.fixtures.api import FakeApiClient, FakeClock


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Undo CLI logging setup so caplog sees package log records."""
    yield
    logger = logging.getLogger("reaper")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def run_config() -> RunConfig:
    """Live-run configuration with a fixed cutoff."""
    return RunConfig(
        api_base="https://gitlab.example.com",
        api_token="test-token",
        delete_before=date(2024, 1, 10),
    )


@pytest.fixture
def fake_api() -> FakeApiClient:
    return FakeApiClient()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
