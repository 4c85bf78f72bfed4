"""Resource cleanup lifecycle.

This module discovers stale resources through paginated listings and drives
each through soft deletion, convergence polling and optional permanent
deletion.

Classes:
    ResourceCleaner: Main orchestrator for cleanup runs
    ResourceFetcher: Paginated discovery with age filter
    ResourceDeleter: Per-resource deletion state machine
    BatchRunner: Sequential batch execution with failure isolation
"""

from __future__ import annotations

from .cleaner import ResourceCleaner
from .deleter import ResourceDeleter
from .fetcher import ResourceFetcher
from .runner import BatchRunner

__all__ = [
    "ResourceCleaner",
    "ResourceFetcher",
    "ResourceDeleter",
    "BatchRunner",
]
