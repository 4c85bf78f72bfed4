"""Data models for cleanup runs."""

from __future__ import annotations

from .outcome import Outcome, OutcomeKind
from .resource_ref import ResourceRef
from .run_config import RunConfig
from .run_report import ReportStatus, RunReport

__all__ = [
    "Outcome",
    "OutcomeKind",
    "ReportStatus",
    "ResourceRef",
    "RunConfig",
    "RunReport",
]
