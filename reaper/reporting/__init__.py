"""Run reporting.

Classes:
    OutcomeReporter: Outcome aggregation and console display
    ReportStorage: YAML report files
"""

from __future__ import annotations

from .reporter import OutcomeReporter
from .storage import ReportStorage

__all__ = [
    "OutcomeReporter",
    "ReportStorage",
]
