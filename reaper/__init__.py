"""Stale Resource Reaper - cleanup of stale resources on a GitLab-style API."""

__version__ = "0.1.0"
