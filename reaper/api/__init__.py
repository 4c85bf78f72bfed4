"""Remote API access.

Classes:
    ApiClient: HTTP client for the REST API
    ResourceKind: Listing and resource endpoints of a resource kind
"""

from __future__ import annotations

from .client import ApiClient
from .resource_types import ResourceKind

__all__ = [
    "ApiClient",
    "ResourceKind",
]
