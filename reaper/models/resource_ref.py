"""Resource reference model.

The identity and metadata a discovered resource carries through a cleanup run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional, Union

MARKED_FOR_DELETION_KEY = "marked_for_deletion_on"


def parse_date(value: str) -> date:
    """Parse an API timestamp into a calendar date.

    Accepts full ISO 8601 timestamps (``2024-01-09T12:30:00.000Z``) as well as
    plain dates (``2024-01-09``).

    Args:
        value: Timestamp string from the API

    Returns:
        Calendar date of the timestamp

    Raises:
        ValueError: If the value is empty or not ISO 8601
    """
    if not value:
        raise ValueError("Empty timestamp")

    normalized = value.strip()
    if normalized.endswith("Z"):
        normalized = normalized[:-1] + "+00:00"

    return datetime.fromisoformat(normalized).date()


@dataclass(frozen=True)
class ResourceRef:
    """Reference to a remote resource.

    Built from a parsed API record by the fetcher. Instances are never mutated;
    the deleter replaces a reference with a freshly fetched one when the remote
    state may have changed (e.g. a project renamed when marked for deletion).

    Attributes:
        resource_type: Resource kind name (project, group, subgroup, user)
        created_at: Raw creation timestamp from the API
        id: Remote identifier (optional)
        full_path: Full hierarchical path (optional)
        path_with_namespace: Namespaced path (optional)
        web_url: Canonical URL (optional)
        marked_for_deletion_on: Date the resource was marked for deletion (optional)
        supports_marked_deletion: Whether the record exposes the marked-for-deletion field at all
        attributes: The complete parsed record
    """

    resource_type: str
    created_at: str
    id: Optional[Union[int, str]] = None
    full_path: Optional[str] = None
    path_with_namespace: Optional[str] = None
    web_url: Optional[str] = None
    marked_for_deletion_on: Optional[str] = None
    supports_marked_deletion: bool = False
    attributes: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_record(cls, resource_type: str, record: dict[str, Any]) -> ResourceRef:
        """Create a reference from a parsed API record.

        Args:
            resource_type: Resource kind name
            record: JSON object returned by the API

        Returns:
            ResourceRef instance
        """
        return cls(
            resource_type=resource_type,
            created_at=record.get("created_at") or "",
            id=record.get("id"),
            full_path=record.get("full_path"),
            path_with_namespace=record.get("path_with_namespace"),
            web_url=record.get("web_url"),
            marked_for_deletion_on=record.get(MARKED_FOR_DELETION_KEY),
            supports_marked_deletion=MARKED_FOR_DELETION_KEY in record,
            attributes=dict(record),
        )

    @property
    def path(self) -> Optional[str]:
        """Identity path: first non-empty of full path, namespaced path, web URL."""
        return self.full_path or self.path_with_namespace or self.web_url

    @property
    def created_date(self) -> date:
        return parse_date(self.created_at)

    @property
    def is_marked_for_deletion(self) -> bool:
        return bool(self.marked_for_deletion_on)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary for report serialization."""
        return {
            "resource_type": self.resource_type,
            "id": self.id,
            "path": self.path,
            "created_at": self.created_at,
            "marked_for_deletion_on": self.marked_for_deletion_on,
        }
