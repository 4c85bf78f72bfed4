"""Resource kind registry.

Maps resource kind names to their listing and resource endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from ..models.resource_ref import ResourceRef

SANDBOX_GROUPS = (
    "gitlab-qa-sandbox-group",
    "gitlab-qa-sandbox-group-0",
    "gitlab-qa-sandbox-group-1",
    "gitlab-qa-sandbox-group-2",
    "gitlab-qa-sandbox-group-3",
    "gitlab-qa-sandbox-group-4",
    "gitlab-qa-sandbox-group-5",
    "gitlab-qa-sandbox-group-6",
    "gitlab-qa-sandbox-group-7",
)


@dataclass(frozen=True)
class ResourceKind:
    """A kind of remote resource the cleaner knows how to list and delete.

    Attributes:
        name: Kind name (used as the resource type tag)
        list_paths: Listing endpoints, fetched in order
        resource_path: Collection path single resources live under
        list_params: Extra query parameters for listing requests
        description: Human-readable description
    """

    name: str
    list_paths: tuple[str, ...]
    resource_path: str
    list_params: dict[str, Any] = field(default_factory=dict)
    description: str = ""

    def resource_endpoint(self, resource: ResourceRef) -> str:
        """Endpoint of a single resource.

        Uses the remote id when present, falling back to the URL-encoded path.

        Raises:
            ValueError: If the resource has neither an id nor a path
        """
        if resource.id is not None:
            return f"{self.resource_path}/{resource.id}"

        if resource.path:
            return f"{self.resource_path}/{quote(resource.path, safe='')}"

        raise ValueError(f"Cannot build endpoint for {self.name} without id or path")


RESOURCE_KINDS: dict[str, ResourceKind] = {
    "project": ResourceKind(
        name="project",
        list_paths=("/projects",),
        resource_path="/projects",
        list_params={"owned": "true"},
        description="Projects owned by the token user",
    ),
    "group": ResourceKind(
        name="group",
        list_paths=("/groups",),
        resource_path="/groups",
        list_params={"owned": "true"},
        description="Groups owned by the token user",
    ),
    "subgroup": ResourceKind(
        name="subgroup",
        list_paths=tuple(f"/groups/{group}/subgroups" for group in SANDBOX_GROUPS),
        resource_path="/groups",
        description="Subgroups of the QA sandbox groups",
    ),
    "user": ResourceKind(
        name="user",
        list_paths=("/users",),
        resource_path="/users",
        list_params={"without_projects": "true"},
        description="Users (single-phase deletion)",
    ),
}


def get_resource_kind(name: str) -> ResourceKind:
    """Look up a resource kind by name.

    Raises:
        KeyError: If the kind is not supported
    """
    try:
        return RESOURCE_KINDS[name]
    except KeyError:
        supported = ", ".join(sorted(RESOURCE_KINDS))
        raise KeyError(f"Unsupported resource type: {name} (supported: {supported})") from None
