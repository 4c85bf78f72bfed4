"""Deletion outcome model.

The terminal result of driving one resource through the deletion state machine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from requests import Response

from .resource_ref import ResourceRef


class OutcomeKind(Enum):
    """Terminal deletion state."""

    MARKED_FOR_DELETION = "marked_deletions"
    PERMANENTLY_DELETED = "permanent_deletions"
    FAILED = "failed_deletions"


@dataclass(frozen=True)
class Outcome:
    """Deletion outcome entity.

    Exactly one outcome is produced per resource per live run.

    Validation rules:
        - kind=failed: requires a response or a reason
        - kind=marked/deleted: no reason

    Attributes:
        kind: Terminal state reached
        resource: The resource, as last observed
        response: Last HTTP response seen for a failure (optional)
        reason: Human-readable failure reason (optional)
    """

    kind: OutcomeKind
    resource: ResourceRef
    response: Optional[Response] = None
    reason: Optional[str] = None

    @classmethod
    def marked(cls, resource: ResourceRef) -> Outcome:
        return cls(kind=OutcomeKind.MARKED_FOR_DELETION, resource=resource)

    @classmethod
    def deleted(cls, resource: ResourceRef) -> Outcome:
        return cls(kind=OutcomeKind.PERMANENTLY_DELETED, resource=resource)

    @classmethod
    def failed(cls, resource: ResourceRef, response: Optional[Response], reason: Optional[str] = None) -> Outcome:
        return cls(kind=OutcomeKind.FAILED, resource=resource, response=response, reason=reason)

    @property
    def is_failure(self) -> bool:
        return self.kind == OutcomeKind.FAILED

    @property
    def status_code(self) -> Optional[int]:
        return self.response.status_code if self.response is not None else None

    @property
    def response_body(self) -> str:
        if self.response is None:
            return ""
        return self.response.text

    def validate(self) -> bool:
        """Validate outcome invariants.

        Returns:
            True if validation passes

        Raises:
            ValueError: If any validation rule fails
        """
        if self.kind == OutcomeKind.FAILED:
            if self.response is None and not self.reason:
                raise ValueError("Failed outcome requires a response or a reason")
        elif self.reason:
            raise ValueError("Successful outcome cannot have a failure reason")

        return True

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary for report serialization."""
        data = {
            "outcome": self.kind.value,
            **self.resource.to_dict(),
        }

        if self.kind == OutcomeKind.FAILED:
            data["status_code"] = self.status_code
            data["reason"] = self.reason
            data["response"] = self.response_body

        return data
