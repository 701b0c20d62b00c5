"""Protocol types for permission dependency injection."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Protocol, Sequence, runtime_checkable

# resource -> operation -> allowed, e.g. {"project": {"list": True, "create": False}}
ResourcePermissions = Dict[str, Dict[str, bool]]


@runtime_checkable
class PermissionOracle(Protocol):
    """Answers capability questions for the current actor.

    The store only reads these decisions; enforcement stays with the
    remote service.
    """

    def resource_permissions(self, scopes: Optional[Sequence[str]]) -> ResourcePermissions: ...

    def has_permission(self, required: Sequence[str], context: Mapping[str, Any]) -> bool: ...
