"""Scope-list permission oracle.

Scopes are ``resource:operation`` strings (``project:list``,
``project:create``). Granted scopes may use ``*`` wildcards, so
``project:*`` grants every project operation.
"""

from __future__ import annotations

import fnmatch
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Sequence

from ..util.log import Log
from .types import ResourcePermissions

log = Log.create({"service": "permission"})

RESOURCE_OPERATIONS: Dict[str, tuple[str, ...]] = {
    "project": ("create", "read", "update", "delete", "list"),
    "workflow": ("create", "read", "update", "delete", "list", "move"),
    "credential": ("create", "read", "update", "delete", "list", "move"),
}


def _wildcard_match(value: str, pattern: str) -> bool:
    """Match a scope against a granted pattern (``*`` wildcards)."""
    if pattern == "*":
        return True
    return fnmatch.fnmatchcase(value, pattern)


def scope_granted(scope: str, granted: Iterable[str]) -> bool:
    return any(_wildcard_match(scope, pattern) for pattern in granted)


def resource_permissions(scopes: Optional[Sequence[str]]) -> ResourcePermissions:
    """Expand a scope list into a resource -> operation -> bool table.

    A missing scope list (no signed-in actor) grants nothing.
    """
    granted = list(scopes or [])
    return {
        resource: {
            operation: scope_granted(f"{resource}:{operation}", granted)
            for operation in operations
        }
        for resource, operations in RESOURCE_OPERATIONS.items()
    }


class ScopePermissionOracle:
    """Permission oracle backed by the actor's global scope list."""

    def __init__(self, scopes: Callable[[], Optional[Sequence[str]]]) -> None:
        self._scopes = scopes

    def resource_permissions(self, scopes: Optional[Sequence[str]]) -> ResourcePermissions:
        return resource_permissions(scopes)

    def has_permission(self, required: Sequence[str], context: Mapping[str, Any]) -> bool:
        """Check every required permission kind against ``context``.

        Only the ``rbac`` kind is understood: ``context["rbac"]["scope"]`` is a
        scope or list of scopes that must all be granted. Unknown kinds deny.
        """
        granted = list(self._scopes() or [])
        for kind in required:
            if kind != "rbac":
                log.warn("unknown permission kind", {"kind": kind})
                return False
            options = context.get("rbac") or {}
            wanted = options.get("scope")
            if wanted is None:
                return False
            if isinstance(wanted, str):
                wanted = [wanted]
            if not all(scope_granted(scope, granted) for scope in wanted):
                return False
        return True
