"""Permission oracle used to gate project views."""

from .oracle import ScopePermissionOracle, resource_permissions, scope_granted
from .types import PermissionOracle, ResourcePermissions

__all__ = [
    "PermissionOracle",
    "ResourcePermissions",
    "ScopePermissionOracle",
    "resource_permissions",
    "scope_granted",
]
