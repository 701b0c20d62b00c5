"""Derived project views.

Every view is a pure function of cached state, the permission oracle and
the team-project limit. ``ProjectViews`` recomputes them on each access,
so there is nothing to invalidate when an input changes.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence

from ..permission.types import PermissionOracle
from .cache import ProjectCache
from .types import ProjectListItem, ProjectType

# Team-project limit meaning "no limit".
UNLIMITED = -1

CREATE_PROJECT_SCOPE = "project:create"


def select_available_projects(
    *,
    projects: List[ProjectListItem],
    my_projects: List[ProjectListItem],
    can_list_all: bool,
) -> List[ProjectListItem]:
    """Pick the whole collection the actor may browse; never a union of both."""
    return projects if can_list_all else my_projects


def filter_by_type(projects: List[ProjectListItem], project_type: ProjectType) -> List[ProjectListItem]:
    return [p for p in projects if p.type == project_type]


def is_team_project_feature_enabled(limit: int) -> bool:
    return limit != 0


def has_unlimited_projects(limit: int) -> bool:
    return limit == UNLIMITED


def is_team_project_limit_exceeded(*, team_count: int, limit: int) -> bool:
    # count >= -1 holds for every count, so unlimited must short-circuit.
    if has_unlimited_projects(limit):
        return False
    return team_count >= limit


def can_create_projects(*, team_count: int, limit: int) -> bool:
    return has_unlimited_projects(limit) or (
        is_team_project_feature_enabled(limit)
        and not is_team_project_limit_exceeded(team_count=team_count, limit=limit)
    )


class ProjectViews:
    """Read-only views over a ``ProjectCache``.

    Args:
        cache: The session's project cache
        oracle: Permission oracle for the current actor
        scopes: Returns the actor's global scopes (``None`` when signed out)
        team_limit: Returns the configured team-project limit
    """

    def __init__(
        self,
        cache: ProjectCache,
        oracle: PermissionOracle,
        *,
        scopes: Callable[[], Optional[Sequence[str]]],
        team_limit: Callable[[], int],
    ) -> None:
        self._cache = cache
        self._oracle = oracle
        self._scopes = scopes
        self._team_limit = team_limit

    @property
    def global_project_permissions(self) -> Dict[str, bool]:
        return self._oracle.resource_permissions(self._scopes()).get("project", {})

    @property
    def available_projects(self) -> List[ProjectListItem]:
        return select_available_projects(
            projects=self._cache.projects,
            my_projects=self._cache.my_projects,
            can_list_all=bool(self.global_project_permissions.get("list")),
        )

    @property
    def personal_projects(self) -> List[ProjectListItem]:
        return filter_by_type(self._cache.projects, ProjectType.PERSONAL)

    @property
    def team_projects(self) -> List[ProjectListItem]:
        return filter_by_type(self._cache.projects, ProjectType.TEAM)

    @property
    def team_projects_limit(self) -> int:
        return self._team_limit()

    @property
    def is_team_project_feature_enabled(self) -> bool:
        return is_team_project_feature_enabled(self.team_projects_limit)

    @property
    def has_unlimited_projects(self) -> bool:
        return has_unlimited_projects(self.team_projects_limit)

    @property
    def is_team_project_limit_exceeded(self) -> bool:
        return is_team_project_limit_exceeded(
            team_count=self._cache.projects_count.team,
            limit=self.team_projects_limit,
        )

    @property
    def can_create_projects(self) -> bool:
        return can_create_projects(
            team_count=self._cache.projects_count.team,
            limit=self.team_projects_limit,
        )

    @property
    def has_permission_to_create_projects(self) -> bool:
        return self._oracle.has_permission(["rbac"], {"rbac": {"scope": CREATE_PROJECT_SCOPE}})
