"""Project mutations.

Each operation calls the remote service first and touches the cache only
after that call succeeded, so a failed mutation leaves local state as it was.
Counters are always re-fetched after create/delete rather than adjusted
locally: the team-project limit is checked against the server's number.
"""

from __future__ import annotations

from typing import Callable, Optional

from ..util.log import Log
from .cache import ProjectCache, parse_payload
from .types import (
    Project,
    ProjectCreateRequest,
    ProjectListItem,
    ProjectUpdateRequest,
    RemoteProjectService,
    ResourceKind,
    ResourceStore,
)

log = Log.create({"service": "projects.mutations"})


class ProjectMutations:
    """Create/update/delete/transfer coordinator for a ``ProjectCache``."""

    def __init__(
        self,
        service: RemoteProjectService,
        cache: ProjectCache,
        *,
        workflows: ResourceStore,
        credentials: ResourceStore,
        current_project_id: Callable[[], Optional[str]],
    ) -> None:
        self._service = service
        self._cache = cache
        self._workflows = workflows
        self._credentials = credentials
        self._current_project_id = current_project_id

    async def create(self, request: ProjectCreateRequest) -> Project:
        """Create a project owned by the current actor."""
        created = await self._service.create_project(
            request.model_dump(by_alias=True, exclude_none=True)
        )
        project = parse_payload(Project, created)
        log.info("created project", {"project_id": project.id, "type": project.type.value})
        await self._cache.load_counts()
        self._cache.append_mine(parse_payload(ProjectListItem, project.model_dump()))
        return project

    async def update(self, request: ProjectUpdateRequest) -> None:
        """Rename a project and, when ``relations`` is given, replace its members.

        Memberships are not part of the cached list shape, so a relations
        change re-fetches the project instead of patching it.
        """
        await self._service.update_project(request.id, request.payload())
        log.info("updated project", {"project_id": request.id})
        self._cache.rename(request.id, request.name)
        if request.relations is not None:
            await self._cache.load_by_id(request.id)

    async def delete(self, project_id: str, transfer_id: Optional[str] = None) -> None:
        """Delete a project, optionally moving its resources to ``transfer_id`` first."""
        await self._service.delete_project(project_id, transfer_id)
        log.info("deleted project", {"project_id": project_id, "transfer_id": transfer_id})
        await self._cache.load_counts()
        self._cache.remove(project_id)

    async def move_resource_to_project(
        self,
        kind: ResourceKind,
        resource_id: str,
        project_id: str,
    ) -> None:
        """Transfer a workflow or credential and refresh that store's listing.

        The refreshed listing is scoped to the project currently on screen,
        not to the destination.
        """
        if kind == "workflow":
            await self._service.move_workflow_to_project(resource_id, project_id)
            store = self._workflows
        elif kind == "credential":
            await self._service.move_credential_to_project(resource_id, project_id)
            store = self._credentials
        else:
            raise ValueError(f"unknown resource kind: {kind}")

        log.info("moved resource", {"kind": kind, "resource_id": resource_id, "project_id": project_id})
        await store.refresh_filtered_by_project(self._current_project_id())
