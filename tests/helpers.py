"""Shared test helpers."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Mapping, Optional, Sequence

from projectsync.api_client.errors import NotFoundError, TransportError
from projectsync.projects import NavigationContext, ProjectsStore


def project(project_id: str, name: str | None = None, type: str = "team", **extra: Any) -> Dict[str, Any]:
    """Wire-shaped project payload."""
    return {"id": project_id, "name": name or f"Project {project_id}", "type": type, **extra}


class FakeProjectService:
    """In-memory remote project service that records every call.

    ``fail`` holds method names that raise ``TransportError``; ``gates`` maps
    a project id to an event ``get_project`` waits on before answering.
    """

    def __init__(
        self,
        *,
        projects: Sequence[Dict[str, Any]] = (),
        my_projects: Sequence[Dict[str, Any]] = (),
        personal: Optional[Dict[str, Any]] = None,
        count: Optional[Dict[str, int]] = None,
    ) -> None:
        self.projects = [dict(p) for p in projects]
        self.my_projects = [dict(p) for p in my_projects]
        self.personal = personal or project("personal-1", "Me", type="personal")
        self.count = dict(count or {"personal": 1, "team": 0, "public": 0})
        self.calls: List[tuple[str, tuple]] = []
        self.fail: set[str] = set()
        self.gates: Dict[str, asyncio.Event] = {}
        self._next_id = 100

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if name in self.fail:
            raise TransportError(f"{name} failed", status_code=500, path=f"/rest/{name}")

    def calls_to(self, name: str) -> List[tuple]:
        return [args for call, args in self.calls if call == name]

    def _find(self, project_id: str) -> Optional[Dict[str, Any]]:
        for item in [*self.projects, *self.my_projects, self.personal]:
            if item["id"] == project_id:
                return item
        return None

    async def list_projects(self) -> List[Dict[str, Any]]:
        self._record("list_projects")
        return [dict(p) for p in self.projects]

    async def list_my_projects(self) -> List[Dict[str, Any]]:
        self._record("list_my_projects")
        return [dict(p) for p in self.my_projects]

    async def get_personal_project(self) -> Dict[str, Any]:
        self._record("get_personal_project")
        return dict(self.personal)

    async def get_project(self, project_id: str) -> Dict[str, Any]:
        self._record("get_project", project_id)
        gate = self.gates.get(project_id)
        if gate is not None:
            await gate.wait()
        found = self._find(project_id)
        if found is None:
            raise NotFoundError("Project not found", status_code=404, path=f"/rest/projects/{project_id}")
        return {"relations": [], **found}

    async def create_project(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        self._record("create_project", payload)
        self._next_id += 1
        created = project(f"p{self._next_id}", payload["name"], relations=[])
        self.projects.append(created)
        self.my_projects.append(created)
        self.count["team"] += 1
        return dict(created)

    async def update_project(self, project_id: str, payload: Dict[str, Any]) -> None:
        self._record("update_project", project_id, payload)
        found = self._find(project_id)
        if found is not None and "name" in payload:
            found["name"] = payload["name"]

    async def delete_project(self, project_id: str, transfer_id: Optional[str] = None) -> None:
        self._record("delete_project", project_id, transfer_id)
        self.projects = [p for p in self.projects if p["id"] != project_id]
        self.my_projects = [p for p in self.my_projects if p["id"] != project_id]
        self.count["team"] = max(0, self.count["team"] - 1)

    async def count_projects(self) -> Dict[str, Any]:
        self._record("count_projects")
        return dict(self.count)

    async def move_workflow_to_project(self, workflow_id: str, project_id: str) -> None:
        self._record("move_workflow_to_project", workflow_id, project_id)

    async def move_credential_to_project(self, credential_id: str, project_id: str) -> None:
        self._record("move_credential_to_project", credential_id, project_id)


class FakeOracle:
    """Permission oracle with fixed answers."""

    def __init__(self, *, can_list: bool = False, can_create: bool = False) -> None:
        self.can_list = can_list
        self.can_create = can_create
        self.checks: List[tuple] = []

    def resource_permissions(self, scopes: Optional[Sequence[str]]) -> Dict[str, Dict[str, bool]]:
        return {"project": {"list": self.can_list, "create": self.can_create}}

    def has_permission(self, required: Sequence[str], context: Mapping[str, Any]) -> bool:
        self.checks.append((tuple(required), dict(context)))
        return self.can_create


class FakeResourceStore:
    """Sibling store recording which project each refresh was scoped to."""

    def __init__(self) -> None:
        self.refreshed: List[Optional[str]] = []

    async def refresh_filtered_by_project(self, project_id: Optional[str]) -> None:
        self.refreshed.append(project_id)


def make_store(
    service: Optional[FakeProjectService] = None,
    *,
    oracle: Optional[FakeOracle] = None,
    team_limit: int = -1,
    navigation: Optional[NavigationContext] = None,
    workflows: Optional[FakeResourceStore] = None,
    credentials: Optional[FakeResourceStore] = None,
) -> ProjectsStore:
    """Build a store over fakes; ``team_limit`` may be changed later via ``store.limit``."""
    limit = {"value": team_limit}
    store = ProjectsStore(
        service or FakeProjectService(),
        oracle or FakeOracle(),
        scopes=lambda: [],
        team_limit=lambda: limit["value"],
        navigation=navigation,
        workflows=workflows,
        credentials=credentials,
    )
    store.limit = limit  # type: ignore[attr-defined]
    return store
