"""Entity cache for projects.

Holds the canonical in-memory collections for a session: all projects,
the actor's projects, the personal project, the currently open project and
the server-side counters. Remote reads replace a collection wholesale once
the response arrives; a failed read leaves the previous value untouched.

Overlapping ``load_by_id`` calls are not ordered or cancelled: whichever
response lands last becomes ``current_project``, even when it answers the
earlier request.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..api_client.errors import MalformedResponseError
from ..util.log import Log
from .types import Project, ProjectListItem, ProjectsCount, RemoteProjectService

log = Log.create({"service": "projects.cache"})


M = TypeVar("M", bound=BaseModel)


def parse_payload(model: Type[M], raw: Any) -> M:
    """Validate a service payload; a malformed one is a failed remote call."""
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise MalformedResponseError(
            f"malformed {model.__name__} in project service response: {e.error_count()} invalid field(s)",
            payload=raw,
        ) from e


def _renamed(
    items: List[ProjectListItem], project_id: str, name: str
) -> Optional[List[ProjectListItem]]:
    """Copy of ``items`` with ``project_id`` renamed, or None when it is absent."""
    if not any(item.id == project_id for item in items):
        return None
    return [
        item.model_copy(update={"name": name}) if item.id == project_id else item
        for item in items
    ]


class ProjectEvent:
    """Change event names emitted by the cache."""

    PROJECTS_UPDATED = "projects.updated"
    MY_PROJECTS_UPDATED = "my_projects.updated"
    PERSONAL_PROJECT_UPDATED = "personal_project.updated"
    CURRENT_PROJECT_UPDATED = "current_project.updated"
    COUNT_UPDATED = "count.updated"


@dataclass
class _CacheState:
    """Cached project state, empty until first loaded."""
    projects: List[ProjectListItem] = field(default_factory=list)
    my_projects: List[ProjectListItem] = field(default_factory=list)
    personal_project: Optional[Project] = None
    current_project: Optional[Project] = None
    projects_count: ProjectsCount = field(default_factory=ProjectsCount)


class ProjectCache:
    """Project collections backed by the remote project service."""

    def __init__(self, service: RemoteProjectService) -> None:
        self._service = service
        self._data = _CacheState()
        self._listeners: Dict[str, List[Callable[[Any], None]]] = {}

    @property
    def projects(self) -> List[ProjectListItem]:
        return self._data.projects

    @property
    def my_projects(self) -> List[ProjectListItem]:
        return self._data.my_projects

    @property
    def personal_project(self) -> Optional[Project]:
        return self._data.personal_project

    @property
    def current_project(self) -> Optional[Project]:
        return self._data.current_project

    @property
    def projects_count(self) -> ProjectsCount:
        return self._data.projects_count

    # Remote loads
    async def load_all(self) -> List[ProjectListItem]:
        """Fetch every project visible to the service and replace ``projects``."""
        raw = await self._service.list_projects()
        self._data.projects = [parse_payload(ProjectListItem, item) for item in raw]
        log.debug("loaded projects", {"count": len(self._data.projects)})
        self._notify(ProjectEvent.PROJECTS_UPDATED, self._data.projects)
        return self._data.projects

    async def load_mine(self) -> List[ProjectListItem]:
        """Fetch the actor's own projects and replace ``my_projects``."""
        raw = await self._service.list_my_projects()
        self._data.my_projects = [parse_payload(ProjectListItem, item) for item in raw]
        log.debug("loaded my projects", {"count": len(self._data.my_projects)})
        self._notify(ProjectEvent.MY_PROJECTS_UPDATED, self._data.my_projects)
        return self._data.my_projects

    async def load_personal(self) -> Project:
        """Fetch and replace the actor's personal project."""
        project = parse_payload(Project, await self._service.get_personal_project())
        self._data.personal_project = project
        log.debug("loaded personal project", {"project_id": project.id})
        self._notify(ProjectEvent.PERSONAL_PROJECT_UPDATED, project)
        return project

    async def fetch_project(self, project_id: str) -> Project:
        """Fetch one project without touching the cache."""
        return parse_payload(Project, await self._service.get_project(project_id))

    async def load_by_id(self, project_id: str) -> Project:
        """Fetch one project and make it the current project."""
        project = await self.fetch_project(project_id)
        log.debug("loaded project", {"project_id": project_id})
        self.set_current(project)
        return project

    async def load_counts(self) -> ProjectsCount:
        """Fetch and replace the personal/team/public counters."""
        count = parse_payload(ProjectsCount, await self._service.count_projects())
        self._data.projects_count = count
        log.debug("loaded project counts", count.model_dump())
        self._notify(ProjectEvent.COUNT_UPDATED, count)
        return count

    def set_current(self, project: Optional[Project]) -> None:
        self._data.current_project = project
        self._notify(ProjectEvent.CURRENT_PROJECT_UPDATED, project)

    # Local patches applied after a successful mutation
    def append_mine(self, item: ProjectListItem) -> None:
        """Append to ``my_projects``.

        Patches always swap in a new list, so a list handed out earlier is
        never changed under its holder.
        """
        self._data.my_projects = [*self._data.my_projects, item]
        self._notify(ProjectEvent.MY_PROJECTS_UPDATED, self._data.my_projects)

    def rename(self, project_id: str, name: str) -> None:
        """Rename ``project_id`` wherever it is cached.

        Both collections are patched so the same id never carries two names;
        ids that are not cached are ignored.
        """
        mine = _renamed(self._data.my_projects, project_id, name)
        if mine is not None:
            self._data.my_projects = mine
            self._notify(ProjectEvent.MY_PROJECTS_UPDATED, mine)
        everyone = _renamed(self._data.projects, project_id, name)
        if everyone is not None:
            self._data.projects = everyone
            self._notify(ProjectEvent.PROJECTS_UPDATED, self._data.projects)

        current = self._data.current_project
        if current is not None and current.id == project_id:
            self.set_current(current.model_copy(update={"name": name}))

    def remove(self, project_id: str) -> None:
        """Drop ``project_id`` from both collections."""
        self._data.my_projects = [p for p in self._data.my_projects if p.id != project_id]
        self._notify(ProjectEvent.MY_PROJECTS_UPDATED, self._data.my_projects)
        if any(p.id == project_id for p in self._data.projects):
            self._data.projects = [p for p in self._data.projects if p.id != project_id]
            self._notify(ProjectEvent.PROJECTS_UPDATED, self._data.projects)

    # Listener methods
    def on(self, event: str, callback: Callable[[Any], None]) -> Callable[[], None]:
        """Register an event listener.

        Args:
            event: One of the ``ProjectEvent`` names
            callback: Called with the new value after each change

        Returns:
            Unsubscribe function
        """
        self._listeners.setdefault(event, []).append(callback)

        def unsubscribe():
            if callback in self._listeners.get(event, []):
                self._listeners[event].remove(callback)

        return unsubscribe

    def _notify(self, event: str, data: Any) -> None:
        for listener in list(self._listeners.get(event, [])):
            try:
                listener(data)
            except Exception as e:
                log.error("project cache listener error", {"event": event, "error": str(e)})
