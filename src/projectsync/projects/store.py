"""Session-scoped project store.

``ProjectsStore`` owns one cache, its derived views, the navigation
synchronizer and the mutation coordinator. Build one per session, pass it
to whatever needs it, call ``startup()`` inside the event loop and
``shutdown()`` when the session ends; the cached state is discarded with it.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence

from ..permission.types import PermissionOracle
from ..util.log import Log
from .cache import ProjectCache
from .mutations import ProjectMutations
from .navigation import NavigationContext, NavigationSynchronizer
from .types import (
    HomeProject,
    Project,
    ProjectCreateRequest,
    ProjectListItem,
    ProjectsCount,
    ProjectUpdateRequest,
    RemoteProjectService,
    ResourceKind,
    ResourceStore,
)
from .views import ProjectViews

log = Log.create({"service": "projects.store"})


class _NoopResourceStore:
    async def refresh_filtered_by_project(self, project_id: Optional[str]) -> None:
        return None


class ProjectsStore:
    """Project cache, views, navigation sync and mutations for one session."""

    def __init__(
        self,
        service: RemoteProjectService,
        oracle: PermissionOracle,
        *,
        scopes: Callable[[], Optional[Sequence[str]]],
        team_limit: Callable[[], int],
        navigation: Optional[NavigationContext] = None,
        workflows: Optional[ResourceStore] = None,
        credentials: Optional[ResourceStore] = None,
    ) -> None:
        self.navigation = navigation or NavigationContext()
        self.cache = ProjectCache(service)
        self.views = ProjectViews(self.cache, oracle, scopes=scopes, team_limit=team_limit)
        self.sync = NavigationSynchronizer(self.navigation, self.cache)
        self.mutations = ProjectMutations(
            service,
            self.cache,
            workflows=workflows or _NoopResourceStore(),
            credentials=credentials or _NoopResourceStore(),
            current_project_id=lambda: self.sync.current_project_id,
        )
        self.started = False

    async def startup(self) -> None:
        if self.started:
            return
        self.sync.start()
        self.started = True
        log.debug("project store started", {"path": self.navigation.state.path})

    async def shutdown(self) -> None:
        self.sync.stop()
        await self.sync.wait_idle()
        self.started = False
        log.debug("project store stopped")

    # Cached state
    @property
    def projects(self) -> List[ProjectListItem]:
        return self.cache.projects

    @property
    def my_projects(self) -> List[ProjectListItem]:
        return self.cache.my_projects

    @property
    def personal_project(self) -> Optional[Project]:
        return self.cache.personal_project

    @property
    def current_project(self) -> Optional[Project]:
        return self.cache.current_project

    @property
    def projects_count(self) -> ProjectsCount:
        return self.cache.projects_count

    # Navigation
    @property
    def active_id(self) -> Optional[str]:
        return self.sync.active_id

    @active_id.setter
    def active_id(self, value: Optional[str]) -> None:
        self.sync.active_id = value

    @property
    def current_project_id(self) -> Optional[str]:
        return self.sync.current_project_id

    @property
    def is_project_home(self) -> bool:
        return self.sync.is_project_home

    async def set_active_by_home_project(self, home_project: Optional[HomeProject]) -> None:
        await self.sync.set_active_by_home_project(home_project)

    # Loads
    def set_current_project(self, project: Optional[Project]) -> None:
        self.cache.set_current(project)

    async def get_all_projects(self) -> List[ProjectListItem]:
        return await self.cache.load_all()

    async def get_my_projects(self) -> List[ProjectListItem]:
        return await self.cache.load_mine()

    async def get_personal_project(self) -> Project:
        return await self.cache.load_personal()

    async def get_available_projects(self) -> List[ProjectListItem]:
        """Load whichever collection ``views.available_projects`` will show."""
        if self.views.global_project_permissions.get("list"):
            return await self.cache.load_all()
        return await self.cache.load_mine()

    async def fetch_project(self, project_id: str) -> Project:
        return await self.cache.fetch_project(project_id)

    async def get_project(self, project_id: str) -> Project:
        return await self.cache.load_by_id(project_id)

    async def get_projects_count(self) -> ProjectsCount:
        return await self.cache.load_counts()

    # Mutations
    async def create_project(self, request: ProjectCreateRequest) -> Project:
        return await self.mutations.create(request)

    async def update_project(self, request: ProjectUpdateRequest) -> None:
        await self.mutations.update(request)

    async def delete_project(self, project_id: str, transfer_id: Optional[str] = None) -> None:
        await self.mutations.delete(project_id, transfer_id)

    async def move_resource_to_project(
        self,
        kind: ResourceKind,
        resource_id: str,
        project_id: str,
    ) -> None:
        await self.mutations.move_resource_to_project(kind, resource_id, project_id)
