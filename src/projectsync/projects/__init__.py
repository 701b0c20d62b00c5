"""Project cache, derived views, navigation sync and mutations."""

from .cache import ProjectCache, ProjectEvent
from .mutations import ProjectMutations
from .navigation import NavigationContext, NavigationState, NavigationSynchronizer
from .store import ProjectsStore
from .types import (
    HOME,
    HomeProject,
    Project,
    ProjectCreateRequest,
    ProjectIcon,
    ProjectListItem,
    ProjectRelation,
    ProjectRelationUpdate,
    ProjectsCount,
    ProjectType,
    ProjectUpdateRequest,
    RemoteProjectService,
    ResourceKind,
    ResourceStore,
)
from .views import ProjectViews

__all__ = [
    "HOME",
    "HomeProject",
    "NavigationContext",
    "NavigationState",
    "NavigationSynchronizer",
    "Project",
    "ProjectCache",
    "ProjectCreateRequest",
    "ProjectEvent",
    "ProjectIcon",
    "ProjectListItem",
    "ProjectMutations",
    "ProjectRelation",
    "ProjectRelationUpdate",
    "ProjectsCount",
    "ProjectsStore",
    "ProjectType",
    "ProjectUpdateRequest",
    "ProjectViews",
    "RemoteProjectService",
    "ResourceKind",
    "ResourceStore",
]
