"""Project entity models and the collaborator interfaces of the project store."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

# Active-selection sentinel for the personal "home" view.
HOME = "home"

ResourceKind = Literal["workflow", "credential"]


class ProjectType(str, Enum):
    PERSONAL = "personal"
    TEAM = "team"
    PUBLIC = "public"


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ProjectIcon(_WireModel):
    type: Literal["emoji", "icon"] = "icon"
    value: str


class ProjectRelation(_WireModel):
    """A member of a project and their project role."""
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    role: str


class ProjectListItem(_WireModel):
    """Summary shape returned by the collection endpoints."""
    id: str
    name: Optional[str] = None
    type: ProjectType
    icon: Optional[ProjectIcon] = None
    role: Optional[str] = None
    scopes: Optional[List[str]] = None
    created_at: Optional[str] = Field(None, alias="createdAt")
    updated_at: Optional[str] = Field(None, alias="updatedAt")


class Project(ProjectListItem):
    """Fully loaded project, including its memberships."""
    relations: List[ProjectRelation] = Field(default_factory=list)


class ProjectsCount(_WireModel):
    personal: int = 0
    team: int = 0
    public: int = 0


class ProjectCreateRequest(_WireModel):
    name: str
    icon: Optional[ProjectIcon] = None


class ProjectRelationUpdate(_WireModel):
    user_id: str = Field(alias="userId")
    role: str


class ProjectUpdateRequest(_WireModel):
    id: str
    name: str
    icon: Optional[ProjectIcon] = None
    relations: Optional[List[ProjectRelationUpdate]] = None

    def payload(self) -> Dict[str, Any]:
        """Request body for the update endpoint (the id travels in the path)."""
        return self.model_dump(by_alias=True, exclude={"id"}, exclude_none=True)


class HomeProject(_WireModel):
    """The owning project a workflow or credential declares."""
    id: str
    type: ProjectType
    name: Optional[str] = None


@runtime_checkable
class RemoteProjectService(Protocol):
    """Remote CRUD, count and transfer calls for projects.

    Implemented by ``projectsync.api_client.ProjectsAPIClient``. Every call
    may raise ``TransportError`` (``NotFoundError`` for a missing entity).
    """

    async def list_projects(self) -> List[Dict[str, Any]]: ...

    async def list_my_projects(self) -> List[Dict[str, Any]]: ...

    async def get_personal_project(self) -> Dict[str, Any]: ...

    async def get_project(self, project_id: str) -> Dict[str, Any]: ...

    async def create_project(self, payload: Dict[str, Any]) -> Dict[str, Any]: ...

    async def update_project(self, project_id: str, payload: Dict[str, Any]) -> None: ...

    async def delete_project(self, project_id: str, transfer_id: Optional[str] = None) -> None: ...

    async def count_projects(self) -> Dict[str, Any]: ...

    async def move_workflow_to_project(self, workflow_id: str, project_id: str) -> None: ...

    async def move_credential_to_project(self, credential_id: str, project_id: str) -> None: ...


@runtime_checkable
class ResourceStore(Protocol):
    """A sibling store (workflows, credentials) that lists resources per project."""

    async def refresh_filtered_by_project(self, project_id: Optional[str]) -> None: ...
