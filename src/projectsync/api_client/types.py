from __future__ import annotations

from typing import Any, TypedDict

JSONDict = dict[str, Any]


class ProjectIconPayload(TypedDict):
    type: str
    value: str


class ProjectCreatePayload(TypedDict, total=False):
    name: str
    icon: ProjectIconPayload


class ProjectRelationPayload(TypedDict):
    userId: str
    role: str


class ProjectUpdatePayload(TypedDict, total=False):
    name: str
    icon: ProjectIconPayload
    relations: list[ProjectRelationPayload]


class ProjectTransferPayload(TypedDict):
    destinationProjectId: str
