import pytest

from projectsync.api_client.errors import TransportError
from projectsync.projects import (
    NavigationContext,
    NavigationState,
    ProjectCreateRequest,
    ProjectRelationUpdate,
    ProjectUpdateRequest,
)
from tests.helpers import FakeProjectService, FakeResourceStore, make_store, project


@pytest.mark.anyio
async def test_create_refreshes_counts_and_appends_to_my_projects() -> None:
    service = FakeProjectService(my_projects=[project("p1")], count={"personal": 1, "team": 1, "public": 0})
    store = make_store(service)
    await store.get_my_projects()
    await store.get_projects_count()

    created = await store.create_project(ProjectCreateRequest(name="Launch"))

    assert created.name == "Launch"
    assert [p.id for p in store.my_projects] == ["p1", created.id]
    assert store.projects_count.team == 2
    assert [name for name, _ in service.calls][-2:] == ["create_project", "count_projects"]
    assert service.calls_to("create_project") == [({"name": "Launch"},)]


@pytest.mark.anyio
async def test_create_failure_leaves_cache_untouched() -> None:
    service = FakeProjectService(my_projects=[project("p1")])
    store = make_store(service)
    await store.get_my_projects()
    service.fail.add("create_project")

    with pytest.raises(TransportError):
        await store.create_project(ProjectCreateRequest(name="Launch"))

    assert [p.id for p in store.my_projects] == ["p1"]
    assert service.calls_to("count_projects") == []


@pytest.mark.anyio
async def test_update_renames_entry_and_current_project() -> None:
    service = FakeProjectService(my_projects=[project("p1", "Old"), project("p2", "Other")])
    store = make_store(service)
    await store.get_my_projects()
    await store.get_project("p1")

    await store.update_project(ProjectUpdateRequest(id="p1", name="New"))

    assert [p.name for p in store.my_projects] == ["New", "Other"]
    assert store.current_project.name == "New"
    assert service.calls_to("update_project") == [("p1", {"name": "New"})]
    assert service.calls_to("get_project") == [("p1",)]


@pytest.mark.anyio
async def test_update_with_relations_refetches_project() -> None:
    service = FakeProjectService(my_projects=[project("p1", "Old")])
    store = make_store(service)
    await store.get_my_projects()

    await store.update_project(
        ProjectUpdateRequest(
            id="p1",
            name="Old",
            relations=[ProjectRelationUpdate(user_id="u1", role="project:editor")],
        )
    )

    assert service.calls_to("update_project") == [
        ("p1", {"name": "Old", "relations": [{"userId": "u1", "role": "project:editor"}]}),
    ]
    assert service.calls_to("get_project") == [("p1",)]
    assert store.current_project.id == "p1"


@pytest.mark.anyio
async def test_update_failure_keeps_names() -> None:
    service = FakeProjectService(my_projects=[project("p1", "Old")])
    store = make_store(service)
    await store.get_my_projects()
    service.fail.add("update_project")

    with pytest.raises(TransportError):
        await store.update_project(ProjectUpdateRequest(id="p1", name="New"))

    assert store.my_projects[0].name == "Old"


@pytest.mark.anyio
async def test_delete_removes_project_and_refreshes_counts() -> None:
    service = FakeProjectService(
        projects=[project("p1"), project("p2")],
        my_projects=[project("p1"), project("p2")],
        count={"personal": 1, "team": 2, "public": 0},
    )
    store = make_store(service)
    await store.get_all_projects()
    await store.get_my_projects()

    await store.delete_project("p1", transfer_id="p2")

    assert [p.id for p in store.my_projects] == ["p2"]
    assert [p.id for p in store.projects] == ["p2"]
    assert store.projects_count.team == 1
    assert service.calls_to("delete_project") == [("p1", "p2")]


@pytest.mark.anyio
async def test_delete_failure_keeps_project() -> None:
    service = FakeProjectService(my_projects=[project("p1")])
    store = make_store(service)
    await store.get_my_projects()
    service.fail.add("delete_project")

    with pytest.raises(TransportError):
        await store.delete_project("p1")

    assert [p.id for p in store.my_projects] == ["p1"]


@pytest.mark.anyio
@pytest.mark.parametrize(
    ("kind", "remote_call"),
    [("workflow", "move_workflow_to_project"), ("credential", "move_credential_to_project")],
)
async def test_move_resource_refreshes_matching_store(kind: str, remote_call: str) -> None:
    service = FakeProjectService(projects=[project("p1"), project("p2")])
    workflows = FakeResourceStore()
    credentials = FakeResourceStore()
    navigation = NavigationContext(NavigationState(path="/projects/p1/workflows", params={"projectId": "p1"}))
    store = make_store(service, navigation=navigation, workflows=workflows, credentials=credentials)

    await store.move_resource_to_project(kind, "r1", "p2")

    assert service.calls_to(remote_call) == [("r1", "p2")]
    refreshed = workflows if kind == "workflow" else credentials
    untouched = credentials if kind == "workflow" else workflows
    assert refreshed.refreshed == ["p1"]
    assert untouched.refreshed == []
    assert store.my_projects == []


@pytest.mark.anyio
async def test_move_resource_unknown_kind() -> None:
    store = make_store()

    with pytest.raises(ValueError):
        await store.move_resource_to_project("folder", "r1", "p2")  # type: ignore[arg-type]
