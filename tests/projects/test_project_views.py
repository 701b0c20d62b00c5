import pytest

from projectsync.projects import ProjectCache, ProjectType, ProjectViews
from projectsync.projects.views import (
    can_create_projects,
    has_unlimited_projects,
    is_team_project_feature_enabled,
    is_team_project_limit_exceeded,
)
from tests.helpers import FakeOracle, FakeProjectService, project


async def _loaded_cache(*, team_count: int = 0) -> ProjectCache:
    service = FakeProjectService(
        projects=[project("a1"), project("a2", type="personal"), project("a3", type="public")],
        my_projects=[project("m1")],
        count={"personal": 1, "team": team_count, "public": 0},
    )
    cache = ProjectCache(service)
    await cache.load_all()
    await cache.load_mine()
    await cache.load_counts()
    return cache


def _views(cache: ProjectCache, oracle: FakeOracle, limit: int) -> ProjectViews:
    return ProjectViews(cache, oracle, scopes=lambda: [], team_limit=lambda: limit)


@pytest.mark.anyio
@pytest.mark.parametrize("can_list", [True, False])
async def test_available_projects_switches_whole_collection(can_list: bool) -> None:
    cache = await _loaded_cache()
    views = _views(cache, FakeOracle(can_list=can_list), limit=0)

    expected = cache.projects if can_list else cache.my_projects
    assert views.available_projects is expected


@pytest.mark.anyio
async def test_available_projects_follows_permission_changes() -> None:
    cache = await _loaded_cache()
    oracle = FakeOracle(can_list=False)
    views = _views(cache, oracle, limit=0)

    assert [p.id for p in views.available_projects] == ["m1"]
    oracle.can_list = True
    assert [p.id for p in views.available_projects] == ["a1", "a2", "a3"]


@pytest.mark.anyio
async def test_type_views_filter_master_collection() -> None:
    cache = await _loaded_cache()
    views = _views(cache, FakeOracle(can_list=False), limit=0)

    assert [p.id for p in views.personal_projects] == ["a2"]
    assert [p.id for p in views.team_projects] == ["a1"]
    assert all(p.type == ProjectType.TEAM for p in views.team_projects)


@pytest.mark.parametrize("team_count", [0, 5, 10_000])
def test_unlimited_always_allows_creation(team_count: int) -> None:
    assert has_unlimited_projects(-1)
    assert not is_team_project_limit_exceeded(team_count=team_count, limit=-1)
    assert can_create_projects(team_count=team_count, limit=-1)


def test_limit_reached_blocks_creation() -> None:
    assert is_team_project_feature_enabled(5)
    assert is_team_project_limit_exceeded(team_count=5, limit=5)
    assert not can_create_projects(team_count=5, limit=5)
    assert can_create_projects(team_count=4, limit=5)


@pytest.mark.parametrize("team_count", [0, 3])
def test_disabled_feature_blocks_creation(team_count: int) -> None:
    assert not is_team_project_feature_enabled(0)
    assert not can_create_projects(team_count=team_count, limit=0)


@pytest.mark.anyio
async def test_views_read_limit_and_count_on_each_access() -> None:
    cache = await _loaded_cache(team_count=5)
    limit = {"value": 5}
    views = ProjectViews(cache, FakeOracle(), scopes=lambda: [], team_limit=lambda: limit["value"])

    assert views.team_projects_limit == 5
    assert views.is_team_project_limit_exceeded
    assert not views.can_create_projects

    limit["value"] = -1
    assert views.has_unlimited_projects
    assert views.can_create_projects


@pytest.mark.anyio
async def test_create_permission_is_asked_on_every_access() -> None:
    cache = await _loaded_cache()
    oracle = FakeOracle(can_create=True)
    views = _views(cache, oracle, limit=-1)

    assert views.has_permission_to_create_projects
    oracle.can_create = False
    assert not views.has_permission_to_create_projects
    assert oracle.checks == [
        (("rbac",), {"rbac": {"scope": "project:create"}}),
        (("rbac",), {"rbac": {"scope": "project:create"}}),
    ]
