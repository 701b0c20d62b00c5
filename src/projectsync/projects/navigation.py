"""Navigation state and the project selection synchronizer.

``NavigationContext`` is the in-process stand-in for the application router:
it holds the current route and notifies subscribers on every change.
``NavigationSynchronizer`` reacts to those changes, keeps the active project
selection (a project id or ``"home"``) in sync with the route and loads the
routed project into the cache.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional, Set

from ..util.log import Log
from .cache import ProjectCache
from .types import HOME, HomeProject, ProjectType

log = Log.create({"service": "projects.navigation"})

PROJECT_ID_KEY = "projectId"


def _single(value: Any) -> Optional[str]:
    """Route values may repeat (``?projectId=a&projectId=b``); the first one wins."""
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if isinstance(value, str) and value:
        return value
    return None


@dataclass(frozen=True)
class NavigationState:
    """A route: its path plus path parameters and query parameters."""
    path: str = "/"
    params: Mapping[str, Any] = field(default_factory=dict)
    query: Mapping[str, Any] = field(default_factory=dict)

    @property
    def segments(self) -> List[str]:
        return [part for part in self.path.split("/") if part]

    @property
    def project_id_param(self) -> Optional[str]:
        return _single(self.params.get(PROJECT_ID_KEY))

    @property
    def project_id_query(self) -> Optional[str]:
        return _single(self.query.get(PROJECT_ID_KEY))

    def is_home(self) -> bool:
        return "home" in self.segments

    def is_workflow_detail(self) -> bool:
        """``/workflow/<id>`` and deeper; a bare ``/workflow`` is not a detail view."""
        segments = self.segments
        return "workflow" in segments[:-1]


class NavigationContext:
    """Holds the current route and notifies listeners when it changes."""

    def __init__(self, initial: Optional[NavigationState] = None) -> None:
        self._state = initial or NavigationState()
        self._listeners: List[Callable[[NavigationState], None]] = []

    @property
    def state(self) -> NavigationState:
        return self._state

    def navigate(self, state: NavigationState) -> None:
        """Make ``state`` the current route and notify listeners."""
        log.debug("navigating", {"path": state.path})
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                log.error("navigation listener error", {"error": str(e)})

    def subscribe(
        self,
        callback: Callable[[NavigationState], None],
        *,
        immediate: bool = True,
    ) -> Callable[[], None]:
        """Register a route listener.

        Args:
            callback: Called with the new state on every change
            immediate: Also call it right away with the current state

        Returns:
            Unsubscribe function
        """
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        if immediate:
            callback(self._state)
        return unsubscribe


class NavigationSynchronizer:
    """Keeps the active project selection in step with navigation.

    The active selection is recomputed from scratch on every route change:
    a ``projectId`` path parameter wins, then a ``projectId`` query parameter,
    then the locally stored override, else ``None``.

    Route changes are handled by tasks on the running event loop. A newer
    route does not cancel an older task still waiting on ``load_by_id``; its
    result still lands in the cache when it arrives.
    """

    def __init__(self, navigation: NavigationContext, cache: ProjectCache) -> None:
        self._navigation = navigation
        self._cache = cache
        self._override: Optional[str] = None
        self._tasks: Set[asyncio.Task] = set()
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def active_id(self) -> Optional[str]:
        state = self._navigation.state
        return state.project_id_param or state.project_id_query or self._override

    @active_id.setter
    def active_id(self, value: Optional[str]) -> None:
        self._override = value

    @property
    def current_project_id(self) -> Optional[str]:
        return self._current_project_id(self._navigation.state)

    @property
    def is_project_home(self) -> bool:
        return self._navigation.state.is_home()

    def _current_project_id(self, state: NavigationState) -> Optional[str]:
        current = self._cache.current_project
        return state.project_id_param or state.project_id_query or (current.id if current else None)

    async def sync(self, state: NavigationState) -> None:
        """Apply one route change."""
        self._override = None

        if state.is_home():
            self._override = HOME
            self._cache.set_current(None)

        if state.is_workflow_detail():
            self._override = self._current_project_id(state) or HOME

        project_id = state.project_id_param
        if not project_id:
            return

        await self._cache.load_by_id(project_id)

    async def set_active_by_home_project(self, home_project: Optional[HomeProject]) -> None:
        """Point the selection at the project owning the resource on screen.

        Personal projects map to ``"home"``. A team project becomes the
        selection and is loaded when no project is resolved yet.
        """
        if home_project is not None and home_project.type == ProjectType.PERSONAL:
            self._override = HOME
            return

        self._override = home_project.id if home_project else None
        if home_project is not None and not self.current_project_id:
            await self._cache.load_by_id(home_project.id)

    def start(self) -> None:
        """Subscribe to navigation; the current route is handled right away.

        Must be called with an event loop running.
        """
        if self._unsubscribe is not None:
            return
        self._loop = asyncio.get_running_loop()
        self._unsubscribe = self._navigation.subscribe(self._schedule, immediate=True)

    def stop(self) -> None:
        """Stop reacting to navigation. Tasks already started run to completion."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def wait_idle(self) -> None:
        """Wait until every scheduled route change has been handled."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _schedule(self, state: NavigationState) -> None:
        assert self._loop is not None
        task = self._loop.create_task(self.sync(state))
        self._tasks.add(task)
        task.add_done_callback(self._on_done)

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            log.error("navigation sync failed", {"error": error})
