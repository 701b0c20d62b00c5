"""projectsync - client-side project cache with navigation sync.

Keeps a session snapshot of the projects an actor can see, derives
permission-gated views from it and follows the application's route to
keep the active project selection current.
"""

__version__ = "0.1.0"


def __getattr__(name: str):
    """Lazy import of the main entry points."""
    if name in ("ProjectsStore", "NavigationContext", "NavigationState"):
        from . import projects
        return getattr(projects, name)
    if name in ("ProjectsAPIClient", "TransportError", "NotFoundError"):
        from . import api_client
        return getattr(api_client, name)
    if name == "Log":
        from .util.log import Log
        return Log
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "__version__",
    "ProjectsStore",
    "NavigationContext",
    "NavigationState",
    "ProjectsAPIClient",
    "TransportError",
    "NotFoundError",
    "Log",
]
