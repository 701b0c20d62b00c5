"""HTTP client for the remote project service."""

from .client import ProjectsAPIClient
from .errors import MalformedResponseError, NotFoundError, TransportError

__all__ = ["MalformedResponseError", "NotFoundError", "ProjectsAPIClient", "TransportError"]
