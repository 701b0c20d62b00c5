"""Errors raised by the remote project service client."""

from __future__ import annotations

from typing import Any


class TransportError(RuntimeError):
    """Raised when a remote call fails, either on the network or with an error status.

    ``status_code`` is ``None`` when no response was received.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        payload: Any | None = None,
        path: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload
        self.path = path


class NotFoundError(TransportError):
    """Raised when the remote entity does not exist (HTTP 404)."""


class MalformedResponseError(TransportError):
    """Raised when a success response does not carry the expected payload."""
