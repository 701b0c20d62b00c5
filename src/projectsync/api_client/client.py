from __future__ import annotations

from typing import Any

import httpx

from ..util.log import Log
from .errors import MalformedResponseError, NotFoundError, TransportError
from .types import ProjectCreatePayload, ProjectTransferPayload, ProjectUpdatePayload

log = Log.create({"service": "api_client"})


class ProjectsAPIClient:
    """Typed HTTP client for the remote project service."""

    def __init__(
        self,
        *,
        base_url: str,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            transport=transport,
            timeout=timeout,
            headers=headers or None,
        )

        if client is not None and headers:
            self._client.headers.update(headers)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request_json(
        self,
        method: str,
        path: str,
        *,
        json_body: dict[str, Any] | list[Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        try:
            response = await self._client.request(method, path, json=json_body, params=params)
        except httpx.HTTPError as e:
            log.error("request failed", {"method": method, "path": path, "error": str(e)})
            raise TransportError(f"{method} {path} failed: {e}", path=path) from e

        self._raise_for_status(response)
        if response.status_code == 204 or not response.content:
            return None

        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"{method} {path} returned a non-JSON body",
                status_code=response.status_code,
                payload=response.text,
                path=path,
            ) from e

        # The REST API wraps every body in {"data": ...}.
        if isinstance(payload, dict) and set(payload) == {"data"}:
            return payload["data"]
        return payload

    @staticmethod
    def _expect(result: Any, kind: type, path: str) -> Any:
        """Reject a success response whose body is not the expected JSON ``kind``."""
        if not isinstance(result, kind):
            shape = "empty body" if result is None else type(result).__name__
            raise MalformedResponseError(
                f"{path} returned {shape}, expected a JSON {kind.__name__}",
                payload=result,
                path=path,
            )
        return result

    @staticmethod
    def _extract_error_message(payload: Any, fallback: str) -> str:
        if isinstance(payload, dict):
            err = payload.get("error")
            if isinstance(err, dict):
                message = err.get("message")
                if isinstance(message, str) and message.strip():
                    return message
            if isinstance(err, str) and err.strip():
                return err
            message = payload.get("message")
            if isinstance(message, str) and message.strip():
                return message
        return fallback

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.is_success:
            return

        payload: Any | None
        try:
            payload = response.json()
        except ValueError:
            payload = response.text

        message = self._extract_error_message(
            payload,
            f"HTTP {response.status_code} for {response.request.method} {response.request.url.path}",
        )
        error_type = NotFoundError if response.status_code == 404 else TransportError
        raise error_type(
            message,
            status_code=response.status_code,
            payload=payload,
            path=response.request.url.path,
        )

    async def list_projects(self) -> list[dict[str, Any]]:
        path = "/rest/projects"
        return self._expect(await self._request_json("GET", path), list, path)

    async def list_my_projects(self) -> list[dict[str, Any]]:
        path = "/rest/projects/my-projects"
        return self._expect(await self._request_json("GET", path), list, path)

    async def get_personal_project(self) -> dict[str, Any]:
        path = "/rest/projects/personal"
        return self._expect(await self._request_json("GET", path), dict, path)

    async def get_project(self, project_id: str) -> dict[str, Any]:
        path = f"/rest/projects/{project_id}"
        return self._expect(await self._request_json("GET", path), dict, path)

    async def create_project(self, payload: ProjectCreatePayload | dict[str, Any]) -> dict[str, Any]:
        result = await self._request_json(
            "POST",
            "/rest/projects",
            json_body=dict(payload),
        )
        return self._expect(result, dict, "/rest/projects")

    async def update_project(
        self,
        project_id: str,
        payload: ProjectUpdatePayload | dict[str, Any],
    ) -> None:
        await self._request_json(
            "PATCH",
            f"/rest/projects/{project_id}",
            json_body=dict(payload),
        )

    async def delete_project(self, project_id: str, transfer_id: str | None = None) -> None:
        params = {"transferId": transfer_id} if transfer_id else None
        await self._request_json(
            "DELETE",
            f"/rest/projects/{project_id}",
            params=params,
        )

    async def count_projects(self) -> dict[str, Any]:
        path = "/rest/projects/count"
        return self._expect(await self._request_json("GET", path), dict, path)

    async def move_workflow_to_project(self, workflow_id: str, project_id: str) -> None:
        payload: ProjectTransferPayload = {"destinationProjectId": project_id}
        await self._request_json(
            "PUT",
            f"/rest/workflows/{workflow_id}/transfer",
            json_body=dict(payload),
        )

    async def move_credential_to_project(self, credential_id: str, project_id: str) -> None:
        payload: ProjectTransferPayload = {"destinationProjectId": project_id}
        await self._request_json(
            "PUT",
            f"/rest/credentials/{credential_id}/transfer",
            json_body=dict(payload),
        )
