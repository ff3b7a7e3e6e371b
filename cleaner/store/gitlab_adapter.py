from typing import Any

import httpx

from cleaner.logging.logger import Log
from cleaner.store.base import BaseJobStore
from cleaner.store.exceptions import (
    AmbiguousProjectError,
    InvalidPayloadError,
    ProjectNotFoundError,
    TransportError,
)
from cleaner.store.models import JobPage
from cleaner.store.parser import build_jobs, build_projects, parse_next_page


class GitLabJobStore(BaseJobStore):
    """Job store adapter for the GitLab REST API (v4)."""

    NEXT_PAGE_HEADER = "X-Next-Page"
    NOT_ERASABLE_STATUS = 403
    NOT_ERASABLE_MESSAGE = "not erasable"

    def __init__(
        self,
        *,
        base_url: str,
        token: str,
        timeout_seconds: int = 30,
        per_page: int = 50,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if per_page < 1:
            raise ValueError(f"per_page must be at least 1, got {per_page}")
        self._per_page = per_page
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={"PRIVATE-TOKEN": token},
            timeout=timeout_seconds,
            transport=transport,
        )

    async def resolve_project(self, name: str) -> int:
        response = await self._request("GET", "/projects", params={"search": name})
        projects = build_projects(self._json(response))
        if not projects:
            raise ProjectNotFoundError(
                f"No project found that matches the researched term '{name}'."
            )
        if len(projects) > 1:
            names = ", ".join(p.name for p in projects)
            raise AmbiguousProjectError(
                f"Multiple projects found that match the researched term '{name}': {names}"
            )
        Log.debug(f"Project '{name}' resolved to id {projects[0].id}")
        return projects[0].id

    async def list_jobs(self, project_id: int, page: int) -> JobPage:
        response = await self._request(
            "GET",
            f"/projects/{project_id}/jobs",
            params={"per_page": self._per_page, "page": page},
        )
        jobs = build_jobs(self._json(response))
        next_page = parse_next_page(response.headers.get(self.NEXT_PAGE_HEADER))
        return JobPage(jobs=jobs, next_page=next_page)

    async def erase_job(self, project_id: int, job_id: int) -> None:
        try:
            await self._request("POST", f"/projects/{project_id}/jobs/{job_id}/erase")
        except TransportError as exc:
            if not self._is_already_erased(exc):
                raise
            Log.debug(f"Job {job_id} of project {project_id} is already erased")

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        Log.debug(f"{method} {path} {params or ''}")
        try:
            response = await self._client.request(method, path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TransportError(
                f"{method} {path} returned {exc.response.status_code}: "
                f"{self._error_message(exc.response)}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {path} failed: {exc}") from exc
        return response

    @classmethod
    def _is_already_erased(cls, exc: TransportError) -> bool:
        return (
            exc.status_code == cls.NOT_ERASABLE_STATUS
            and cls.NOT_ERASABLE_MESSAGE in str(exc).lower()
        )

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise InvalidPayloadError(
                f"Invalid JSON response from {response.request.url.path}: {exc}"
            ) from exc

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text[:200] or response.reason_phrase
        if isinstance(body, dict):
            message = body.get("message") or body.get("error")
            if message:
                return str(message)
        return response.reason_phrase
