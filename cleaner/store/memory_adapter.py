"""In-memory job store adapter.

No network calls. Useful for offline dry runs against a JSON fixture, for
tests, and as a template for building adapters for other CI providers.
"""

import json
from pathlib import Path

from cleaner.store.base import BaseJobStore
from cleaner.store.exceptions import (
    AmbiguousProjectError,
    InvalidPayloadError,
    JobStoreError,
    ProjectNotFoundError,
    TransportError,
)
from cleaner.store.models import Job, JobPage, Project
from cleaner.store.parser import build_jobs, build_projects


class InMemoryJobStore(BaseJobStore):
    """Serves projects and jobs from memory and records erase calls.

    Project search matches case-insensitive substrings, like GitLab's search.
    """

    def __init__(
        self,
        *,
        projects: list[Project] | None = None,
        jobs: dict[int, list[Job]] | None = None,
        per_page: int = 50,
        failing_job_ids: set[int] | None = None,
    ) -> None:
        if per_page < 1:
            raise ValueError(f"per_page must be at least 1, got {per_page}")
        self._projects = list(projects or [])
        self._jobs = {pid: list(items) for pid, items in (jobs or {}).items()}
        self._per_page = per_page
        self._failing_job_ids = set(failing_job_ids or ())
        self.erased: list[tuple[int, int]] = []
        self.pages_requested: list[int] = []

    @classmethod
    def from_fixture(cls, path: Path, per_page: int = 50) -> "InMemoryJobStore":
        """Load projects and jobs from a JSON fixture file.

        The file holds the same shapes the GitLab API returns:
        {"projects": [{"id", "name"}], "jobs": {"<project id>": [{"id", "created_at", "erased_at"}]}}

        Raises:
            JobStoreError: if the file cannot be read.
            InvalidPayloadError: if its content does not match the shapes above.
        """
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise JobStoreError(f"Failed to load store fixture: {exc}") from exc
        except ValueError as exc:
            raise InvalidPayloadError(f"Invalid JSON in store fixture {path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise InvalidPayloadError("Store fixture must be an object")

        raw_jobs = raw.get("jobs", {})
        if not isinstance(raw_jobs, dict):
            raise InvalidPayloadError("Store fixture 'jobs' must be an object keyed by project id")
        jobs: dict[int, list[Job]] = {}
        for key, items in raw_jobs.items():
            try:
                project_id = int(key)
            except ValueError as exc:
                raise InvalidPayloadError(
                    f"Store fixture 'jobs' key {key!r} is not a project id"
                ) from exc
            jobs[project_id] = build_jobs(items)

        return cls(
            projects=build_projects(raw.get("projects", [])),
            jobs=jobs,
            per_page=per_page,
        )

    async def resolve_project(self, name: str) -> int:
        needle = name.lower()
        matches = [p for p in self._projects if needle in p.name.lower()]
        if not matches:
            raise ProjectNotFoundError(
                f"No project found that matches the researched term '{name}'."
            )
        if len(matches) > 1:
            raise AmbiguousProjectError(
                f"Multiple projects found that match the researched term '{name}'."
            )
        return matches[0].id

    async def list_jobs(self, project_id: int, page: int) -> JobPage:
        self.pages_requested.append(page)
        jobs = self._jobs.get(project_id, [])
        start = (page - 1) * self._per_page
        chunk = jobs[start:start + self._per_page]
        next_page = page + 1 if start + self._per_page < len(jobs) else None
        return JobPage(jobs=chunk, next_page=next_page)

    async def erase_job(self, project_id: int, job_id: int) -> None:
        if job_id in self._failing_job_ids:
            raise TransportError(f"Erase of job {job_id} rejected")
        self.erased.append((project_id, job_id))
