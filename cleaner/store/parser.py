"""Builds store models from raw JSON payloads."""

from datetime import datetime, timezone
from typing import Any

from cleaner.store.exceptions import InvalidPayloadError
from cleaner.store.models import Job, Project


def build_projects(data: Any) -> list[Project]:
    """Build projects from a project search response.

    Raises:
        InvalidPayloadError: when the body is not a list of project objects.
    """
    if not isinstance(data, list):
        raise InvalidPayloadError("Project search response must be a list")
    return [_build_project(item, i) for i, item in enumerate(data)]


def build_jobs(data: Any) -> list[Job]:
    """Build jobs from a job listing response.

    Raises:
        InvalidPayloadError: when the body is not a list of job objects.
    """
    if not isinstance(data, list):
        raise InvalidPayloadError("Job listing response must be a list")
    return [_build_job(item, i) for i, item in enumerate(data)]


def parse_next_page(raw: str | None) -> int | None:
    """Read the next page cursor. Empty or non-numeric values end pagination."""
    if raw is None:
        return None
    try:
        page = int(raw)
    except ValueError:
        return None
    return page if page > 0 else None


def parse_timestamp(raw: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware datetime (UTC if naive)."""
    value = raw.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _build_project(raw: Any, index: int) -> Project:
    if not isinstance(raw, dict):
        raise InvalidPayloadError(f"Project at index {index} must be an object")
    project_id = _require_id(raw, f"Project at index {index}")
    name = raw.get("name")
    if not isinstance(name, str):
        raise InvalidPayloadError(f"Project at index {index}: 'name' must be a string")
    return Project(id=project_id, name=name)


def _build_job(raw: Any, index: int) -> Job:
    if not isinstance(raw, dict):
        raise InvalidPayloadError(f"Job at index {index} must be an object")
    job_id = _require_id(raw, f"Job at index {index}")
    created_at = _build_timestamp(raw.get("created_at"), f"Job {job_id}: 'created_at'")
    if created_at is None:
        raise InvalidPayloadError(f"Job {job_id}: 'created_at' is required")
    erased_at = _build_timestamp(raw.get("erased_at"), f"Job {job_id}: 'erased_at'")
    return Job(id=job_id, created_at=created_at, erased_at=erased_at)


def _require_id(raw: dict[str, Any], where: str) -> int:
    value = raw.get("id")
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidPayloadError(f"{where}: 'id' must be a non-negative integer")
    return value


def _build_timestamp(raw: Any, where: str) -> datetime | None:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise InvalidPayloadError(f"{where} must be a string or null")
    try:
        return parse_timestamp(raw)
    except ValueError as exc:
        raise InvalidPayloadError(f"{where} is not a valid timestamp: {raw!r}") from exc
