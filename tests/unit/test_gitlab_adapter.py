import asyncio
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from cleaner.store.exceptions import (
    AmbiguousProjectError,
    InvalidPayloadError,
    ProjectNotFoundError,
    TransportError,
)
from cleaner.store.gitlab_adapter import GitLabJobStore

BASE_URL = "https://gitlab.example.com/api/v4"


def _make_store(
    handler: Callable[[httpx.Request], httpx.Response],
    per_page: int = 50,
) -> GitLabJobStore:
    return GitLabJobStore(
        base_url=BASE_URL,
        token="glpat-test",
        per_page=per_page,
        transport=httpx.MockTransport(handler),
    )


def _call(store: GitLabJobStore, method: str, *args: Any) -> Any:
    async def run() -> Any:
        async with store:
            return await getattr(store, method)(*args)

    return asyncio.run(run())


class TestResolveProject:
    def test_returns_single_match(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[{"id": 42, "name": "my-service"}])

        assert _call(_make_store(handler), "resolve_project", "my-service") == 42
        assert seen[0].method == "GET"
        assert seen[0].url.path == "/api/v4/projects"
        assert seen[0].url.params["search"] == "my-service"
        assert seen[0].headers["PRIVATE-TOKEN"] == "glpat-test"

    def test_raises_not_found(self) -> None:
        store = _make_store(lambda request: httpx.Response(200, json=[]))
        with pytest.raises(ProjectNotFoundError, match="No project found"):
            _call(store, "resolve_project", "ghost")

    def test_raises_ambiguous(self) -> None:
        store = _make_store(
            lambda request: httpx.Response(
                200, json=[{"id": 1, "name": "api"}, {"id": 2, "name": "api-docs"}]
            )
        )
        with pytest.raises(AmbiguousProjectError, match="api, api-docs"):
            _call(store, "resolve_project", "api")

    def test_raises_transport_error_on_unauthorized(self) -> None:
        store = _make_store(
            lambda request: httpx.Response(401, json={"message": "401 Unauthorized"})
        )
        with pytest.raises(TransportError, match="401 Unauthorized"):
            _call(store, "resolve_project", "api")

    def test_raises_transport_error_on_connection_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError, match="connection refused"):
            _call(_make_store(handler), "resolve_project", "api")

    def test_raises_invalid_payload_on_bad_json(self) -> None:
        store = _make_store(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(InvalidPayloadError, match="Invalid JSON"):
            _call(store, "resolve_project", "api")


class TestListJobs:
    def test_returns_jobs_and_next_page(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json=[
                    {"id": 1, "created_at": "2024-01-01T00:00:00.000Z", "erased_at": None},
                    {"id": 2, "created_at": "2024-01-02T00:00:00.000Z", "erased_at": None},
                ],
                headers={"X-Next-Page": "3"},
            )

        page = _call(_make_store(handler, per_page=2), "list_jobs", 42, 2)
        assert [j.id for j in page.jobs] == [1, 2]
        assert page.next_page == 3
        assert seen[0].url.path == "/api/v4/projects/42/jobs"
        assert seen[0].url.params["per_page"] == "2"
        assert seen[0].url.params["page"] == "2"

    def test_empty_next_page_header_ends_listing(self) -> None:
        store = _make_store(
            lambda request: httpx.Response(200, json=[], headers={"X-Next-Page": ""})
        )
        page = _call(store, "list_jobs", 42, 1)
        assert page.jobs == []
        assert page.next_page is None

    def test_missing_next_page_header_ends_listing(self) -> None:
        store = _make_store(lambda request: httpx.Response(200, json=[]))
        assert _call(store, "list_jobs", 42, 1).next_page is None

    def test_raises_transport_error_on_server_error(self) -> None:
        store = _make_store(lambda request: httpx.Response(502, text="Bad Gateway"))
        with pytest.raises(TransportError, match="502"):
            _call(store, "list_jobs", 42, 1)

    def test_raises_transport_error_on_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(TransportError, match="timed out"):
            _call(_make_store(handler), "list_jobs", 42, 1)


class TestEraseJob:
    def test_posts_erase(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={"id": 7})

        assert _call(_make_store(handler), "erase_job", 42, 7) is None
        assert seen[0].method == "POST"
        assert seen[0].url.path == "/api/v4/projects/42/jobs/7/erase"

    def test_ignores_response_body(self) -> None:
        store = _make_store(lambda request: httpx.Response(204))
        assert _call(store, "erase_job", 42, 7) is None

    def test_already_erased_job_counts_as_erased(self) -> None:
        store = _make_store(
            lambda request: httpx.Response(
                403, json={"message": "403 Forbidden - Job is not erasable!"}
            )
        )
        assert _call(store, "erase_job", 42, 7) is None

    def test_raises_transport_error_on_forbidden(self) -> None:
        store = _make_store(
            lambda request: httpx.Response(403, json={"message": "403 Forbidden"})
        )
        with pytest.raises(TransportError, match="403 Forbidden") as exc_info:
            _call(store, "erase_job", 42, 7)
        assert exc_info.value.status_code == 403

    def test_not_erasable_message_with_other_status_is_an_error(self) -> None:
        store = _make_store(
            lambda request: httpx.Response(409, json={"message": "Job is not erasable!"})
        )
        with pytest.raises(TransportError, match="409"):
            _call(store, "erase_job", 42, 7)

    def test_connection_failure_has_no_status(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError) as exc_info:
            _call(_make_store(handler), "erase_job", 42, 7)
        assert exc_info.value.status_code is None


class TestConstruction:
    def test_rejects_non_positive_page_size(self) -> None:
        with pytest.raises(ValueError, match="per_page"):
            GitLabJobStore(base_url=BASE_URL, token="t", per_page=0)
