from typing import ClassVar

from cleaner.config.settings import Settings
from cleaner.store.base import BaseJobStore
from cleaner.store.gitlab_adapter import GitLabJobStore
from cleaner.store.memory_adapter import InMemoryJobStore


class JobStoreFactory:
    """Creates the configured job store adapter."""

    BACKENDS: ClassVar[tuple[str, ...]] = ("gitlab", "memory")

    @classmethod
    def create(cls, settings: Settings) -> BaseJobStore:
        """Create a configured job store from application settings."""
        backend = settings.store_backend.lower()
        if backend == "memory":
            if settings.memory_fixture_path is None:
                raise ValueError("memory_fixture_path is required for store_backend=memory")
            return InMemoryJobStore.from_fixture(
                settings.memory_fixture_path,
                per_page=settings.jobs_per_page,
            )
        if backend == "gitlab":
            return GitLabJobStore(
                base_url=cls._require(settings.gitlab_url, "gitlab_url"),
                token=cls._require(settings.gitlab_token, "gitlab_token"),
                timeout_seconds=settings.request_timeout_seconds,
                per_page=settings.jobs_per_page,
            )
        raise ValueError(
            f"Unknown store backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )

    @staticmethod
    def _require(value: str, name: str) -> str:
        value = (value or "").strip()
        if not value:
            raise ValueError(f"{name} is required for store_backend=gitlab")
        return value
