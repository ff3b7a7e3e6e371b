from abc import ABC, abstractmethod
from types import TracebackType

from cleaner.store.models import JobPage


class BaseJobStore(ABC):
    """Contract for all remote job store adapters."""

    @abstractmethod
    async def resolve_project(self, name: str) -> int:
        """Find the id of the single project matching name.

        Raises:
            ProjectNotFoundError: when nothing matches.
            AmbiguousProjectError: when more than one project matches.
            TransportError: when the search request fails.
        """

    @abstractmethod
    async def list_jobs(self, project_id: int, page: int) -> JobPage:
        """Fetch one page of jobs for a project.

        Jobs are returned as listed; no age filtering happens here.

        Raises:
            TransportError: when the listing request fails.
        """

    @abstractmethod
    async def erase_job(self, project_id: int, job_id: int) -> None:
        """Erase one job.

        Raises:
            TransportError: when the erase request fails.
        """

    async def aclose(self) -> None:
        """Release any resources held by the adapter."""

    async def __aenter__(self) -> "BaseJobStore":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
