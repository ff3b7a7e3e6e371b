from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Project:
    """A remote project that owns CI jobs."""

    id: int
    name: str


@dataclass(frozen=True)
class Job:
    """A single CI job record as listed by the store."""

    id: int
    created_at: datetime
    erased_at: datetime | None = None


@dataclass(frozen=True)
class JobPage:
    """One page of a job listing.

    next_page is None once the listing is exhausted.
    """

    jobs: list[Job] = field(default_factory=list)
    next_page: int | None = None
