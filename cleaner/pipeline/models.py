from dataclasses import dataclass, field
from enum import Enum


class CleanupStage(str, Enum):
    """Lifecycle of one cleanup run."""

    PENDING = "pending"
    RESOLVING = "resolving"
    PAGINATING = "paginating"
    SELECTING = "selecting"
    ERASING = "erasing"
    REPORTING = "reporting"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class JobOutcome:
    """Result of one erase attempt."""

    job_id: int
    success: bool
    reason: str | None = None

    @classmethod
    def succeeded(cls, job_id: int) -> "JobOutcome":
        return cls(job_id=job_id, success=True)

    @classmethod
    def failed(cls, job_id: int, reason: str) -> "JobOutcome":
        return cls(job_id=job_id, success=False, reason=reason)


@dataclass
class BatchResult:
    """Outcomes of the erase phase, in completion order."""

    outcomes: list[JobOutcome] = field(default_factory=list)

    def add(self, outcome: JobOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def failures(self) -> list[JobOutcome]:
        return [o for o in self.outcomes if not o.success]

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.success)

    @property
    def failed(self) -> int:
        return self.total - self.succeeded

    @property
    def has_failures(self) -> bool:
        return any(not o.success for o in self.outcomes)
