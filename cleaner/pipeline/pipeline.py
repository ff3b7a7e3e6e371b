from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar

from cleaner.pipeline.models import BatchResult, CleanupStage
from cleaner.store.models import Job


@dataclass(slots=True)
class CleanupContext:
    project_name: str
    cutoff: datetime
    project_id: int | None = None
    pages_fetched: int = 0
    jobs: list[Job] = field(default_factory=list)
    eligible_jobs: list[Job] = field(default_factory=list)
    result: BatchResult = field(default_factory=BatchResult)


class CleanupStep(ABC):
    stage: ClassVar[CleanupStage]

    @abstractmethod
    async def run(self, context: CleanupContext) -> CleanupContext:
        raise NotImplementedError
