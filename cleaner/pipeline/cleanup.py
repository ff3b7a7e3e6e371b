from datetime import datetime

from cleaner.logging.logger import Log
from cleaner.pipeline.models import BatchResult, CleanupStage
from cleaner.pipeline.pipeline import CleanupContext, CleanupStep
from cleaner.pipeline.steps import (
    CollectJobsStep,
    EraseJobsStep,
    ReportStep,
    ResolveProjectStep,
    SelectExpiredStep,
)
from cleaner.progress.base import BaseProgressReporter
from cleaner.store.base import BaseJobStore


class CleanupPipeline:
    """Orchestrates one cleanup run.

    Pipeline: resolve -> paginate -> select -> erase -> report.
    A failure before the erase phase stops the run with nothing erased.
    """

    def __init__(self, steps: list[CleanupStep]) -> None:
        self._steps = steps
        self._stage = CleanupStage.PENDING

    @property
    def stage(self) -> CleanupStage:
        return self._stage

    async def clean(self, project_name: str, cutoff: datetime) -> BatchResult:
        """Erase the jobs of project_name created before cutoff."""
        Log.info(f"Cleaning jobs of '{project_name}' created before {cutoff.isoformat()}")
        context = CleanupContext(project_name=project_name, cutoff=cutoff)
        try:
            for step in self._steps:
                self._stage = step.stage
                context = await step.run(context)
        except Exception as exc:
            Log.error(f"Cleanup failed while {self._stage.value}: {exc}")
            self._stage = CleanupStage.FAILED
            raise
        self._stage = CleanupStage.DONE
        return context.result


def build_pipeline(
    store: BaseJobStore,
    reporter: BaseProgressReporter,
    concurrency: int | None = None,
) -> CleanupPipeline:
    """Build a CleanupPipeline with the standard step order."""
    return CleanupPipeline(
        steps=[
            ResolveProjectStep(store),
            CollectJobsStep(store, reporter),
            SelectExpiredStep(),
            EraseJobsStep(store, reporter, concurrency),
            ReportStep(reporter),
        ]
    )
