import asyncio

from cleaner.logging.logger import Log
from cleaner.pipeline.models import CleanupStage, JobOutcome
from cleaner.pipeline.pipeline import CleanupContext, CleanupStep
from cleaner.pipeline.selection import select_expired
from cleaner.progress.base import BaseProgressReporter
from cleaner.store.base import BaseJobStore
from cleaner.store.exceptions import JobStoreError
from cleaner.store.models import Job


class ResolveProjectStep(CleanupStep):
    stage = CleanupStage.RESOLVING

    def __init__(self, store: BaseJobStore) -> None:
        self._store = store

    async def run(self, context: CleanupContext) -> CleanupContext:
        context.project_id = await self._store.resolve_project(context.project_name)
        Log.info(
            f"Project '{context.project_name}' has id {context.project_id}",
            project_id=context.project_id,
        )
        return context


class CollectJobsStep(CleanupStep):
    """Drain the paginated listing before anything is erased."""

    stage = CleanupStage.PAGINATING

    def __init__(self, store: BaseJobStore, reporter: BaseProgressReporter) -> None:
        self._store = store
        self._reporter = reporter

    async def run(self, context: CleanupContext) -> CleanupContext:
        if context.project_id is None:
            raise ValueError("CleanupContext.project_id must be set before listing jobs")
        page: int | None = 1
        while page is not None:
            self._reporter.display(f"Loading jobs from page {page}")
            job_page = await self._store.list_jobs(context.project_id, page)
            context.jobs.extend(job_page.jobs)
            context.pages_fetched += 1
            Log.debug(
                f"Page {page}: {len(job_page.jobs)} jobs, next page {job_page.next_page}",
                page=page,
            )
            page = job_page.next_page
        Log.info(
            f"Fetched {len(context.jobs)} jobs in {context.pages_fetched} pages "
            f"for project {context.project_id}",
            project_id=context.project_id,
            pages_fetched=context.pages_fetched,
            job_count=len(context.jobs),
        )
        return context


class SelectExpiredStep(CleanupStep):
    stage = CleanupStage.SELECTING

    async def run(self, context: CleanupContext) -> CleanupContext:
        context.eligible_jobs = select_expired(context.jobs, context.cutoff)
        Log.info(
            f"{len(context.eligible_jobs)} of {len(context.jobs)} jobs were created "
            f"before {context.cutoff.isoformat()}",
            eligible_count=len(context.eligible_jobs),
            job_count=len(context.jobs),
        )
        return context


class EraseJobsStep(CleanupStep):
    """Erase every eligible job concurrently.

    A failed erase is recorded and never cancels the other attempts.
    """

    stage = CleanupStage.ERASING

    def __init__(
        self,
        store: BaseJobStore,
        reporter: BaseProgressReporter,
        concurrency: int | None = None,
    ) -> None:
        if concurrency is not None and concurrency < 1:
            raise ValueError(f"Erase concurrency must be at least 1, got {concurrency}")
        self._store = store
        self._reporter = reporter
        self._concurrency = concurrency

    async def run(self, context: CleanupContext) -> CleanupContext:
        if context.project_id is None:
            raise ValueError("CleanupContext.project_id must be set before erasing jobs")
        jobs = context.eligible_jobs
        self._reporter.display(f"Found {len(jobs)} jobs to clean.")
        self._reporter.begin_batch("Cleaning the jobs...", len(jobs))

        lock = asyncio.Lock()
        semaphore = asyncio.Semaphore(self._concurrency) if self._concurrency else None
        await asyncio.gather(
            *(self._erase(context, context.project_id, job, lock, semaphore) for job in jobs)
        )
        Log.info(
            f"Erase phase finished: {context.result.succeeded} erased, "
            f"{context.result.failed} failed",
            erased_count=context.result.succeeded,
            failed_count=context.result.failed,
        )
        return context

    async def _erase(
        self,
        context: CleanupContext,
        project_id: int,
        job: Job,
        lock: asyncio.Lock,
        semaphore: asyncio.Semaphore | None,
    ) -> None:
        try:
            if semaphore is None:
                await self._store.erase_job(project_id, job.id)
            else:
                async with semaphore:
                    await self._store.erase_job(project_id, job.id)
        except JobStoreError as exc:
            outcome = JobOutcome.failed(job.id, f"Could not erase the job {job.id}: {exc}")
            label = f"Job {job.id} failed."
            Log.debug(outcome.reason or "", job_id=job.id)
        else:
            outcome = JobOutcome.succeeded(job.id)
            label = f"Job {job.id} erased."

        async with lock:
            context.result.add(outcome)
            self._reporter.advance(label)


class ReportStep(CleanupStep):
    stage = CleanupStage.REPORTING

    def __init__(self, reporter: BaseProgressReporter) -> None:
        self._reporter = reporter

    async def run(self, context: CleanupContext) -> CleanupContext:
        for failure in context.result.failures:
            Log.warning(failure.reason or f"Job {failure.job_id} failed", job_id=failure.job_id)
            self._reporter.display(f"Error: {failure.reason}")
        self._reporter.display("Done erasing jobs.")
        return context
