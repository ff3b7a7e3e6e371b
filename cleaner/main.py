import argparse
import asyncio
import sys
from collections.abc import Sequence
from enum import Enum

from pydantic import ValidationError

from cleaner.config.settings import Settings
from cleaner.logging.logger import Log
from cleaner.pipeline.cleanup import build_pipeline
from cleaner.pipeline.models import BatchResult
from cleaner.pipeline.selection import cutoff_from_days
from cleaner.progress.base import BaseProgressReporter
from cleaner.progress.terminal_reporter import TerminalProgressReporter
from cleaner.store.base import BaseJobStore
from cleaner.store.exceptions import JobStoreError
from cleaner.store.factory import JobStoreFactory

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_PARTIAL = 2


class Target(str, Enum):
    """Project components that can be cleaned."""

    JOBS = "jobs"


def _non_negative_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected a whole number of days, got {raw!r}") from exc
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected zero or more days, got {value}")
    return value


def _positive_int(raw: str) -> int:
    value = _non_negative_int(raw)
    if value == 0:
        raise argparse.ArgumentTypeError("expected at least 1")
    return value


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitlab-cleaner",
        description="Erase the CI jobs of a GitLab project older than a number of days",
    )
    parser.add_argument("-p", "--project", required=True, help="Name of the project to search for")
    parser.add_argument(
        "-t",
        "--target",
        choices=[t.value for t in Target],
        default=Target.JOBS.value,
        help="Component of the project to clean",
    )
    parser.add_argument(
        "expiration_in_days",
        nargs="?",
        type=_non_negative_int,
        default=settings.default_expiration_days,
        help=f"Erase components older than this many days (default: {settings.default_expiration_days})",
    )
    parser.add_argument(
        "--concurrency",
        type=_positive_int,
        default=settings.erase_concurrency,
        help="Maximum number of erase requests in flight (default: unbounded)",
    )
    return parser


async def run_cleanup(
    store: BaseJobStore,
    reporter: BaseProgressReporter,
    project: str,
    expiration_in_days: int,
    concurrency: int | None = None,
) -> BatchResult:
    """Clean one project's jobs, closing the store when done."""
    cutoff = cutoff_from_days(expiration_in_days)
    async with store:
        pipeline = build_pipeline(store, reporter, concurrency)
        return await pipeline.clean(project, cutoff)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: parse arguments -> build store -> run pipeline -> exit status."""
    reporter = TerminalProgressReporter()
    try:
        settings = Settings()
    except ValidationError as exc:
        Log.error(f"Invalid configuration: {exc}")
        reporter.display(f"Error: invalid configuration: {exc}")
        return EXIT_FATAL
    Log.configure(settings.log_level)
    args = build_parser(settings).parse_args(argv)

    try:
        store = JobStoreFactory.create(settings)
        result = asyncio.run(
            run_cleanup(
                store,
                reporter,
                args.project,
                args.expiration_in_days,
                args.concurrency,
            )
        )
    except (JobStoreError, ValueError) as exc:
        Log.error(f"Cleanup of '{args.project}' aborted: {exc}")
        reporter.display(f"Error: {exc}")
        return EXIT_FATAL

    if result.has_failures:
        Log.warning(f"{result.failed} of {result.total} jobs could not be erased")
        return EXIT_PARTIAL
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
