import io
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from cleaner.progress.base import BaseProgressReporter
from cleaner.progress.terminal_reporter import TerminalProgressReporter
from cleaner.store.models import Job


@pytest.fixture()
def now() -> datetime:
    return datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def mock_reporter() -> MagicMock:
    """Reporter double that keeps the call order in mock_calls."""
    return MagicMock(spec=BaseProgressReporter)


@pytest.fixture()
def terminal_reporter() -> TerminalProgressReporter:
    """Non-interactive reporter writing to an in-memory stream."""
    return TerminalProgressReporter(io.StringIO(), interactive=False)


@pytest.fixture()
def old_jobs(now: datetime) -> list[Job]:
    """Five jobs (ids 1-5) created 200 days before `now`."""
    return [Job(id=i, created_at=now - timedelta(days=200)) for i in range(1, 6)]
