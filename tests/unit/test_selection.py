from datetime import datetime, timedelta, timezone

import pytest

from cleaner.pipeline.selection import cutoff_from_days, select_expired
from cleaner.store.models import Job


class TestSelectExpired:
    def test_keeps_only_jobs_before_cutoff(self, now: datetime) -> None:
        older = Job(id=1, created_at=now - timedelta(days=1))
        newer = Job(id=2, created_at=now + timedelta(days=1))
        assert select_expired([older, newer], now) == [older]

    def test_cutoff_is_strict(self, now: datetime) -> None:
        assert select_expired([Job(id=1, created_at=now)], now) == []

    def test_known_dates_give_exact_subset(self, now: datetime) -> None:
        ages = {1: 400, 2: 99, 3: 101, 4: 100, 5: 0, 6: 250}
        jobs = [Job(id=i, created_at=now - timedelta(days=d)) for i, d in ages.items()]
        cutoff = now - timedelta(days=100)
        assert [j.id for j in select_expired(jobs, cutoff)] == [1, 3, 6]

    def test_preserves_order_and_duplicates(self, now: datetime) -> None:
        job = Job(id=3, created_at=now - timedelta(days=5))
        other = Job(id=1, created_at=now - timedelta(days=5))
        assert select_expired([job, other, job], now) == [job, other, job]

    def test_naive_cutoff_is_utc(self) -> None:
        job = Job(id=1, created_at=datetime(2024, 1, 1, 11, 0, tzinfo=timezone.utc))
        assert select_expired([job], datetime(2024, 1, 1, 12, 0)) == [job]

    def test_erased_jobs_are_still_selected(self, now: datetime) -> None:
        job = Job(id=1, created_at=now - timedelta(days=5), erased_at=now - timedelta(days=1))
        assert select_expired([job], now) == [job]


class TestCutoffFromDays:
    def test_subtracts_days(self, now: datetime) -> None:
        assert cutoff_from_days(100, now=now) == now - timedelta(days=100)

    def test_zero_days_is_now(self, now: datetime) -> None:
        assert cutoff_from_days(0, now=now) == now

    def test_defaults_to_current_utc_time(self) -> None:
        before = datetime.now(timezone.utc)
        cutoff = cutoff_from_days(1)
        assert cutoff.tzinfo is not None
        assert before - timedelta(days=1, seconds=5) < cutoff <= before

    def test_rejects_negative_days(self) -> None:
        with pytest.raises(ValueError, match="zero or more"):
            cutoff_from_days(-1)
