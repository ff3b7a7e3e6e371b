from datetime import datetime, timedelta, timezone

from cleaner.store.models import Job


def cutoff_from_days(days: int, now: datetime | None = None) -> datetime:
    """Return the cutoff timestamp that lies `days` whole days before now (UTC)."""
    if days < 0:
        raise ValueError(f"Expiration must be zero or more days, got {days}")
    if now is None:
        now = datetime.now(timezone.utc)
    return now - timedelta(days=days)


def select_expired(jobs: list[Job], cutoff: datetime) -> list[Job]:
    """Keep the jobs created strictly before cutoff, preserving order.

    A naive cutoff is taken as UTC.
    """
    if cutoff.tzinfo is None:
        cutoff = cutoff.replace(tzinfo=timezone.utc)
    return [job for job in jobs if job.created_at < cutoff]
