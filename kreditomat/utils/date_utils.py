"""Date manipulation utilities"""

from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime"""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (as returned by SQLite) as UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_expired(stamped_at: datetime, ttl_hours: float, now: datetime | None = None) -> bool:
    """True when more than ttl_hours have passed since stamped_at"""
    now = as_utc(now) if now is not None else utc_now()
    return now - as_utc(stamped_at) > timedelta(hours=ttl_hours)
