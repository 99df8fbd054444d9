"""Utility functions for the backend."""

from datetime import UTC, datetime, time, tzinfo


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """
    Normalize a datetime read back from the database.

    SQLite drops tzinfo on round trip; naive values are stored in UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def ensure_utc(value: datetime | None) -> datetime | None:
    """as_utc for nullable columns."""
    return as_utc(value) if value is not None else None


def start_of_local_day(moment: datetime, zone: tzinfo) -> datetime:
    """Midnight of the calendar day containing moment, in zone, as UTC."""
    local_day = moment.astimezone(zone).date()
    return datetime.combine(local_day, time.min, tzinfo=zone).astimezone(UTC)
