"""Time utilities for database models."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def isoformat_utc(moment: datetime | None = None) -> str:
    """Return ``moment`` as an ISO 8601 string with millisecond precision.

    The format matches ``2026-10-19T08:15:30.123Z`` so that lexical ordering of
    stored values equals chronological ordering.
    """
    moment = (moment or utcnow()).astimezone(UTC)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"
