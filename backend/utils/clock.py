"""
Clock helper.

All domain timestamps are naive UTC datetimes, matching how they are
stored in the database.
"""
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current UTC time as a naive datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
