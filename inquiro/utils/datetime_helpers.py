"""Datetime utility functions for timezone handling."""
from datetime import datetime, UTC
from typing import Optional


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure datetime is timezone-aware in UTC.

    Datetimes read back from SQLite are timezone-naive but were written as
    UTC, and client payloads may carry any offset. Both end up as UTC-aware.

    Example:
        >>> naive_dt = datetime(2025, 1, 1, 12, 0, 0)
        >>> ensure_utc(naive_dt).tzinfo == UTC
        True

        >>> ensure_utc(None) is None
        True
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def is_within_window(
    start: Optional[datetime],
    end: Optional[datetime],
    now: Optional[datetime] = None,
) -> bool:
    """Return True when ``now`` falls inside the optional [start, end] availability window."""
    current = now or datetime.now(UTC)
    start = ensure_utc(start)
    end = ensure_utc(end)
    if start is not None and start > current:
        return False
    if end is not None and end < current:
        return False
    return True
