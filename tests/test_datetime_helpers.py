"""Tests for datetime helper utilities."""
from datetime import UTC, datetime, timedelta, timezone

from inquiro.utils.datetime_helpers import ensure_utc, is_within_window


def test_ensure_utc_none_returns_none():
    assert ensure_utc(None) is None


def test_ensure_utc_attaches_timezone_to_naive_datetime():
    """Naive datetimes read back from SQLite are UTC already; only the tzinfo is added."""

    naive = datetime(2024, 5, 1, 12, 30, 0)

    result = ensure_utc(naive)

    assert result.tzinfo is UTC
    assert result.replace(tzinfo=None) == naive


def test_ensure_utc_converts_from_other_timezones_to_utc():
    eastern = timezone(timedelta(hours=-4))
    aware = datetime(2024, 5, 1, 8, 0, tzinfo=eastern)

    result = ensure_utc(aware)

    assert result.tzinfo is UTC
    assert result.replace(tzinfo=None) == datetime(2024, 5, 1, 12, 0)


def test_open_window_always_contains_now():
    assert is_within_window(None, None)


def test_window_respects_start_and_end():
    now = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)
    yesterday = now - timedelta(days=1)
    tomorrow = now + timedelta(days=1)

    assert is_within_window(yesterday, tomorrow, now)
    assert not is_within_window(tomorrow, None, now)
    assert not is_within_window(None, yesterday, now)


def test_window_bounds_are_inclusive():
    now = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)

    assert is_within_window(now, now, now)


def test_window_treats_naive_bounds_as_utc():
    now = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)

    assert not is_within_window(datetime(2025, 6, 1, 13, 0), None, now)
    assert is_within_window(datetime(2025, 6, 1, 11, 0), None, now)
