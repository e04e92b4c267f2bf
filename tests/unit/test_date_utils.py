"""Unit tests for date helpers"""

import pytest
from datetime import date, datetime, timedelta, timezone
from medfin_dashboard.utils.date_utils import (
    days_between,
    days_until,
    month_label,
    parse_datetime,
    shift_month,
    sort_by_date,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("2025-03-01T10:15:00Z", datetime(2025, 3, 1, 10, 15, tzinfo=timezone.utc)),
        ("2025-03-01T13:15:00+03:00", datetime(2025, 3, 1, 10, 15, tzinfo=timezone.utc)),
        ("2025-03-01", datetime(2025, 3, 1, tzinfo=timezone.utc)),
        (date(2025, 3, 1), datetime(2025, 3, 1, tzinfo=timezone.utc)),
        (datetime(2025, 3, 1, 10, 15), datetime(2025, 3, 1, 10, 15, tzinfo=timezone.utc)),
    ],
)
def test_parse_datetime(raw, expected):
    assert parse_datetime(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "not a date", "2025-13-45", 12345])
def test_parse_datetime_treats_bad_values_as_absent(raw):
    assert parse_datetime(raw) is None


def test_days_until_rounds_up():
    now = datetime(2025, 6, 15, 12, tzinfo=timezone.utc)

    assert days_until(now + timedelta(days=2, hours=1), now) == 3
    assert days_until(now + timedelta(days=2), now) == 2
    assert days_until(now - timedelta(hours=12), now) == 0
    assert days_until(now - timedelta(days=3), now) == -3


def test_days_between_is_absolute():
    now = datetime(2025, 6, 15, 12, tzinfo=timezone.utc)

    assert days_between(now - timedelta(days=1, hours=2), now) == 2
    assert days_between(now + timedelta(days=1), now) == 1


@pytest.mark.parametrize(
    "year,month,offset,expected",
    [
        (2025, 3, -5, (2024, 10)),
        (2025, 1, -1, (2024, 12)),
        (2025, 12, 1, (2026, 1)),
        (2025, 6, 0, (2025, 6)),
    ],
)
def test_shift_month(year, month, offset, expected):
    assert shift_month(year, month, offset) == expected


def test_month_label():
    assert month_label(1) == "Jan"
    assert month_label(12) == "Dec"


def test_sort_by_date_puts_undated_last():
    now = datetime(2025, 6, 15, 12, tzinfo=timezone.utc)
    items = [
        ("undated_a", None),
        ("old", now - timedelta(days=3)),
        ("new", now),
        ("undated_b", None),
        ("tie", now),
    ]

    oldest = sort_by_date(items, lambda item: item[1])
    newest = sort_by_date(items, lambda item: item[1], newest_first=True)

    assert [name for name, _ in oldest] == ["old", "new", "tie", "undated_a", "undated_b"]
    assert [name for name, _ in newest] == ["new", "tie", "old", "undated_a", "undated_b"]
