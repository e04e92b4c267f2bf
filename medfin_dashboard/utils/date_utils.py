"""Date manipulation utilities"""

import math
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Callable, List, Optional, Sequence, Tuple, TypeVar

MONTH_LABELS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

SECONDS_PER_DAY = 24 * 60 * 60

T = TypeVar("T")


def parse_datetime(value: Any) -> Optional[datetime]:
    """
    Coerce a record's date field to an aware UTC datetime.

    Accepts datetimes, dates (midnight UTC) and ISO-8601 strings, including the
    trailing "Z" that Postgres REST endpoints emit. Anything missing or
    unparseable yields None so callers can treat the field as absent.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def days_until(target: datetime, now: datetime) -> int:
    """Whole days from now to target, rounded up (negative when target is past)"""
    return math.ceil((target - now).total_seconds() / SECONDS_PER_DAY)


def days_between(earlier: datetime, later: datetime) -> int:
    """Absolute distance in whole days, rounded up"""
    return math.ceil(abs((later - earlier).total_seconds()) / SECONDS_PER_DAY)


def same_month(moment: datetime, year: int, month: int) -> bool:
    """True if moment falls in the given calendar month (month is 1-based)"""
    return moment.year == year and moment.month == month


def shift_month(year: int, month: int, offset: int) -> Tuple[int, int]:
    """Move (year, month) by offset calendar months; month is 1-based"""
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def month_label(month: int) -> str:
    """Short English label for a 1-based month"""
    return MONTH_LABELS[month - 1]


def week_ago(now: datetime) -> datetime:
    return now - timedelta(days=7)


def sort_by_date(
    items: Sequence[T],
    date_of: Callable[[T], Optional[datetime]],
    newest_first: bool = False,
) -> List[T]:
    """Stable sort on a date attribute; items without a date follow every dated one"""
    dated = [item for item in items if date_of(item) is not None]
    undated = [item for item in items if date_of(item) is None]
    return sorted(dated, key=date_of, reverse=newest_first) + undated
