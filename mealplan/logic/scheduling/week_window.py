"""Week-window date helpers.

Plain date arithmetic used by the meal-plan store for the week cursor,
bulk clearing and day lookups, and by the API for week/month grids.

Day-of-week numbering follows the 0 = Sunday .. 6 = Saturday convention,
so ``week_starts_on=1`` means weeks begin on Monday.
"""
from __future__ import annotations
import calendar
import re
from datetime import MAXYEAR, MINYEAR, date, datetime, timedelta
from typing import List, Union

from mealplan.domain.errors import InvalidInputError
from mealplan.utilities.constants import DATE_FORMAT, DAYS_PER_WEEK, MONDAY

__all__ = [
    "parse_iso_date", "format_iso_date", "validate_week_starts_on",
    "start_of_week", "end_of_week", "add_days", "date_range",
    "week_days", "is_in_week", "month_grid",
]

DateLike = Union[date, datetime, str]

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: DateLike) -> date:
    """Return a ``date`` for a date, datetime or strict ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _ISO_DATE_RE.match(value):
        raise InvalidInputError(f"Expected an ISO date (YYYY-MM-DD), got {value!r}")
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as e:
        raise InvalidInputError(f"Invalid calendar date {value!r}: {e}") from e


def format_iso_date(d: date) -> str:
    # strftime("%Y") does not zero-pad years below 1000 on every platform
    return d.isoformat()


def validate_week_starts_on(week_starts_on: int) -> int:
    if isinstance(week_starts_on, bool) or not isinstance(week_starts_on, int) or not 0 <= week_starts_on <= 6:
        raise InvalidInputError(f"week_starts_on must be an integer 0..6 (0 = Sunday), got {week_starts_on!r}")
    return week_starts_on


def _day_of_week(d: date) -> int:
    # date.weekday() is Monday=0; shift to Sunday=0
    return (d.weekday() + 1) % DAYS_PER_WEEK


def _shift(d: date, days: int) -> date:
    try:
        return d + timedelta(days=days)
    except OverflowError:
        raise InvalidInputError(
            f"{format_iso_date(d)} {days:+d} day(s) is outside the supported calendar "
            f"({format_iso_date(date.min)}..{format_iso_date(date.max)})") from None


def start_of_week(d: DateLike, week_starts_on: int = MONDAY) -> date:
    d = parse_iso_date(d)
    validate_week_starts_on(week_starts_on)
    offset = (_day_of_week(d) - week_starts_on) % DAYS_PER_WEEK
    return _shift(d, -offset)


def end_of_week(d: DateLike, week_starts_on: int = MONDAY) -> date:
    return _shift(start_of_week(d, week_starts_on), DAYS_PER_WEEK - 1)


def add_days(d: DateLike, n: int) -> date:
    return _shift(parse_iso_date(d), n)


def date_range(start: DateLike, end: DateLike) -> List[date]:
    """Every date from start to end inclusive; empty when end precedes start."""
    start, end = parse_iso_date(start), parse_iso_date(end)
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def week_days(week_start: DateLike) -> List[date]:
    start = parse_iso_date(week_start)
    _shift(start, DAYS_PER_WEEK - 1)  # whole week must fit in the calendar
    return [start + timedelta(days=i) for i in range(DAYS_PER_WEEK)]


def is_in_week(d: DateLike, week_start: DateLike) -> bool:
    d, start = parse_iso_date(d), parse_iso_date(week_start)
    return 0 <= (d - start).days < DAYS_PER_WEEK


def month_grid(year: int, month: int, week_starts_on: int = MONDAY) -> List[date]:
    """Dates for a month calendar made of whole weeks.

    Includes the lead days of the previous month and the trail days of the
    next month needed to fill the first and last rows. Months whose rows would
    run past date.min or date.max raise InvalidInputError.
    """
    if isinstance(year, bool) or not isinstance(year, int) or not MINYEAR <= year <= MAXYEAR:
        raise InvalidInputError(f"year must be {MINYEAR}..{MAXYEAR}, got {year!r}")
    if isinstance(month, bool) or not isinstance(month, int) or not 1 <= month <= 12:
        raise InvalidInputError(f"month must be 1..12, got {month!r}")
    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])
    return date_range(start_of_week(first, week_starts_on), end_of_week(last, week_starts_on))
