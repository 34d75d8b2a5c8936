# daygrid/util/dates.py
"""Calendar date algebra used by the day layout.

All helpers take and return `datetime.datetime` values. Units are the
strings in `UNITS`; weeks start on `first_of_week` using Python's weekday
numbering (0 = Monday).

Wall-clock semantics: `diff` compares the wall-clock readings of its
arguments, so a DST transition inside a visible day does not shift the grid.
"""

from __future__ import annotations

import calendar
import datetime as dt
from typing import List, Optional, Union

from .tz import resolve_tz

SECONDS_IN_DAY = 24 * 60 * 60
MINUTES_IN_DAY = 1440

UNITS = ("milliseconds", "seconds", "minutes", "hours", "day", "week", "month", "year")

_MILLI = {
    "milliseconds": 1,
    "seconds": 1000,
    "minutes": 1000 * 60,
    "hours": 1000 * 60 * 60,
    "day": 1000 * 60 * 60 * 24,
    "week": 1000 * 60 * 60 * 24 * 7,
}

TzLike = Union[str, dt.tzinfo, None]


def _unit(unit: Optional[str]) -> Optional[str]:
    if unit is None:
        return None
    u = str(unit).strip().lower()
    if u == "date":
        u = "day"
    if u not in UNITS:
        raise ValueError(f"Unsupported date unit: {unit!r}")
    return u


def _tzinfo(tz: TzLike) -> Optional[dt.tzinfo]:
    if tz is None or isinstance(tz, dt.tzinfo):
        return tz
    return resolve_tz(tz)


def start_of(date: dt.datetime, unit: str, first_of_week: int = 0) -> dt.datetime:
    u = _unit(unit)
    if u == "milliseconds":
        return date.replace(microsecond=(date.microsecond // 1000) * 1000)
    if u == "seconds":
        return date.replace(microsecond=0)
    if u == "minutes":
        return date.replace(second=0, microsecond=0)
    if u == "hours":
        return date.replace(minute=0, second=0, microsecond=0)

    day = date.replace(hour=0, minute=0, second=0, microsecond=0)
    if u == "day":
        return day
    if u == "week":
        back = (day.weekday() - int(first_of_week)) % 7
        return day - dt.timedelta(days=back)
    if u == "month":
        return day.replace(day=1)
    return day.replace(month=1, day=1)


def add(date: dt.datetime, num: int, unit: str) -> dt.datetime:
    u = _unit(unit)
    if u == "month":
        months = date.year * 12 + (date.month - 1) + int(num)
        year, month0 = divmod(months, 12)
        last_day = calendar.monthrange(year, month0 + 1)[1]
        return date.replace(year=year, month=month0 + 1, day=min(date.day, last_day))
    if u == "year":
        return add(date, int(num) * 12, "month")
    if u == "week":
        return date + dt.timedelta(days=7 * num)
    if u == "day":
        return date + dt.timedelta(days=num)
    return date + dt.timedelta(milliseconds=_MILLI[u] * num)


def end_of(date: dt.datetime, unit: str, first_of_week: int = 0) -> dt.datetime:
    nxt = add(start_of(date, unit, first_of_week), 1, unit)
    return nxt - dt.timedelta(milliseconds=1)


def ceil(date: dt.datetime, unit: str) -> dt.datetime:
    floor = start_of(date, unit)
    return floor if floor == date else add(floor, 1, unit)


def _floor_pair(a: dt.datetime, b: dt.datetime, unit: Optional[str]):
    u = _unit(unit)
    if u is None:
        return a, b
    return start_of(a, u), start_of(b, u)


def eq(a: dt.datetime, b: dt.datetime, unit: Optional[str] = None) -> bool:
    x, y = _floor_pair(a, b, unit)
    return x == y


def neq(a: dt.datetime, b: dt.datetime, unit: Optional[str] = None) -> bool:
    return not eq(a, b, unit)


def lt(a: dt.datetime, b: dt.datetime, unit: Optional[str] = None) -> bool:
    x, y = _floor_pair(a, b, unit)
    return x < y


def lte(a: dt.datetime, b: dt.datetime, unit: Optional[str] = None) -> bool:
    x, y = _floor_pair(a, b, unit)
    return x <= y


def gt(a: dt.datetime, b: dt.datetime, unit: Optional[str] = None) -> bool:
    return not lte(a, b, unit)


def gte(a: dt.datetime, b: dt.datetime, unit: Optional[str] = None) -> bool:
    return not lt(a, b, unit)


def merge(date: Optional[dt.datetime], time: Optional[dt.datetime]) -> Optional[dt.datetime]:
    """Calendar day of `date` combined with the time of day of `time`.

    A missing side is taken from the current time. When both values are
    timezone-aware, `time` is read in `date`'s zone first.
    """
    if date is None and time is None:
        return None
    if time is None:
        time = dt.datetime.now(date.tzinfo)  # type: ignore[union-attr]
    if date is None:
        date = dt.datetime.now(time.tzinfo)

    if date.tzinfo is not None and time.tzinfo is not None:
        time = time.astimezone(date.tzinfo)

    return start_of(date, "day").replace(
        hour=time.hour,
        minute=time.minute,
        second=time.second,
        microsecond=time.microsecond,
    )


def _wall(value: dt.datetime, tz: Optional[dt.tzinfo]) -> dt.datetime:
    if value.tzinfo is not None and tz is not None:
        value = value.astimezone(tz)
    return value.replace(tzinfo=None)


def diff(a: dt.datetime, b: dt.datetime, unit: Optional[str] = None) -> float:
    """Absolute difference between `a` and `b`, rounded to whole `unit`s.

    Without a unit the exact difference in milliseconds is returned.
    Fixed-length units are measured on wall-clock readings (both values in
    `a`'s zone), month and year count calendar boundaries crossed.
    """
    u = _unit(unit)
    if u is None or u == "milliseconds":
        return abs((a - b) / dt.timedelta(milliseconds=1))

    wa = _wall(a, a.tzinfo)
    wb = _wall(b, a.tzinfo)

    if u == "month":
        return abs((wa.year * 12 + wa.month) - (wb.year * 12 + wb.month))
    if u == "year":
        return abs(wa.year - wb.year)

    span = start_of(wa, u) - start_of(wb, u)
    return round(abs(span / dt.timedelta(milliseconds=_MILLI[u])))


def _component(date: dt.datetime, unit: str) -> int:
    u = _unit(unit)
    if u == "milliseconds":
        return date.microsecond // 1000
    if u == "seconds":
        return date.second
    if u == "minutes":
        return date.minute
    if u == "hours":
        return date.hour
    if u == "day":
        return date.day
    if u == "week":
        return week(date)
    if u == "month":
        return date.month
    return date.year


def duration(start: dt.datetime, end: dt.datetime, unit: str) -> int:
    """Distance between the `unit` components of two dates (day of month, hour, ...)."""
    return abs(_component(start, unit) - _component(end, unit))


def total(date: dt.datetime, unit: Optional[str] = None) -> float:
    """Epoch time of `date` expressed in `unit`s (milliseconds by default)."""
    u = _unit(unit) or "milliseconds"
    if u in ("month", "year"):
        raise ValueError(f"total() has no fixed length for unit {unit!r}")
    ms = date.timestamp() * 1000
    return ms / _MILLI[u]


def week(date: dt.datetime) -> int:
    return date.isocalendar()[1]


def date_range(start: dt.datetime, end: dt.datetime, unit: str = "day") -> List[dt.datetime]:
    current = start
    days: List[dt.datetime] = []
    while lte(current, end, unit):
        days.append(current)
        current = add(current, 1, unit)
    return days


def first_visible_day(date: dt.datetime, first_of_week: int = 0) -> dt.datetime:
    return start_of(start_of(date, "month"), "week", first_of_week)


def last_visible_day(date: dt.datetime, first_of_week: int = 0) -> dt.datetime:
    return end_of(end_of(date, "month"), "week", first_of_week)


def visible_days(date: dt.datetime, first_of_week: int = 0) -> List[dt.datetime]:
    """Whole weeks covering the month of `date`, as a month view shows them."""
    return date_range(first_visible_day(date, first_of_week), last_visible_day(date, first_of_week), "day")


def months_in_year(year: int) -> List[dt.datetime]:
    return [dt.datetime(int(year), m, 1) for m in (1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12)]


def same_date(a: dt.datetime, b: dt.datetime) -> bool:
    return a.date() == b.date()


def same_month(a: dt.datetime, b: dt.datetime) -> bool:
    return eq(a, b, "month")


def eq_time(a: dt.datetime, b: dt.datetime) -> bool:
    return (a.hour, a.minute, a.second) == (b.hour, b.minute, b.second)


def is_just_date(date: dt.datetime) -> bool:
    return date.hour == 0 and date.minute == 0 and date.second == 0 and date.microsecond == 0


def now(tz: TzLike = None) -> dt.datetime:
    """Current naive wall time, read in `tz` when given."""
    tzinfo = _tzinfo(tz)
    if tzinfo is None:
        return dt.datetime.now()
    return dt.datetime.now(tzinfo).replace(tzinfo=None)


def today(tz: TzLike = None) -> dt.datetime:
    return start_of(now(tz), "day")


def yesterday(tz: TzLike = None) -> dt.datetime:
    return add(today(tz), -1, "day")


def tomorrow(tz: TzLike = None) -> dt.datetime:
    return add(today(tz), 1, "day")


def is_today(date: dt.datetime, tz: TzLike = None) -> bool:
    tzinfo = _tzinfo(tz)
    return _wall(date, tzinfo).date() == today(tzinfo).date()
