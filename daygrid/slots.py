# daygrid/slots.py
from __future__ import annotations

import datetime as dt
import math
from typing import Any, List, Optional, Sequence, Tuple

from .accessors import Accessor
from .model import DayWindow, Event
from .util import dates


def as_datetime(value: Any) -> Optional[dt.datetime]:
    """Accessor output as a datetime; plain dates read as midnight, anything else as None."""
    if isinstance(value, dt.datetime):
        return value
    if isinstance(value, dt.date):
        return dt.datetime(value.year, value.month, value.day)
    return None


def _epoch(value: Any) -> float:
    d = as_datetime(value)
    if d is None:
        return math.nan
    return d.timestamp()


def _sort_key(start_value: Any, end_value: Any) -> Tuple[bool, float, bool, float]:
    # Non-date starts sort after every valid start, non-date ends after every
    # valid end among equal starts.
    s = _epoch(start_value)
    e = _epoch(end_value)
    s_bad = math.isnan(s)
    e_bad = math.isnan(e)
    return (s_bad, 0.0 if s_bad else s, e_bad, 0.0 if e_bad else -e)


def sort_events(events: List[Event], start: Accessor, end: Accessor) -> List[Event]:
    """Sort `events` in place by start time; equal starts put the longest event first.

    Events without a usable start go last, in their input order.
    Returns the same list object.
    """
    events.sort(key=lambda e: _sort_key(start(e), end(e)))
    return events


def starts_before(date: dt.datetime, min_dt: dt.datetime) -> bool:
    """True when the time of day of `date` falls before `min_dt` on `min_dt`'s day."""
    return dates.lt(dates.merge(min_dt, date), min_dt, "minutes")


def position_from_date(date: Any, min_dt: dt.datetime, total_min: int) -> float:
    """Minute offset of `date` inside the window opening at `min_dt`.

    Only the time of day of `date` matters. The result is clamped to
    [0, total_min]; a non-date input yields NaN.
    """
    value = as_datetime(date)
    if value is None:
        return math.nan
    if starts_before(value, min_dt):
        return 0
    diff = int(dates.diff(min_dt, dates.merge(min_dt, value), "minutes"))
    return min(diff, int(total_min))


def project_slots(
    events: Sequence[Event],
    start: Accessor,
    end: Accessor,
    window: DayWindow,
) -> Tuple[List[float], List[float]]:
    """Start and end slots for every event, index-aligned with `events`."""
    starts = [position_from_date(start(e), window.min_dt, window.total_min) for e in events]
    ends = [position_from_date(end(e), window.min_dt, window.total_min) for e in events]
    return starts, ends
