# daygrid/util/timeparse.py
from __future__ import annotations

import datetime as dt
import re
from typing import Optional, Tuple

from .tz import resolve_tz

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_hhmm(s: str) -> Tuple[int, int]:
    """Parse "HH:MM"; "24:00" is accepted as the end of the day."""
    m = _HHMM_RE.match(s.strip())
    if not m:
        raise ValueError(f"Invalid HH:MM: {s!r}")
    hh = int(m.group(1))
    mm = int(m.group(2))
    if hh == 24 and mm == 0:
        return hh, mm
    if not (0 <= hh <= 23 and 0 <= mm <= 59):
        raise ValueError(f"Invalid HH:MM: {s!r}")
    return hh, mm


def parse_window(s: str) -> Tuple[int, int]:
    """Parse a visible window like "06:00-23:00" into (start_min, total_min)."""
    parts = s.split("-")
    if len(parts) != 2:
        raise ValueError("window must be like 06:00-23:00")
    sh, sm = parse_hhmm(parts[0])
    eh, em = parse_hhmm(parts[1])
    start = sh * 60 + sm
    end = eh * 60 + em
    if end <= start:
        raise ValueError("window end must be after start")
    return start, end - start


def parse_date_yyyy_mm_dd(s: str) -> dt.date:
    return dt.datetime.strptime(s, "%Y-%m-%d").date()


def parse_iso_datetime(s: str, tz: Optional[dt.tzinfo] = None) -> dt.datetime:
    """Parse an ISO 8601 timestamp ("Z" suffix allowed).

    Offset-carrying values are converted to `tz`; naive values are kept as
    wall time (stamped with `tz` when one is given).
    """
    raw = str(s).strip()
    if not raw:
        raise ValueError("empty timestamp")
    value = dt.datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if tz is None:
        return value
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def window_start(day: dt.date, start_min: int, tz: str | None = "local") -> dt.datetime:
    """Aware datetime marking slot 0 of a window opening `start_min` after midnight."""
    tzinfo = resolve_tz(tz)
    midnight = dt.datetime(day.year, day.month, day.day, tzinfo=tzinfo)
    return midnight + dt.timedelta(minutes=int(start_min))
