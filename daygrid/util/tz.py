# daygrid/util/tz.py
from __future__ import annotations

import datetime as dt
import re
from typing import Optional
from zoneinfo import ZoneInfo

_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")

_LOCAL_ALIASES = {"local", "system", "native"}
_UTC_ALIASES = {"utc", "z", "gmt", "utc0", "utc+0"}


def normalize_tz_name(name: Optional[str]) -> str:
    """Canonical timezone identifier for a view.

    None/"" and the local aliases become "local", the UTC aliases become "UTC",
    anything else (IANA names, "+02:00" style offsets) is kept as given.
    """
    if name is None:
        return "local"
    s = str(name).strip()
    if not s:
        return "local"

    low = s.lower()
    if low in _LOCAL_ALIASES:
        return "local"
    if low in _UTC_ALIASES:
        return "UTC"
    return s


def _fixed_offset(tz_name: str) -> Optional[dt.tzinfo]:
    m = _OFFSET_RE.match(tz_name)
    if not m:
        return None
    sign_s, hh_s, mm_s = m.groups()
    hh = int(hh_s)
    mm = int(mm_s)
    if hh > 23 or mm > 59:
        raise ValueError(f"Invalid timezone offset: {tz_name!r}")
    sign = 1 if sign_s == "+" else -1
    return dt.timezone(dt.timedelta(minutes=sign * (hh * 60 + mm)))


def resolve_tz(name: Optional[str]) -> dt.tzinfo:
    """Resolve a timezone name into a tzinfo.

    Raises ValueError for identifiers that are neither an alias, a fixed
    offset nor a known IANA zone.
    """
    tz_name = normalize_tz_name(name)

    if tz_name == "UTC":
        return dt.timezone.utc

    if tz_name == "local":
        return dt.datetime.now().astimezone().tzinfo or dt.timezone.utc

    fixed = _fixed_offset(tz_name)
    if fixed is not None:
        return fixed

    try:
        return ZoneInfo(tz_name)
    except Exception as ex:
        raise ValueError(f"Invalid timezone identifier: {tz_name!r}") from ex


def local_tz_name() -> str:
    """Best-effort name of the machine's zone ("UTC" when unnamed)."""
    tz = dt.datetime.now().astimezone().tzinfo
    key = getattr(tz, "key", None)
    if isinstance(key, str) and key:
        return key
    name = tz.tzname(None) if tz is not None else None
    return name or "UTC"


def utc_offset_minutes(value: dt.datetime, tz: Optional[dt.tzinfo] = None) -> int:
    """UTC offset of `value` in minutes, east positive.

    Naive datetimes are read as wall time in `tz` (the local zone when omitted).
    """
    if value.tzinfo is None:
        tzinfo = tz if tz is not None else resolve_tz("local")
        value = value.replace(tzinfo=tzinfo)
    elif tz is not None:
        value = value.astimezone(tz)
    off = value.utcoffset()
    if off is None:
        return 0
    return int(off.total_seconds() // 60)


def tz_normalized_end(end: dt.datetime, offset_min: float) -> dt.datetime:
    """`end` with its seconds cleared, shifted by `offset_min` minutes.

    Sub-second precision is kept; only the seconds field is zeroed.
    """
    if end.second:
        end = end.replace(second=0)
    return end + dt.timedelta(minutes=offset_min)
