#!/usr/bin/env python3
from __future__ import annotations

import argparse
import dataclasses
import datetime as dt
import json
import math
import os
import sys
from pathlib import Path
from typing import Any, Callable, List, Optional

from .layout import get_styled_events
from .model import DEFAULT_INDENT, DEFAULT_NESTED_INDENT, PackingPolicy, StyledEvent
from .util import dates
from .util.console import eprint, obs_enabled
from .util.timeparse import parse_date_yyyy_mm_dd, parse_iso_datetime, parse_window, window_start
from .util.tz import normalize_tz_name, resolve_tz
from .validate import validate_layout


def _die(msg: str, rc: int = 2) -> int:
    print(f"[daygrid] ERROR: {msg}", file=sys.stderr)
    return rc


def _read_events(p: Path) -> List[Any]:
    obj = json.loads(p.read_text(encoding="utf-8", errors="replace"))
    if isinstance(obj, dict):
        obj = obj.get("events")
    if not isinstance(obj, list):
        raise ValueError(f"events must be a list (or an object with an 'events' list); got {type(obj).__name__}")
    return obj


def _time_field(name: str, tzinfo: dt.tzinfo) -> Callable[[Any], Optional[dt.datetime]]:
    def get(event: Any) -> Optional[dt.datetime]:
        raw = event.get(name) if isinstance(event, dict) else None
        if not isinstance(raw, str):
            return None
        try:
            return parse_iso_datetime(raw, tzinfo)
        except ValueError:
            if obs_enabled():
                eprint(f"[daygrid.cli] WARN: invalid {name} timestamp value={raw!r}")
            return None

    return get


def _finite_or_none(v: float) -> Optional[float]:
    # NaN/inf are not JSON; malformed events get null geometry.
    return v if math.isfinite(v) else None


def _styled_to_json(i: int, se: StyledEvent) -> dict:
    return {
        "index": i,
        "event": se.event,
        "style": {k: _finite_or_none(v) for k, v in dataclasses.asdict(se.style).items()},
        "meta": dataclasses.asdict(se.meta),
    }


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="daygrid",
        description="Lay out a day of calendar events into stacked columns (JSON in, JSON out).",
    )
    ap.add_argument("--in", dest="in_json", required=True, help="Events JSON path (list, or object with 'events')")
    ap.add_argument("--out", default=None, help="Output layout JSON path (default: stdout)")
    ap.add_argument("--day", default=None, help="Day to lay out, YYYY-MM-DD (default: today in --tz)")
    ap.add_argument("--window", default="00:00-24:00", help="Visible window, e.g. 06:00-23:00 (default: whole day)")
    ap.add_argument("--step", type=int, default=30, help="Minimum event height in minutes (default: 30)")
    ap.add_argument(
        "--tz",
        default=os.getenv("DAYGRID_TZ", "local"),
        help="Timezone the day column is drawn in (default: env DAYGRID_TZ or 'local')",
    )
    ap.add_argument("--start-field", default="start", help="Event field holding the ISO start time (default: start)")
    ap.add_argument("--end-field", default="end", help="Event field holding the ISO end time (default: end)")
    ap.add_argument("--indent", type=float, default=DEFAULT_INDENT, help="Child group indent, percent (default: 3)")
    ap.add_argument(
        "--nested-indent",
        type=float,
        default=DEFAULT_NESTED_INDENT,
        help="Indent of multi-event child groups, percent (default: 3)",
    )
    ap.add_argument("--overlap-multiplier", type=float, default=0.0, help="Let events grow into neighbours (default: 0)")
    ap.add_argument("--check", action="store_true", help="Fail (rc=3) if the layout breaks an invariant")
    ap.add_argument("--pretty", action="store_true", help="Pretty JSON output")
    ns = ap.parse_args(argv)

    tz_name = normalize_tz_name(ns.tz)
    try:
        tzinfo = resolve_tz(tz_name)
    except ValueError as e:
        return _die(f"Invalid --tz value: {e}")

    try:
        day = parse_date_yyyy_mm_dd(ns.day) if ns.day else dates.today(tzinfo).date()
        start_min, total_min = parse_window(ns.window)
        policy = PackingPolicy(
            indent=ns.indent,
            nested_indent=ns.nested_indent,
            overlap_multiplier=ns.overlap_multiplier,
        )
    except ValueError as e:
        return _die(str(e))

    p = Path(ns.in_json)
    if not p.exists():
        return _die(f"Missing JSON file: {p}")
    try:
        events = _read_events(p)
    except Exception as e:
        return _die(f"Failed to parse events JSON: {p} ({e})")

    try:
        styled = get_styled_events(
            events,
            min_dt=window_start(day, start_min, tz_name),
            total_min=total_min,
            step=ns.step,
            start_accessor=_time_field(ns.start_field, tzinfo),
            end_accessor=_time_field(ns.end_field, tzinfo),
            policy=policy,
        )
    except ValueError as e:
        return _die(str(e))

    if ns.check:
        errs = validate_layout(styled, total_min=total_min, step=ns.step, expected_count=len(events))
        if errs:
            for err in errs:
                eprint(f"[daygrid] CHECK: {err}")
            return _die(f"layout check failed ({len(errs)} problem(s))", rc=3)

    out = {
        "cfg": {
            "day": day.isoformat(),
            "tz": tz_name,
            "window_start_min": start_min,
            "total_min": total_min,
            "step": ns.step,
            "indent": policy.indent,
            "nested_indent": policy.nested_indent,
            "overlap_multiplier": policy.overlap_multiplier,
        },
        "events": [_styled_to_json(i, se) for i, se in enumerate(styled)],
    }
    txt = json.dumps(out, ensure_ascii=False, allow_nan=False, indent=2 if ns.pretty else None)

    if ns.out:
        out_path = Path(ns.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(txt + "\n", encoding="utf-8", newline="\n")
        print(f"[daygrid] OK: wrote {out_path}")
    else:
        print(txt)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
