# daygrid/model.py
from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

# Caller-owned records; only read through accessors.
Event = Any
LayoutConfig = Dict[str, Any]

DEFAULT_TOTAL_MIN = 1440
DEFAULT_STEP_MIN = 30
DEFAULT_INDENT = 3.0
DEFAULT_NESTED_INDENT = 3.0


@dataclass(frozen=True)
class EventStyle:
    top: float       # % of column height
    height: float    # % of column height
    width: float     # % of column width
    x_offset: float  # % of column width


@dataclass(frozen=True)
class EventMeta:
    """Grouping bookkeeping for one event; None where the layout attached nothing."""

    overlapping_count: Optional[int] = None
    group_start: Optional[bool] = None
    group_end: Optional[bool] = None
    group_number: Optional[int] = None


@dataclass(frozen=True)
class StyledEvent:
    event: Event
    style: EventStyle
    meta: EventMeta = EventMeta()


def _cfg_float(cfg: Mapping[str, Any], key: str, default: float) -> float:
    v = cfg.get(key)
    if v is None or v == "":
        return float(default)
    try:
        return float(v)
    except (TypeError, ValueError) as ex:
        raise ValueError(f"{key} must be a number; got {v!r}") from ex


def _cfg_int(cfg: Mapping[str, Any], key: str, default: int) -> int:
    v = cfg.get(key)
    if v is None or v == "":
        return int(default)
    if isinstance(v, bool):
        raise ValueError(f"{key} must be an integer; got {v!r}")
    try:
        return int(v)
    except (TypeError, ValueError) as ex:
        raise ValueError(f"{key} must be an integer; got {v!r}") from ex


@dataclass(frozen=True)
class PackingPolicy:
    """Horizontal packing knobs for nested child groups.

    indent:             left indent per group number for single-event groups,
                        and the per-group width reduction for wider groups.
    nested_indent:      left indent per group number for multi-event groups.
    overlap_multiplier: how far non-last members may grow into their right
                        neighbour, as a fraction of their width (0 = never).
    """

    indent: float = DEFAULT_INDENT
    nested_indent: float = DEFAULT_NESTED_INDENT
    overlap_multiplier: float = 0.0

    def __post_init__(self) -> None:
        if not all(math.isfinite(v) for v in (self.indent, self.nested_indent, self.overlap_multiplier)):
            raise ValueError("indent, nested_indent and overlap_multiplier must be finite numbers")
        if self.indent < 0 or self.nested_indent < 0:
            raise ValueError("indent and nested_indent must be >= 0")
        if self.overlap_multiplier < 0:
            raise ValueError("overlap_multiplier must be >= 0")

    @classmethod
    def from_cfg(cls, cfg: Mapping[str, Any]) -> "PackingPolicy":
        return cls(
            indent=_cfg_float(cfg, "indent", DEFAULT_INDENT),
            nested_indent=_cfg_float(cfg, "nested_indent", DEFAULT_NESTED_INDENT),
            overlap_multiplier=_cfg_float(cfg, "overlap_multiplier", 0.0),
        )


@dataclass(frozen=True)
class DayWindow:
    """The visible part of a day column: slot 0 at `min_dt`, `total_min` minutes tall."""

    min_dt: dt.datetime
    total_min: int = DEFAULT_TOTAL_MIN
    step: int = DEFAULT_STEP_MIN

    def __post_init__(self) -> None:
        if not isinstance(self.min_dt, dt.datetime):
            raise ValueError(f"min must be a datetime; got {type(self.min_dt).__name__}")
        if self.total_min <= 0:
            raise ValueError(f"total_min must be > 0; got {self.total_min}")
        if self.step <= 0:
            raise ValueError(f"step must be > 0; got {self.step}")

    @classmethod
    def from_cfg(cls, cfg: Mapping[str, Any]) -> "DayWindow":
        return cls(
            min_dt=cfg.get("min"),  # type: ignore[arg-type]
            total_min=_cfg_int(cfg, "total_min", DEFAULT_TOTAL_MIN),
            step=_cfg_int(cfg, "step", DEFAULT_STEP_MIN),
        )


__all__ = [
    "Event",
    "LayoutConfig",
    "EventStyle",
    "EventMeta",
    "StyledEvent",
    "PackingPolicy",
    "DayWindow",
]
