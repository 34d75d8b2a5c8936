# daygrid/layout.py
"""Day-column event layout.

Events are sorted, then walked cluster by cluster. Starting at the first
unplaced event (the anchor), its siblings and its child groups are found.
The anchor and its siblings split the column evenly. Each child group then
moves as far right as it can: from the anchor to the latest consecutive
sibling that still contains the group's first event. A group takes the space
its parent occupies, minus a fixed indent per group number, and divides it
among its members.

Widths and offsets are computed without overlap. Overlap is added at the very
end according to `PackingPolicy.overlap_multiplier`; with 0 nothing grows.

When a cluster is done the cursor moves past every event it touched.
"""

from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Tuple

from .accessors import AccessorSpec, resolve_accessor
from .model import (
    DEFAULT_STEP_MIN,
    DEFAULT_TOTAL_MIN,
    DayWindow,
    Event,
    EventMeta,
    EventStyle,
    PackingPolicy,
    StyledEvent,
)
from .slots import project_slots, sort_events
from .util.console import eprint, obs_enabled

# Events whose starts are closer than this many minutes share a row.
SIBLING_THRESHOLD_MIN = 30


@dataclass(frozen=True)
class SlotGrid:
    """Projected start/end slots of sorted events, with the relations between them."""

    starts: Tuple[float, ...]
    ends: Tuple[float, ...]

    def _has(self, idx: Optional[int]) -> bool:
        return idx is not None and 0 <= idx < len(self.starts)

    def is_sibling(self, idx1: Optional[int], idx2: Optional[int]) -> bool:
        if not (self._has(idx1) and self._has(idx2)):
            return False
        return abs(self.starts[idx1] - self.starts[idx2]) < SIBLING_THRESHOLD_MIN  # type: ignore[index]

    def is_child(self, parent_idx: Optional[int], child_idx: Optional[int]) -> bool:
        """A child starts inside its parent's span but is not the parent's sibling."""
        if not (self._has(parent_idx) and self._has(child_idx)):
            return False
        if self.is_sibling(parent_idx, child_idx):
            return False
        return self.ends[parent_idx] > self.starts[child_idx]  # type: ignore[index]

    def scan(self, cursor: int, accept: Callable[[int], bool]) -> Tuple[List[int], int]:
        """Collect consecutive indices from `cursor` while `accept` holds.

        Returns the matches and the first index that was not accepted.
        """
        matches: List[int] = []
        while accept(cursor):
            matches.append(cursor)
            cursor += 1
        return matches, cursor

    def get_siblings(self, idx: int) -> List[int]:
        siblings, _ = self.scan(idx + 1, lambda j: self.is_sibling(idx, j))
        return siblings

    def get_child_groups(self, idx: int, search_from: int) -> Tuple[List[List[int]], int]:
        """Child groups of `idx` starting at `search_from`, and the largest group size.

        Each group is a child of `idx` followed by that child's own siblings.
        """
        groups: List[List[int]] = []
        nbr_of_columns = 0
        cursor = search_from

        while self.is_child(idx, cursor):
            first = cursor
            rest, cursor = self.scan(first + 1, lambda j: self.is_sibling(first, j))
            group = [first, *rest]
            nbr_of_columns = max(nbr_of_columns, len(group))
            groups.append(group)

        return groups, nbr_of_columns


@dataclass
class _Placement:
    grid: SlotGrid
    window: DayWindow
    policy: PackingPolicy
    styles: List[Optional[EventStyle]] = field(default_factory=list)
    metas: List[EventMeta] = field(default_factory=list)
    grows: List[bool] = field(default_factory=list)

    def __post_init__(self) -> None:
        n = len(self.grid.starts)
        self.styles = [None] * n
        self.metas = [EventMeta()] * n
        self.grows = [False] * n

    def style_of(self, idx: int) -> EventStyle:
        style = self.styles[idx]
        if style is None:
            raise RuntimeError(f"event #{idx} was read before it was placed")
        return style

    def y_style(self, idx: int) -> Tuple[float, float]:
        total = self.window.total_min
        start = self.grid.starts[idx]
        end = self.grid.ends[idx]
        if math.isnan(start) or math.isnan(end):
            end = math.nan
        else:
            end = max(end, start + self.window.step)
        top = start / total * 100
        bottom = end / total * 100
        return top, bottom - top

    def place(self, idx: int, width: float, x_offset: float, meta: EventMeta, *, grows: bool) -> None:
        top, height = self.y_style(idx)
        self.styles[idx] = EventStyle(top=top, height=height, width=width, x_offset=x_offset)
        self.metas[idx] = meta
        self.grows[idx] = grows

    def style_top_level(self, idx: int, siblings: Sequence[int]) -> None:
        run = [idx, *siblings]
        n = len(run)
        for pos, event_idx in enumerate(run):
            if siblings:
                width = 100 / n
                x_offset = 0 if pos == 0 else width * pos
                meta = EventMeta(
                    overlapping_count=n,
                    group_start=(pos == 0),
                    group_end=(pos == len(siblings)),
                )
                self.place(event_idx, width, x_offset, meta, grows=(pos < n - 1))
            else:
                self.place(event_idx, 100, 0, EventMeta(), grows=False)

    def resolve_parent(self, idx: int, siblings: Sequence[int], first_child: int) -> int:
        """Move a child group to the latest consecutive sibling that still contains it."""
        parent_idx = idx
        for sibling_idx in siblings:
            if not self.grid.is_child(sibling_idx, first_child):
                break
            parent_idx = sibling_idx
        return parent_idx

    def style_child_group(self, group: Sequence[int], group_index: int, parent_idx: int) -> None:
        parent = self.style_of(parent_idx)
        indent = self.policy.indent
        group_number = group_index + 1
        count = len(group)

        if count == 1:
            x_offset = indent * group_number
            self.place(group[0], 100 - x_offset, x_offset, EventMeta(), grows=False)
            return

        group_offset = self.policy.nested_indent * group_number
        width = (parent.width - indent * group_index) / count - indent / count
        for i, event_idx in enumerate(group):
            x_offset = parent.x_offset + width * i + group_offset
            meta = EventMeta(
                overlapping_count=count,
                group_start=(i == 0),
                group_end=(i == count - 1),
                group_number=group_number,
            )
            self.place(event_idx, width, x_offset, meta, grows=(i < count - 1))

    def apply_overlap(self) -> None:
        multiplier = self.policy.overlap_multiplier
        if not multiplier:
            return
        for i, style in enumerate(self.styles):
            if style is None or not self.grows[i]:
                continue
            grown = min(style.width * (1 + multiplier), 100 - style.x_offset)
            self.styles[i] = EventStyle(
                top=style.top,
                height=style.height,
                width=max(style.width, grown),
                x_offset=style.x_offset,
            )


def _warn_invalid_slots(grid: SlotGrid) -> None:
    for i, (start, end) in enumerate(zip(grid.starts, grid.ends)):
        if math.isnan(start):
            eprint(f"[daygrid.layout] WARN: event #{i} has a non-date start; its style will be NaN")
        if math.isnan(end):
            eprint(f"[daygrid.layout] WARN: event #{i} has a non-date end; its style will be NaN")


def get_styled_events(
    events: Iterable[Event],
    *,
    min_dt: dt.datetime,
    total_min: int = DEFAULT_TOTAL_MIN,
    step: int = DEFAULT_STEP_MIN,
    start_accessor: AccessorSpec = "start",
    end_accessor: AccessorSpec = "end",
    policy: Optional[PackingPolicy] = None,
) -> List[StyledEvent]:
    """Lay out `events` in one day column.

    Returns one StyledEvent per event, in sorted order. Neither the events
    nor the caller's sequence are modified.
    """
    start = resolve_accessor(start_accessor)
    end = resolve_accessor(end_accessor)
    window = DayWindow(min_dt=min_dt, total_min=int(total_min), step=int(step))
    policy = policy if policy is not None else PackingPolicy()

    ordered = sort_events(list(events), start, end)
    starts, ends = project_slots(ordered, start, end, window)
    grid = SlotGrid(starts=tuple(starts), ends=tuple(ends))
    if obs_enabled():
        _warn_invalid_slots(grid)

    placement = _Placement(grid=grid, window=window, policy=policy)
    idx = 0

    # One iteration covers one cluster of connected events.
    while idx < len(ordered):
        siblings = grid.get_siblings(idx)
        child_groups, _ = grid.get_child_groups(idx, idx + len(siblings) + 1)

        placement.style_top_level(idx, siblings)
        for group_index, group in enumerate(child_groups):
            parent_idx = placement.resolve_parent(idx, siblings, group[0])
            placement.style_child_group(group, group_index, parent_idx)

        idx += 1 + len(siblings) + sum(len(group) for group in child_groups)

    placement.apply_overlap()

    out: List[StyledEvent] = []
    for i, event in enumerate(ordered):
        out.append(StyledEvent(event=event, style=placement.style_of(i), meta=placement.metas[i]))
    return out


def get_styled_events_from_cfg(events: Iterable[Event], cfg: Mapping[str, Any]) -> List[StyledEvent]:
    """`get_styled_events` driven by a mapping config.

    Keys: min (datetime), total_min, step, start_accessor, end_accessor,
    indent, nested_indent, overlap_multiplier.
    """
    window = DayWindow.from_cfg(cfg)
    return get_styled_events(
        events,
        min_dt=window.min_dt,
        total_min=window.total_min,
        step=window.step,
        start_accessor=cfg.get("start_accessor") or "start",
        end_accessor=cfg.get("end_accessor") or "end",
        policy=PackingPolicy.from_cfg(cfg),
    )
