"""Layout validation helpers (library-facing)."""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

from daygrid.model import StyledEvent

# Float slack for percentage arithmetic.
_EPS = 1e-9


class LayoutValidationError(ValueError):
    """Raised when a computed layout breaks a layout invariant."""


def _require(cond: bool, msg: str, errs: List[str]) -> None:
    if not cond:
        errs.append(msg)


def validate_layout(
    styled: Sequence[StyledEvent],
    *,
    total_min: int,
    step: int,
    expected_count: Optional[int] = None,
) -> List[str]:
    """Return a list of invariant violations (empty when the layout is sound)."""
    errs: List[str] = []

    if expected_count is not None:
        _require(
            len(styled) == expected_count,
            f"layout has {len(styled)} events; expected {expected_count}",
            errs,
        )

    min_height = 100 * step / total_min
    for i, se in enumerate(styled):
        if not isinstance(se, StyledEvent):
            errs.append(f"events[{i}] must be StyledEvent")
            continue
        s = se.style
        values = (s.top, s.height, s.width, s.x_offset)
        if not all(isinstance(v, (int, float)) and math.isfinite(v) for v in values):
            errs.append(f"events[{i}].style has non-finite values")
            continue
        _require(0 - _EPS <= s.top <= 100 + _EPS, f"events[{i}].style.top outside 0..100", errs)
        _require(s.height + _EPS >= min_height, f"events[{i}].style.height below step floor", errs)
        _require(s.width > 0, f"events[{i}].style.width must be > 0", errs)
        _require(s.x_offset >= 0 - _EPS, f"events[{i}].style.x_offset must be >= 0", errs)

        m = se.meta
        if m.overlapping_count is not None:
            _require(m.overlapping_count >= 1, f"events[{i}].meta.overlapping_count must be >= 1", errs)
        if m.group_number is not None:
            _require(m.group_number >= 1, f"events[{i}].meta.group_number must be >= 1", errs)

    return errs


def assert_valid_layout(
    styled: Sequence[StyledEvent],
    *,
    total_min: int,
    step: int,
    expected_count: Optional[int] = None,
) -> None:
    errs = validate_layout(styled, total_min=total_min, step=step, expected_count=expected_count)
    if errs:
        raise LayoutValidationError("Layout validation failed:\n- " + "\n- ".join(errs))
