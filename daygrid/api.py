"""daygrid.api

Stable *library* entrypoint for daygrid.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from daygrid.accessors import resolve_accessor
from daygrid.layout import SlotGrid, get_styled_events, get_styled_events_from_cfg
from daygrid.model import DayWindow, EventMeta, EventStyle, PackingPolicy, StyledEvent
from daygrid.slots import position_from_date, sort_events, starts_before
from daygrid.validate import LayoutValidationError, assert_valid_layout, validate_layout

__all__ = [
    "get_styled_events",
    "get_styled_events_from_cfg",
    "sort_events",
    "starts_before",
    "position_from_date",
    "resolve_accessor",
    "SlotGrid",
    "DayWindow",
    "PackingPolicy",
    "EventStyle",
    "EventMeta",
    "StyledEvent",
    "validate_layout",
    "assert_valid_layout",
    "LayoutValidationError",
]
