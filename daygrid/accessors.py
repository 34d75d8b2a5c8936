# daygrid/accessors.py
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Union

Accessor = Callable[[Any], Any]
AccessorSpec = Union[str, Accessor]


def _field_getter(name: str) -> Accessor:
    def get(event: Any) -> Any:
        if isinstance(event, Mapping):
            return event.get(name)
        return getattr(event, name, None)

    get.__name__ = f"get_{name}"
    return get


def resolve_accessor(spec: AccessorSpec) -> Accessor:
    """Turn a field name or a unary callable into an `event -> value` function.

    Field names are looked up as mapping keys first, then as attributes;
    a missing field reads as None.
    """
    if isinstance(spec, str):
        name = spec.strip()
        if not name:
            raise ValueError("accessor field name must be non-empty")
        return _field_getter(name)
    if callable(spec):
        return spec
    raise TypeError(f"accessor must be a field name or a callable; got {type(spec).__name__}")
