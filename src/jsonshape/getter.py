"""Accessor resolution for decoded values."""

from __future__ import annotations

from typing import Any

from .model import NA, Matrix, RList, Table, Vector


def _position(accessor: str | int, size: int) -> int | None:
    """1-based accessor → 0-based index, or None if out of range."""
    try:
        idx = int(accessor) - 1
    except (TypeError, ValueError):
        return None
    if 0 <= idx < size:
        return idx
    return None


def get(value: Any, accessor: str | int) -> Any:
    """Resolve a single accessor on a value.

    - RList: label first, then 1-based position (so ``"2"`` finds an
      unlabelled second element the same way the encoder names it)
    - Table: column label first, then 1-based column position
    - Vector / Matrix: 1-based position into the (row-major) data
    - anything else: NA
    """
    if isinstance(value, RList):
        if value.names is not None and isinstance(accessor, str) and accessor in value.names:
            return value.items[value.names.index(accessor)]
        idx = _position(accessor, len(value.items))
        return NA if idx is None else value.items[idx]

    if isinstance(value, Table):
        if accessor in value.columns:
            return value.columns[accessor]
        idx = _position(accessor, value.ncol)
        return NA if idx is None else value.columns[value.names[idx]]

    if isinstance(value, Matrix):
        value = value.data

    if isinstance(value, Vector):
        idx = _position(accessor, len(value.items))
        return NA if idx is None else value.items[idx]

    return NA


def get_path(value: Any, *accessors: str | int) -> Any:
    """Apply accessors left to right; NA short-circuits."""
    for accessor in accessors:
        if value is NA:
            return NA
        value = get(value, accessor)
    return value
