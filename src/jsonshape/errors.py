"""Exception types for jsonshape."""

from __future__ import annotations

from typing import Any


class JsonShapeError(Exception):
    """Base class for all jsonshape errors."""


class UnsupportedShapeError(JsonShapeError, TypeError):
    """A value has no encoding rule, or its shape is internally inconsistent."""

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__(message)
        self.value = value


class FormatError(JsonShapeError, ValueError):
    """JSON text is malformed, or decoded rows cannot form one table.

    ``position`` is a JSON path (``$[2].foo``) for structural problems or a
    character offset for syntax errors.
    """

    def __init__(self, message: str, position: str | int | None = None) -> None:
        if position is not None:
            message = f"{message} (at {position})"
        super().__init__(message)
        self.position = position


class AmbiguousDecodeError(FormatError):
    """An empty array was decoded with ``strict_empty`` enabled."""
