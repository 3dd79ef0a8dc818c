"""Decoder: text → JSON tree → best-fit shape-tagged value.

Classification of an array by its immediate elements:

- only primitives → Vector
- only objects with only primitive members → Table (row-based)
- only primitive arrays of one common, non-zero length → Matrix
- anything else → unnamed List; an object → named List
"""

from __future__ import annotations

import logging
from typing import Any

from .errors import AmbiguousDecodeError, FormatError
from .model import NA, Matrix, RList, Scalar, Table, Value, Vector, VectorKind
from .options import DecodeOptions, resolve
from .primitives import NA_TOKEN, decode_item, is_primitive, widen
from .text import parse

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def decode(tree: Any, options: DecodeOptions | None = None, **overrides) -> Value:
    """Decode a parsed JSON tree (dicts, lists, primitives) into a value."""
    opts = resolve(options, DecodeOptions, overrides)
    return _decode(tree, opts, "$")


def from_json(text: str | bytes, options: DecodeOptions | None = None, **overrides) -> Value:
    """Parse JSON *text* and decode it into a value."""
    opts = resolve(options, DecodeOptions, overrides)
    return _decode(parse(text), opts, "$")


def _decode(node: Any, opts: DecodeOptions, path: str) -> Value:
    if is_primitive(node):
        return _scalar(node)
    if isinstance(node, dict):
        return _object(node, opts, path)
    if isinstance(node, list):
        return _array(node, opts, path)
    raise FormatError(f"{type(node).__name__} is not a JSON value", position=path)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _scalar(p: Any) -> Scalar:
    kind = widen([p])
    return Scalar(kind, decode_item(p, kind))


def _vector(prims: list[Any], nulls_are_text: bool = True) -> Vector:
    kind = widen(prims, nulls_are_text)
    items = [decode_item(p, kind) for p in prims]
    if kind == VectorKind.CHARACTER and None not in prims:
        # No null means NA was written as a token (complex or na="string").
        items = [NA if x == NA_TOKEN else x for x in items]
    return Vector(kind, items)


def _object(node: dict[str, Any], opts: DecodeOptions, path: str) -> RList:
    return RList(
        [_decode(v, opts, f"{path}.{k}") for k, v in node.items()],
        list(node.keys()),
    )


def _array(node: list[Any], opts: DecodeOptions, path: str) -> Value:
    if not node:
        if opts.strict_empty:
            raise AmbiguousDecodeError(
                "empty array could be an empty vector or an empty list", position=path
            )
        logger.debug("empty array at %s decoded as an empty list", path)
        return RList([])

    if all(is_primitive(x) for x in node):
        if opts.simplify_vector:
            return _vector(node)
        return RList([_scalar(x) for x in node])

    if opts.simplify_table and all(isinstance(x, dict) for x in node):
        table = _table(node, path)
        if table is not None:
            return table

    if opts.simplify_matrix and _is_matrix(node):
        return _matrix(node)

    return RList([_decode(x, opts, f"{path}[{i}]") for i, x in enumerate(node)])


def _table(rows: list[dict[str, Any]], path: str) -> Table | None:
    """Build a table from row objects, or return None if they aren't rows."""
    primitive_keys: dict[str, str] = {}
    structural_keys: dict[str, str] = {}
    for i, row in enumerate(rows):
        for key, value in row.items():
            where = f"{path}[{i}].{key}"
            if is_primitive(value):
                primitive_keys.setdefault(key, where)
            else:
                structural_keys.setdefault(key, where)

    for key in primitive_keys:
        if key in structural_keys:
            raise FormatError(
                f"key {key!r} holds a primitive at {primitive_keys[key]} "
                "but a nested value elsewhere; rows cannot form one table",
                position=structural_keys[key],
            )
    if structural_keys or not primitive_keys:
        return None

    columns = {
        # Omitted cells read as null, so null says nothing about the column kind.
        key: _vector([row.get(key) for row in rows], nulls_are_text=False)
        for key in primitive_keys
    }
    return Table(columns)


def _is_matrix(node: list[Any]) -> bool:
    if not all(isinstance(x, list) for x in node):
        return False
    width = len(node[0])
    if width == 0:
        return False
    return all(len(x) == width and all(is_primitive(p) for p in x) for x in node)


def _matrix(rows: list[list[Any]]) -> Matrix:
    flat = [p for row in rows for p in row]
    return Matrix(_vector(flat), nrow=len(rows), ncol=len(rows[0]))
