"""Encoder: shape-tagged value → JSON tree → text."""

from __future__ import annotations

import logging
from typing import Any, Callable

from .errors import UnsupportedShapeError
from .model import NA, Matrix, RList, Scalar, Shape, Table, Value, Vector, shape_of
from .normalize import normalize
from .options import EncodeOptions, resolve
from .primitives import encode_item, na_style
from .text import dump

logger = logging.getLogger(__name__)

# Where a value sits in its parent; decides whether it may be a bare primitive.
_TOP = "top"
_MEMBER = "member"
_ELEMENT = "element"


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def encode(value: Value, options: EncodeOptions | None = None, **overrides) -> Any:
    """Encode *value* into a JSON-compatible tree of dicts, lists and primitives."""
    opts = resolve(options, EncodeOptions, overrides)
    return _encode(value, opts, _TOP)


def to_json(value: Value, options: EncodeOptions | None = None, **overrides) -> str:
    """Encode *value* as JSON text."""
    opts = resolve(options, EncodeOptions, overrides)
    return dump(_encode(value, opts, _TOP), indent=opts.indent)


def _encode(value: Any, opts: EncodeOptions, where: str) -> Any:
    handler = _HANDLERS[shape_of(value)]
    return handler(value, opts, where)


# ---------------------------------------------------------------------------
# Atomic helpers
# ---------------------------------------------------------------------------

def _encode_items(vec: Vector, opts: EncodeOptions) -> list[Any]:
    style = na_style(vec.kind, opts)
    flat = normalize(vec, opts)
    return [encode_item(x, flat.kind, style, opts) for x in flat.items]


# ---------------------------------------------------------------------------
# Shape handlers
# ---------------------------------------------------------------------------

def _vector(vec: Vector, opts: EncodeOptions, where: str) -> Any:
    items = _encode_items(vec, opts)
    if opts.auto_unbox and len(items) == 1 and where != _ELEMENT:
        return items[0]
    return items


def _scalar(sc: Scalar, opts: EncodeOptions, where: str) -> Any:
    (item,) = _encode_items(Vector(sc.kind, [sc.value]), opts)
    # Inside an array a primitive must sit one level deeper than a vector would.
    return [item] if where == _ELEMENT else item


def _matrix(mat: Matrix, opts: EncodeOptions, where: str) -> list[list[Any]]:
    if mat.rownames is not None or mat.colnames is not None:
        logger.debug("dropping %dx%d matrix labels", mat.nrow, mat.ncol)
    items = _encode_items(mat.data, opts)
    if opts.matrix == "columnmajor":
        return [items[j::mat.ncol] for j in range(mat.ncol)]
    return [items[i * mat.ncol:(i + 1) * mat.ncol] for i in range(mat.nrow)]


def _list(lst: RList, opts: EncodeOptions, where: str) -> Any:
    if not lst.is_named:
        return [_encode(item, opts, _ELEMENT) for item in lst.items]
    obj: dict[str, Any] = {}
    for label, item in zip(lst.labels(), lst.items):
        if label in obj:
            raise UnsupportedShapeError(f"duplicate list label {label!r}", value=lst)
        obj[label] = _encode(item, opts, _MEMBER)
    return obj


def _table(tbl: Table, opts: EncodeOptions, where: str) -> Any:
    columns = {name: _encode_items(col, opts) for name, col in tbl.columns.items()}

    if opts.dataframe == "columns":
        return columns
    if opts.dataframe == "values":
        return [[columns[name][i] for name in columns] for i in range(tbl.nrow)]

    for name, col in tbl.columns.items():
        if len(col) and all(x is NA for x in col.items):
            logger.debug("table column %r is all NA and will not appear in any row", name)
    return [
        {
            name: columns[name][i]
            for name, col in tbl.columns.items()
            if col.items[i] is not NA
        }
        for i in range(tbl.nrow)
    ]


_HANDLERS: dict[Shape, Callable[[Any, EncodeOptions, str], Any]] = {
    Shape.VECTOR: _vector,
    Shape.SCALAR: _scalar,
    Shape.MATRIX: _matrix,
    Shape.LIST: _list,
    Shape.TABLE: _table,
}
