"""Element-level conversion between vector items and JSON primitives."""

from __future__ import annotations

import datetime as _dt
import math
from typing import Any, Iterable

from .errors import UnsupportedShapeError
from .model import NA, NUMERIC_KINDS, VectorKind
from .options import EncodeOptions

NA_TOKEN = "NA"
NAN_TOKEN = "NaN"
POSINF_TOKEN = "Inf"
NEGINF_TOKEN = "-Inf"
SPECIAL_TOKENS = frozenset({NA_TOKEN, NAN_TOKEN, POSINF_TOKEN, NEGINF_TOKEN})

# Integral doubles beyond this magnitude keep their float form.
_EXACT_INT_LIMIT = 1e15

# ---------------------------------------------------------------------------
# Missing-value policy
# ---------------------------------------------------------------------------

def na_style(source_kind: VectorKind, options: EncodeOptions) -> str:
    """Return ``"null"`` or ``"string"`` for a vector of *source_kind*.

    Numeric kinds keep NA, NaN and ±Inf apart with quoted tokens; logical
    and text kinds use null so a token can't collide with a real string.
    """
    if options.na != "default":
        return options.na
    return "string" if source_kind in NUMERIC_KINDS else "null"


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def format_double(x: float, options: EncodeOptions) -> int | float:
    if options.digits is not None:
        x = round(x, options.digits)
    if not options.always_decimal and x.is_integer() and abs(x) < _EXACT_INT_LIMIT:
        return int(x)
    return x


def encode_item(x: Any, kind: VectorKind, style: str, options: EncodeOptions) -> Any:
    """Convert one (already normalized) vector item to a JSON primitive."""
    if x is NA:
        return NA_TOKEN if style == "string" else None

    if kind == VectorKind.LOGICAL:
        if not isinstance(x, bool):
            raise _mismatch(x, kind)
        return x

    if kind == VectorKind.CHARACTER:
        if not isinstance(x, str):
            raise _mismatch(x, kind)
        return x

    if kind == VectorKind.INTEGER:
        if isinstance(x, bool) or not isinstance(x, int):
            raise _mismatch(x, kind)
        return x

    if kind == VectorKind.DOUBLE:
        if isinstance(x, bool) or not isinstance(x, (int, float)):
            raise _mismatch(x, kind)
        x = float(x)
        if math.isnan(x):
            return NAN_TOKEN if style == "string" else None
        if math.isinf(x):
            if style != "string":
                return None
            return POSINF_TOKEN if x > 0 else NEGINF_TOKEN
        return format_double(x, options)

    raise UnsupportedShapeError(f"no element encoder for kind {kind.name}", value=x)


def _mismatch(x: Any, kind: VectorKind) -> UnsupportedShapeError:
    return UnsupportedShapeError(
        f"{type(x).__name__} item {x!r} in a {kind.name} vector", value=x
    )


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def is_primitive(node: Any) -> bool:
    return node is None or isinstance(node, (bool, int, float, str))


def widen(prims: Iterable[Any], nulls_are_text: bool = True) -> VectorKind:
    """Common kind of a run of JSON primitives.

    logical < integer < double < character. The special tokens count as
    numbers unless some other text is present, or unless *nulls_are_text*
    and a null sits next to them with no bool or number: numeric vectors
    never write null, text vectors do.
    """
    rank = -1
    saw_null = False
    saw_na_token = False
    saw_special = False
    for p in prims:
        if p is None:
            saw_null = True
            continue
        if isinstance(p, bool):
            rank = max(rank, 0)
        elif isinstance(p, int):
            rank = max(rank, 1)
        elif isinstance(p, float):
            rank = max(rank, 2)
        elif p == NA_TOKEN:
            saw_na_token = True
        elif p in SPECIAL_TOKENS:
            saw_special = True
        else:
            return VectorKind.CHARACTER
    if nulls_are_text and saw_null and rank < 0 and (saw_na_token or saw_special):
        return VectorKind.CHARACTER
    if saw_special:
        rank = max(rank, 2)
    if saw_na_token:
        rank = max(rank, 1) if rank >= 0 else 2
    if rank < 0:
        return VectorKind.LOGICAL
    return [VectorKind.LOGICAL, VectorKind.INTEGER, VectorKind.DOUBLE][rank]


def decode_item(p: Any, kind: VectorKind) -> Any:
    """Convert one JSON primitive to a vector item of *kind*."""
    if p is None:
        return NA

    if kind == VectorKind.CHARACTER:
        if isinstance(p, bool):
            return "TRUE" if p else "FALSE"
        if isinstance(p, (int, float)):
            return repr(p)
        return p

    if kind == VectorKind.LOGICAL:
        return p

    if isinstance(p, str):
        if p == NA_TOKEN:
            return NA
        if p == NAN_TOKEN:
            return math.nan
        return math.inf if p == POSINF_TOKEN else -math.inf

    if kind == VectorKind.INTEGER:
        return int(p)
    return float(p)


# ---------------------------------------------------------------------------
# Python type inference (used by Table.from_records)
# ---------------------------------------------------------------------------

def infer_kind(items: Iterable[Any]) -> VectorKind:
    kinds = set()
    for x in items:
        if x is NA:
            continue
        if isinstance(x, bool):
            kinds.add(VectorKind.LOGICAL)
        elif isinstance(x, int):
            kinds.add(VectorKind.INTEGER)
        elif isinstance(x, float):
            kinds.add(VectorKind.DOUBLE)
        elif isinstance(x, complex):
            kinds.add(VectorKind.COMPLEX)
        elif isinstance(x, _dt.datetime):
            kinds.add(VectorKind.DATETIME)
        elif isinstance(x, _dt.date):
            kinds.add(VectorKind.DATE)
        elif isinstance(x, str):
            kinds.add(VectorKind.CHARACTER)
        else:
            raise UnsupportedShapeError(
                f"cannot infer a vector kind for {type(x).__name__}", value=x
            )
    if not kinds:
        return VectorKind.LOGICAL
    if len(kinds) == 1:
        return kinds.pop()
    if kinds == {VectorKind.INTEGER, VectorKind.DOUBLE}:
        return VectorKind.DOUBLE
    raise UnsupportedShapeError(
        f"mixed item kinds {sorted(k.name for k in kinds)} in one column"
    )
