"""Pre-encoding normalization of vector kinds.

Kinds with no direct JSON form (factors, dates, date-times, complex numbers)
are rewritten into an encodable kind before any element is encoded:

=========  ==========  =====================================
source     canonical   rendering (option)
=========  ==========  =====================================
FACTOR     CHARACTER   level label (``factor="string"``)
FACTOR     INTEGER     1-based level code (``factor="integer"``)
DATE       CHARACTER   ``YYYY-MM-DD`` (``dates="ISO8601"``)
DATE       INTEGER     days since 1970-01-01 (``dates="epoch"``)
DATETIME   CHARACTER   ``YYYY-MM-DD HH:MM:SS`` (``posixt="string"``)
DATETIME   CHARACTER   ``YYYY-MM-DDTHH:MM:SS`` (``posixt="ISO8601"``)
DATETIME   DOUBLE      ms since the epoch (``posixt="epoch"``)
COMPLEX    CHARACTER   ``a+bi``
=========  ==========  =====================================
"""

from __future__ import annotations

import datetime as _dt
import logging
import math
from typing import Any, Callable

from .errors import UnsupportedShapeError
from .model import NA, Vector, VectorKind
from .options import EncodeOptions

logger = logging.getLogger(__name__)

_EPOCH_DATE = _dt.date(1970, 1, 1)
_STRING_FORMATS = {
    "string": "%Y-%m-%d %H:%M:%S",
    "ISO8601": "%Y-%m-%dT%H:%M:%S",
}

ENCODABLE_KINDS = frozenset({
    VectorKind.LOGICAL,
    VectorKind.CHARACTER,
    VectorKind.INTEGER,
    VectorKind.DOUBLE,
})


# ---------------------------------------------------------------------------
# Per-kind rewriters
# ---------------------------------------------------------------------------

def _factor(vec: Vector, options: EncodeOptions) -> Vector:
    levels = vec.levels or []
    for x in vec.items:
        if x is not NA and x not in levels:
            raise UnsupportedShapeError(
                f"factor value {x!r} is not one of its levels {levels}", value=vec
            )
    if options.factor == "integer":
        codes = {level: i for i, level in enumerate(levels, 1)}
        return Vector(VectorKind.INTEGER, [NA if x is NA else codes[x] for x in vec.items])
    return Vector(VectorKind.CHARACTER, vec.items)


def _date(vec: Vector, options: EncodeOptions) -> Vector:
    _require(vec, _dt.date)
    if options.dates == "epoch":
        return Vector(
            VectorKind.INTEGER,
            [NA if d is NA else (_as_date(d) - _EPOCH_DATE).days for d in vec.items],
        )
    return Vector(
        VectorKind.CHARACTER,
        [NA if d is NA else _as_date(d).isoformat() for d in vec.items],
    )


def _datetime(vec: Vector, options: EncodeOptions) -> Vector:
    _require(vec, _dt.datetime)
    if options.posixt == "epoch":
        return Vector(VectorKind.DOUBLE, [NA if t is NA else _epoch_ms(t) for t in vec.items])
    fmt = _STRING_FORMATS[options.posixt]
    return Vector(VectorKind.CHARACTER, [NA if t is NA else t.strftime(fmt) for t in vec.items])


def _complex(vec: Vector, options: EncodeOptions) -> Vector:
    _require(vec, (complex, int, float))
    return Vector(VectorKind.CHARACTER, [NA if z is NA else format_complex(z) for z in vec.items])


_NORMALIZERS: dict[VectorKind, Callable[[Vector, EncodeOptions], Vector]] = {
    VectorKind.FACTOR: _factor,
    VectorKind.DATE: _date,
    VectorKind.DATETIME: _datetime,
    VectorKind.COMPLEX: _complex,
}


def normalize(vec: Vector, options: EncodeOptions) -> Vector:
    """Return *vec* rewritten into an encodable kind (unchanged if it already is)."""
    if vec.kind in ENCODABLE_KINDS:
        return vec
    rewrite = _NORMALIZERS.get(vec.kind)
    if rewrite is None:
        raise UnsupportedShapeError(f"no normalization for kind {vec.kind.name}", value=vec)
    out = rewrite(vec, options)
    logger.debug("normalized %s vector to %s", vec.kind.name, out.kind.name)
    return out


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _require(vec: Vector, types) -> None:
    for x in vec.items:
        if x is not NA and (isinstance(x, bool) or not isinstance(x, types)):
            raise UnsupportedShapeError(
                f"{type(x).__name__} item {x!r} in a {vec.kind.name} vector", value=vec
            )


def _as_date(d: _dt.date) -> _dt.date:
    return d.date() if isinstance(d, _dt.datetime) else d


def _epoch_ms(t: _dt.datetime) -> float:
    if t.tzinfo is None:
        t = t.replace(tzinfo=_dt.timezone.utc)
    return t.timestamp() * 1000.0


def _part(x: float) -> str:
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "Inf" if x > 0 else "-Inf"
    if x.is_integer():
        return str(int(x))
    return repr(x)


def format_complex(z: Any) -> str:
    """Render a complex number as ``a+bi`` / ``a-bi``."""
    z = complex(z)
    imag = _part(z.imag)
    sign = "" if imag.startswith("-") else "+"
    return f"{_part(z.real)}{sign}{imag}i"
