"""Encode / decode configuration."""

from __future__ import annotations

from dataclasses import dataclass, replace

_NA_POLICIES = ("default", "null", "string")
_DATAFRAME_LAYOUTS = ("rows", "columns", "values")
_MATRIX_LAYOUTS = ("rowmajor", "columnmajor")
_FACTOR_STYLES = ("string", "integer")
_DATE_STYLES = ("ISO8601", "epoch")
_POSIXT_STYLES = ("string", "ISO8601", "epoch")


def _check(name: str, value: str, allowed: tuple[str, ...]) -> None:
    if value not in allowed:
        raise ValueError(f"{name} must be one of {', '.join(allowed)}; got {value!r}")


@dataclass(frozen=True)
class EncodeOptions:
    """Options for ``encode`` / ``to_json``.

    na:
        ``default`` picks null or quoted tokens by vector kind; ``null`` and
        ``string`` force one convention for every kind.
    dataframe:
        ``rows`` (array of row objects), ``columns`` (object of column
        arrays) or ``values`` (array of row arrays).
    matrix:
        ``rowmajor`` or ``columnmajor``.
    digits:
        Decimal places doubles are rounded to; ``None`` keeps full precision.
    pretty:
        ``False`` for compact output, ``True`` for 2-space indentation, or
        an explicit indent width.
    """

    na: str = "default"
    dataframe: str = "rows"
    matrix: str = "rowmajor"
    factor: str = "string"
    dates: str = "ISO8601"
    posixt: str = "string"
    digits: int | None = None
    always_decimal: bool = False
    auto_unbox: bool = False
    pretty: bool | int = False

    def __post_init__(self) -> None:
        _check("na", self.na, _NA_POLICIES)
        _check("dataframe", self.dataframe, _DATAFRAME_LAYOUTS)
        _check("matrix", self.matrix, _MATRIX_LAYOUTS)
        _check("factor", self.factor, _FACTOR_STYLES)
        _check("dates", self.dates, _DATE_STYLES)
        _check("posixt", self.posixt, _POSIXT_STYLES)
        if self.digits is not None and self.digits < 0:
            raise ValueError(f"digits must be >= 0; got {self.digits}")

    @property
    def indent(self) -> int | None:
        if self.pretty is True:
            return 2
        if self.pretty is False or self.pretty == 0:
            return None
        return int(self.pretty)

    def with_(self, **changes) -> EncodeOptions:
        return replace(self, **changes)


@dataclass(frozen=True)
class DecodeOptions:
    """Options for ``decode`` / ``from_json``."""

    simplify_vector: bool = True
    simplify_table: bool = True
    simplify_matrix: bool = True
    strict_empty: bool = False

    def with_(self, **changes) -> DecodeOptions:
        return replace(self, **changes)


def resolve(options, cls, overrides: dict):
    """Combine an options object (or None) with keyword overrides."""
    base = options if options is not None else cls()
    if not isinstance(base, cls):
        raise TypeError(f"expected {cls.__name__}, got {type(base).__name__}")
    return base.with_(**overrides) if overrides else base
