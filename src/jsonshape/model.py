"""Data model for jsonshape: shape-tagged values and the NA marker."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Iterable, Union

from .errors import UnsupportedShapeError


# ---------------------------------------------------------------------------
# NA — singleton absent-value marker
# ---------------------------------------------------------------------------

class _NAType:
    """Sentinel for a missing element. Distinct from NaN, zero and ""."""

    _instance: _NAType | None = None

    def __new__(cls) -> _NAType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NA"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_NAType, ())


NA = _NAType()


def is_na(x: Any) -> bool:
    return x is NA


def is_nan(x: Any) -> bool:
    """True for a real NaN (never for NA)."""
    if isinstance(x, float):
        return math.isnan(x)
    if isinstance(x, complex):
        return math.isnan(x.real) or math.isnan(x.imag)
    return False


# ---------------------------------------------------------------------------
# VectorKind / Shape
# ---------------------------------------------------------------------------

class VectorKind(Enum):
    LOGICAL = auto()
    CHARACTER = auto()
    INTEGER = auto()
    DOUBLE = auto()
    COMPLEX = auto()
    # Kinds below are rewritten by normalize.py before encoding.
    FACTOR = auto()
    DATE = auto()
    DATETIME = auto()


NUMERIC_KINDS = frozenset({VectorKind.INTEGER, VectorKind.DOUBLE, VectorKind.COMPLEX})


class Shape(Enum):
    VECTOR = auto()
    SCALAR = auto()
    MATRIX = auto()
    LIST = auto()
    TABLE = auto()


# ---------------------------------------------------------------------------
# Element comparison
# ---------------------------------------------------------------------------

def _same_item(a: Any, b: Any) -> bool:
    if a is NA or b is NA:
        return a is b
    if is_nan(a) or is_nan(b):
        return is_nan(a) and is_nan(b)
    return a == b


def _same_family(a: VectorKind, b: VectorKind) -> bool:
    numeric = (VectorKind.INTEGER, VectorKind.DOUBLE)
    return a == b or (a in numeric and b in numeric)


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------

@dataclass(eq=False, slots=True)
class Vector:
    kind: VectorKind
    items: list[Any] = field(default_factory=list)
    levels: list[str] | None = None  # FACTOR only

    def __post_init__(self) -> None:
        self.items = list(self.items)
        if self.kind == VectorKind.FACTOR and self.levels is None:
            seen = [x for x in self.items if x is not NA]
            self.levels = sorted(set(seen))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, i: int) -> Any:
        return self.items[i]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        if not _same_family(self.kind, other.kind) or len(self) != len(other):
            return False
        return all(_same_item(a, b) for a, b in zip(self.items, other.items))

    def __repr__(self) -> str:
        return f"Vector({self.kind.name}, {self.items!r})"


@dataclass(eq=False, slots=True)
class Scalar:
    """An unboxed atomic value; encodes as a bare primitive."""

    kind: VectorKind
    value: Any

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Scalar):
            return NotImplemented
        return _same_family(self.kind, other.kind) and _same_item(self.value, other.value)


@dataclass(eq=False, slots=True)
class Matrix:
    data: Vector  # row-major
    nrow: int
    ncol: int
    rownames: list[str] | None = None
    colnames: list[str] | None = None

    def __post_init__(self) -> None:
        if self.nrow < 0 or self.ncol < 0 or self.nrow * self.ncol != len(self.data):
            raise UnsupportedShapeError(
                f"matrix extents {self.nrow}x{self.ncol} do not match "
                f"data length {len(self.data)}",
                value=self,
            )
        if self.rownames is not None and len(self.rownames) != self.nrow:
            raise UnsupportedShapeError("rownames length differs from nrow", value=self)
        if self.colnames is not None and len(self.colnames) != self.ncol:
            raise UnsupportedShapeError("colnames length differs from ncol", value=self)

    @property
    def kind(self) -> VectorKind:
        return self.data.kind

    def row(self, i: int) -> list[Any]:
        start = i * self.ncol
        return self.data.items[start:start + self.ncol]

    def column(self, j: int) -> list[Any]:
        return self.data.items[j::self.ncol] if self.ncol else []

    def __eq__(self, other: object) -> bool:
        # Labels are annotation, not data.
        if not isinstance(other, Matrix):
            return NotImplemented
        return (self.nrow, self.ncol) == (other.nrow, other.ncol) and self.data == other.data


@dataclass(eq=False, slots=True)
class RList:
    items: list[Value] = field(default_factory=list)
    names: list[str | None] | None = None

    def __post_init__(self) -> None:
        self.items = list(self.items)
        if self.names is not None:
            self.names = list(self.names)
            if len(self.names) != len(self.items):
                raise UnsupportedShapeError(
                    f"list has {len(self.items)} items but {len(self.names)} names",
                    value=self,
                )

    @classmethod
    def of(cls, **named: Value) -> RList:
        return cls(list(named.values()), list(named.keys()))

    def __len__(self) -> int:
        return len(self.items)

    @property
    def is_named(self) -> bool:
        """True when at least one position carries a label.

        An empty list with ``names=[]`` counts as named (it came from ``{}``).
        """
        return self.names is not None and (not self.names or any(self.names))

    @property
    def is_fully_named(self) -> bool:
        return self.names is not None and len(self.names) > 0 and all(self.names)

    def labels(self) -> list[str]:
        """Labels with missing ones replaced by the 1-based position."""
        names = self.names or [None] * len(self.items)
        return [n if n else str(i) for i, n in enumerate(names, 1)]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RList):
            return NotImplemented
        mine = self.labels() if self.is_named else None
        theirs = other.labels() if other.is_named else None
        return mine == theirs and self.items == other.items


@dataclass(eq=False, slots=True)
class Table:
    """Column-oriented table: ordered column label → Vector."""

    columns: dict[str, Vector] = field(default_factory=dict)

    def __post_init__(self) -> None:
        lengths = set()
        for name, col in self.columns.items():
            if not isinstance(col, Vector):
                raise UnsupportedShapeError(
                    f"table column {name!r} is a {type(col).__name__}; "
                    "only plain vectors are supported",
                    value=col,
                )
            lengths.add(len(col))
        if len(lengths) > 1:
            raise UnsupportedShapeError(
                f"table columns have unequal lengths {sorted(lengths)}", value=self
            )

    @classmethod
    def from_records(
        cls,
        records: Iterable[dict[str, Any]],
        kinds: dict[str, VectorKind] | None = None,
    ) -> Table:
        """Build a table from row dictionaries. Missing keys become NA.

        Column kinds not given in *kinds* are inferred from the Python types
        of the present values.
        """
        from .primitives import infer_kind

        rows = list(records)
        names: list[str] = []
        for rec in rows:
            for key in rec:
                if key not in names:
                    names.append(key)
        kinds = kinds or {}
        columns: dict[str, Vector] = {}
        for name in names:
            items = [rec.get(name, NA) for rec in rows]
            items = [NA if x is None else x for x in items]
            kind = kinds.get(name) or infer_kind(items)
            columns[name] = Vector(kind, items)
        return cls(columns)

    @property
    def names(self) -> list[str]:
        return list(self.columns)

    @property
    def ncol(self) -> int:
        return len(self.columns)

    @property
    def nrow(self) -> int:
        for col in self.columns.values():
            return len(col)
        return 0

    def row(self, i: int) -> dict[str, Any]:
        return {name: col.items[i] for name, col in self.columns.items()}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Table):
            return NotImplemented
        return self.names == other.names and all(
            self.columns[n] == other.columns[n] for n in self.names
        )


Value = Union[Vector, Scalar, Matrix, RList, Table]


_SHAPES: dict[type, Shape] = {
    Vector: Shape.VECTOR,
    Scalar: Shape.SCALAR,
    Matrix: Shape.MATRIX,
    RList: Shape.LIST,
    Table: Shape.TABLE,
}


def shape_of(value: Any) -> Shape:
    """Classify *value* into its shape tag."""
    shape = _SHAPES.get(type(value))
    if shape is None:
        raise UnsupportedShapeError(
            f"no shape tag for value of type {type(value).__name__}", value=value
        )
    return shape
