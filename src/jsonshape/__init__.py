"""jsonshape — shape-tagged value ↔ JSON serializer."""

from .errors import AmbiguousDecodeError, FormatError, JsonShapeError, UnsupportedShapeError
from .model import (
    NA,
    Matrix,
    RList,
    Scalar,
    Shape,
    Table,
    Value,
    Vector,
    VectorKind,
    is_na,
    shape_of,
)
from .options import DecodeOptions, EncodeOptions
from .encoder import encode, to_json
from .decoder import decode, from_json
from .text import minify, prettify, validate
from .getter import get, get_path

__all__ = [
    "encode",
    "to_json",
    "decode",
    "from_json",
    "prettify",
    "minify",
    "validate",
    "get",
    "get_path",
    "NA",
    "is_na",
    "Matrix",
    "RList",
    "Scalar",
    "Shape",
    "Table",
    "Value",
    "Vector",
    "VectorKind",
    "shape_of",
    "EncodeOptions",
    "DecodeOptions",
    "JsonShapeError",
    "UnsupportedShapeError",
    "FormatError",
    "AmbiguousDecodeError",
]
