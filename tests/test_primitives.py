"""Tests for element-level encoding, decoding and kind widening."""

import math

import pytest

from jsonshape import NA, EncodeOptions, UnsupportedShapeError, VectorKind
from jsonshape.primitives import decode_item, encode_item, format_double, infer_kind, na_style, widen

DEFAULT = EncodeOptions()


# ---------------------------------------------------------------------------
# na_style
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("kind", [VectorKind.INTEGER, VectorKind.DOUBLE, VectorKind.COMPLEX])
def test_numeric_kinds_use_string_tokens(kind):
    assert na_style(kind, DEFAULT) == "string"


@pytest.mark.parametrize("kind", [VectorKind.LOGICAL, VectorKind.CHARACTER, VectorKind.FACTOR])
def test_text_kinds_use_null(kind):
    assert na_style(kind, DEFAULT) == "null"


def test_policy_override():
    assert na_style(VectorKind.DOUBLE, EncodeOptions(na="null")) == "null"
    assert na_style(VectorKind.CHARACTER, EncodeOptions(na="string")) == "string"


# ---------------------------------------------------------------------------
# encode_item
# ---------------------------------------------------------------------------

def test_double_specials():
    enc = [encode_item(x, VectorKind.DOUBLE, "string", DEFAULT)
           for x in (NA, math.nan, math.inf, -math.inf)]
    assert enc == ["NA", "NaN", "Inf", "-Inf"]


def test_double_specials_as_null():
    enc = [encode_item(x, VectorKind.DOUBLE, "null", DEFAULT)
           for x in (NA, math.nan, math.inf)]
    assert enc == [None, None, None]


def test_text_na_is_null():
    assert encode_item(NA, VectorKind.CHARACTER, "null", DEFAULT) is None


def test_integral_double_written_as_int():
    out = encode_item(21.0, VectorKind.DOUBLE, "string", DEFAULT)
    assert out == 21 and isinstance(out, int)


def test_always_decimal():
    out = encode_item(21.0, VectorKind.DOUBLE, "string", EncodeOptions(always_decimal=True))
    assert isinstance(out, float)


def test_digits_rounds():
    assert format_double(3.14159, EncodeOptions(digits=2)) == 3.14


def test_kind_mismatch():
    with pytest.raises(UnsupportedShapeError):
        encode_item("1", VectorKind.INTEGER, "string", DEFAULT)


def test_bool_is_not_an_integer():
    with pytest.raises(UnsupportedShapeError):
        encode_item(True, VectorKind.INTEGER, "string", DEFAULT)


# ---------------------------------------------------------------------------
# widen
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("prims, kind", [
    ([True, None], VectorKind.LOGICAL),
    ([None, None], VectorKind.LOGICAL),
    ([1, 2, None], VectorKind.INTEGER),
    ([1, "NA"], VectorKind.INTEGER),
    ([1, 2.5], VectorKind.DOUBLE),
    ([1, "NaN"], VectorKind.DOUBLE),
    (["Inf", "-Inf"], VectorKind.DOUBLE),
    (["NA"], VectorKind.DOUBLE),
    (["a", "NA"], VectorKind.CHARACTER),
    (["NA", None], VectorKind.CHARACTER),
    (["-Inf", None], VectorKind.CHARACTER),
    ([1, "NA", None], VectorKind.INTEGER),
    ([1, "a"], VectorKind.CHARACTER),
    ([True, 1], VectorKind.INTEGER),
])
def test_widen(prims, kind):
    assert widen(prims) == kind


def test_widen_nulls_not_text_for_table_columns():
    assert widen(["NaN", None], nulls_are_text=False) == VectorKind.DOUBLE


# ---------------------------------------------------------------------------
# decode_item
# ---------------------------------------------------------------------------

def test_decode_double_tokens():
    assert decode_item("NA", VectorKind.DOUBLE) is NA
    assert math.isnan(decode_item("NaN", VectorKind.DOUBLE))
    assert decode_item("Inf", VectorKind.DOUBLE) == math.inf
    assert decode_item("-Inf", VectorKind.DOUBLE) == -math.inf


def test_decode_null_is_na():
    assert decode_item(None, VectorKind.CHARACTER) is NA


def test_decode_token_as_text():
    assert decode_item("NA", VectorKind.CHARACTER) == "NA"


def test_decode_bool_as_text():
    assert decode_item(True, VectorKind.CHARACTER) == "TRUE"


# ---------------------------------------------------------------------------
# infer_kind
# ---------------------------------------------------------------------------

def test_infer_mixed_numbers():
    assert infer_kind([1, 2.5, NA]) == VectorKind.DOUBLE


def test_infer_all_na():
    assert infer_kind([NA]) == VectorKind.LOGICAL


def test_infer_incompatible():
    with pytest.raises(UnsupportedShapeError):
        infer_kind([1, "a"])
