"""Tests for the pre-encoding normalization table."""

import datetime as dt
import math

import pytest

from jsonshape import NA, EncodeOptions, UnsupportedShapeError, Vector, VectorKind, to_json
from jsonshape.normalize import format_complex, normalize

DEFAULT = EncodeOptions()


class TestPassThrough:
    @pytest.mark.parametrize("kind", [
        VectorKind.LOGICAL, VectorKind.CHARACTER, VectorKind.INTEGER, VectorKind.DOUBLE,
    ])
    def test_encodable_kinds_untouched(self, kind):
        vec = Vector(kind, [])
        assert normalize(vec, DEFAULT) is vec


class TestFactor:
    def test_labels(self):
        vec = Vector(VectorKind.FACTOR, ["lo", "hi", NA], levels=["lo", "hi"])
        out = normalize(vec, DEFAULT)
        assert out.kind == VectorKind.CHARACTER
        assert out.items == ["lo", "hi", NA]

    def test_integer_codes(self):
        vec = Vector(VectorKind.FACTOR, ["lo", "hi", NA], levels=["lo", "hi"])
        out = normalize(vec, EncodeOptions(factor="integer"))
        assert out.kind == VectorKind.INTEGER
        assert out.items == [1, 2, NA]

    def test_value_outside_levels(self):
        vec = Vector(VectorKind.FACTOR, ["mid"], levels=["lo", "hi"])
        with pytest.raises(UnsupportedShapeError):
            normalize(vec, DEFAULT)

    def test_factor_na_is_null(self):
        vec = Vector(VectorKind.FACTOR, ["a", NA])
        assert to_json(vec) == '["a",null]'


class TestDates:
    def test_iso(self):
        vec = Vector(VectorKind.DATE, [dt.date(2013, 1, 1), NA])
        assert normalize(vec, DEFAULT).items == ["2013-01-01", NA]

    def test_epoch_days(self):
        vec = Vector(VectorKind.DATE, [dt.date(1970, 1, 11)])
        out = normalize(vec, EncodeOptions(dates="epoch"))
        assert out.kind == VectorKind.INTEGER
        assert out.items == [10]

    def test_wrong_item_type(self):
        with pytest.raises(UnsupportedShapeError):
            normalize(Vector(VectorKind.DATE, ["2013-01-01"]), DEFAULT)


class TestDateTimes:
    stamp = dt.datetime(2013, 1, 1, 5, 17, 0)

    def test_string(self):
        out = normalize(Vector(VectorKind.DATETIME, [self.stamp]), DEFAULT)
        assert out.items == ["2013-01-01 05:17:00"]

    def test_iso(self):
        out = normalize(Vector(VectorKind.DATETIME, [self.stamp]), EncodeOptions(posixt="ISO8601"))
        assert out.items == ["2013-01-01T05:17:00"]

    def test_epoch_ms(self):
        t = dt.datetime(1970, 1, 1, 0, 0, 1)
        out = normalize(Vector(VectorKind.DATETIME, [t, NA]), EncodeOptions(posixt="epoch"))
        assert out.kind == VectorKind.DOUBLE
        assert out.items == [1000.0, NA]

    def test_epoch_encodes_as_number(self):
        t = dt.datetime(1970, 1, 1, 0, 0, 1, tzinfo=dt.timezone.utc)
        assert to_json(Vector(VectorKind.DATETIME, [t]), posixt="epoch") == "[1000]"


class TestComplex:
    def test_format(self):
        assert format_complex(3 + 2j) == "3+2i"
        assert format_complex(0 - 1.5j) == "0-1.5i"
        assert format_complex(complex(math.inf, 1)) == "Inf+1i"

    def test_complex_na_keeps_string_token(self):
        vec = Vector(VectorKind.COMPLEX, [1 + 1j, NA])
        assert to_json(vec) == '["1+1i","NA"]'
