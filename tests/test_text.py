"""Tests for prettify / minify / validate."""

import pytest

from jsonshape import FormatError, minify, prettify, validate


def test_prettify_default_indent():
    assert prettify('{"a":[1,2]}') == '{\n    "a": [\n        1,\n        2\n    ]\n}'


def test_prettify_custom_indent():
    assert prettify("[1]", indent=2) == "[\n  1\n]"


def test_minify():
    assert minify('{ "b" : 1,\n  "a" : [ true , null ] }') == '{"b":1,"a":[true,null]}'


def test_minify_of_prettify():
    text = '[{"foo":false,"bar":"Aladdin"},{}]'
    assert minify(prettify(text)) == text


def test_bytes_input():
    assert minify('["é"]'.encode("utf-8")) == '["é"]'


def test_validate():
    assert validate('{"a": 1}')
    assert not validate("{a: 1}")
    assert not validate("[NaN]")


def test_prettify_malformed():
    with pytest.raises(FormatError):
        prettify("[")
