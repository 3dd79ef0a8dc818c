"""Strict JSON text handling: parse, dump, prettify, minify, validate."""

from __future__ import annotations

import json
from typing import Any

from .errors import FormatError

_COMPACT = (",", ":")
_SPACED = (",", ": ")


def _unique_pairs(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    obj: dict[str, Any] = {}
    for key, value in pairs:
        if key in obj:
            raise FormatError(f"duplicate object key {key!r}")
        obj[key] = value
    return obj


def _reject_constant(name: str) -> Any:
    raise FormatError(f"{name} is not valid JSON")


def parse(text: str | bytes) -> Any:
    """Parse JSON text into dicts, lists and primitives.

    Rejects ``NaN``/``Infinity`` literals and duplicate keys.
    """
    try:
        return json.loads(
            text,
            object_pairs_hook=_unique_pairs,
            parse_constant=_reject_constant,
        )
    except json.JSONDecodeError as exc:
        raise FormatError(exc.msg, position=exc.pos) from exc
    except FormatError:
        raise
    except (TypeError, ValueError, RecursionError) as exc:
        # Over-long integer literals, bad encodings and too-deep nesting.
        raise FormatError(str(exc)) from exc


def dump(tree: Any, indent: int | None = None) -> str:
    return json.dumps(
        tree,
        ensure_ascii=False,
        allow_nan=False,
        indent=indent,
        separators=_COMPACT if indent is None else _SPACED,
    )


def prettify(text: str | bytes, indent: int = 4) -> str:
    return dump(parse(text), indent=indent)


def minify(text: str | bytes) -> str:
    return dump(parse(text))


def validate(text: str | bytes) -> bool:
    try:
        parse(text)
    except FormatError:
        return False
    return True
