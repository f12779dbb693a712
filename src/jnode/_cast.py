"""Conversion between draft text and typed JSON values."""

from __future__ import annotations

import json
import math
import re

from jnode._types import JsonType
from jnode.errors import CastError

_NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INT_RE = re.compile(r"[+-]?[0-9]+")


def display_value(value: object) -> str:
    """Return the JSON-style text of a scalar (strings unquoted)."""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def _parse_number(raw: str, key: str | None) -> int | float:
    try:
        if _INT_RE.fullmatch(raw):
            return int(raw)
        if _NUMBER_RE.fullmatch(raw):
            num = float(raw)
            if math.isfinite(num):
                return num
    except ValueError:
        # int() refuses very long digit strings
        pass
    if key is None:
        raise CastError("Value must be a number", value=raw)
    raise CastError(f"Property {key} must be a number", key=key, value=raw)


def _parse_boolean(raw: str, key: str | None) -> bool:
    lowered = raw.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if key is None:
        raise CastError("Value must be true or false", value=raw)
    raise CastError(f"Property {key} must be true or false", key=key, value=raw)


def cast_value(
    raw: str, declared_type: JsonType | None, key: str | None = None
) -> object:
    """Convert draft text into a value of *declared_type*.

    *key* names the property being cast and only changes the error message.
    Strings need no quoting; surrounding whitespace is dropped for all types.
    """
    if declared_type is None or declared_type is JsonType.NULL:
        return None
    text = (raw or "").strip()
    if declared_type is JsonType.NUMBER:
        return _parse_number(text, key)
    if declared_type is JsonType.BOOLEAN:
        return _parse_boolean(text, key)
    if declared_type is JsonType.STRING:
        return text
    if declared_type.is_container:
        # containers are never seeded as drafts; keep the plain-text rule
        return text
    raise TypeError(f"unhandled JSON type: {declared_type!r}")


def _reject_constant(name: str) -> float:
    raise ValueError(f"non-standard JSON constant: {name}")


def _finite_float(text: str) -> float:
    num = float(text)
    if not math.isfinite(num):
        raise ValueError(f"number out of range: {text}")
    return num


def load_json(text: str) -> object:
    """Parse strict JSON: NaN, Infinity and overflowing numbers raise ValueError."""
    return json.loads(
        text, parse_constant=_reject_constant, parse_float=_finite_float
    )
