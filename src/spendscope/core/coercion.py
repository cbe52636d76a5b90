"""Column value coercion.

Converts raw values returned by the database driver into tagged values
without knowing the column type. Rules are applied in order and the
first match wins:

1. None -> Null
2. parses as a float64 literal -> Number
3. exactly "true" or "false" -> Boolean
4. anything else -> String of the textual form

Bytes are decoded as UTF-8. Undecodable bytes are kept as backslash
escapes (e.g. ``b"\\xff"`` becomes the string ``"\\xff"``) so binary data
degrades to a String instead of being dropped.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time

from spendscope.models.values import Boolean, Null, Number, String, Value

_INFINITY_LITERALS = frozenset({"inf", "infinity"})


def to_text(raw: object) -> str:
    """Render a non-null raw value as the text the coercion rules see.

    Native booleans render as ``true``/``false`` so they coerce back to
    Boolean rather than Number.
    """
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return bytes(raw).decode("utf-8", errors="backslashreplace")
    if isinstance(raw, bool):
        return "true" if raw else "false"
    if isinstance(raw, (datetime, date, time)):
        return raw.isoformat()
    return str(raw)


def parse_float(text: str) -> float | None:
    """Parse a float64 literal, or return None.

    Stricter than ``float()``: only ASCII literals are accepted, surrounding
    whitespace and digit-group underscores are rejected, and finite
    literals that overflow are not numbers. Hexadecimal literals need a
    binary exponent, e.g. ``0x1p-2``.
    """
    if not text or not text.isascii() or text != text.strip() or "_" in text:
        return None
    unsigned = text[1:] if text[0] in "+-" else text
    try:
        if unsigned[:2].lower() == "0x":
            if "p" not in unsigned.lower():
                return None
            number = float.fromhex(text)
        else:
            number = float(text)
    except (ValueError, OverflowError):
        return None
    if math.isinf(number) and text.lstrip("+-").lower() not in _INFINITY_LITERALS:
        return None
    return number


def parse_bool(text: str) -> bool | None:
    """Parse ``true`` or ``false`` (case-sensitive), or return None."""
    if text == "true":
        return True
    if text == "false":
        return False
    return None


def coerce_value(raw: object) -> Value:
    """Coerce one raw column value into a tagged value."""
    if raw is None:
        return Null()

    text = to_text(raw)

    number = parse_float(text)
    if number is not None:
        return Number(number)

    flag = parse_bool(text)
    if flag is not None:
        return Boolean(flag)

    return String(text)
