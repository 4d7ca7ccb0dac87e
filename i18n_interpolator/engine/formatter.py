"""
Canonical text rendering of resolved variable values.

Used when a ${path} placeholder is spliced into a template:
- Strings are inserted as is
- Booleans and null use their JSON spelling
- Sequences render as [a, b, c]
- Mappings render as {k: v, ...} with the "k: v" pairs sorted as whole strings
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

# Floats at or above this magnitude switch to exponent notation
_EXPONENT_THRESHOLD = 1e21

# Decimal exponents rendered in positional notation; the rest use e-notation
_FIXED_EXPONENTS = range(-6, 21)


def format_number(value: int | float) -> str:
    """
    Format a number the way JavaScript's Number#toString does.

    Integral floats drop their fractional part, so 2.0 renders as "2".
    Exponents carry a sign and no leading zeros: 1e-07 renders as "1e-7"
    and 1e21 as "1e+21".

    Args:
        value: An int or float

    Returns:
        Canonical textual form of the number
    """
    if isinstance(value, int):
        return str(value)

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < _EXPONENT_THRESHOLD:
        return str(int(value))
    return _normalize_exponent(repr(value))


def _normalize_exponent(text: str) -> str:
    """Rewrite repr() e-notation ("1e-07", "1.5e-05") in the JavaScript form."""
    mantissa, sep, exponent = text.partition("e")
    if not sep:
        return text

    power = int(exponent)
    if power in _FIXED_EXPONENTS:
        return format(Decimal(text), "f")
    sign = "+" if power > 0 else "-"
    return f"{mantissa}e{sign}{abs(power)}"


def format_value(value: Any) -> str:
    """
    Render a resolved value as placeholder text.

    Args:
        value: Any value produced by interpolating a variables argument

    Returns:
        The canonical string form

    Examples:
        >>> format_value([1, 2, 3])
        '[1, 2, 3]'
        >>> format_value({"b": 1, "a": 2})
        '{a: 2, b: 1}'
    """
    if isinstance(value, str):
        return value
    # bool is a subclass of int, check it first
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if value is None:
        return "null"
    if isinstance(value, (list, tuple)):
        elements = [format_value(element) for element in value]
        return f"[{', '.join(elements)}]"
    if isinstance(value, Mapping):
        pairs = sorted(f"{key}: {format_value(item)}" for key, item in value.items())
        return f"{{{', '.join(pairs)}}}"
    return str(value)
