"""
Field coercion shared by the sanitizer and form edits.

Each helper takes an arbitrary value and returns a well-typed field value.
None of them raise; unusable input becomes the field's empty value.
"""

import math
from typing import Any, Optional


_RADIX_PREFIXES = {"0x": 16, "0o": 8, "0b": 2}


def _parse_number(text: str) -> Optional[float]:
    """Parse trimmed numeric text; decimal, exponent, and 0x/0o/0b literals."""
    if "_" in text:
        return None
    base = _RADIX_PREFIXES.get(text[:2].lower())
    try:
        if base is not None:
            digits = text[2:]
            # int() would also take a sign or inner spaces here
            if not (digits.isascii() and digits.isalnum()):
                return None
            return float(int(digits, base))
        return float(text)
    except (ValueError, OverflowError):
        return None


def to_numeric_value(value: Any) -> Optional[float]:
    """Finite number or None. Never raises."""
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
        return number if math.isfinite(number) else None

    if isinstance(value, str):
        trimmed = value.strip()
        if not trimmed:
            return None
        parsed = _parse_number(trimmed)
        if parsed is None or not math.isfinite(parsed):
            return None
        return parsed

    return None


def to_boolean_value(value: Any) -> bool:
    """Native bools pass, "true"/"false" text is honoured, else truthiness."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized == "true":
            return True
        if normalized == "false":
            return False
    # Python truthiness: empty containers are False, NaN is True
    return bool(value)
