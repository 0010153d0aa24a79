"""
Before-save normalization hooks.

Each hook maps a scalar to a canonical scalar of the same type and passes None through.
They run field by field in the repository, after validation.
"""

import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Mapping

Normalizer = Callable[[Any], Any]

_NON_DIGITS = re.compile(r"\D")


def format_string(value: str | None) -> str | None:
    """Trim and upper-case free text (names, descriptions)."""
    if value is None:
        return None
    return value.strip().upper()


def format_digits(value: str | None) -> str | None:
    """
    Keep only the digits of a document number.

    >>> format_digits("123.456.789-09")
    '12345678909'
    """
    if value is None:
        return None
    return _NON_DIGITS.sub("", value)


def format_decimal(value):
    """Round a monetary/measure value to 2 places, keeping its numeric type."""
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, Decimal):
        return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    if isinstance(value, float):
        return round(value, 2)
    return value


def apply_normalizers(payload: Mapping[str, Any], normalizers: Mapping[str, Normalizer]) -> dict[str, Any]:
    """Return a copy of `payload` with each field passed through its hook, if it has one."""
    return {
        key: normalizers[key](value) if key in normalizers else value
        for key, value in payload.items()
    }


def format_object(normalizers: Mapping[str, Normalizer]) -> Normalizer:
    """Build a hook for an object field (e.g. an address) out of per-key hooks."""
    def _format(value):
        if value is None:
            return None
        return apply_normalizers(value, normalizers)
    return _format
