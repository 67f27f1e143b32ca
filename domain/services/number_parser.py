from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

# Larger magnitudes are treated as unparseable input
MAX_EXPONENT = 100


def _bounded(number: Decimal) -> Decimal | None:
    if not number.is_finite():
        return None
    if number and abs(number.adjusted()) > MAX_EXPONENT:
        return None
    return number


def parse_user_number(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return _bounded(value)
    if isinstance(value, (int, float)):
        if isinstance(value, float) and value != value:
            return None
        try:
            return _bounded(Decimal(str(value)))
        except (InvalidOperation, ValueError):
            return None

    text = str(value).strip()
    if not text:
        return None

    cleaned = text.replace(" ", "").replace("$", "")
    if "," in cleaned:
        cleaned = cleaned.replace(".", "")
        cleaned = cleaned.replace(",", ".")

    try:
        parsed = Decimal(cleaned)
    except (InvalidOperation, ValueError):
        return None
    return _bounded(parsed)


def parse_user_int(value: Any) -> int | None:
    """Parse a whole number; fractional input is truncated like ``parseInt``."""
    parsed = parse_user_number(value)
    if parsed is None:
        return None
    return int(parsed)
