from __future__ import annotations

from decimal import Decimal, localcontext
from typing import Any

from config.constants import MIX_TYPE_LABELS
from domain.services.number_parser import parse_user_number


def _to_decimal(value: Any) -> Decimal | None:
    return parse_user_number(value)


def _precision_for(dec: Decimal, decimals: int = 0) -> int:
    # Enough digits to hold the integer part plus the requested decimals
    return max(28, dec.adjusted() + decimals + 2, len(dec.as_tuple().digits) + 2)


def fmt_decimal(value: Any, decimals: int = 2, thousands: bool = True) -> str:
    dec = _to_decimal(value)
    if dec is None:
        return "-"
    quant = Decimal("1") if decimals <= 0 else Decimal(f"1.{'0' * decimals}")
    with localcontext() as ctx:
        ctx.prec = _precision_for(dec, decimals)
        dec = dec.quantize(quant)
    pattern = f"{{:,.{decimals}f}}" if thousands else f"{{:.{decimals}f}}"
    formatted = pattern.format(dec)
    if thousands:
        return formatted.replace(",", "X").replace(".", ",").replace("X", ".")
    return formatted.replace(".", ",")


def fmt_number(value: Any) -> str:
    """Plain number: no trailing zeros, comma as decimal separator."""
    dec = _to_decimal(value)
    if dec is None:
        return "-"
    with localcontext() as ctx:
        ctx.prec = _precision_for(dec)
        if dec == dec.to_integral_value():
            return format(dec.to_integral_value(), "f")
        return format(dec.normalize(), "f").replace(".", ",")


def fmt_money(value: Any, decimals: int = 2, thousands: bool = True) -> str:
    dec = _to_decimal(value)
    if dec is None:
        return "-"
    return f"$ {fmt_decimal(dec, decimals=decimals, thousands=thousands)}"


def fmt_mix_type(value: Any) -> str:
    return MIX_TYPE_LABELS.get(str(value), str(value or "-"))
