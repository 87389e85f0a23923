from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any

_MICRO = Decimal("0.000001")
# wide enough for any finite float at six decimals
_PRICE_CONTEXT = Context(prec=400)
_SUFFIXES = ((1e9, "B"), (1e6, "M"), (1e3, "K"))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def format_number(num: Any) -> str:
    """
    Abbreviate large magnitudes: 1_500_000 -> "1.50M".

    Zero, None, NaN and infinities all render as "0.00".
    """
    if not num or not _is_number(num):
        return "0.00"

    for threshold, suffix in _SUFFIXES:
        if num >= threshold:
            return f"{num / threshold:.2f}{suffix}"
    return f"{num:.2f}"


def format_price(price: Any) -> str:
    """en-US dollar amount with 2 to 6 fraction digits."""
    if not _is_number(price):
        price = 0.0

    # Intl.NumberFormat rounds ties away from zero
    amount = Decimal(abs(price)).quantize(_MICRO, rounding=ROUND_HALF_UP, context=_PRICE_CONTEXT)
    text = f"{amount:,f}"
    whole, frac = text.split(".")
    frac = frac.rstrip("0").ljust(2, "0")
    sign = "-" if price < 0 and amount != 0 else ""
    return f"{sign}${whole}.{frac}"


def format_change(change: Any) -> str:
    if not _is_number(change):
        change = 0.0
    sign = "+" if change >= 0 else ""
    return f"{sign}{change:.2f}%"


def format_address(address: str | None) -> str:
    if not address:
        return ""
    return f"{address[:6]}...{address[-4:]}"


def format_balance(balance: Any, decimals: int = 4) -> str:
    try:
        num = float(balance)
    except (TypeError, ValueError):
        return "0"
    if math.isnan(num):
        return "0"
    return f"{num:.{decimals}f}"
