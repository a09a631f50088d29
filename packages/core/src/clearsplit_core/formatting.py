"""Display formatting for money values (USD only)."""

from decimal import Decimal
from typing import Any

from .normalizer import coerce_amount, quantize_half_up

CENTS = Decimal("0.01")


def format_usd(value: Any) -> str:
    """Format as US dollars, e.g. ``$1,234.56`` or ``-$50.00``.

    Non-numeric input formats as ``$0.00``.
    """
    amount = quantize_half_up(coerce_amount(value), CENTS)
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_percent(value: Any) -> str:
    """Format a rate already expressed in percent, e.g. ``24.99%``."""
    amount = coerce_amount(value).normalize()
    if amount == amount.to_integral_value():
        amount = quantize_half_up(amount, Decimal("1"))
    return f"{amount}%"


__all__ = ["format_usd", "format_percent"]
