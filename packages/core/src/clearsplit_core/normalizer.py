"""Frequency normalization and numeric ingestion.

Income and expense entries are recorded at whatever cadence the user
knows them by. Every calculation works in monthly equivalents, so this
module converts (amount, frequency) pairs to a monthly amount and owns
the coercion rules applied to every numeric field at ingestion.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from enum import Enum
from typing import Any

ZERO = Decimal("0")
WEEKS_PER_YEAR = Decimal("52")
BIWEEKLY_PERIODS_PER_YEAR = Decimal("26")
MONTHS_PER_YEAR = Decimal("12")


class Frequency(str, Enum):
    """Recurrence of an income or expense entry."""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    ANNUAL = "annual"


def coerce_amount(value: Any) -> Decimal:
    """Coerce arbitrary input to a finite Decimal.

    Blank, non-numeric, NaN and infinite values all become zero; this is
    the documented fallback for out-of-domain numbers, never an error.

    Args:
        value: Raw value from a form field, CSV cell or JSON document.

    Returns:
        A finite Decimal.
    """
    if value is None:
        return ZERO
    if isinstance(value, bool):
        return Decimal(int(value))
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        # str() keeps the shortest repr, so 0.1 stays 0.1
        result = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            return ZERO
        try:
            result = Decimal(text)
        except InvalidOperation:
            return ZERO
    else:
        return ZERO

    if not result.is_finite():
        return ZERO
    return result


def quantize_half_up(value: Decimal, exp: Decimal) -> Decimal:
    """Round ``value`` to the exponent of ``exp``, halves away from zero.

    Precision is widened to fit every digit of the result, so amounts
    beyond the default 28-digit context still round instead of raising.
    """
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() - exp.as_tuple().exponent + 2)
        return value.quantize(exp, rounding=ROUND_HALF_UP)


def normalize_frequency(value: Any) -> Frequency:
    """Map a raw frequency to the enum, falling back to monthly."""
    if isinstance(value, Frequency):
        return value
    if isinstance(value, str):
        try:
            return Frequency(value.strip().lower())
        except ValueError:
            pass
    return Frequency.MONTHLY


def to_monthly(amount: Any, frequency: Any) -> Decimal:
    """Convert an amount at the given frequency to its monthly equivalent.

    weekly -> amount * 52 / 12, biweekly -> amount * 26 / 12,
    annual -> amount / 12, monthly or anything unrecognized -> amount.

    >>> to_monthly(100, "annual") == Decimal(100) / 12
    True
    >>> to_monthly(100, "bogus")
    Decimal('100')
    """
    value = coerce_amount(amount)
    freq = normalize_frequency(frequency)

    if freq is Frequency.WEEKLY:
        return value * WEEKS_PER_YEAR / MONTHS_PER_YEAR
    if freq is Frequency.BIWEEKLY:
        return value * BIWEEKLY_PERIODS_PER_YEAR / MONTHS_PER_YEAR
    if freq is Frequency.ANNUAL:
        return value / MONTHS_PER_YEAR
    return value


__all__ = [
    "Frequency",
    "coerce_amount",
    "normalize_frequency",
    "quantize_half_up",
    "to_monthly",
]
