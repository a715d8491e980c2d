"""Cents-precision money helpers.

All monetary values in the engine are ``Decimal`` amounts quantized to
the cent with half-up rounding. Floats never touch money.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

MoneyLike = Union[Decimal, int, str]


def to_money(value: MoneyLike) -> Decimal:
    """Quantize a value to cents using half-up rounding.

    Args:
        value: Decimal, int or numeric string

    Returns:
        Decimal with exactly two decimal places

    Raises:
        ValueError: If the value is not a finite number
    """
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Not a monetary amount: {value!r}") from e

    if not amount.is_finite():
        raise ValueError(f"Monetary amount must be finite: {value!r}")

    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def sum_money(amounts) -> Decimal:
    """Sum an iterable of amounts, starting from zero cents."""
    total = ZERO
    for amount in amounts:
        total += amount
    return to_money(total)


def format_currency(amount: Decimal) -> str:
    """Format an amount as US dollars (e.g. ``-$1,234.50``)."""
    amount = to_money(amount)
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_percentage(fraction: Decimal) -> str:
    """Format a 0-1 fraction as a whole-number percentage."""
    percent = (Decimal(fraction) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{percent}%"
