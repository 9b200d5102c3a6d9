"""
Money helpers.

Amounts are stored as ``Decimal`` in major units (rupees).  Stripe works
in minor units (paise), so conversions happen at the provider boundary
only.  ``format_inr`` reproduces the en-IN digit grouping used on the
frontend (``12,34,567``).
"""
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

TWO_PLACES = Decimal("0.01")


def to_decimal(value) -> Decimal:
    return Decimal(str(value)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def to_minor_units(amount) -> int:
    """Convert a major-unit amount to an integer count of minor units."""
    return int((to_decimal(amount) * 100).to_integral_value(rounding=ROUND_HALF_UP))


def from_minor_units(value) -> Decimal:
    return to_decimal(Decimal(int(value or 0)) / 100)


def _group_indian(digits: str) -> str:
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_inr(amount, symbol: str = "") -> str:
    """
    Format an amount with Indian digit grouping.

    Whole amounts drop the fractional part (``1500`` -> ``1,500``); others
    keep two decimals (``1234567.5`` -> ``12,34,567.50``).
    """
    value = to_decimal(amount)
    sign = "-" if value < 0 else ""
    value = abs(value)
    whole, _, fraction = f"{value:.2f}".partition(".")
    text = _group_indian(whole)
    if fraction != "00":
        text = f"{text}.{fraction}"
    return f"{sign}{symbol}{text}"
