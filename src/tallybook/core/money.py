"""
Money helpers.

Amounts live as integer cents. These helpers convert at the edges; the
totals engine never formats or parses currency.
"""

import re
from decimal import ROUND_FLOOR, Decimal, InvalidOperation

_NON_NUMERIC = re.compile(r"[^0-9.\-]")


def round_half_up(value: Decimal | int | float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    if isinstance(value, float):
        value = Decimal(str(value))
    return int((Decimal(value) + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))


def dollars_to_cents(dollars: Decimal | int | float | str) -> int:
    """Convert a major-unit amount to integer cents."""
    if isinstance(dollars, float):
        dollars = str(dollars)
    return round_half_up(Decimal(dollars) * 100)


def cents_to_dollars(cents: int) -> Decimal:
    return Decimal(cents) / 100


def display_to_cents(value: str | int | float | Decimal) -> int:
    """Parse user-entered text like '$1,234.50' to cents. Unparseable input is 0."""
    if not isinstance(value, str):
        return dollars_to_cents(value)
    cleaned = _NON_NUMERIC.sub("", value)
    try:
        return dollars_to_cents(Decimal(cleaned))
    except InvalidOperation:
        return 0


def format_cents(cents: int, currency: str = "AUD") -> str:
    """Format cents for display, e.g. ``AUD 1,234.56`` or ``-AUD 5.00``."""
    sign = "-" if cents < 0 else ""
    amount = cents_to_dollars(abs(cents))
    return f"{sign}{currency} {amount:,.2f}"
