"""
Per-line calculation.

Every figure is rounded to whole cents on the line itself, so a document's
totals always equal the sum of the line totals shown to the user.
"""

from decimal import Decimal

from tallybook.core.entities.document import (
    DiscountType,
    LineCalculation,
    LineDiscount,
    LineItem,
    PricingMode,
)
from tallybook.core.money import round_half_up

_HUNDRED = Decimal("100")


def calculate_line_discount(base_cents: int, discount: LineDiscount) -> int:
    """Discount in cents for a line whose undiscounted amount is ``base_cents``."""
    if discount.type is DiscountType.PERCENT and discount.value > 0:
        return round_half_up(base_cents * discount.value / _HUNDRED)
    if discount.type is DiscountType.AMOUNT:
        # Already cents; over-large amounts are clamped through net below.
        return round_half_up(discount.value)
    return 0


def calculate_line(
    line: LineItem,
    pricing_mode: PricingMode = PricingMode.EXCLUSIVE,
) -> LineCalculation:
    """
    Calculate base, discount, net, tax and total for one line.

    In EXCLUSIVE mode tax is added on top of the discounted amount. In
    INCLUSIVE mode the discounted amount already contains tax, which is
    extracted from it, so ``net_cents`` is the tax-exclusive part.
    """
    base_cents = round_half_up(line.quantity * line.unit_price_cents)
    discount_cents = calculate_line_discount(base_cents, line.discount)
    discounted = max(0, base_cents - discount_cents)

    rate = line.tax.effective_rate_percent

    if pricing_mode is PricingMode.INCLUSIVE:
        tax_cents = round_half_up(discounted - discounted / (1 + rate / _HUNDRED))
        net_cents = discounted - tax_cents
    else:
        net_cents = discounted
        tax_cents = round_half_up(net_cents * rate / _HUNDRED)

    return LineCalculation(
        base_cents=base_cents,
        discount_cents=discount_cents,
        net_cents=net_cents,
        tax_cents=tax_cents,
        total_cents=net_cents + tax_cents,
        tax_rate_applied=rate,
        is_reverse_charge=line.tax.is_reverse_charge,
    )
