"""Tests for per-line calculation."""

from decimal import Decimal

import pytest

from tallybook.core.entities import LineDiscount, LineItem, PricingMode, TaxTreatment
from tallybook.core.services.line_calculator import calculate_line, calculate_line_discount

GST = TaxTreatment(rate_percent=Decimal("10"), name="GST")


class TestCalculateLineDiscount:
    def test_none(self):
        assert calculate_line_discount(2000, LineDiscount()) == 0

    def test_percent(self):
        assert calculate_line_discount(10000, LineDiscount.percent(25)) == 2500

    def test_percent_rounds_half_up(self):
        # 333 * 15% = 49.95
        assert calculate_line_discount(333, LineDiscount.percent(15)) == 50

    def test_zero_percent(self):
        assert calculate_line_discount(10000, LineDiscount.percent(0)) == 0

    def test_amount_is_cents(self):
        assert calculate_line_discount(10000, LineDiscount.amount(1500)) == 1500


class TestCalculateLine:
    """Exclusive pricing: tax on top of the discounted amount."""

    def test_plain_line(self):
        line = LineItem(quantity=2, unit_price_cents=1000, tax=GST)
        calc = calculate_line(line)
        assert calc.base_cents == 2000
        assert calc.discount_cents == 0
        assert calc.net_cents == 2000
        assert calc.tax_cents == 200
        assert calc.total_cents == 2200
        assert calc.tax_rate_applied == Decimal("10")

    def test_percent_discount(self):
        line = LineItem(
            quantity=1, unit_price_cents=10000, discount=LineDiscount.percent(25), tax=GST
        )
        calc = calculate_line(line)
        assert calc.base_cents == 10000
        assert calc.discount_cents == 2500
        assert calc.net_cents == 7500
        assert calc.tax_cents == 750
        assert calc.total_cents == 8250

    def test_discount_larger_than_base_clamps_net(self):
        line = LineItem(
            quantity=1, unit_price_cents=1000, discount=LineDiscount.amount(1500), tax=GST
        )
        calc = calculate_line(line)
        assert calc.discount_cents == 1500
        assert calc.net_cents == 0
        assert calc.tax_cents == 0
        assert calc.total_cents == 0

    def test_fractional_quantity_rounds_base(self):
        # 1.5 * 333 = 499.5
        line = LineItem(quantity="1.5", unit_price_cents=333)
        assert calculate_line(line).base_cents == 500

    def test_tax_rounds_half_up(self):
        # 5 cents at 10% = 0.5
        line = LineItem(quantity=1, unit_price_cents=5, tax=GST)
        assert calculate_line(line).tax_cents == 1

    def test_fractional_rate(self):
        line = LineItem(
            quantity=1, unit_price_cents=999, tax=TaxTreatment(rate_percent="12.5", name="VAT")
        )
        calc = calculate_line(line)
        # 999 * 12.5% = 124.875
        assert calc.tax_cents == 125
        assert calc.total_cents == 1124

    def test_reverse_charge_has_no_tax(self):
        line = LineItem(
            quantity=1,
            unit_price_cents=5000,
            tax=TaxTreatment(rate_percent=20, name="VAT (Reverse Charge)", is_reverse_charge=True),
        )
        calc = calculate_line(line)
        assert calc.net_cents == 5000
        assert calc.tax_cents == 0
        assert calc.total_cents == 5000
        assert calc.tax_rate_applied == Decimal("0")
        assert calc.is_reverse_charge is True

    @pytest.mark.parametrize(
        "quantity,price,discount",
        [
            ("3", 333, LineDiscount()),
            ("0.25", 1999, LineDiscount.percent("33.3")),
            ("7", 1234, LineDiscount.amount(555)),
            ("1", 100, LineDiscount.amount(250)),
            ("12.5", 17, LineDiscount.percent(100)),
        ],
    )
    def test_rounding_closure(self, quantity, price, discount):
        line = LineItem(quantity=quantity, unit_price_cents=price, discount=discount, tax=GST)
        calc = calculate_line(line)
        assert calc.total_cents == calc.net_cents + calc.tax_cents
        assert calc.net_cents == max(0, calc.base_cents - calc.discount_cents)
        assert all(
            isinstance(v, int)
            for v in (calc.base_cents, calc.discount_cents, calc.net_cents, calc.tax_cents)
        )


class TestInclusivePricing:
    """Inclusive pricing: tax is extracted from the discounted amount."""

    def test_extracts_tax(self):
        line = LineItem(quantity=1, unit_price_cents=1100, tax=GST)
        calc = calculate_line(line, PricingMode.INCLUSIVE)
        assert calc.base_cents == 1100
        assert calc.tax_cents == 100
        assert calc.net_cents == 1000
        assert calc.total_cents == 1100

    def test_extraction_rounds(self):
        # 1000 - 1000 / 1.1 = 90.909...
        line = LineItem(quantity=1, unit_price_cents=1000, tax=GST)
        calc = calculate_line(line, PricingMode.INCLUSIVE)
        assert calc.tax_cents == 91
        assert calc.net_cents == 909
        assert calc.total_cents == 1000

    def test_discount_applies_before_extraction(self):
        line = LineItem(
            quantity=1, unit_price_cents=2200, discount=LineDiscount.percent(50), tax=GST
        )
        calc = calculate_line(line, PricingMode.INCLUSIVE)
        assert calc.discount_cents == 1100
        assert calc.tax_cents == 100
        assert calc.net_cents == 1000

    def test_reverse_charge_extracts_nothing(self):
        line = LineItem(
            quantity=1,
            unit_price_cents=1100,
            tax=TaxTreatment(rate_percent=10, name="GST (Reverse Charge)", is_reverse_charge=True),
        )
        calc = calculate_line(line, PricingMode.INCLUSIVE)
        assert calc.tax_cents == 0
        assert calc.net_cents == 1100
