"""Tests for DocumentValidator."""

from decimal import Decimal

import pytest

from tallybook.core.entities import (
    AdjustmentType,
    DepositRequest,
    DocumentDiscount,
    LineDiscount,
    LineItem,
)
from tallybook.core.exceptions import (
    InvalidDepositAmountError,
    InvalidDiscountRangeError,
    NegativeQuantityOrPriceError,
)
from tallybook.core.services.document_validator import DocumentValidator


@pytest.fixture
def validator() -> DocumentValidator:
    return DocumentValidator(currency="AUD")


class TestValidateLine:
    def test_valid_line(self, validator):
        validator.validate_line(LineItem(quantity="0.01", unit_price_cents=0))

    @pytest.mark.parametrize("quantity", ["0", "-1"])
    def test_non_positive_quantity(self, validator, quantity):
        with pytest.raises(NegativeQuantityOrPriceError) as exc_info:
            validator.validate_line(LineItem(quantity=quantity, unit_price_cents=100), index=3)
        assert exc_info.value.details["field"] == "quantity"
        assert exc_info.value.details["line_index"] == 3

    def test_negative_price(self, validator):
        with pytest.raises(NegativeQuantityOrPriceError) as exc_info:
            validator.validate_line(LineItem(quantity=1, unit_price_cents=-1))
        assert exc_info.value.details["field"] == "unit_price_cents"

    @pytest.mark.parametrize("value", ["-1", "100.01", "150"])
    def test_percent_out_of_range(self, validator, value):
        line = LineItem(quantity=1, unit_price_cents=1000, discount=LineDiscount.percent(value))
        with pytest.raises(InvalidDiscountRangeError):
            validator.validate_line(line)

    @pytest.mark.parametrize("value", ["0", "100", "33.33"])
    def test_percent_in_range(self, validator, value):
        line = LineItem(quantity=1, unit_price_cents=1000, discount=LineDiscount.percent(value))
        validator.validate_line(line)

    def test_amount_exceeding_base(self, validator):
        line = LineItem(quantity=1, unit_price_cents=1000, discount=LineDiscount.amount(1500))
        with pytest.raises(InvalidDiscountRangeError) as exc_info:
            validator.validate_line(line)
        assert "AUD 15.00" in exc_info.value.details["message"]
        assert "AUD 10.00" in exc_info.value.details["message"]

    def test_amount_equal_to_base(self, validator):
        line = LineItem(quantity=2, unit_price_cents=500, discount=LineDiscount.amount(1000))
        validator.validate_line(line)

    def test_negative_amount(self, validator):
        line = LineItem(quantity=1, unit_price_cents=1000, discount=LineDiscount.amount(-5))
        with pytest.raises(InvalidDiscountRangeError):
            validator.validate_line(line)

    def test_validate_lines_reports_index(self, validator):
        lines = [
            LineItem(quantity=1, unit_price_cents=100),
            LineItem(quantity=1, unit_price_cents=-100),
        ]
        with pytest.raises(NegativeQuantityOrPriceError) as exc_info:
            validator.validate_lines(lines)
        assert exc_info.value.details["line_index"] == 1


class TestValidateDocumentDiscount:
    def test_none(self, validator):
        validator.validate_document_discount(None, 1000)

    def test_percent_over_100(self, validator):
        discount = DocumentDiscount(type=AdjustmentType.PERCENT, value=101)
        with pytest.raises(InvalidDiscountRangeError):
            validator.validate_document_discount(discount, 1000)

    def test_negative(self, validator):
        discount = DocumentDiscount(type=AdjustmentType.FIXED, value=-1)
        with pytest.raises(InvalidDiscountRangeError):
            validator.validate_document_discount(discount, 1000)

    def test_fixed_exceeding_net_subtotal(self, validator):
        discount = DocumentDiscount(type=AdjustmentType.FIXED, value="10.01")
        with pytest.raises(InvalidDiscountRangeError) as exc_info:
            validator.validate_document_discount(discount, 1000)
        assert exc_info.value.details["field"] == "document_discount"

    def test_fixed_within_net_subtotal(self, validator):
        discount = DocumentDiscount(type=AdjustmentType.FIXED, value=10)
        validator.validate_document_discount(discount, 1000)


class TestValidateDeposit:
    def test_none(self, validator):
        validator.validate_deposit(None, 20000)

    def test_valid_percent(self, validator):
        validator.validate_deposit(DepositRequest(value=25), 20000)

    def test_full_amount_allowed(self, validator):
        validator.validate_deposit(DepositRequest(type=AdjustmentType.FIXED, value=200), 20000)

    def test_exceeds_total(self, validator):
        deposit = DepositRequest(type=AdjustmentType.FIXED, value=250)
        with pytest.raises(InvalidDepositAmountError) as exc_info:
            validator.validate_deposit(deposit, 20000)
        error = exc_info.value
        assert "cannot exceed the document total" in error.message
        assert "AUD 250.00 > AUD 200.00" in error.message
        assert error.details["deposit_cents"] == 25000
        assert error.details["total_cents"] == 20000

    def test_zero_deposit(self, validator):
        with pytest.raises(InvalidDepositAmountError) as exc_info:
            validator.validate_deposit(DepositRequest(value=0), 20000)
        assert "greater than zero" in exc_info.value.message

    def test_zero_total(self, validator):
        with pytest.raises(InvalidDepositAmountError):
            validator.validate_deposit(DepositRequest(value=25), 0)

    @pytest.mark.parametrize("value", ["-5", "120"])
    def test_percent_out_of_range(self, validator, value):
        with pytest.raises(InvalidDepositAmountError) as exc_info:
            validator.validate_deposit(DepositRequest(value=value), 20000)
        assert "between 0 and 100" in exc_info.value.message

    def test_negative_amount_paid(self, validator):
        with pytest.raises(InvalidDepositAmountError):
            validator.validate_deposit(DepositRequest(value=25, amount_paid_cents=-1), 20000)

    def test_is_valid_deposit(self, validator):
        assert validator.is_valid_deposit(DepositRequest(value=Decimal("25")), 20000) is True
        assert validator.is_valid_deposit(DepositRequest(value=Decimal("101")), 20000) is False
