"""
Caller-side validation for document inputs.

Everything the totals engine tolerates silently is rejected here, before a
configuration is saved. All user-facing messages live in this module.
"""

from collections.abc import Iterable

from tallybook.core.entities.document import (
    AdjustmentType,
    DepositRequest,
    DiscountType,
    DocumentDiscount,
    LineItem,
)
from tallybook.core.exceptions import (
    InvalidDepositAmountError,
    InvalidDiscountRangeError,
    NegativeQuantityOrPriceError,
)
from tallybook.core.money import format_cents, round_half_up
from tallybook.core.services.totals_engine import calculate_deposit_amount


class DocumentValidator:
    """Validates line items, document discounts and deposit requests."""

    def __init__(self, currency: str = "AUD"):
        self._currency = currency

    def validate_line(self, line: LineItem, index: int | None = None) -> None:
        """Reject non-positive quantities, negative prices and out-of-range discounts."""
        if line.quantity <= 0:
            raise NegativeQuantityOrPriceError(
                field="quantity",
                message="Quantity must be greater than 0",
                value=line.quantity,
                line_index=index,
            )
        if line.unit_price_cents < 0:
            raise NegativeQuantityOrPriceError(
                field="unit_price_cents",
                message="Unit price cannot be negative",
                value=line.unit_price_cents,
                line_index=index,
            )

        discount = line.discount
        if discount.type is DiscountType.PERCENT:
            if not 0 <= discount.value <= 100:
                raise InvalidDiscountRangeError(
                    field="discount",
                    message="Percent discount must be between 0 and 100",
                    value=discount.value,
                )
        elif discount.type is DiscountType.AMOUNT:
            base_cents = round_half_up(line.quantity * line.unit_price_cents)
            if discount.value < 0:
                raise InvalidDiscountRangeError(
                    field="discount",
                    message="Discount amount cannot be negative",
                    value=discount.value,
                )
            if discount.value > base_cents:
                raise InvalidDiscountRangeError(
                    field="discount",
                    message=(
                        f"Discount of {format_cents(round_half_up(discount.value), self._currency)} "
                        f"exceeds the line amount of {format_cents(base_cents, self._currency)}"
                    ),
                    value=discount.value,
                )

    def validate_lines(self, lines: Iterable[LineItem]) -> None:
        for index, line in enumerate(lines):
            self.validate_line(line, index=index)

    def validate_document_discount(
        self, discount: DocumentDiscount | None, net_subtotal_cents: int
    ) -> None:
        """Percent must be within [0, 100]; fixed must not exceed the discounted base."""
        if discount is None:
            return
        if discount.value < 0:
            raise InvalidDiscountRangeError(
                field="document_discount",
                message="Discount cannot be negative",
                value=discount.value,
            )
        if discount.type is AdjustmentType.PERCENT:
            if discount.value > 100:
                raise InvalidDiscountRangeError(
                    field="document_discount",
                    message="Percent discount must be between 0 and 100",
                    value=discount.value,
                )
            return

        discount_cents = round_half_up(discount.value * 100)
        if discount_cents > net_subtotal_cents:
            raise InvalidDiscountRangeError(
                field="document_discount",
                message=(
                    f"Discount of {format_cents(discount_cents, self._currency)} "
                    f"exceeds the subtotal of {format_cents(net_subtotal_cents, self._currency)}"
                ),
                value=discount.value,
            )

    def validate_deposit(self, deposit: DepositRequest | None, total_cents: int) -> None:
        """A deposit must be positive and no larger than the document total."""
        if deposit is None:
            return
        if deposit.type is AdjustmentType.PERCENT and not 0 <= deposit.value <= 100:
            raise InvalidDepositAmountError(
                "Deposit percentage must be between 0 and 100",
                deposit_cents=calculate_deposit_amount(total_cents, deposit) or 0,
                total_cents=total_cents,
            )
        if deposit.amount_paid_cents < 0:
            raise InvalidDepositAmountError(
                "Deposit amount paid cannot be negative",
                deposit_cents=deposit.amount_paid_cents,
                total_cents=total_cents,
            )

        amount = calculate_deposit_amount(total_cents, deposit) or 0
        if amount <= 0:
            raise InvalidDepositAmountError(
                "Deposit must be greater than zero",
                deposit_cents=amount,
                total_cents=total_cents,
            )
        if amount > total_cents:
            raise InvalidDepositAmountError(
                f"Deposit cannot exceed the document total "
                f"({format_cents(amount, self._currency)} > {format_cents(total_cents, self._currency)})",
                deposit_cents=amount,
                total_cents=total_cents,
            )

    def is_valid_deposit(self, deposit: DepositRequest, total_cents: int) -> bool:
        try:
            self.validate_deposit(deposit, total_cents)
        except InvalidDepositAmountError:
            return False
        return True
