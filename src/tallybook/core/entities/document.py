"""
Document domain entities with Pydantic v2 validation.

Line items are frozen snapshots: once attached to a document their price,
discount and tax never follow later catalogue changes. Totals are always
derived, never authored.

Range checks (negative prices, discounts over 100%) are deliberately left to
DocumentValidator so the engine can still produce a consistent result for
whatever it is handed.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tallybook.core.entities.tax import TaxCategory, TaxTreatment, to_decimal


class PricingMode(str, Enum):
    """Whether unit prices exclude or already include tax."""

    EXCLUSIVE = "EXCLUSIVE"
    INCLUSIVE = "INCLUSIVE"


class DocumentKind(str, Enum):
    """Kinds of numbered documents."""

    INVOICE = "invoice"
    QUOTE = "quote"


class DiscountType(str, Enum):
    """Line-level discount type."""

    NONE = "NONE"
    PERCENT = "PERCENT"
    AMOUNT = "AMOUNT"


class AdjustmentType(str, Enum):
    """Document discount / deposit value type."""

    PERCENT = "percent"
    FIXED = "fixed"


class LineDiscount(BaseModel):
    """
    Line discount.

    ``value`` is a percentage for PERCENT and integer cents for AMOUNT.
    """

    model_config = ConfigDict(frozen=True)

    type: DiscountType = DiscountType.NONE
    value: Decimal = Decimal("0")

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v: Any) -> Any:
        if v is None or v == "":
            return Decimal("0")
        return to_decimal(v)

    @classmethod
    def none(cls) -> "LineDiscount":
        return cls()

    @classmethod
    def percent(cls, value: Decimal | int | float | str) -> "LineDiscount":
        return cls(type=DiscountType.PERCENT, value=value)

    @classmethod
    def amount(cls, cents: int) -> "LineDiscount":
        return cls(type=DiscountType.AMOUNT, value=cents)


class LineItem(BaseModel):
    """One row of a quote or invoice, snapshotted at creation time."""

    model_config = ConfigDict(frozen=True)

    quantity: Decimal
    unit_price_cents: int
    discount: LineDiscount = Field(default_factory=LineDiscount)
    tax: TaxTreatment = Field(default_factory=TaxTreatment)

    # Descriptive snapshot
    name: str = ""
    description: str | None = None
    unit: str = "unit"
    source_item_id: str | None = None
    sort_order: int = 0

    @field_validator("quantity", mode="before")
    @classmethod
    def coerce_quantity(cls, v: Any) -> Any:
        return to_decimal(v)

    @property
    def tax_rate_percent(self) -> Decimal:
        return self.tax.rate_percent

    @property
    def tax_name(self) -> str:
        return self.tax.name

    @property
    def is_reverse_charge(self) -> bool:
        return self.tax.is_reverse_charge

    @classmethod
    def from_catalog_item(
        cls,
        name: str,
        unit_price_cents: int,
        tax: TaxTreatment,
        quantity: Decimal | int | float | str = 1,
        unit: str = "unit",
        source_item_id: str | None = None,
        sort_order: int = 0,
    ) -> "LineItem":
        """Snapshot a catalogue entry's current price and tax into a new line."""
        return cls(
            name=name,
            quantity=quantity,
            unit_price_cents=unit_price_cents,
            tax=tax,
            unit=unit,
            source_item_id=source_item_id,
            sort_order=sort_order,
        )


class DocumentDiscount(BaseModel):
    """Document-level discount; fixed values are major currency units."""

    model_config = ConfigDict(frozen=True)

    type: AdjustmentType
    value: Decimal

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v: Any) -> Any:
        return to_decimal(v)


class DepositRequest(BaseModel):
    """
    Partial-payment claim against a document total.

    Deposit payments are tracked separately from the document's general
    amount-paid figure; both reduce the balance.
    """

    model_config = ConfigDict(frozen=True)

    type: AdjustmentType = AdjustmentType.PERCENT
    value: Decimal = Decimal("25")
    amount_paid_cents: int = 0
    due_date: date | None = None
    description: str | None = None

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v: Any) -> Any:
        return to_decimal(v)


class LineCalculation(BaseModel):
    """Per-line figures, all integer cents."""

    model_config = ConfigDict(frozen=True)

    base_cents: int
    discount_cents: int
    net_cents: int
    tax_cents: int
    total_cents: int
    tax_rate_applied: Decimal
    is_reverse_charge: bool = False


class TaxGroup(BaseModel):
    """Lines sharing a tax name, rate and reverse-charge flag."""

    model_config = ConfigDict(frozen=True)

    name: str
    rate_percent: Decimal
    category: TaxCategory = TaxCategory.STANDARD
    taxable_cents: int = 0
    tax_cents: int = 0
    is_reverse_charge: bool = False


class DocumentTotals(BaseModel):
    """Reconciled financial breakdown of a document."""

    model_config = ConfigDict(frozen=True)

    subtotal_cents: int = 0
    line_discount_cents: int = 0
    document_discount_cents: int = 0
    tax_cents: int = 0
    total_cents: int = 0
    tax_breakdown: tuple[TaxGroup, ...] = ()
    has_mixed_rates: bool = False
    has_reverse_charge: bool = False
    pricing_mode: PricingMode = PricingMode.EXCLUSIVE

    # Deposit / balance
    deposit_amount_cents: int | None = None
    paid_cents: int = 0
    deposit_paid_cents: int = 0
    balance_cents: int = 0

    @property
    def net_subtotal_cents(self) -> int:
        """Subtotal after line discounts, before document discount."""
        return self.subtotal_cents - self.line_discount_cents

    @property
    def is_overpaid(self) -> bool:
        return self.balance_cents < 0

    @property
    def shows_itemized_tax(self) -> bool:
        """Presentation hint: itemize tax groups instead of one summary line."""
        return self.has_mixed_rates or self.has_reverse_charge


class IssuedDocument(BaseModel):
    """
    Immutable record of an issued document.

    The totals stored here are final; an issued document is never recomputed.
    """

    model_config = ConfigDict(frozen=True)

    number: str
    kind: DocumentKind
    currency: str
    pricing_mode: PricingMode = PricingMode.EXCLUSIVE
    lines: tuple[LineItem, ...]
    document_discount: DocumentDiscount | None = None
    deposit_request: DepositRequest | None = None
    paid_cents: int = 0
    totals: DocumentTotals
    source_number: str | None = None
    issued_at: datetime = Field(default_factory=datetime.utcnow)
