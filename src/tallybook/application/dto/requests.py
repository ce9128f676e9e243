"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.

Business ranges (negative prices, discounts over 100%) are not enforced
here; DocumentValidator rejects them with domain error codes.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from tallybook.core.entities import (
    AdjustmentType,
    CustomerTaxProfile,
    CustomerType,
    DepositRequest,
    DiscountType,
    DocumentDiscount,
    DocumentKind,
    LineDiscount,
    LineItem,
    PricingMode,
    TaxCategory,
    TaxCode,
    TaxTreatment,
)

# --- Line items ---


class TaxTreatmentRequest(BaseModel):
    """Resolved tax snapshot for a line."""

    rate_percent: Decimal = Field(default=Decimal("0"), description="Rate, e.g. 10 for 10%")
    name: str = Field(default="No Tax", description="Display label used to group tax")
    is_reverse_charge: bool = Field(default=False)
    category: TaxCategory = Field(default=TaxCategory.STANDARD)


class LineDiscountRequest(BaseModel):
    """Line discount: percent (0-100) or amount in cents."""

    type: DiscountType = DiscountType.NONE
    value: Decimal = Decimal("0")


class LineItemRequest(BaseModel):
    """A single line on a quote or invoice."""

    name: str = Field(default="", description="Item name snapshot")
    description: str | None = None
    unit: str = "unit"
    quantity: Decimal = Field(..., description="Quantity; fractional values allowed")
    unit_price_cents: int = Field(..., description="Unit price in minor currency units")
    discount: LineDiscountRequest | None = None
    tax: TaxTreatmentRequest | None = Field(
        default=None, description="Resolved tax snapshot"
    )
    tax_code: TaxCode | None = Field(
        default=None,
        description="Legacy GST code, used when no tax snapshot is supplied",
        examples=["GST", "GST_FREE", "NONE"],
    )
    source_item_id: str | None = None
    sort_order: int = 0

    def to_entity(self) -> LineItem:
        if self.tax is not None:
            tax = TaxTreatment(**self.tax.model_dump())
        elif self.tax_code is not None:
            tax = TaxTreatment.from_legacy_code(self.tax_code)
        else:
            tax = TaxTreatment()

        discount = (
            LineDiscount(**self.discount.model_dump()) if self.discount else LineDiscount()
        )
        return LineItem(
            name=self.name,
            description=self.description,
            unit=self.unit,
            quantity=self.quantity,
            unit_price_cents=self.unit_price_cents,
            discount=discount,
            tax=tax,
            source_item_id=self.source_item_id,
            sort_order=self.sort_order,
        )


# --- Document adjustments ---


class DocumentDiscountRequest(BaseModel):
    """Document discount: percent of net subtotal, or fixed major units."""

    type: AdjustmentType
    value: Decimal

    def to_entity(self) -> DocumentDiscount:
        return DocumentDiscount(type=self.type, value=self.value)


class DepositConfigRequest(BaseModel):
    """Deposit request configuration."""

    type: AdjustmentType = AdjustmentType.PERCENT
    value: Decimal = Field(default=Decimal("25"))
    amount_paid_cents: int = Field(default=0, description="Deposit already received")
    due_date: date | None = None
    description: str | None = None

    def to_entity(self) -> DepositRequest:
        return DepositRequest(**self.model_dump())


# --- Totals ---


class CalculateLineRequest(BaseModel):
    """Request to calculate one line."""

    line: LineItemRequest
    pricing_mode: PricingMode | None = None


class DocumentInputRequest(BaseModel):
    """Lines, adjustments and payments shared by totals and issue requests."""

    lines: list[LineItemRequest] = Field(default_factory=list)
    document_discount: DocumentDiscountRequest | None = None
    deposit_request: DepositConfigRequest | None = None
    paid_cents: int = Field(default=0, description="General payments received")
    pricing_mode: PricingMode | None = Field(
        default=None, description="Defaults to the configured pricing mode"
    )
    currency: str | None = Field(
        default=None, description="Passed through for display; defaults to settings"
    )


class CalculateTotalsRequest(DocumentInputRequest):
    """Request to calculate document totals for a draft."""

    validate_inputs: bool = Field(
        default=True,
        description="Reject invalid lines, discounts and deposits before calculating",
    )


class IssueDocumentRequest(DocumentInputRequest):
    """
    Request to issue (first save/send) a quote or invoice.

    Issued documents are always validated, so there is no validate_inputs flag.
    """

    kind: DocumentKind
    number: str | None = Field(
        default=None,
        description="Manually chosen number; allocated from the sequence when omitted",
        examples=["I 98978"],
    )
    source_number: str | None = Field(
        default=None,
        description="Number of the quote this invoice was converted from",
        examples=["E 82385"],
    )


# --- Tax ---


class CustomerTaxProfileRequest(BaseModel):
    """Customer facts used for tax resolution."""

    customer_type: CustomerType = CustomerType.INDIVIDUAL
    country_code: str = Field(..., min_length=2, max_length=2)
    tax_id: str | None = None
    tax_id_validated: bool = False
    exemption_reason: str | None = None

    def to_entity(self) -> CustomerTaxProfile:
        return CustomerTaxProfile(**self.model_dump())


class ResolveTaxRequest(BaseModel):
    """Request to resolve a tax treatment for a catalogue category."""

    category: TaxCategory = TaxCategory.STANDARD
    customer: CustomerTaxProfileRequest | None = None
    on_date: date | None = None
