"""Response DTOs for API endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from tallybook.core.entities import (
    DocumentKind,
    DocumentTotals,
    LineCalculation,
    PricingMode,
    TaxApplication,
    TaxCategory,
    TaxGroup,
)
from tallybook.core.entities.tax import TaxTreatment


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    uptime_seconds: float


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. INVALID_DEPOSIT_AMOUNT)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    details: dict | None = Field(default=None, description="Structured error context")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)


class LineCalculationResponse(BaseModel):
    """Per-line figures in cents."""

    base_cents: int
    discount_cents: int
    net_cents: int
    tax_cents: int
    total_cents: int
    tax_rate_applied: float
    is_reverse_charge: bool

    @classmethod
    def from_entity(cls, calc: LineCalculation) -> "LineCalculationResponse":
        return cls(
            base_cents=calc.base_cents,
            discount_cents=calc.discount_cents,
            net_cents=calc.net_cents,
            tax_cents=calc.tax_cents,
            total_cents=calc.total_cents,
            tax_rate_applied=float(calc.tax_rate_applied),
            is_reverse_charge=calc.is_reverse_charge,
        )


class TaxGroupResponse(BaseModel):
    """One row of the tax breakdown."""

    name: str
    rate_percent: float
    display_rate: str
    category: TaxCategory
    taxable_cents: int
    tax_cents: int
    is_reverse_charge: bool

    @classmethod
    def from_entity(cls, group: TaxGroup) -> "TaxGroupResponse":
        treatment = TaxTreatment(
            rate_percent=group.rate_percent,
            name=group.name,
            is_reverse_charge=group.is_reverse_charge,
        )
        return cls(
            name=group.name,
            rate_percent=float(group.rate_percent),
            display_rate=treatment.display_rate,
            category=group.category,
            taxable_cents=group.taxable_cents,
            tax_cents=group.tax_cents,
            is_reverse_charge=group.is_reverse_charge,
        )


class DocumentTotalsResponse(BaseModel):
    """Document totals with tax breakdown, deposit and balance."""

    currency: str
    pricing_mode: PricingMode
    subtotal_cents: int
    line_discount_cents: int
    document_discount_cents: int
    net_subtotal_cents: int
    tax_cents: int
    total_cents: int
    tax_breakdown: list[TaxGroupResponse]
    has_mixed_rates: bool
    has_reverse_charge: bool
    deposit_amount_cents: int | None = None
    paid_cents: int
    deposit_paid_cents: int
    balance_cents: int

    @classmethod
    def from_entity(cls, totals: DocumentTotals, currency: str) -> "DocumentTotalsResponse":
        return cls(
            currency=currency,
            pricing_mode=totals.pricing_mode,
            subtotal_cents=totals.subtotal_cents,
            line_discount_cents=totals.line_discount_cents,
            document_discount_cents=totals.document_discount_cents,
            net_subtotal_cents=totals.net_subtotal_cents,
            tax_cents=totals.tax_cents,
            total_cents=totals.total_cents,
            tax_breakdown=[TaxGroupResponse.from_entity(g) for g in totals.tax_breakdown],
            has_mixed_rates=totals.has_mixed_rates,
            has_reverse_charge=totals.has_reverse_charge,
            deposit_amount_cents=totals.deposit_amount_cents,
            paid_cents=totals.paid_cents,
            deposit_paid_cents=totals.deposit_paid_cents,
            balance_cents=totals.balance_cents,
        )


class IssuedDocumentResponse(BaseModel):
    """An issued document's immutable summary."""

    number: str
    kind: DocumentKind
    currency: str
    source_number: str | None = None
    line_count: int
    totals: DocumentTotalsResponse
    issued_at: datetime


class NextNumberResponse(BaseModel):
    """Preview of the next document number."""

    kind: DocumentKind
    number: str


class TaxResolutionResponse(BaseModel):
    """Resolved tax treatment for a catalogue category."""

    name: str
    rate_percent: float
    category: TaxCategory
    is_reverse_charge: bool
    explanation: str
    reverse_charge_note: str | None = None

    @classmethod
    def from_entity(cls, application: TaxApplication) -> "TaxResolutionResponse":
        treatment = application.treatment
        return cls(
            name=treatment.name,
            rate_percent=float(treatment.rate_percent),
            category=treatment.category,
            is_reverse_charge=treatment.is_reverse_charge,
            explanation=application.explanation,
            reverse_charge_note=application.reverse_charge_note,
        )
