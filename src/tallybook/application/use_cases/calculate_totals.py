"""
Calculate Totals Use Case.

Validates a draft document's lines and adjustments, then asks the totals
engine for the full breakdown. Nothing is stored.
"""

from dataclasses import dataclass

from tallybook.application.dto.requests import (
    CalculateLineRequest,
    CalculateTotalsRequest,
    DocumentInputRequest,
)
from tallybook.application.dto.responses import (
    DocumentTotalsResponse,
    LineCalculationResponse,
)
from tallybook.config import get_logger, get_settings
from tallybook.core.entities import (
    DepositRequest,
    DocumentDiscount,
    DocumentTotals,
    LineCalculation,
    LineItem,
    PricingMode,
)
from tallybook.core.services import DocumentValidator, TotalsEngine

logger = get_logger(__name__)


@dataclass
class CalculateTotalsResult:
    """Result of a totals calculation."""

    lines: list[LineItem]
    totals: DocumentTotals
    currency: str


class CalculateTotalsUseCase:
    """
    Use case for calculating document totals.

    Flow:
    1. Convert request DTOs to frozen line snapshots
    2. Validate lines (quantity, price, line discount)
    3. Compute totals
    4. Validate the document discount against the net subtotal
       and the deposit against the total
    """

    def __init__(
        self,
        engine: TotalsEngine | None = None,
        validator: DocumentValidator | None = None,
    ):
        self._engine = engine
        self._validator = validator

    def _get_engine(self) -> TotalsEngine:
        if self._engine is None:
            from tallybook.application.services import get_totals_engine

            self._engine = get_totals_engine()
        return self._engine

    def _get_validator(self) -> DocumentValidator:
        if self._validator is None:
            from tallybook.application.services import get_document_validator

            self._validator = get_document_validator()
        return self._validator

    async def execute(self, request: CalculateTotalsRequest) -> CalculateTotalsResult:
        """
        Execute totals calculation.

        Args:
            request: Lines, adjustments and payments

        Returns:
            CalculateTotalsResult with the computed totals

        Raises:
            NegativeQuantityOrPriceError: Invalid quantity or unit price
            InvalidDiscountRangeError: Line or document discount out of range
            InvalidDepositAmountError: Deposit not within (0, total]
        """
        return self.calculate_request(request, validate_inputs=request.validate_inputs)

    def calculate_request(
        self, request: DocumentInputRequest, validate_inputs: bool = True
    ) -> CalculateTotalsResult:
        """Convert request DTOs to entities and calculate their totals."""
        lines = [line.to_entity() for line in request.lines]
        document_discount = (
            request.document_discount.to_entity() if request.document_discount else None
        )
        deposit_request = (
            request.deposit_request.to_entity() if request.deposit_request else None
        )

        totals = self.calculate(
            lines,
            document_discount=document_discount,
            deposit_request=deposit_request,
            paid_cents=request.paid_cents,
            pricing_mode=request.pricing_mode,
            validate_inputs=validate_inputs,
        )

        return CalculateTotalsResult(
            lines=lines,
            totals=totals,
            currency=request.currency or get_settings().totals.default_currency,
        )

    def calculate(
        self,
        lines: list[LineItem],
        document_discount: DocumentDiscount | None = None,
        deposit_request: DepositRequest | None = None,
        paid_cents: int = 0,
        pricing_mode: PricingMode | None = None,
        validate_inputs: bool = True,
    ) -> DocumentTotals:
        """Validate (unless disabled) and compute totals for entity inputs."""
        validator = self._get_validator()
        engine = self._get_engine()

        if validate_inputs:
            validator.validate_lines(lines)

        totals = engine.calculate(
            lines,
            document_discount=document_discount,
            deposit_request=deposit_request,
            paid_cents=paid_cents,
            pricing_mode=pricing_mode,
        )

        if validate_inputs:
            validator.validate_document_discount(
                document_discount, totals.net_subtotal_cents
            )
            validator.validate_deposit(deposit_request, totals.total_cents)

        logger.info(
            "totals_calculated",
            lines=len(lines),
            total_cents=totals.total_cents,
            tax_cents=totals.tax_cents,
            balance_cents=totals.balance_cents,
        )

        return totals

    async def calculate_line(self, request: CalculateLineRequest) -> LineCalculation:
        """Validate and calculate a single line."""
        line = request.line.to_entity()
        self._get_validator().validate_line(line)
        return self._get_engine().calculate_line(line, request.pricing_mode)

    def to_response(self, result: CalculateTotalsResult) -> DocumentTotalsResponse:
        """Convert result to API response."""
        return DocumentTotalsResponse.from_entity(result.totals, result.currency)

    def to_line_response(self, calc: LineCalculation) -> LineCalculationResponse:
        return LineCalculationResponse.from_entity(calc)
