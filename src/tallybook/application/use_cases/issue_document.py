"""
Issue Document Use Case.

First save/send of a quote or invoice: the totals are computed one last
time, a number is allocated (or a manual number claimed) and the result is
frozen into an IssuedDocument.
"""

from dataclasses import dataclass

from tallybook.application.dto.requests import IssueDocumentRequest
from tallybook.application.dto.responses import (
    DocumentTotalsResponse,
    IssuedDocumentResponse,
)
from tallybook.application.use_cases.calculate_totals import CalculateTotalsUseCase
from tallybook.config import document_context, get_logger
from tallybook.core.entities import DocumentKind, IssuedDocument
from tallybook.core.exceptions import ValidationError
from tallybook.core.interfaces import ISequenceAllocator

logger = get_logger(__name__)


@dataclass
class IssueDocumentResult:
    """Result of issuing a document."""

    document: IssuedDocument


class IssueDocumentUseCase:
    """
    Use case for issuing a quote or invoice.

    Flow:
    1. Validate and calculate totals
    2. Claim the manual number or allocate the next one
    3. Freeze lines, adjustments and totals into an IssuedDocument

    Numbers are only consumed after the document has passed validation.
    """

    def __init__(
        self,
        calculate_totals: CalculateTotalsUseCase | None = None,
        allocator: ISequenceAllocator | None = None,
    ):
        self._calculate_totals = calculate_totals
        self._allocator = allocator

    def _get_calculate_totals(self) -> CalculateTotalsUseCase:
        if self._calculate_totals is None:
            self._calculate_totals = CalculateTotalsUseCase()
        return self._calculate_totals

    def _get_allocator(self) -> ISequenceAllocator:
        if self._allocator is None:
            from tallybook.infrastructure.numbering import get_sequence_allocator

            self._allocator = get_sequence_allocator()
        return self._allocator

    async def execute(self, request: IssueDocumentRequest) -> IssueDocumentResult:
        """
        Execute document issuing.

        Raises:
            ValidationError: Invalid lines, discounts or deposit, or a
                source quote given for a quote
            DocumentNumberConflictError: Manual number malformed or taken
        """
        if request.source_number and request.kind is not DocumentKind.INVOICE:
            raise ValidationError(
                field="source_number",
                message="Only invoices can be converted from a quote",
                value=request.source_number,
            )

        with document_context(
            document_kind=request.kind.value, currency=request.currency
        ):
            logger.info(
                "issue_document_started",
                lines=len(request.lines),
                manual_number=request.number is not None,
            )

            calculation = self._get_calculate_totals().calculate_request(
                request, validate_inputs=True
            )

            allocator = self._get_allocator()
            if request.number:
                allocator.claim_number(request.kind, request.number)
                number = request.number
            else:
                number = allocator.next_number(request.kind)

            document = IssuedDocument(
                number=number,
                kind=request.kind,
                currency=calculation.currency,
                pricing_mode=calculation.totals.pricing_mode,
                lines=tuple(calculation.lines),
                document_discount=(
                    request.document_discount.to_entity()
                    if request.document_discount
                    else None
                ),
                deposit_request=(
                    request.deposit_request.to_entity()
                    if request.deposit_request
                    else None
                ),
                paid_cents=request.paid_cents,
                totals=calculation.totals,
                source_number=request.source_number,
            )

            logger.info(
                "document_issued",
                number=number,
                total_cents=document.totals.total_cents,
                source_number=request.source_number,
            )

        return IssueDocumentResult(document=document)

    def to_response(self, result: IssueDocumentResult) -> IssuedDocumentResponse:
        """Convert result to API response."""
        doc = result.document
        return IssuedDocumentResponse(
            number=doc.number,
            kind=doc.kind,
            currency=doc.currency,
            source_number=doc.source_number,
            line_count=len(doc.lines),
            totals=DocumentTotalsResponse.from_entity(doc.totals, doc.currency),
            issued_at=doc.issued_at,
        )
