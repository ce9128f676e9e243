"""Document issuing and numbering endpoints."""

from fastapi import APIRouter, Depends, status

from tallybook.api.dependencies import get_allocator, get_issue_document_use_case
from tallybook.application.dto.requests import IssueDocumentRequest
from tallybook.application.dto.responses import (
    ErrorResponse,
    IssuedDocumentResponse,
    NextNumberResponse,
)
from tallybook.application.use_cases.issue_document import IssueDocumentUseCase
from tallybook.core.entities import DocumentKind
from tallybook.core.interfaces import ISequenceAllocator

router = APIRouter(prefix="/api/documents", tags=["documents"])


@router.post(
    "/issue",
    response_model=IssuedDocumentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def issue_document(
    request: IssueDocumentRequest,
    use_case: IssueDocumentUseCase = Depends(get_issue_document_use_case),
) -> IssuedDocumentResponse:
    """
    Issue a quote or invoice.

    Totals are calculated and frozen; a number is allocated unless one is
    supplied, in which case it must be well-formed and unused.
    """
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("/numbers/{kind}/next", response_model=NextNumberResponse)
async def peek_next_number(
    kind: DocumentKind,
    allocator: ISequenceAllocator = Depends(get_allocator),
) -> NextNumberResponse:
    """Preview the next number without consuming it."""
    return NextNumberResponse(kind=kind, number=allocator.peek_next_number(kind))
