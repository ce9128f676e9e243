"""Data transfer objects for the API boundary."""

from tallybook.application.dto.requests import (
    CalculateLineRequest,
    CalculateTotalsRequest,
    CustomerTaxProfileRequest,
    DepositConfigRequest,
    DocumentDiscountRequest,
    DocumentInputRequest,
    IssueDocumentRequest,
    LineDiscountRequest,
    LineItemRequest,
    ResolveTaxRequest,
    TaxTreatmentRequest,
)
from tallybook.application.dto.responses import (
    DocumentTotalsResponse,
    ErrorResponse,
    HealthResponse,
    IssuedDocumentResponse,
    LineCalculationResponse,
    NextNumberResponse,
    TaxGroupResponse,
    TaxResolutionResponse,
)

__all__ = [
    # Requests
    "LineItemRequest",
    "LineDiscountRequest",
    "TaxTreatmentRequest",
    "DocumentDiscountRequest",
    "DocumentInputRequest",
    "DepositConfigRequest",
    "CalculateLineRequest",
    "CalculateTotalsRequest",
    "IssueDocumentRequest",
    "CustomerTaxProfileRequest",
    "ResolveTaxRequest",
    # Responses
    "HealthResponse",
    "ErrorResponse",
    "LineCalculationResponse",
    "TaxGroupResponse",
    "DocumentTotalsResponse",
    "IssuedDocumentResponse",
    "NextNumberResponse",
    "TaxResolutionResponse",
]
