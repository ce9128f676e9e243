"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services
3. Providing factory functions for dependency injection

Use cases are the only entry point for API handlers.
"""

from tallybook.application.dto import (
    CalculateLineRequest,
    CalculateTotalsRequest,
    DocumentTotalsResponse,
    ErrorResponse,
    HealthResponse,
    IssuedDocumentResponse,
    IssueDocumentRequest,
    LineCalculationResponse,
    ResolveTaxRequest,
    TaxResolutionResponse,
)
from tallybook.application.services import (
    get_company_tax_settings,
    get_document_validator,
    get_tax_resolver_service,
    get_totals_engine,
    reset_services,
)
from tallybook.application.use_cases import (
    CalculateTotalsUseCase,
    IssueDocumentUseCase,
    ResolveTaxUseCase,
)

__all__ = [
    # Request DTOs
    "CalculateLineRequest",
    "CalculateTotalsRequest",
    "IssueDocumentRequest",
    "ResolveTaxRequest",
    # Response DTOs
    "LineCalculationResponse",
    "DocumentTotalsResponse",
    "IssuedDocumentResponse",
    "TaxResolutionResponse",
    "HealthResponse",
    "ErrorResponse",
    # Services
    "get_totals_engine",
    "get_document_validator",
    "get_tax_resolver_service",
    "get_company_tax_settings",
    "reset_services",
    # Use cases
    "CalculateTotalsUseCase",
    "IssueDocumentUseCase",
    "ResolveTaxUseCase",
]
