"""
Dependency injection container for FastAPI.

Provides service instances to route handlers.
"""

from tallybook.application.use_cases import (
    CalculateTotalsUseCase,
    IssueDocumentUseCase,
    ResolveTaxUseCase,
)
from tallybook.config import Settings, get_settings
from tallybook.core.interfaces import ISequenceAllocator
from tallybook.infrastructure.numbering import get_sequence_allocator


def get_app_settings() -> Settings:
    """Get application settings."""
    return get_settings()


def get_allocator() -> ISequenceAllocator:
    """Get document number allocator."""
    return get_sequence_allocator()


# Use case dependencies
def get_calculate_totals_use_case() -> CalculateTotalsUseCase:
    """Get calculate totals use case."""
    return CalculateTotalsUseCase()


def get_issue_document_use_case() -> IssueDocumentUseCase:
    """Get issue document use case."""
    return IssueDocumentUseCase(allocator=get_sequence_allocator())


def get_resolve_tax_use_case() -> ResolveTaxUseCase:
    """Get resolve tax use case."""
    return ResolveTaxUseCase()
