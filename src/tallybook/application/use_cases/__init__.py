"""Application use cases."""

from tallybook.application.use_cases.calculate_totals import (
    CalculateTotalsResult,
    CalculateTotalsUseCase,
)
from tallybook.application.use_cases.issue_document import (
    IssueDocumentResult,
    IssueDocumentUseCase,
)
from tallybook.application.use_cases.resolve_tax import (
    ResolveTaxResult,
    ResolveTaxUseCase,
)

__all__ = [
    "CalculateTotalsUseCase",
    "CalculateTotalsResult",
    "IssueDocumentUseCase",
    "IssueDocumentResult",
    "ResolveTaxUseCase",
    "ResolveTaxResult",
]
