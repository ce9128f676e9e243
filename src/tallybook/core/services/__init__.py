"""
Core business logic services.

Layer-pure services that depend only on:
- tallybook/core/entities/*
- tallybook/core/interfaces/*
- tallybook/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from tallybook.core.services.document_validator import DocumentValidator
from tallybook.core.services.line_calculator import calculate_line, calculate_line_discount
from tallybook.core.services.tax_resolver import TaxResolverService
from tallybook.core.services.totals_engine import (
    TotalsEngine,
    calculate_deposit_amount,
    calculate_document_discount,
    calculate_document_totals,
    group_taxes,
)

__all__ = [
    # Totals engine
    "TotalsEngine",
    "calculate_line",
    "calculate_line_discount",
    "calculate_document_totals",
    "calculate_document_discount",
    "calculate_deposit_amount",
    "group_taxes",
    # Validation
    "DocumentValidator",
    # Tax resolution
    "TaxResolverService",
]
