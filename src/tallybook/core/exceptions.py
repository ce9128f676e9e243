"""
Domain exceptions for tallybook.

The totals engine itself never raises these. They belong to the calling
layer, which rejects invalid configurations before they reach the engine.
"""

from typing import Any


class TallybookError(Exception):
    """Base exception for all tallybook errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(TallybookError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class InvalidDiscountRangeError(ValidationError):
    """Percent discount outside [0, 100] or fixed discount larger than its base."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(field=field, message=message, value=value)
        self.code = "INVALID_DISCOUNT_RANGE"


class InvalidDepositAmountError(ValidationError):
    """Computed deposit is not within (0, total]."""

    def __init__(self, message: str, deposit_cents: int, total_cents: int):
        super().__init__(field="deposit_request", message=message, value=deposit_cents)
        self.code = "INVALID_DEPOSIT_AMOUNT"
        self.details.update(
            {
                "deposit_cents": deposit_cents,
                "total_cents": total_cents,
            }
        )


class NegativeQuantityOrPriceError(ValidationError):
    """Line quantity or unit price out of range."""

    def __init__(self, field: str, message: str, value: Any = None, line_index: int | None = None):
        super().__init__(field=field, message=message, value=value)
        self.code = "NEGATIVE_QUANTITY_OR_PRICE"
        if line_index is not None:
            self.details["line_index"] = line_index


# Numbering Exceptions
class NumberingError(TallybookError):
    """Base exception for document number allocation."""

    pass


class DocumentNumberConflictError(NumberingError):
    """Requested document number has already been issued or is malformed."""

    def __init__(self, kind: str, number: str):
        super().__init__(
            f"Document number '{number}' is not available for {kind}",
            code="DOCUMENT_NUMBER_CONFLICT",
            details={"kind": kind, "number": number},
        )


class ConfigurationError(TallybookError):
    """Configuration error."""

    pass
