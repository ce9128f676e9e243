"""
Error handling for the totals API.

Every failure leaves the API as an ErrorResponse body: a machine-readable
``error_code``, the message, a recovery hint and, for domain errors, the
offending values in ``details`` (line index, deposit and total cents, the
conflicting number).
"""

import traceback
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from tallybook.application.dto.responses import ErrorResponse
from tallybook.config import get_logger
from tallybook.core.exceptions import (
    ConfigurationError,
    NumberingError,
    TallybookError,
    ValidationError,
)

logger = get_logger(__name__)


# Checked in order; the first matching base class wins
DOMAIN_STATUS: tuple[tuple[type[Exception], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NumberingError, status.HTTP_409_CONFLICT),
    (ConfigurationError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (ValueError, status.HTTP_400_BAD_REQUEST),
)

ERROR_HINTS: dict[str, str] = {
    "NEGATIVE_QUANTITY_OR_PRICE": "Quantities must be greater than 0 and unit prices cannot be negative.",
    "INVALID_DISCOUNT_RANGE": "Percent discounts must be 0-100; fixed discounts cannot exceed the amount they reduce.",
    "INVALID_DEPOSIT_AMOUNT": "The deposit must be greater than zero and no more than the document total.",
    "DOCUMENT_NUMBER_CONFLICT": "Use GET /api/documents/numbers/{kind}/next for an available number, or omit the number.",
    "VALIDATION_ERROR": "Check the request body fields and types against /docs.",
    "NOT_FOUND": "Available routes live under /api/totals, /api/documents and /api/tax.",
    "ConfigurationError": "Check the TOTALS_*, NUMBERING_* and TAX_* environment settings.",
}

FALLBACK_HINT = "Check the request and try again."


def status_for(exc: Exception) -> int:
    """HTTP status for an exception raised while handling a request."""
    for exc_type, code in DOMAIN_STATUS:
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_json(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: dict[str, Any] | None = None,
    detail: str | None = None,
) -> JSONResponse:
    """Build the ErrorResponse body shared by the middleware and handlers."""
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=ERROR_HINTS.get(error_code, FALLBACK_HINT),
        detail=detail,
        details=details or None,
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turns exceptions escaping a route into ErrorResponse bodies."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return self._to_response(request, exc)

    def _to_response(self, request: Request, exc: Exception) -> JSONResponse:
        status_code = status_for(exc)

        if isinstance(exc, TallybookError):
            error_code, message, details = exc.code, exc.message, exc.details
        else:
            error_code, message, details = exc.__class__.__name__, str(exc), None

        if status_code >= 500:
            logger.error(
                "request_error",
                path=request.url.path,
                error_code=error_code,
                error=message,
                traceback=traceback.format_exc(),
            )
        else:
            # Rejected documents are expected traffic
            logger.warning(
                "document_rejected",
                path=request.url.path,
                error_code=error_code,
                error=message,
                details=details or None,
            )

        return error_json(request, status_code, error_code, message, details)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register handlers for errors FastAPI raises before a route runs."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = [
            f"{' -> '.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        return error_json(
            request,
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "VALIDATION_ERROR",
            "Request validation failed",
            detail="; ".join(errors),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        error_code = {
            status.HTTP_404_NOT_FOUND: "NOT_FOUND",
            status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
        }.get(exc.status_code, "HTTP_ERROR")
        return error_json(
            request,
            exc.status_code,
            error_code,
            str(exc.detail) if exc.detail else "An error occurred",
        )
