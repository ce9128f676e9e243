"""API middleware."""

from tallybook.api.middleware.error_handler import ErrorHandlerMiddleware
from tallybook.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
