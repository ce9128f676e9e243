"""API route modules."""

from tallybook.api.routes.documents import router as documents_router
from tallybook.api.routes.health import router as health_router
from tallybook.api.routes.tax import router as tax_router
from tallybook.api.routes.totals import router as totals_router

__all__ = [
    "health_router",
    "totals_router",
    "documents_router",
    "tax_router",
]
