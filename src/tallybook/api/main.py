"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tallybook.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from tallybook.api.middleware.error_handler import setup_exception_handlers
from tallybook.api.routes import (
    documents_router,
    health_router,
    tax_router,
    totals_router,
)
from tallybook.config import configure_logging, get_logger, get_settings
from tallybook.core.entities import DocumentKind

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Configures logging and warms the service singletons on startup.
    """
    configure_logging()
    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
    )

    from tallybook.application.services import get_totals_engine
    from tallybook.infrastructure.numbering import get_sequence_allocator

    engine = get_totals_engine()
    allocator = get_sequence_allocator()
    logger.info(
        "application_started",
        pricing_mode=engine.pricing_mode.value,
        currency=settings.totals.default_currency,
        next_invoice=allocator.peek_next_number(DocumentKind.INVOICE),
        next_quote=allocator.peek_next_number(DocumentKind.QUOTE),
    )

    yield

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Tallybook Totals API",
        description="Quote and invoice totals, tax breakdown, deposits and numbering",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(totals_router)
    app.include_router(documents_router)
    app.include_router(tax_router)

    return app


# Create app instance
app = create_app()


# Root health endpoint (for k8s/docker health checks)
@app.get("/health")
async def root_health() -> dict[str, str]:
    """Simple health check at root level."""
    return {
        "status": "healthy",
        "version": get_settings().app_version,
    }


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "tallybook.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
