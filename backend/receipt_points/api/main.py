"""Entry point for the FastAPI application.

This module constructs the FastAPI app, attaches a fresh in-memory
receipt store, includes the receipts router and sets up the startup
and shutdown hooks. When run with uvicorn it loads configuration from
``receipt_points.core.config``.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from receipt_points.api.error_handlers import (
    InvalidReceiptError,
    generic_exception_handler,
    invalid_receipt_handler,
    validation_exception_handler,
)
from receipt_points.api.routes.receipts import router as receipts_router
from receipt_points.core.config import Settings, settings as default_settings
from receipt_points.core.observability import init_sentry
from receipt_points.services.receipt_store import ReceiptStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle."""
    # Startup
    logger.info("Starting up...")
    if init_sentry("api", app.state.settings):
        logger.info("Sentry SDK initialized (api)")
    yield
    # Shutdown
    logger.info("Shutting down with %d receipt(s) in memory", len(app.state.receipt_store))


def _cors_origins(settings: Settings) -> list[str]:
    """CORS configuration.

    In development allow all ( * ). Otherwise use BACKEND_CORS_ORIGINS,
    deduplicated while preserving order.
    """
    if settings.is_development:
        return ["*"]
    seen: set[str] = set()
    return [o for o in settings.BACKEND_CORS_ORIGINS if not (o in seen or seen.add(o))]


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build a FastAPI app with its own empty receipt store."""
    settings = settings or default_settings
    logging.basicConfig(level=settings.LOG_LEVEL.upper())

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.receipt_store = ReceiptStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(settings),
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Register custom exception handlers
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(InvalidReceiptError, invalid_receipt_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    app.include_router(receipts_router)
    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    uvicorn.run(
        "receipt_points.api.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        log_level=default_settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":  # pragma: no cover
    run()
