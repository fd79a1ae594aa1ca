"""
Middleware and exception handlers for the FastAPI application.

CORS setup plus the mapping from domain exceptions to HTTP responses.
Extracted from main.py to keep app factory slim.
Version: 1.0.0
"""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from autoparts_hub.core.config import settings
from autoparts_hub.core.exceptions import (
    CatalogFetchFailed,
    InvalidLineInput,
    OrderNotFoundError,
    PersistenceFailure,
    ProductNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def apply_cors(app: FastAPI) -> None:
    """Apply CORS middleware with the configured origins."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        # Credentials cannot be combined with a wildcard origin
        allow_credentials="*" not in settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _error(status_code: int, code: str, message: str, retryable: bool = False) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": {"code": code, "message": message, "retryable": retryable}},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Translate domain exceptions raised inside routes into JSON errors."""

    @app.exception_handler(InvalidLineInput)
    async def _invalid_line(request: Request, exc: InvalidLineInput):
        return _error(422, "INVALID_LINE_INPUT", str(exc))

    @app.exception_handler(ValidationError)
    async def _validation(request: Request, exc: ValidationError):
        return _error(422, "VALIDATION_ERROR", str(exc))

    @app.exception_handler(ProductNotFoundError)
    async def _product_not_found(request: Request, exc: ProductNotFoundError):
        return _error(404, "PRODUCT_NOT_FOUND", str(exc))

    @app.exception_handler(OrderNotFoundError)
    async def _order_not_found(request: Request, exc: OrderNotFoundError):
        return _error(404, "ORDER_NOT_FOUND", str(exc))

    @app.exception_handler(PersistenceFailure)
    async def _persistence(request: Request, exc: PersistenceFailure):
        logger.error(f"Persistence failure on {request.url.path}: {exc}")
        return _error(503, "PERSISTENCE_FAILURE", str(exc), retryable=True)

    @app.exception_handler(CatalogFetchFailed)
    async def _catalog(request: Request, exc: CatalogFetchFailed):
        logger.warning(f"Catalog unavailable on {request.url.path}: {exc}")
        return _error(503, "CATALOG_FETCH_FAILED", str(exc), retryable=True)
