"""Product Catalog API main application module.

This module builds the FastAPI application and wires the catalog
service, middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from product_catalog.api.health import router as health_router
from product_catalog.api.middleware import setup_middleware
from product_catalog.api.products import router as products_router
from product_catalog.api.schemas import ErrorResponse
from product_catalog.catalog.repository import SqlProductStore
from product_catalog.catalog.service import CatalogService
from product_catalog.catalog.store import InMemoryProductStore, ProductStore
from product_catalog.infrastructure.config import Settings, settings as default_settings
from product_catalog.infrastructure.logging_config import configure_logging

logger = structlog.get_logger()


def build_store(settings: Settings) -> ProductStore:
    """Create the product store selected by configuration."""
    if settings.uses_database:
        return SqlProductStore.from_url(settings.database_url, echo=settings.debug)
    return InMemoryProductStore()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    store = app.state.catalog_service.store
    logger.info(
        "Starting Product Catalog API",
        version=app.state.settings.api_version,
        store=store.name,
    )

    yield

    store.close()
    logger.info("Shutting down Product Catalog API")


# ============================================================================
# Exception Handlers
# ============================================================================


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation errors in the failure envelope."""
    details = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())),
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    logger.warning(
        "Request validation failed",
        path=request.url.path,
        method=request.method,
        errors=len(details),
    )
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(
            message="Invalid request",
            details=details,
            request_id=getattr(request.state, "request_id", None),
        ).model_dump(),
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Handle HTTP exceptions with consistent format."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            message=str(exc.detail),
            request_id=getattr(request.state, "request_id", None),
        ).model_dump(),
        headers=getattr(exc, "headers", None),
    )


# ============================================================================
# Application Factory
# ============================================================================


def create_app(
    settings: Settings | None = None,
    store: ProductStore | None = None,
) -> FastAPI:
    """Build a Product Catalog application.

    Each application owns its own store, so separate instances never
    share products.

    Args:
        settings: Settings to use (defaults to environment settings).
        store: Store to use (defaults to the one selected by settings).

    Returns:
        Configured FastAPI application.
    """
    settings = settings or default_settings
    configure_logging(settings.log_level, json_logs=settings.log_json)

    app = FastAPI(
        title="Product Catalog API",
        description="SKU-keyed product catalog with pagination",
        version=settings.api_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.catalog_service = CatalogService(store or build_store(settings))

    setup_middleware(app)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    app.include_router(health_router, tags=["Health"])
    app.include_router(products_router)

    return app


app = create_app()
