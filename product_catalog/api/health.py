"""Health check endpoints.

Provides endpoints for monitoring service health and readiness.
"""

from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    service: str
    version: str
    store: str
    product_count: int


@router.get("/health", response_model=HealthResponse)
def health_check(request: Request) -> HealthResponse:
    """Check service health.

    Returns:
        Health status with service name, version and store summary.
    """
    settings = request.app.state.settings
    store = request.app.state.catalog_service.store

    return HealthResponse(
        status="healthy",
        service=settings.service_name,
        version=settings.api_version,
        store=store.name,
        product_count=store.count(),
    )


@router.get("/ready")
def readiness_check(request: Request) -> dict[str, str]:
    """Check if service is ready to accept requests.

    Returns:
        Readiness status.
    """
    # Touching the store surfaces database connectivity problems.
    request.app.state.catalog_service.store.count()
    return {"status": "ready"}
