"""Product API endpoints.

Thin HTTP shell over the catalog service: parses requests, wraps
service results in the ``{status, message, ...}`` envelope, and maps
failure kinds to HTTP status codes.

Handlers are plain ``def`` functions because store calls are blocking;
FastAPI runs them in its threadpool.
"""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, Query, Request, status
from fastapi.responses import JSONResponse

from product_catalog.api.schemas import (
    MessageResponse,
    PaginationSchema,
    ProductCreateRequest,
    ProductListResponse,
    ProductResponse,
    ProductSchema,
    ProductSummarySchema,
    ProductUpdateRequest,
)
from product_catalog.catalog.exceptions import (
    ProductAlreadyExistsError,
    ProductNotFoundError,
)
from product_catalog.catalog.pagination import PaginationRequest
from product_catalog.catalog.service import CatalogService, ServiceResult

router = APIRouter(prefix="/products", tags=["Products"])

ERROR_STATUS_CODES = {
    ProductAlreadyExistsError: status.HTTP_409_CONFLICT,
    ProductNotFoundError: status.HTTP_404_NOT_FOUND,
}


# ============================================================================
# Dependencies
# ============================================================================


def get_catalog_service(request: Request) -> CatalogService:
    """Get the catalog service owned by the application."""
    return request.app.state.catalog_service


CatalogDep = Annotated[CatalogService, Depends(get_catalog_service)]


# ============================================================================
# Converters
# ============================================================================


def failure_response(result: ServiceResult) -> JSONResponse:
    """Convert a failed service result to an error envelope."""
    status_code = ERROR_STATUS_CODES.get(
        type(result.error), status.HTTP_400_BAD_REQUEST
    )
    return JSONResponse(
        status_code=status_code,
        content=MessageResponse(status=False, message=result.message).model_dump(),
    )


def product_response(result: ServiceResult) -> ProductResponse:
    """Convert a successful single-product result."""
    return ProductResponse(
        status=True,
        message=result.message,
        product=ProductSchema.from_product(result.product),
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": MessageResponse}},
)
def create_product(
    request: ProductCreateRequest,
    service: CatalogDep,
) -> ProductResponse | JSONResponse:
    """Create a product.

    Returns:
        Created product, or 409 if the SKU is taken.
    """
    result = service.create_product(request.to_product())
    if not result.status:
        return failure_response(result)
    return product_response(result)


@router.get("", response_model=ProductListResponse)
@router.get("/", response_model=ProductListResponse, include_in_schema=False)
def list_products(
    service: CatalogDep,
    page: Annotated[str | None, Query(description="Page number (1-based)")] = None,
    size: Annotated[str | None, Query(description="Page size")] = None,
) -> ProductListResponse:
    """List products in insertion order.

    Absent or invalid ``page``/``size`` fall back to 1 and 100.

    Returns:
        One page of products with pagination metadata.
    """
    result = service.list_page(PaginationRequest.from_query(page=page, size=size))

    return ProductListResponse(
        status=True,
        message=result.message,
        products=[ProductSummarySchema.from_product(p) for p in result.products],
        pagination=PaginationSchema.from_result(result.pagination),
    )


@router.get(
    "/{sku:path}",
    response_model=ProductResponse,
    responses={404: {"model": MessageResponse}},
)
def get_product(sku: str, service: CatalogDep) -> ProductResponse | JSONResponse:
    """Get product by SKU."""
    result = service.get_product(sku)
    if not result.status:
        return failure_response(result)
    return product_response(result)


@router.put(
    "/{sku:path}",
    response_model=ProductResponse,
    responses={404: {"model": MessageResponse}},
)
def update_product(
    sku: str,
    service: CatalogDep,
    request: Annotated[ProductUpdateRequest | None, Body()] = None,
) -> ProductResponse | JSONResponse:
    """Merge the supplied fields into a product.

    A missing body is an empty patch.
    """
    patch = (request or ProductUpdateRequest()).to_patch()
    result = service.update_product(sku, patch)
    if not result.status:
        return failure_response(result)
    return product_response(result)


@router.delete(
    "/{sku:path}",
    response_model=MessageResponse,
    responses={404: {"model": MessageResponse}},
)
def delete_product(sku: str, service: CatalogDep) -> MessageResponse | JSONResponse:
    """Delete product by SKU."""
    result = service.delete_product(sku)
    if not result.status:
        return failure_response(result)
    return MessageResponse(status=True, message=result.message)
