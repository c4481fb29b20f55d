"""Product Catalog core.

Stores, pagination arithmetic, and the catalog service that enforces
SKU uniqueness and merge-patch updates.
"""

from product_catalog.catalog.exceptions import (
    CatalogError,
    InvalidProductError,
    ProductAlreadyExistsError,
    ProductNotFoundError,
)
from product_catalog.catalog.models import Product, ProductPatch
from product_catalog.catalog.pagination import (
    PageWindow,
    PaginationRequest,
    PaginationResult,
    paginate,
)
from product_catalog.catalog.repository import SqlProductStore
from product_catalog.catalog.service import CatalogService, ServiceResult
from product_catalog.catalog.store import InMemoryProductStore, ProductStore

__all__ = [
    # Errors
    "CatalogError",
    "InvalidProductError",
    "ProductAlreadyExistsError",
    "ProductNotFoundError",
    # Models
    "Product",
    "ProductPatch",
    # Pagination
    "PageWindow",
    "PaginationRequest",
    "PaginationResult",
    "paginate",
    # Stores
    "InMemoryProductStore",
    "ProductStore",
    "SqlProductStore",
    # Service
    "CatalogService",
    "ServiceResult",
]
