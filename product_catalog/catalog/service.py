"""Catalog service for product operations.

High-level service that combines store primitives with the catalog's
business rules and turns store errors into failure results.
"""

from dataclasses import dataclass, field

import structlog

from product_catalog.catalog.exceptions import (
    CatalogError,
    ProductAlreadyExistsError,
    ProductNotFoundError,
)
from product_catalog.catalog.models import Product, ProductPatch
from product_catalog.catalog.pagination import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    PaginationRequest,
    PaginationResult,
    paginate,
)
from product_catalog.catalog.store import ProductStore

logger = structlog.get_logger()

LIST_MESSAGE = "Showing available products"


@dataclass
class ServiceResult:
    """Outcome of a catalog operation.

    Attributes:
        status: Whether the operation succeeded.
        message: Human-readable outcome message.
        product: Affected product, for single-product operations.
        products: Selected page, for listings.
        pagination: Page metadata, for listings.
        error: The caught error when ``status`` is False.
    """

    status: bool
    message: str
    product: Product | None = None
    products: list[Product] = field(default_factory=list)
    pagination: PaginationResult | None = None
    error: CatalogError | None = None

    @classmethod
    def failure(cls, error: CatalogError) -> "ServiceResult":
        return cls(status=False, message=error.message, error=error)


class CatalogService:
    """Service for catalog operations.

    Example usage:
        service = CatalogService(InMemoryProductStore())
        result = service.create_product(
            Product(sku="sku-1", title="Mug", description="Blue", qty=3)
        )
        assert result.status
    """

    def __init__(self, store: ProductStore) -> None:
        """Initialize service with a product store.

        Args:
            store: Store owning the product collection.
        """
        self.store = store

    def create_product(self, product: Product) -> ServiceResult:
        """Create a product unless its SKU is taken.

        Args:
            product: Product to create.

        Returns:
            Success with the stored product, or a conflict failure.
        """
        try:
            created = self.store.create(product)
        except ProductAlreadyExistsError as e:
            logger.warning("Product already exists", sku=product.sku)
            return ServiceResult.failure(e)

        logger.info("Product created", sku=created.sku, qty=created.qty)
        return ServiceResult(
            status=True,
            message=f"Product with sku: {created.sku} created successfully!",
            product=created,
        )

    def get_product(self, sku: str) -> ServiceResult:
        """Get a product by SKU.

        Args:
            sku: Product SKU.

        Returns:
            Success with the product, or a not-found failure.
        """
        try:
            product = self.store.get(sku)
        except ProductNotFoundError as e:
            logger.warning("Product not found", sku=sku, operation="get")
            return ServiceResult.failure(e)

        return ServiceResult(
            status=True,
            message=f"Showing product with sku: {sku}",
            product=product,
        )

    def update_product(self, sku: str, patch: ProductPatch) -> ServiceResult:
        """Merge a partial update into a product.

        Args:
            sku: Product SKU.
            patch: Fields to overwrite.

        Returns:
            Success with the merged product, or a not-found failure.
        """
        try:
            updated = self.store.update(sku, patch)
        except ProductNotFoundError as e:
            logger.warning("Product not found", sku=sku, operation="update")
            return ServiceResult.failure(e)

        logger.info("Product updated", sku=sku, fields=sorted(patch.fields))
        return ServiceResult(
            status=True,
            message=f"Product with sku: {sku} updated!",
            product=updated,
        )

    def delete_product(self, sku: str) -> ServiceResult:
        """Delete a product.

        Args:
            sku: Product SKU.

        Returns:
            Success, or a not-found failure.
        """
        try:
            self.store.delete(sku)
        except ProductNotFoundError as e:
            logger.warning("Product not found", sku=sku, operation="delete")
            return ServiceResult.failure(e)

        logger.info("Product deleted", sku=sku)
        return ServiceResult(status=True, message=f"Product with sku: {sku} deleted!")

    def list_products(
        self,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> ServiceResult:
        """List one page of products in insertion order.

        Args:
            page: Page number (1-indexed).
            page_size: Items per page.

        Returns:
            Success with the page's products and pagination metadata.
        """
        products = self.store.list()
        window = paginate(len(products), page, page_size)

        return ServiceResult(
            status=True,
            message=LIST_MESSAGE,
            products=window.slice(products),
            pagination=window.result,
        )

    def list_page(self, request: PaginationRequest) -> ServiceResult:
        """List products for a parsed pagination request."""
        return self.list_products(page=request.page, page_size=request.page_size)
