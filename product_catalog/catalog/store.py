"""Product stores.

A store owns the product collection and its insertion order. Every
primitive is atomic from the caller's point of view: in particular the
existence check and the insert of ``create`` happen as one step.
"""

import threading
from abc import ABC, abstractmethod

from product_catalog.catalog.exceptions import (
    ProductAlreadyExistsError,
    ProductNotFoundError,
)
from product_catalog.catalog.models import Product, ProductPatch, utcnow


class ProductStore(ABC):
    """Interface shared by the in-memory and SQL-backed stores."""

    name: str = "abstract"

    @abstractmethod
    def create(self, product: Product) -> Product:
        """Insert a product at the end of the order.

        Raises:
            ProductAlreadyExistsError: If the SKU is already stored.
        """

    @abstractmethod
    def get(self, sku: str) -> Product:
        """Return the stored product.

        Raises:
            ProductNotFoundError: If the SKU is not stored.
        """

    @abstractmethod
    def update(self, sku: str, patch: ProductPatch) -> Product:
        """Merge a patch over the stored product and return the result.

        Raises:
            ProductNotFoundError: If the SKU is not stored.
        """

    @abstractmethod
    def delete(self, sku: str) -> Product:
        """Remove and return the stored product.

        Raises:
            ProductNotFoundError: If the SKU is not stored.
        """

    @abstractmethod
    def list(self) -> list[Product]:
        """Snapshot of all products in insertion order."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored products."""

    def close(self) -> None:
        """Release resources held by the store."""


class InMemoryProductStore(ProductStore):
    """Lock-guarded, insertion-ordered product store.

    Products are frozen dataclasses, so readers can hold on to returned
    instances while writers replace entries.
    """

    name = "memory"

    def __init__(self) -> None:
        self._products: dict[str, Product] = {}
        self._lock = threading.Lock()

    def create(self, product: Product) -> Product:
        with self._lock:
            if product.sku in self._products:
                raise ProductAlreadyExistsError(product.sku)
            self._products[product.sku] = product
            return product

    def get(self, sku: str) -> Product:
        with self._lock:
            try:
                return self._products[sku]
            except KeyError:
                raise ProductNotFoundError(sku) from None

    def update(self, sku: str, patch: ProductPatch) -> Product:
        with self._lock:
            current = self._products.get(sku)
            if current is None:
                raise ProductNotFoundError(sku)
            # Reassigning an existing key keeps its position in the dict.
            updated = patch.apply(current, now=utcnow())
            self._products[sku] = updated
            return updated

    def delete(self, sku: str) -> Product:
        with self._lock:
            try:
                return self._products.pop(sku)
            except KeyError:
                raise ProductNotFoundError(sku) from None

    def list(self) -> list[Product]:
        with self._lock:
            return list(self._products.values())

    def count(self) -> int:
        with self._lock:
            return len(self._products)
