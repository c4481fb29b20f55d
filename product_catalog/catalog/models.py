"""Catalog value types.

Products are immutable values; updates produce new instances through
``ProductPatch.apply``.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from product_catalog.catalog.exceptions import InvalidProductError


def utcnow() -> datetime:
    """Current UTC time."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Product:
    """A catalog product keyed by SKU.

    Attributes:
        sku: Stock keeping unit, unique and immutable.
        title: Product title.
        description: Product description.
        qty: Available quantity (non-negative).
        created_at: When the product was created.
        updated_at: When the product was last changed.
    """

    sku: str
    title: str
    description: str
    qty: int
    created_at: datetime = field(default_factory=utcnow, compare=False)
    updated_at: datetime = field(default_factory=utcnow, compare=False)

    def __post_init__(self) -> None:
        if not self.sku:
            raise InvalidProductError("sku", self.sku, "SKU must not be empty")
        if self.qty < 0:
            raise InvalidProductError("qty", self.qty, "Quantity cannot be negative")

    def to_summary(self) -> dict[str, str | int]:
        """Core fields only, without timestamps."""
        return {
            "sku": self.sku,
            "title": self.title,
            "description": self.description,
            "qty": self.qty,
        }


@dataclass(frozen=True)
class ProductPatch:
    """Partial update for a product.

    Fields left as ``None`` are absent and keep their stored value. There
    is no ``sku`` field, so a patch can never re-key a product.
    """

    title: str | None = None
    description: str | None = None
    qty: int | None = None

    @property
    def fields(self) -> dict[str, str | int]:
        """Fields present in this patch."""
        present = {
            "title": self.title,
            "description": self.description,
            "qty": self.qty,
        }
        return {name: value for name, value in present.items() if value is not None}

    def is_empty(self) -> bool:
        return not self.fields

    def apply(self, product: Product, now: datetime | None = None) -> Product:
        """Merge this patch over a product.

        Args:
            product: Current stored product.
            now: Timestamp for ``updated_at`` (defaults to current time).

        Returns:
            New product with present fields overwritten.
        """
        return replace(product, **self.fields, updated_at=now or utcnow())
