"""Catalog exceptions.

Errors raised by product stores and model constructors. The catalog
service converts the lookup and uniqueness errors into failure results,
so they never escape to the HTTP layer as faults.
"""

from typing import Any


class CatalogError(Exception):
    """Base class for all catalog exceptions."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize catalog error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ProductAlreadyExistsError(CatalogError):
    """Raised when creating a product whose SKU is already stored."""

    def __init__(self, sku: str) -> None:
        super().__init__(
            f"Product with sku: {sku} already exist!",
            details={"sku": sku},
        )
        self.sku = sku


class ProductNotFoundError(CatalogError):
    """Raised when no product is stored under a SKU."""

    def __init__(self, sku: str) -> None:
        super().__init__(
            f"Product with sku: {sku} doesn't exist!",
            details={"sku": sku},
        )
        self.sku = sku


class InvalidProductError(CatalogError):
    """Raised when product fields violate model invariants."""

    def __init__(self, field: str, value: Any, reason: str) -> None:
        """Initialize invalid product error.

        Args:
            field: Name of the offending field.
            value: The rejected value.
            reason: Explanation of why the value is invalid.
        """
        super().__init__(
            f"Invalid {field} {value!r}: {reason}",
            details={"field": field, "value": value, "reason": reason},
        )
