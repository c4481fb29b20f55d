"""SQLAlchemy models for database tables."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, Text

from product_catalog.infrastructure.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProductModel(Base):
    """Product row.

    ``position`` is an autoincrement surrogate key that records insertion
    order; ``sku`` carries the uniqueness constraint.
    """

    __tablename__ = "products"

    position = Column(Integer, primary_key=True, autoincrement=True)
    sku = Column(String, nullable=False, unique=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    qty = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    def __repr__(self) -> str:
        return f"<ProductModel(sku={self.sku!r}, qty={self.qty})>"
