"""SQL-backed product store.

Persists products through SQLAlchemy. Uniqueness is enforced by the
``sku`` unique constraint, and every primitive runs in its own
transaction, so create's check-then-insert and update's merge-then-write
are never split across transactions.

SQLite connections are not safe to share between threads, and an
in-memory database lives on a single shared connection, so SQLite-backed
stores serialize their primitives under a lock.
"""

import threading
from contextlib import nullcontext
from datetime import datetime, timezone

from sqlalchemy import Engine, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from product_catalog.catalog.exceptions import (
    ProductAlreadyExistsError,
    ProductNotFoundError,
)
from product_catalog.catalog.models import Product, ProductPatch, utcnow
from product_catalog.catalog.store import ProductStore
from product_catalog.infrastructure.database import (
    Base,
    build_engine,
    build_session_factory,
)
from product_catalog.infrastructure.models import ProductModel


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_product(row: ProductModel) -> Product:
    return Product(
        sku=row.sku,
        title=row.title,
        description=row.description,
        qty=row.qty,
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )


class SqlProductStore(ProductStore):
    """Product store backed by a relational database.

    Example usage:
        store = SqlProductStore.from_url("sqlite://")
        store.create(Product(sku="sku-1", title="t", description="d", qty=1))
        products = store.list()
    """

    name = "sql"

    def __init__(self, engine: Engine, create_schema: bool = True) -> None:
        """Initialize store with an engine.

        Args:
            engine: SQLAlchemy engine.
            create_schema: Create the products table if missing.
        """
        self.engine = engine
        self._session_factory: sessionmaker = build_session_factory(engine)
        self._lock = threading.Lock() if engine.dialect.name == "sqlite" else nullcontext()
        if create_schema:
            Base.metadata.create_all(engine)

    @classmethod
    def from_url(cls, database_url: str, echo: bool = False) -> "SqlProductStore":
        """Build a store for a database URL."""
        return cls(build_engine(database_url, echo=echo))

    def _get_row(self, session: Session, sku: str, for_update: bool = False) -> ProductModel:
        query = select(ProductModel).where(ProductModel.sku == sku)
        if for_update:
            query = query.with_for_update()
        row = session.execute(query).scalar_one_or_none()
        if row is None:
            raise ProductNotFoundError(sku)
        return row

    def create(self, product: Product) -> Product:
        row = ProductModel(
            sku=product.sku,
            title=product.title,
            description=product.description,
            qty=product.qty,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )
        with self._lock:
            try:
                with self._session_factory.begin() as session:
                    session.add(row)
                    session.flush()
                    return _to_product(row)
            except IntegrityError:
                raise ProductAlreadyExistsError(product.sku) from None

    def get(self, sku: str) -> Product:
        with self._lock, self._session_factory() as session:
            return _to_product(self._get_row(session, sku))

    def update(self, sku: str, patch: ProductPatch) -> Product:
        with self._lock, self._session_factory.begin() as session:
            row = self._get_row(session, sku, for_update=True)
            merged = patch.apply(_to_product(row), now=utcnow())
            row.title = merged.title
            row.description = merged.description
            row.qty = merged.qty
            row.updated_at = merged.updated_at
            session.flush()
            return _to_product(row)

    def delete(self, sku: str) -> Product:
        with self._lock, self._session_factory.begin() as session:
            row = self._get_row(session, sku, for_update=True)
            removed = _to_product(row)
            session.delete(row)
            return removed

    def count(self) -> int:
        with self._lock, self._session_factory() as session:
            return session.execute(select(func.count(ProductModel.position))).scalar_one()

    def close(self) -> None:
        self.engine.dispose()

    def list(self) -> list[Product]:
        with self._lock, self._session_factory() as session:
            rows = session.execute(
                select(ProductModel).order_by(ProductModel.position.asc())
            ).scalars()
            return [_to_product(row) for row in rows]
