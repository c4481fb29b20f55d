"""Tests for product stores.

Every test runs against both the in-memory and the SQL-backed store.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from product_catalog.catalog.exceptions import (
    ProductAlreadyExistsError,
    ProductNotFoundError,
)
from product_catalog.catalog.models import Product, ProductPatch
from product_catalog.catalog.store import ProductStore


def make_product(sku: str, qty: int = 1) -> Product:
    return Product(sku=sku, title=f"title {sku}", description=f"about {sku}", qty=qty)


class TestProductStore:
    """Behavior shared by every store implementation."""

    def test_create_and_get(self, store: ProductStore, product: Product) -> None:
        """Created product can be read back unchanged."""
        created = store.create(product)
        assert created == product
        assert store.get("sku-1").to_summary() == product.to_summary()

    def test_create_duplicate_raises_conflict(self, store: ProductStore, product: Product) -> None:
        """Second create with the same SKU fails and keeps the first."""
        store.create(product)
        with pytest.raises(ProductAlreadyExistsError) as exc_info:
            store.create(Product(sku="sku-1", title="other", description="other", qty=99))

        assert exc_info.value.sku == "sku-1"
        assert store.get("sku-1").title == "title-1"
        assert store.count() == 1

    def test_get_unknown_raises_not_found(self, store: ProductStore) -> None:
        """Unknown SKU raises ProductNotFoundError."""
        with pytest.raises(ProductNotFoundError):
            store.get("missing")

    def test_update_merges_fields(self, store: ProductStore, product: Product) -> None:
        """Update overwrites only present fields."""
        store.create(product)
        updated = store.update("sku-1", ProductPatch(qty=42))

        assert updated.to_summary() == {
            "sku": "sku-1",
            "title": "title-1",
            "description": "description-1",
            "qty": 42,
        }
        assert store.get("sku-1") == updated

    def test_update_refreshes_updated_at(self, store: ProductStore, product: Product) -> None:
        """Update keeps created_at and moves updated_at forward."""
        created = store.create(product)
        updated = store.update("sku-1", ProductPatch(title="new"))
        assert updated.created_at == created.created_at
        assert updated.updated_at >= created.updated_at

    def test_empty_update_keeps_fields(self, store: ProductStore, product: Product) -> None:
        """Empty patch succeeds and changes nothing."""
        store.create(product)
        assert store.update("sku-1", ProductPatch()) == product

    def test_update_unknown_raises_not_found(self, store: ProductStore) -> None:
        """Updating unknown SKU raises ProductNotFoundError."""
        with pytest.raises(ProductNotFoundError):
            store.update("missing", ProductPatch(qty=1))

    def test_update_keeps_position(self, store: ProductStore) -> None:
        """Updated product stays where it was inserted."""
        for sku in ("a", "b", "c"):
            store.create(make_product(sku))
        store.update("a", ProductPatch(title="changed"))

        assert [p.sku for p in store.list()] == ["a", "b", "c"]

    def test_delete_removes_product(self, store: ProductStore, product: Product) -> None:
        """Deleted product is gone."""
        store.create(product)
        removed = store.delete("sku-1")

        assert removed == product
        assert store.count() == 0
        with pytest.raises(ProductNotFoundError):
            store.get("sku-1")

    def test_delete_unknown_raises_not_found(self, store: ProductStore) -> None:
        """Deleting unknown SKU raises ProductNotFoundError."""
        with pytest.raises(ProductNotFoundError):
            store.delete("missing")

    def test_delete_is_terminal(self, store: ProductStore, product: Product) -> None:
        """After delete, SKU behaves as never created."""
        store.create(product)
        store.delete("sku-1")

        with pytest.raises(ProductNotFoundError):
            store.update("sku-1", ProductPatch(qty=1))
        with pytest.raises(ProductNotFoundError):
            store.delete("sku-1")

    def test_delete_preserves_order_of_rest(self, store: ProductStore) -> None:
        """Remaining products keep their relative order."""
        for sku in ("a", "b", "c", "d"):
            store.create(make_product(sku))
        store.delete("b")

        assert [p.sku for p in store.list()] == ["a", "c", "d"]

    def test_recreate_after_delete_appends(self, store: ProductStore) -> None:
        """A deleted SKU can be created again at the end."""
        for sku in ("a", "b", "c"):
            store.create(make_product(sku))
        store.delete("a")
        store.create(make_product("a", qty=7))

        assert [p.sku for p in store.list()] == ["b", "c", "a"]
        assert store.get("a").qty == 7

    def test_list_in_insertion_order(self, store: ProductStore) -> None:
        """List returns products in insertion order."""
        skus = [f"sku-{i}" for i in (3, 1, 2, 10)]
        for sku in skus:
            store.create(make_product(sku))

        assert [p.sku for p in store.list()] == skus

    def test_list_returns_fresh_snapshot(self, store: ProductStore) -> None:
        """Each list call is a new snapshot unaffected by later writes."""
        store.create(make_product("a"))
        snapshot = store.list()
        store.create(make_product("b"))

        assert [p.sku for p in snapshot] == ["a"]
        assert [p.sku for p in store.list()] == ["a", "b"]

    def test_empty_store(self, store: ProductStore) -> None:
        """New store is empty."""
        assert store.list() == []
        assert store.count() == 0


class TestStoreConcurrency:
    """Concurrency guarantees shared by every store implementation."""

    def test_concurrent_create_same_sku_has_one_winner(self, store: ProductStore) -> None:
        """Exactly one of many racing creates succeeds."""
        barrier = threading.Barrier(16)

        def attempt(i: int) -> bool:
            barrier.wait()
            try:
                store.create(Product(sku="race", title=str(i), description="", qty=i))
            except ProductAlreadyExistsError:
                return False
            return True

        with ThreadPoolExecutor(max_workers=16) as pool:
            outcomes = list(pool.map(attempt, range(16)))

        assert outcomes.count(True) == 1
        assert store.count() == 1
        winner = store.get("race")
        assert winner.title == str(winner.qty)

    def test_concurrent_create_distinct_skus_all_stored(self, store: ProductStore) -> None:
        """Racing creates of different SKUs are all kept."""
        barrier = threading.Barrier(8)

        def attempt(i: int) -> None:
            barrier.wait()
            store.create(make_product(f"sku-{i}", qty=i))

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(attempt, range(8)))

        assert store.count() == 8
        assert sorted(p.qty for p in store.list()) == list(range(8))

    def test_concurrent_updates_are_not_lost(self, store: ProductStore) -> None:
        """Interleaved single-field updates never clobber each other."""
        store.create(Product(sku="p", title="t0", description="d0", qty=0))

        def update(i: int) -> None:
            if i % 2:
                store.update("p", ProductPatch(title=f"t{i}"))
            else:
                store.update("p", ProductPatch(description=f"d{i}"))

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(update, range(1, 101)))

        final = store.get("p")
        assert final.title.startswith("t") and final.title != "t0"
        assert final.description.startswith("d") and final.description != "d0"
        assert final.qty == 0
