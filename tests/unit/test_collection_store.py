"""Tests for the in-memory collection store."""

from decimal import Decimal

import pytest

from domain.models import Product
from infrastructure.persistence.memory_repository import CollectionStore, IdGenerator


def product(pid: int, name: str = "Pintura") -> Product:
    return Product(
        id=pid,
        name=name,
        description="",
        quantity=Decimal("1"),
        unit_price=Decimal("1"),
    )


@pytest.fixture
def store():
    return CollectionStore([product(1, "A"), product(2, "B"), product(3, "C")])


class TestCollectionStore:
    def test_keeps_seed_order(self, store) -> None:
        assert [p.id for p in store.all()] == [1, 2, 3]

    def test_create_appends(self, store) -> None:
        store.create(product(10, "D"))
        assert [p.id for p in store.all()] == [1, 2, 3, 10]
        assert store.count() == 4

    def test_update_replaces_in_place(self, store) -> None:
        assert store.update_by_id(2, product(2, "B2")) is True
        assert [p.name for p in store.all()] == ["A", "B2", "C"]

    def test_update_missing_id_is_noop(self, store) -> None:
        before = store.all()
        assert store.update_by_id(99, product(99, "X")) is False
        assert store.all() == before

    def test_delete(self, store) -> None:
        assert store.delete_by_id(2) is True
        assert 2 not in store
        assert [p.id for p in store.all()] == [1, 3]

    def test_delete_missing_id_is_noop(self, store) -> None:
        assert store.delete_by_id(99) is False
        assert len(store) == 3

    def test_create_then_delete_restores_contents(self, store) -> None:
        before = store.all()
        new_id = store.next_id()
        store.create(product(new_id, "Nuevo"))
        assert store.delete_by_id(new_id) is True
        assert store.all() == before

    def test_get(self, store) -> None:
        assert store.get(3).name == "C"
        assert store.get(42) is None

    def test_snapshot_does_not_follow_mutations(self, store) -> None:
        snapshot = store.all()
        store.delete_by_id(1)
        assert len(snapshot) == 3

    def test_next_id_is_fresh(self, store) -> None:
        new_id = store.next_id()
        assert new_id not in store
        assert new_id > 3


class TestIdGenerator:
    def test_time_seeded(self) -> None:
        generator = IdGenerator(clock=lambda: 1700000000.5)
        assert generator.next_id() == 1700000000500

    def test_strictly_increasing_with_frozen_clock(self) -> None:
        generator = IdGenerator(clock=lambda: 1.0)
        ids = [generator.next_id() for _ in range(3)]
        assert ids == [1000, 1001, 1002]

    def test_stays_above_observed_ids(self) -> None:
        generator = IdGenerator(clock=lambda: 0.0)
        generator.observe(500)
        assert generator.next_id() == 501
