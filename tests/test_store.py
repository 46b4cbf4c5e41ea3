"""Tests for ExpenseStore: mutations, persistence and observers."""

from __future__ import annotations

import pytest

from iexpense.config import STORAGE_KEY
from iexpense.models.expense import ExpenseItem
from iexpense.storage.adapter import StorageError
from iexpense.storage.codec import decode_items, encode_items
from iexpense.storage.memory import MemoryStorage
from iexpense.store import DuplicateExpenseError, ExpenseStore


class BrokenStorage(MemoryStorage):
    """Storage whose reads and writes always fail."""

    def get(self, key: str) -> bytes | None:
        raise StorageError("disk on fire")

    def set(self, key: str, blob: bytes) -> None:
        raise StorageError("disk on fire")


def _simple(store: ExpenseStore) -> list[tuple[str, str, int]]:
    return [(e.name, e.category, e.amount) for e in store]


def test_new_store_on_empty_storage_is_empty(storage: MemoryStorage) -> None:
    store = ExpenseStore(storage)

    assert len(store) == 0
    assert store.items == ()


def test_add_appends_and_persists(storage: MemoryStorage, coffee: ExpenseItem, bus: ExpenseItem) -> None:
    store = ExpenseStore(storage)
    store.add(coffee)
    store.add(bus)

    assert len(store) == 2
    assert store[-1] == bus
    assert decode_items(storage.get(STORAGE_KEY)) == [coffee, bus]


def test_add_rejects_duplicate_id(storage: MemoryStorage, coffee: ExpenseItem) -> None:
    store = ExpenseStore(storage)
    store.add(coffee)
    saved = storage.get(STORAGE_KEY)

    with pytest.raises(DuplicateExpenseError):
        store.add(coffee.model_copy(update={"name": "Latte"}))

    assert store.items == (coffee,)
    assert storage.get(STORAGE_KEY) == saved


def test_remove_at_example(storage: MemoryStorage, coffee: ExpenseItem, bus: ExpenseItem) -> None:
    store = ExpenseStore(storage)
    store.add(coffee)
    store.add(bus)

    removed = store.remove_at({0})

    assert removed == [coffee]
    assert _simple(store) == [("Bus", "Travel", 200)]
    assert decode_items(storage.get(STORAGE_KEY)) == [bus]


def test_remove_at_uses_one_snapshot(storage: MemoryStorage) -> None:
    store = ExpenseStore(storage)
    items = [ExpenseItem(name=f"item{i}", amount=i) for i in range(6)]
    for item in items:
        store.add(item)

    removed = store.remove_at([4, 0, 1])

    assert removed == [items[0], items[1], items[4]]
    assert list(store) == [items[2], items[3], items[5]]


def test_remove_at_ignores_out_of_range(storage: MemoryStorage, coffee: ExpenseItem, bus: ExpenseItem) -> None:
    store = ExpenseStore(storage)
    store.add(coffee)
    store.add(bus)

    assert store.remove_at({-1, 2, 99}) == []
    assert store.remove_at({1, 7}) == [bus]
    assert list(store) == [coffee]


def test_second_store_sees_saved_items(storage: MemoryStorage, coffee: ExpenseItem, bus: ExpenseItem) -> None:
    first = ExpenseStore(storage)
    first.add(coffee)
    first.add(bus)
    first.remove_at({0})

    second = ExpenseStore(storage)
    assert list(second) == [bus]


@pytest.mark.parametrize("blob", [b"", b"garbage", b'{"not": "a list"}', b"[1, 2, 3]"])
def test_corrupt_blob_loads_empty(blob: bytes) -> None:
    store = ExpenseStore(MemoryStorage({STORAGE_KEY: blob}))

    assert len(store) == 0


def test_duplicate_ids_in_blob_keep_first(coffee: ExpenseItem) -> None:
    twin = coffee.model_copy(update={"name": "Twin"})
    store = ExpenseStore(MemoryStorage({STORAGE_KEY: encode_items([coffee, twin])}))

    assert list(store) == [coffee]


def test_custom_key_is_used(coffee: ExpenseItem) -> None:
    storage = MemoryStorage()
    store = ExpenseStore(storage, key="Other")
    store.add(coffee)

    assert storage.keys() == ["Other"]


def test_storage_failures_are_swallowed(coffee: ExpenseItem, bus: ExpenseItem) -> None:
    store = ExpenseStore(BrokenStorage())
    assert len(store) == 0

    store.add(coffee)
    store.add(bus)
    store.remove_at({0})

    assert list(store) == [bus]


def test_load_discards_unsaved_state(storage: MemoryStorage, coffee: ExpenseItem) -> None:
    store = ExpenseStore(storage)
    store.add(coffee)
    storage.delete(STORAGE_KEY)

    store.load()

    assert len(store) == 0


def test_totals(storage: MemoryStorage, coffee: ExpenseItem, bus: ExpenseItem) -> None:
    store = ExpenseStore(storage)
    store.add(coffee)
    store.add(bus)
    store.add(ExpenseItem(name="Cake", category="Food", amount=450))

    assert store.total() == 1000
    assert store.totals_by_category() == {"Food": 800, "Travel": 200}


def test_observers_fire_after_save(storage: MemoryStorage, coffee: ExpenseItem, bus: ExpenseItem) -> None:
    store = ExpenseStore(storage)
    seen: list[int] = []

    def observer(changed: ExpenseStore) -> None:
        assert changed is store
        seen.append(len(decode_items(storage.get(STORAGE_KEY))))

    unsubscribe = store.subscribe(observer)
    store.add(coffee)
    store.add(bus)
    store.remove_at({5})
    store.remove_at({0})
    unsubscribe()
    store.add(ExpenseItem(name="Tea", amount=100))

    assert seen == [1, 2, 1]


def test_observer_errors_propagate(storage: MemoryStorage, coffee: ExpenseItem) -> None:
    store = ExpenseStore(storage)

    def observer(changed: ExpenseStore) -> None:
        raise RuntimeError("boom")

    store.subscribe(observer)
    with pytest.raises(RuntimeError):
        store.add(coffee)

    assert list(ExpenseStore(storage)) == [coffee]
