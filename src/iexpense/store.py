"""ExpenseStore — the ordered expense list, saved on every change.

The store loads its items from a key-value storage backend when it is
created and writes the whole list back after each ``add`` or ``remove_at``.
Storage and decoding problems never reach the caller: a bad or missing blob
means an empty list, and a failed write leaves the in-memory list as is.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable, Iterable, Iterator

from iexpense.config import STORAGE_KEY
from iexpense.models.expense import ExpenseItem
from iexpense.storage.adapter import KeyValueStorage, StorageError
from iexpense.storage.codec import DecodeError, decode_items, encode_items

log = logging.getLogger(__name__)

Observer = Callable[["ExpenseStore"], None]


class DuplicateExpenseError(ValueError):
    """An item with the same id is already in the store."""


class ExpenseStore:
    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEY):
        self._storage = storage
        self._key = key
        self._items: list[ExpenseItem] = []
        self._observers: list[Observer] = []
        self.load()

    # -- reading ---------------------------------------------------------

    @property
    def items(self) -> tuple[ExpenseItem, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ExpenseItem]:
        return iter(tuple(self._items))

    def __getitem__(self, index: int) -> ExpenseItem:
        return self._items[index]

    def total(self) -> int:
        return sum(item.amount for item in self._items)

    def totals_by_category(self) -> dict[str, int]:
        totals: dict[str, int] = defaultdict(int)
        for item in self._items:
            totals[item.category] += item.amount
        return dict(totals)

    # -- persistence -----------------------------------------------------

    def load(self) -> None:
        """Replace the in-memory list with the saved one, or empty it."""
        try:
            blob = self._storage.get(self._key)
        except StorageError as exc:
            log.warning("Could not read saved expenses: %s", exc)
            self._items = []
            return

        if blob is None:
            log.debug("No saved expenses under %r", self._key)
            self._items = []
            return

        try:
            loaded = decode_items(blob)
        except DecodeError as exc:
            log.warning("Ignoring unreadable saved expenses: %s", exc)
            self._items = []
            return

        items: list[ExpenseItem] = []
        seen: set[str] = set()
        for item in loaded:
            if item.id in seen:
                log.warning("Dropping saved expense with duplicate id %s", item.id)
                continue
            seen.add(item.id)
            items.append(item)
        self._items = items
        log.debug("Loaded %d expenses", len(items))

    def _save(self) -> None:
        try:
            self._storage.set(self._key, encode_items(self._items))
        except (StorageError, ValueError) as exc:
            log.warning("Could not save expenses, keeping changes in memory only: %s", exc)

    # -- mutation --------------------------------------------------------

    def add(self, item: ExpenseItem) -> None:
        """Append an item to the end of the list."""
        if any(existing.id == item.id for existing in self._items):
            raise DuplicateExpenseError(f"Expense {item.id!r} is already in the store")
        self._items.append(item)
        self._changed()

    def remove_at(self, positions: Iterable[int]) -> list[ExpenseItem]:
        """Remove the items at the given positions of the current list.

        All positions refer to the list as it is before the call, so
        ``remove_at({0, 1})`` removes the first two items. Positions out of
        range are ignored. Returns the removed items in list order.
        """
        requested = set(positions)
        size = len(self._items)
        targets = {p for p in requested if 0 <= p < size}
        if requested - targets:
            log.debug("Ignoring out-of-range positions %s", sorted(requested - targets))
        if not targets:
            return []

        removed = [item for i, item in enumerate(self._items) if i in targets]
        self._items = [item for i, item in enumerate(self._items) if i not in targets]
        self._changed()
        return removed

    # -- observers -------------------------------------------------------

    def subscribe(self, callback: Observer) -> Callable[[], None]:
        """Call ``callback(store)`` after every change. Returns an unsubscribe function."""
        self._observers.append(callback)

        def unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def _changed(self) -> None:
        self._save()
        for callback in list(self._observers):
            callback(self)
