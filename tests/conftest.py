from __future__ import annotations

import pytest

from iexpense.models.expense import ExpenseItem
from iexpense.storage.memory import MemoryStorage


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def coffee() -> ExpenseItem:
    return ExpenseItem(name="Coffee", category="Food", amount=350)


@pytest.fixture
def bus() -> ExpenseItem:
    return ExpenseItem(name="Bus", category="Travel", amount=200)
