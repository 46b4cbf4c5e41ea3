"""Suggested expense types offered when adding an item."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ExpenseType:
    name: str
    description: str


DEFAULT_TYPE = "Personal"

EXPENSE_TYPES: dict[str, ExpenseType] = {
    "Business": ExpenseType("Business", "Work-related spending"),
    "Personal": ExpenseType("Personal", "Everything else"),
}


def get_type(name: str) -> ExpenseType | None:
    """Case-insensitive lookup of a suggested type."""
    for key, value in EXPENSE_TYPES.items():
        if key.lower() == name.strip().lower():
            return value
    return None


def list_types() -> list[ExpenseType]:
    return sorted(EXPENSE_TYPES.values(), key=lambda t: t.name)
