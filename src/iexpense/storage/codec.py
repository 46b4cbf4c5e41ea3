"""Encode and decode the whole expense list to a JSON blob."""

from collections.abc import Iterable

from pydantic import TypeAdapter, ValidationError

from iexpense.models.expense import ExpenseItem

_ITEMS = TypeAdapter(list[ExpenseItem])


class DecodeError(ValueError):
    """A saved blob could not be read back as a list of expense items."""


def encode_items(items: Iterable[ExpenseItem]) -> bytes:
    """JSON array of ``{"id", "name", "type", "amount"}`` objects."""
    return _ITEMS.dump_json(list(items), by_alias=True)


def decode_items(blob: bytes | str) -> list[ExpenseItem]:
    try:
        return _ITEMS.validate_json(blob)
    except ValidationError as exc:
        raise DecodeError(f"Invalid expense data: {exc.error_count()} error(s)") from exc
