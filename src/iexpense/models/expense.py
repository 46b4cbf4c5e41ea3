"""Pydantic ExpenseItem model — one user-entered spending entry."""

import re
import uuid
from decimal import Decimal, InvalidOperation

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

from iexpense.config import DEFAULT_CURRENCY
from iexpense.models.categories import DEFAULT_TYPE

# Digits, optional thousands separators, at most two decimals
_AMOUNT_RE = re.compile(r"^\d{1,3}(,\d{3})*(\.\d{1,2})?$|^\d+(\.\d{1,2})?$")


class ExpenseItem(BaseModel):
    """A single expense. ``amount`` is in minor currency units."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str
    category: str = Field(default=DEFAULT_TYPE, alias="type")
    amount: StrictInt = Field(ge=0)

    @field_validator("name", "category")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()

    @field_validator("id")
    @classmethod
    def _non_empty_id(cls, value: str) -> str:
        if not value:
            raise ValueError("id must not be empty")
        return value


def parse_amount(text: str) -> int:
    """Convert user input like ``"3.50"`` into minor units (350)."""
    cleaned = text.strip()
    if not _AMOUNT_RE.match(cleaned):
        raise ValueError(f"Not a valid amount: {text!r}")
    try:
        value = Decimal(cleaned.replace(",", ""))
    except InvalidOperation as exc:
        raise ValueError(f"Not a valid amount: {text!r}") from exc
    return int(value * 100)


def format_amount(amount: int, currency: str = DEFAULT_CURRENCY) -> str:
    """Render minor units as ``"USD 3.50"``."""
    sign = "-" if amount < 0 else ""
    major, minor = divmod(abs(amount), 100)
    return f"{currency} {sign}{major:,}.{minor:02d}"
