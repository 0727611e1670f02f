"""Inventory data model for stockroom.

Items come from the inventory store as loosely-typed JSON. The store is not
trusted to send clean numbers, so quantities pass through a named
normalization step (`normalize_quantity`) before anything sums or compares
them.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, field_validator


def normalize_quantity(value: Any) -> int:
    """Treat any non-numeric quantity as 0.

    Numeric strings and floats are accepted and truncated toward zero.
    Missing values, booleans, NaN/inf and unparseable strings become 0.

    Args:
        value: Raw quantity as received from the store or a form

    Returns:
        Integer quantity
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number):
        return 0
    return int(number)


class Item(BaseModel):
    """A single stock record.

    Attributes:
        id: Opaque identifier assigned by the store
        name: Display name (not guaranteed unique)
        quantity: Units in stock
        description: Free-form notes
    """

    id: int | str
    name: str = ""
    quantity: int = 0
    description: str = ""

    @field_validator("quantity", mode="before")
    @classmethod
    def _coerce_quantity(cls, value: Any) -> int:
        return normalize_quantity(value)

    @field_validator("name", "description", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @property
    def label(self) -> str:
        """Single-line rendering used in chat responses."""
        return f"{self.name} (qty: {self.quantity})"

    def to_payload(self) -> dict[str, Any]:
        """Body for a full-record write to the store (id excluded)."""
        return {
            "name": self.name,
            "quantity": self.quantity,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Item:
        """Build an Item from a store record."""
        return cls.model_validate(data)


def format_items(items: Sequence[Item], limit: int = 10) -> str:
    """Render up to `limit` items as newline-joined "name (qty: N)" lines.

    Returns "No items." for an empty sequence.
    """
    if not items:
        return "No items."
    return "\n".join(item.label for item in items[:limit])


__all__ = ["Item", "format_items", "normalize_quantity"]
