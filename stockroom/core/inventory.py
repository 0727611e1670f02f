"""Inventory snapshot and table operations for stockroom.

`Inventory` owns the last fetched snapshot. Both front-ends read from it:
the chat session passes `inventory.items` to the dispatcher and the
form/table views filter and paginate it. Nobody edits the snapshot in
place; every write goes to the store and is followed by `refresh()`, so
both paths always re-derive from the same authoritative fetch.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from .models import Item, normalize_quantity
from .store import FetchError, InventoryStore

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 5


@dataclass(frozen=True)
class Page:
    """One page of a (possibly filtered) item list.

    Attributes:
        items: Items on this page
        number: 1-indexed page number after clamping
        total_pages: Page count, never less than 1
        total_items: Size of the list being paged
    """

    items: list[Item]
    number: int
    total_pages: int
    total_items: int

    @property
    def has_previous(self) -> bool:
        return self.number > 1

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages


def filter_items(items: Sequence[Item], query: str) -> list[Item]:
    """Case-insensitive name filter for the table view. Empty query keeps all."""
    needle = query.strip().casefold()
    if not needle:
        return list(items)
    return [item for item in items if needle in item.name.casefold()]


def paginate(items: Sequence[Item], page: int = 1, per_page: int = DEFAULT_PAGE_SIZE) -> Page:
    """Slice a list into pages, clamping `page` into the valid range.

    Args:
        items: Items to page through
        page: Requested 1-indexed page
        per_page: Items per page (must be positive)

    Returns:
        Page with the slice and clamped page number
    """
    if per_page < 1:
        raise ValueError(f"per_page must be positive, got {per_page}")

    total_pages = max(1, math.ceil(len(items) / per_page))
    number = min(max(page, 1), total_pages)
    start = (number - 1) * per_page
    return Page(
        items=list(items[start : start + per_page]),
        number=number,
        total_pages=total_pages,
        total_items=len(items),
    )


class Inventory:
    """Holds the authoritative snapshot and the store it came from.

    Example:
        >>> inventory = Inventory(MemoryInventoryStore())
        >>> await inventory.save_item(None, "Mango", "10")
        >>> await inventory.refresh()
        >>> inventory.items
        [Item(id=1, name='Mango', quantity=10, description='')]
    """

    def __init__(self, store: InventoryStore) -> None:
        self.store = store
        self._items: list[Item] = []

    @property
    def items(self) -> list[Item]:
        """Last fetched snapshot, in store order."""
        return self._items

    async def refresh(self) -> list[Item]:
        """Replace the snapshot with a fresh `list()` from the store.

        Raises:
            FetchError: If the store cannot be read; the old snapshot is kept
        """
        self._items = await self.store.list()
        logger.debug(f"Inventory refreshed: {len(self._items)} items")
        return self._items

    def get(self, item_id: int | str) -> Item | None:
        """Look up an item in the snapshot by id (string/int agnostic)."""
        for item in self._items:
            if str(item.id) == str(item_id):
                return item
        return None

    async def save_item(
        self,
        item_id: int | str | None,
        name: str,
        quantity: int | str,
        description: str = "",
    ) -> Item:
        """Form submit: create when `item_id` is None, otherwise replace.

        Refreshes the snapshot after a successful write.

        Raises:
            ValueError: If the name is blank or the quantity is negative
            WriteError: If the store rejects the write
        """
        name = name.strip()
        if not name:
            raise ValueError("Item name is required")
        qty = normalize_quantity(quantity)
        if qty < 0:
            raise ValueError(f"Quantity must not be negative, got {qty}")

        if item_id is None:
            item = await self.store.create(name, qty, description)
        else:
            item = await self.store.update(item_id, name, qty, description)
        await self._refresh_after_write()
        return item

    async def delete_item(self, item_id: int | str) -> None:
        """Delete by id and refresh the snapshot.

        Raises:
            WriteError: If the store rejects the delete
        """
        await self.store.delete(item_id)
        await self._refresh_after_write()

    async def _refresh_after_write(self) -> None:
        # The write already happened; a failed re-read only leaves the view stale
        try:
            await self.refresh()
        except FetchError as e:
            logger.warning(f"Refresh after write failed: {e}")


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "Inventory",
    "Page",
    "filter_items",
    "paginate",
]
