"""In-process inventory store.

Backs the `--offline` mode and the test-suite. Ids are integers assigned
from a counter that never reuses a value, matching what the REST service
does for its primary keys.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..models import Item
from .base import InventoryStore, WriteError

logger = logging.getLogger(__name__)


class MemoryInventoryStore(InventoryStore):
    """Dict-backed store preserving insertion order."""

    def __init__(self, items: Iterable[Item] | None = None) -> None:
        self._items: dict[int | str, Item] = {}
        self._next_id = 1
        for item in items or ():
            self._items[item.id] = item
            if isinstance(item.id, int) and item.id >= self._next_id:
                self._next_id = item.id + 1

    async def list(self) -> list[Item]:
        return [item.model_copy() for item in self._items.values()]

    async def create(self, name: str, quantity: int, description: str = "") -> Item:
        if not name:
            raise WriteError("Item name must not be empty")
        item = Item(id=self._next_id, name=name, quantity=quantity, description=description)
        self._items[item.id] = item
        self._next_id += 1
        logger.debug(f"Created item {item.id}: {item.name}")
        return item.model_copy()

    async def update(
        self,
        item_id: int | str,
        name: str,
        quantity: int,
        description: str = "",
    ) -> Item:
        if item_id not in self._items:
            raise WriteError(f"No item with id {item_id}")
        item = Item(id=item_id, name=name, quantity=quantity, description=description)
        self._items[item_id] = item
        return item.model_copy()

    async def delete(self, item_id: int | str) -> None:
        if self._items.pop(item_id, None) is None:
            raise WriteError(f"No item with id {item_id}")


__all__ = ["MemoryInventoryStore"]
