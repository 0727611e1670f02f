"""Tests for stockroom.core.dispatcher.

Covers:
- Read-only intents answered from the snapshot
- Mutating intents resolving targets and writing through the store
- Store failures reported as the generic failure text
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from stockroom.core.dispatcher import (
    ACTION_FAILED_TEXT,
    HELP_TEXT,
    ActionDispatcher,
    find_items,
    low_stock,
    total_stock,
)
from stockroom.core.intent import (
    Add,
    ById,
    ByName,
    Delete,
    Find,
    LowStock,
    ShowInventory,
    TotalStock,
    Unknown,
    Update,
)
from stockroom.core.models import Item
from stockroom.core.store import WriteError
from stockroom.core.store.memory import MemoryInventoryStore


@pytest.fixture
def items() -> list[Item]:
    return [
        Item(id=1, name="Mango", quantity=10, description="ripe"),
        Item(id=2, name="Apple", quantity=2),
        Item(id=3, name="Banana", quantity=5),
    ]


@pytest.fixture
def store() -> AsyncMock:
    mock = AsyncMock()
    mock.create.return_value = Item(id=4, name="Pear", quantity=3)
    return mock


class TestHelpers:
    def test_total_stock(self, items: list[Item]) -> None:
        assert total_stock(items) == 17

    def test_total_stock_empty(self) -> None:
        assert total_stock([]) == 0

    def test_low_stock_is_strict(self, items: list[Item]) -> None:
        assert [i.name for i in low_stock(items, 5)] == ["Apple"]

    def test_low_stock_includes_zero_quantity(self) -> None:
        junk = Item.from_dict({"id": 9, "name": "Junk", "quantity": "n/a"})
        assert low_stock([junk], 1) == [junk]

    def test_find_is_case_insensitive_substring(self, items: list[Item]) -> None:
        assert [i.name for i in find_items(items, "AN")] == ["Mango", "Banana"]


@pytest.mark.asyncio
class TestReadOnlyIntents:
    """Read-only intents never touch the store."""

    async def test_show_inventory(self, items, store) -> None:
        result = await ActionDispatcher(store).execute(ShowInventory(), items)
        assert result.text == "3 items:\nMango (qty: 10)\nApple (qty: 2)\nBanana (qty: 5)"
        assert not result.refresh_requested
        store.create.assert_not_called()

    async def test_show_inventory_empty(self, store) -> None:
        result = await ActionDispatcher(store).execute(ShowInventory(), [])
        assert result.text == "No items."

    async def test_show_inventory_limited(self, store) -> None:
        many = [Item(id=i, name=f"Item{i}", quantity=i) for i in range(30)]
        result = await ActionDispatcher(store).execute(ShowInventory(), many)
        lines = result.text.splitlines()
        assert lines[0] == "30 items:"
        assert len(lines) == 21

    async def test_total_stock(self, items, store) -> None:
        result = await ActionDispatcher(store).execute(TotalStock(), items)
        assert result.text == "📦 Total stock across items: 17"

    async def test_low_stock(self, items, store) -> None:
        result = await ActionDispatcher(store).execute(LowStock(threshold=5), items)
        assert result.text == "⚠️ Items with qty < 5:\nApple (qty: 2)"

    async def test_low_stock_none(self, items, store) -> None:
        result = await ActionDispatcher(store).execute(LowStock(threshold=1), items)
        assert result.text == "✅ No items below 1."

    async def test_find(self, items, store) -> None:
        result = await ActionDispatcher(store).execute(Find(query="man"), items)
        assert result.text == "🔍 Found 1 item(s):\nMango (qty: 10)"

    async def test_find_no_match(self, items, store) -> None:
        result = await ActionDispatcher(store).execute(Find(query="kiwi"), items)
        assert result.text == 'No items matching "kiwi"'

    async def test_unknown_returns_help(self, items, store) -> None:
        result = await ActionDispatcher(store).execute(Unknown(), items)
        assert result.text == HELP_TEXT

    async def test_read_only_is_idempotent(self, items, store) -> None:
        dispatcher = ActionDispatcher(store)
        first = await dispatcher.execute(TotalStock(), items)
        second = await dispatcher.execute(TotalStock(), items)
        assert first == second


@pytest.mark.asyncio
class TestMutatingIntents:
    """Writes go to the store and request a refresh."""

    async def test_add(self, items, store) -> None:
        result = await ActionDispatcher(store).execute(Add(name="Pear", qty=3), items)
        store.create.assert_awaited_once_with("Pear", 3, "")
        assert result.text == '✅ Added "Pear" (qty: 3).'
        assert result.refresh_requested

    async def test_add_does_not_edit_snapshot(self, items, store) -> None:
        await ActionDispatcher(store).execute(Add(name="Pear", qty=3), items)
        assert len(items) == 3

    async def test_update_by_name_preserves_description(self, items, store) -> None:
        result = await ActionDispatcher(store).execute(
            Update(ref=ByName("mango"), qty=7), items
        )
        store.update.assert_awaited_once_with(1, "Mango", 7, "ripe")
        assert result.text == '✏️ Updated "Mango" → qty 7.'
        assert result.refresh_requested

    async def test_update_by_id(self, items, store) -> None:
        await ActionDispatcher(store).execute(Update(ref=ById(2), qty=9), items)
        store.update.assert_awaited_once_with(2, "Apple", 9, "")

    async def test_update_missing_skips_store(self, items, store) -> None:
        result = await ActionDispatcher(store).execute(Update(ref=ById(99), qty=1), items)
        assert result.text == "❌ Item not found to update."
        assert not result.refresh_requested
        store.update.assert_not_called()

    async def test_delete(self, items, store) -> None:
        result = await ActionDispatcher(store).execute(Delete(ref=ByName("Apple")), items)
        store.delete.assert_awaited_once_with(2)
        assert result.text == '🗑️ Deleted "Apple".'
        assert result.refresh_requested

    async def test_delete_missing_skips_store(self, items, store) -> None:
        result = await ActionDispatcher(store).execute(Delete(ref=ByName("Kiwi")), items)
        assert result.text == "❌ Item not found to delete."
        store.delete.assert_not_called()

    async def test_against_memory_store(self, items) -> None:
        store = MemoryInventoryStore(items)
        dispatcher = ActionDispatcher(store)
        await dispatcher.execute(Delete(ref=ById(1)), items)
        assert [i.name for i in await store.list()] == ["Apple", "Banana"]


@pytest.mark.asyncio
class TestStoreFailures:
    """A failed write yields the generic failure text and no refresh."""

    @pytest.mark.parametrize(
        "cmd",
        [Add(name="Pear", qty=1), Update(ref=ById(1), qty=1), Delete(ref=ById(1))],
    )
    async def test_write_error_reported(self, items, store, cmd) -> None:
        store.create.side_effect = WriteError("down")
        store.update.side_effect = WriteError("down")
        store.delete.side_effect = WriteError("down")

        result = await ActionDispatcher(store).execute(cmd, items)
        assert result.text == ACTION_FAILED_TEXT
        assert not result.refresh_requested
