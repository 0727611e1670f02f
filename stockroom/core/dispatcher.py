"""Action dispatcher for stockroom commands.

Executes one classified Command and produces exactly one response text.
Read-only intents are answered from the snapshot passed in; mutating
intents resolve their target, write through the InventoryStore and ask
the caller to refresh the snapshot. The dispatcher never edits the
snapshot itself.

Store failures are caught here, logged, and reported to the user as a
single generic message, so callers never need their own error path for
interpreter-triggered writes.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from .intent import (
    Add,
    Command,
    Delete,
    Find,
    LowStock,
    ShowInventory,
    TotalStock,
    Unknown,
    Update,
    resolve,
)
from .models import Item, format_items
from .store import InventoryError, InventoryStore

logger = logging.getLogger(__name__)

# Listing limits per response
SHOW_LIMIT = 20
FIND_LIMIT = 20
LOW_STOCK_LIMIT = 30

HELP_TEXT = """\
🤖 Sorry, I didn't understand.
Try commands like:
• show inventory
• total stock
• low stock
• find <name>
• add <name> <qty>
• update <name|id> <qty>
• delete <name|id>"""

ACTION_FAILED_TEXT = "⚠️ There was an error performing that action."


@dataclass(frozen=True)
class ActionResult:
    """Outcome of executing a command.

    Attributes:
        text: The single bot response
        refresh_requested: True after a successful write
    """

    text: str
    refresh_requested: bool = False


def total_stock(items: Sequence[Item]) -> int:
    """Sum quantities; items were normalized on load so junk counts as 0."""
    return sum(item.quantity for item in items)


def low_stock(items: Sequence[Item], threshold: int) -> list[Item]:
    return [item for item in items if item.quantity < threshold]


def find_items(items: Sequence[Item], query: str) -> list[Item]:
    """Case-insensitive substring match on item names."""
    needle = query.casefold()
    return [item for item in items if needle in item.name.casefold()]


class ActionDispatcher:
    """Runs Commands against a snapshot and an InventoryStore.

    Attributes:
        store: Store that receives create/update/delete calls
    """

    def __init__(self, store: InventoryStore) -> None:
        self.store = store

    async def execute(self, cmd: Command, items: Sequence[Item]) -> ActionResult:
        """Execute a command.

        Args:
            cmd: Classified command
            items: Current inventory snapshot (read only)

        Returns:
            ActionResult with the response text and refresh flag
        """
        try:
            return await self._execute(cmd, items)
        except InventoryError as e:
            logger.error(f"Store call failed for {cmd.kind.value}: {e}")
            return ActionResult(ACTION_FAILED_TEXT)

    async def _execute(self, cmd: Command, items: Sequence[Item]) -> ActionResult:
        if isinstance(cmd, ShowInventory):
            return ActionResult(self._show_inventory(items))
        if isinstance(cmd, TotalStock):
            return ActionResult(f"📦 Total stock across items: {total_stock(items)}")
        if isinstance(cmd, LowStock):
            return ActionResult(self._low_stock(items, cmd.threshold))
        if isinstance(cmd, Find):
            return ActionResult(self._find(items, cmd.query))
        if isinstance(cmd, Add):
            return await self._add(cmd)
        if isinstance(cmd, Update):
            return await self._update(cmd, items)
        if isinstance(cmd, Delete):
            return await self._delete(cmd, items)
        if isinstance(cmd, Unknown):
            return ActionResult(HELP_TEXT)
        raise TypeError(f"Unsupported command: {cmd!r}")

    # -------------------------------------------------------------------------
    # Read-only intents
    # -------------------------------------------------------------------------

    def _show_inventory(self, items: Sequence[Item]) -> str:
        if not items:
            return "No items."
        return f"{len(items)} items:\n{format_items(items, SHOW_LIMIT)}"

    def _low_stock(self, items: Sequence[Item], threshold: int) -> str:
        low = low_stock(items, threshold)
        if not low:
            return f"✅ No items below {threshold}."
        return f"⚠️ Items with qty < {threshold}:\n{format_items(low, LOW_STOCK_LIMIT)}"

    def _find(self, items: Sequence[Item], query: str) -> str:
        found = find_items(items, query)
        if not found:
            return f'No items matching "{query}"'
        return f"🔍 Found {len(found)} item(s):\n{format_items(found, FIND_LIMIT)}"

    # -------------------------------------------------------------------------
    # Mutating intents
    # -------------------------------------------------------------------------

    async def _add(self, cmd: Add) -> ActionResult:
        await self.store.create(cmd.name, cmd.qty, "")
        logger.info(f"Added {cmd.name!r} (qty {cmd.qty})")
        return ActionResult(f'✅ Added "{cmd.name}" (qty: {cmd.qty}).', refresh_requested=True)

    async def _update(self, cmd: Update, items: Sequence[Item]) -> ActionResult:
        target = resolve(cmd.ref, items)
        if target is None:
            return ActionResult("❌ Item not found to update.")

        await self.store.update(target.id, target.name, cmd.qty, target.description or "")
        logger.info(f"Updated item {target.id} to qty {cmd.qty}")
        return ActionResult(
            f'✏️ Updated "{target.name}" → qty {cmd.qty}.',
            refresh_requested=True,
        )

    async def _delete(self, cmd: Delete, items: Sequence[Item]) -> ActionResult:
        target = resolve(cmd.ref, items)
        if target is None:
            return ActionResult("❌ Item not found to delete.")

        await self.store.delete(target.id)
        logger.info(f"Deleted item {target.id}")
        return ActionResult(f'🗑️ Deleted "{target.name}".', refresh_requested=True)


__all__ = [
    "ACTION_FAILED_TEXT",
    "ActionDispatcher",
    "ActionResult",
    "HELP_TEXT",
    "find_items",
    "low_stock",
    "total_stock",
]
