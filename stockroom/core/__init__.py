"""Core components for stockroom."""

from __future__ import annotations

from .dispatcher import (
    ACTION_FAILED_TEXT,
    HELP_TEXT,
    ActionDispatcher,
    ActionResult,
)
from .inventory import (
    Inventory,
    Page,
    filter_items,
    paginate,
)
from .models import (
    Item,
    format_items,
    normalize_quantity,
)
from .session import (
    GREETING,
    ChatSession,
    Message,
    Sender,
)
from .store import (
    FetchError,
    InventoryError,
    InventoryStore,
    WriteError,
    create_store,
)

__all__ = [
    # Data model
    "Item",
    "format_items",
    "normalize_quantity",
    # Store
    "InventoryStore",
    "InventoryError",
    "FetchError",
    "WriteError",
    "create_store",
    # Snapshot
    "Inventory",
    "Page",
    "filter_items",
    "paginate",
    # Interpreter
    "ActionDispatcher",
    "ActionResult",
    "ACTION_FAILED_TEXT",
    "HELP_TEXT",
    # Session
    "ChatSession",
    "Message",
    "Sender",
    "GREETING",
]
