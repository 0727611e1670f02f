"""stockroom UI Widgets."""

from .chat_pane import ChatPane, MessageBubble
from .inventory_panel import InventoryPanel

__all__ = [
    "ChatPane",
    "InventoryPanel",
    "MessageBubble",
]
