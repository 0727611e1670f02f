"""Chat session for the stockroom inventory assistant.

A session is the message log plus a busy flag. One submission runs at a
time: `submit()` appends the user message, classifies it, executes it,
appends exactly one bot reply and always returns to idle, even when the
store call fails. Submissions that arrive while busy are ignored.

Features:
- Message dataclass with sender, text and timestamp
- Append-only transcript in display order
- Busy gate as the only admission control (no locks needed on one task)
- JSON-friendly transcript export
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from .dispatcher import ACTION_FAILED_TEXT, ActionDispatcher
from .intent import CommandClassifier
from .inventory import Inventory
from .store import FetchError

logger = logging.getLogger(__name__)

GREETING = """\
👋 Hello! I'm Inventory Assistant.
Here are some commands you can try:
- total stock
- low stock
- find <name>
- add <name> <qty>
- update <name> <qty>
- delete <name>"""


class Sender(str, Enum):
    """Who wrote a message."""

    USER = "user"
    BOT = "bot"


@dataclass
class Message:
    """A single entry in the transcript.

    Attributes:
        sender: USER or BOT
        text: Message text
        timestamp: When the message was appended
    """

    sender: Sender
    text: str
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON export."""
        return {
            "sender": self.sender.value,
            "text": self.text,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Message":
        """Deserialize from dictionary."""
        return cls(
            sender=Sender(data["sender"]),
            text=data["text"],
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )


class ChatSession:
    """Interpreter session bound to one Inventory.

    Attributes:
        inventory: Snapshot owner, read per submission and refreshed after writes
        dispatcher: Executes classified commands against the store
        classifier: Turns text into Commands
        messages: Append-only transcript
        busy: True while a submission is in flight
        input_buffer: Uncommitted text being composed by a driver
        on_message: Optional callback invoked with every appended Message
    """

    def __init__(
        self,
        inventory: Inventory,
        dispatcher: ActionDispatcher | None = None,
        classifier: CommandClassifier | None = None,
        greeting: str | None = GREETING,
        on_message: Callable[[Message], None] | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            inventory: Inventory whose snapshot commands run against
            dispatcher: Dispatcher to use (defaults to one on inventory.store)
            classifier: Classifier to use (defaults to a stock classifier)
            greeting: Initial bot message, or None for an empty transcript
            on_message: Called after each append (e.g. to render it in a UI)
        """
        self.inventory = inventory
        self.dispatcher = dispatcher or ActionDispatcher(inventory.store)
        self.classifier = classifier or CommandClassifier()
        self.messages: list[Message] = []
        self.busy = False
        self.input_buffer = ""
        self.on_message = on_message

        if greeting:
            self._append(Sender.BOT, greeting)

    def _append(self, sender: Sender, text: str) -> Message:
        msg = Message(sender=sender, text=text)
        self.messages.append(msg)
        if self.on_message is not None:
            self.on_message(msg)
        return msg

    async def submit(self, text: str | None = None) -> bool:
        """Run one interaction cycle.

        Args:
            text: Input line; when None the input buffer is used

        Returns:
            True if the input was accepted, False if it was empty or the
            session was busy
        """
        if text is None:
            text = self.input_buffer
        text = text.strip()

        if not text or self.busy:
            return False

        self._append(Sender.USER, text)
        self.input_buffer = ""
        self.busy = True

        try:
            try:
                reply = await self._respond(text)
            except Exception:
                logger.exception("Unexpected error handling chat input")
                reply = ACTION_FAILED_TEXT
            self._append(Sender.BOT, reply)
        finally:
            self.busy = False

        return True

    async def _respond(self, text: str) -> str:
        command = self.classifier.classify(text)
        result = await self.dispatcher.execute(command, self.inventory.items)

        if result.refresh_requested:
            try:
                await self.inventory.refresh()
            except FetchError as e:
                logger.warning(f"Refresh after {command.kind.value} failed: {e}")

        return result.text

    @property
    def last_reply(self) -> str | None:
        """Text of the most recent bot message."""
        for msg in reversed(self.messages):
            if msg.sender is Sender.BOT:
                return msg.text
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize the transcript for export."""
        return {"messages": [msg.to_dict() for msg in self.messages]}


__all__ = [
    "GREETING",
    "ChatSession",
    "Message",
    "Sender",
]
