"""Chat pane - transcript and input for the inventory assistant."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from textual.app import ComposeResult
from textual.containers import Vertical, VerticalScroll
from textual.message import Message
from textual.widgets import Input, Static

from ...core.session import Sender

if TYPE_CHECKING:
    from ...core.session import ChatSession
    from ...core.session import Message as ChatMessage

logger = logging.getLogger(__name__)


class MessageBubble(Static):
    """A single transcript entry, styled by sender."""

    def __init__(self, sender: Sender, text: str) -> None:
        super().__init__(text, markup=False, classes=f"message {sender.value}")
        self.role = sender
        self.body = text


class ChatPane(Vertical):
    """Chat transcript with a typing indicator and a single-line input.

    Submissions run as workers so the UI stays live while a store call is
    pending; the session's busy flag rejects anything sent meanwhile.
    """

    DEFAULT_CSS = """
    ChatPane {
        width: 100%;
        height: 100%;
        border: solid $primary-darken-2;
        border-title-color: $primary;
        padding: 0 1;
    }

    #chat-log {
        height: 1fr;
    }

    .message {
        height: auto;
        margin: 1 0 0 0;
        padding: 0 1;
    }

    .message.user {
        background: $primary-darken-3;
        margin-left: 4;
    }

    .message.bot {
        background: $surface-lighten-1;
        margin-right: 4;
    }

    #chat-typing {
        height: 1;
        color: $text-muted;
        text-style: italic;
        display: none;
    }

    #chat-typing.visible {
        display: block;
    }
    """

    BORDER_TITLE = "Inventory Assistant"

    class CommandHandled(Message):
        """Posted after a submission completes."""

        def __init__(self, reply: str | None) -> None:
            super().__init__()
            self.reply = reply

    def __init__(self, session: "ChatSession", **kwargs) -> None:
        """Initialize the chat pane.

        Args:
            session: Chat session to drive; its on_message hook is taken over
        """
        super().__init__(**kwargs)
        self.session = session
        self.session.on_message = self._on_session_message

    def compose(self) -> ComposeResult:
        with VerticalScroll(id="chat-log"):
            for msg in self.session.messages:
                yield MessageBubble(msg.sender, msg.text)
        yield Static("Typing...", id="chat-typing")
        yield Input(placeholder="Type a command (e.g. add Mango 10)", id="chat-input")

    def focus_input(self) -> None:
        self.query_one("#chat-input", Input).focus()

    def _on_session_message(self, msg: "ChatMessage") -> None:
        """Mount each new transcript entry as it is appended."""
        log = self.query_one("#chat-log", VerticalScroll)
        log.mount(MessageBubble(msg.sender, msg.text))
        log.scroll_end(animate=False)
        self.query_one("#chat-typing", Static).set_class(msg.sender is Sender.USER, "visible")

    def send(self, text: str) -> bool:
        """Start a submission in the background.

        Returns:
            False if the text is blank or a submission is already running
        """
        if not text.strip():
            return False
        if self.session.busy:
            self._reject_busy()
            return False
        self.run_worker(self._submit(text), group="chat")
        return True

    def _reject_busy(self) -> None:
        logger.debug("Chat input ignored while busy")
        self.notify("Still working on the last command", severity="warning")

    async def _submit(self, text: str) -> None:
        accepted = await self.session.submit(text)
        if accepted:
            self.post_message(self.CommandHandled(self.session.last_reply))
        else:
            # Another submission started between send() and this worker
            self._reject_busy()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "chat-input":
            return
        event.stop()
        if self.send(event.value):
            event.input.value = ""


__all__ = ["ChatPane", "MessageBubble"]
