"""stockroom - TUI inventory manager with chat assistant."""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Footer, Header

from .config import AppConfig
from .core.intent import CommandClassifier
from .core.inventory import Inventory
from .core.session import ChatSession
from .core.store import FetchError, InventoryStore, create_store
from .ui.widgets import ChatPane, InventoryPanel

logger = logging.getLogger(__name__)


def setup_logging(log_dir: Path | None = None) -> logging.Logger:
    """Configure logging with rotation.

    Logs are written to ~/.stockroom/logs/ with owner-only permissions.
    Uses INFO level by default; set STOCKROOM_DEBUG=1 for DEBUG level.
    """
    log_dir = log_dir or Path.home() / ".stockroom" / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_dir.chmod(0o700)

    log_file = log_dir / "stockroom.log"

    log_level = logging.DEBUG if os.environ.get("STOCKROOM_DEBUG") else logging.INFO

    # 5 MB per file, keep 3 backups
    handler = RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.addHandler(handler)

    return logging.getLogger(__name__)


class StockroomApp(App):
    """Main stockroom TUI application.

    Left: item form, search, table and pagination.
    Right: chat assistant. Both share one Inventory snapshot.
    """

    TITLE = "stockroom"
    SUB_TITLE = "Inventory Management"

    CSS = """
    #main-layout {
        height: 1fr;
    }

    #inventory-panel {
        width: 3fr;
    }

    #chat-pane {
        width: 2fr;
        min-width: 36;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", show=True),
        Binding("ctrl+r", "reload", "Reload"),
        Binding("ctrl+d", "toggle_dark", "Dark Mode"),
    ]

    def __init__(
        self,
        config: AppConfig | None = None,
        store: InventoryStore | None = None,
    ) -> None:
        super().__init__()
        self.config = config or AppConfig.load()
        self.store = store or create_store(self.config)
        self.inventory = Inventory(self.store)
        self.session = ChatSession(
            self.inventory,
            classifier=CommandClassifier(self.config.low_stock_threshold),
        )

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            yield InventoryPanel(
                self.inventory,
                page_size=self.config.page_size,
                id="inventory-panel",
            )
            yield ChatPane(self.session, id="chat-pane")
        yield Footer()

    async def on_mount(self) -> None:
        """Load the snapshot and focus the chat input."""
        self.query_one(ChatPane).focus_input()
        await self.reload()

    async def reload(self) -> bool:
        """Fetch the snapshot and redraw the table.

        Returns:
            False if the store could not be read
        """
        try:
            await self.inventory.refresh()
        except FetchError as e:
            logger.error(f"Error fetching items: {e}")
            self.notify("Could not load items", severity="error")
            return False
        self.query_one(InventoryPanel).refresh_table()
        return True

    def on_chat_pane_command_handled(self, message: ChatPane.CommandHandled) -> None:
        # The session already refreshed after a write; redraw from it
        self.query_one(InventoryPanel).refresh_table()

    def on_inventory_panel_changed(self, message: InventoryPanel.Changed) -> None:
        logger.info(f"Form write applied ({len(self.inventory.items)} items)")
        self.sub_title = f"Inventory Management - {len(self.inventory.items)} items"

    async def action_reload(self) -> None:
        await self.reload()

    def action_toggle_dark(self) -> None:
        """Toggle dark mode."""
        self.theme = "textual-light" if self.theme == "textual-dark" else "textual-dark"

    async def on_unmount(self) -> None:
        await self.store.close()


def main():
    """Entry point for the application.

    Supports CLI subcommands (list, add, edit, delete, ask, chat) and TUI mode.
    If no subcommand is given, launches the TUI.
    """
    import sys

    from .cli import create_parser, load_config, run_cli

    setup_logging()

    result = run_cli()
    if result is not None:
        sys.exit(result)

    # No subcommand = TUI mode (global flags still apply)
    args = create_parser().parse_args()
    app = StockroomApp(load_config(args))
    app.run()


if __name__ == "__main__":
    main()
