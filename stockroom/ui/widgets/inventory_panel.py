"""Inventory panel - item form, search box, table and pagination."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widgets import Button, DataTable, Input, Static

from ...core.inventory import DEFAULT_PAGE_SIZE, filter_items, paginate
from ...core.store import InventoryError

if TYPE_CHECKING:
    from ...core.inventory import Inventory
    from ...core.models import Item

logger = logging.getLogger(__name__)


class InventoryPanel(Vertical):
    """Direct CRUD view over the inventory snapshot.

    Selecting a table row loads it into the form for editing. Every write
    goes through the store and re-reads the snapshot; the table is always
    rebuilt from `inventory.items`.
    """

    DEFAULT_CSS = """
    InventoryPanel {
        width: 100%;
        height: 100%;
        border: solid $primary-darken-2;
        border-title-color: $primary;
        padding: 0 1;
    }

    #item-form, #form-buttons, #pagination {
        height: auto;
    }

    #item-form Input {
        width: 1fr;
    }

    #form-quantity {
        max-width: 14;
    }

    #items-table {
        height: 1fr;
        margin: 1 0;
    }

    #pagination {
        align: center middle;
    }

    #page-label {
        width: auto;
        padding: 1 2;
    }
    """

    BORDER_TITLE = "Inventory"

    class Changed(Message):
        """Posted after a successful write from the form."""

    def __init__(self, inventory: "Inventory", page_size: int = DEFAULT_PAGE_SIZE, **kwargs) -> None:
        """Initialize the inventory panel.

        Args:
            inventory: Snapshot owner shared with the chat session
            page_size: Rows per table page
        """
        super().__init__(**kwargs)
        self.inventory = inventory
        self.page_size = page_size
        self.page = 1
        self.search = ""
        self.editing_id: int | str | None = None

    def compose(self) -> ComposeResult:
        with Horizontal(id="item-form"):
            yield Input(placeholder="Item Name", id="form-name")
            yield Input(placeholder="Quantity", type="integer", id="form-quantity")
            yield Input(placeholder="Description", id="form-description")
        with Horizontal(id="form-buttons"):
            yield Button("Add Item", variant="primary", id="form-save")
            yield Button("Cancel", id="form-cancel", disabled=True)
            yield Button("Delete", variant="error", id="form-delete", disabled=True)
        yield Input(placeholder="Search by item name…", id="search-input")
        yield DataTable(id="items-table", cursor_type="row", zebra_stripes=True)
        with Horizontal(id="pagination"):
            yield Button("Prev", id="page-prev")
            yield Static("", id="page-label")
            yield Button("Next", id="page-next")

    def on_mount(self) -> None:
        table = self.query_one("#items-table", DataTable)
        table.add_columns("Item Name", "Quantity", "Description")
        self.refresh_table()

    # -------------------------------------------------------------------------
    # Table
    # -------------------------------------------------------------------------

    def refresh_table(self) -> None:
        """Rebuild the table from the current snapshot, search and page."""
        filtered = filter_items(self.inventory.items, self.search)
        page = paginate(filtered, self.page, self.page_size)
        self.page = page.number

        table = self.query_one("#items-table", DataTable)
        table.clear()
        if not page.items:
            table.add_row("No items found", "", "", key="__empty__")
        for item in page.items:
            table.add_row(item.name, str(item.quantity), item.description, key=str(item.id))

        self.query_one("#page-label", Static).update(f"Page {page.number} of {page.total_pages}")
        self.query_one("#page-prev", Button).disabled = not page.has_previous
        self.query_one("#page-next", Button).disabled = not page.has_next

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        key = event.row_key.value
        item = self.inventory.get(key) if key and key != "__empty__" else None
        if item is not None:
            self.start_edit(item)

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search-input":
            self.search = event.value
            self.page = 1
            self.refresh_table()

    # -------------------------------------------------------------------------
    # Form
    # -------------------------------------------------------------------------

    def start_edit(self, item: "Item") -> None:
        """Load an item into the form."""
        self.editing_id = item.id
        self.query_one("#form-name", Input).value = item.name
        self.query_one("#form-quantity", Input).value = str(item.quantity)
        self.query_one("#form-description", Input).value = item.description
        self._sync_buttons()

    def cancel_edit(self) -> None:
        """Clear the form and leave edit mode."""
        self.editing_id = None
        for input_id in ("#form-name", "#form-quantity", "#form-description"):
            self.query_one(input_id, Input).value = ""
        self._sync_buttons()

    def _sync_buttons(self) -> None:
        editing = self.editing_id is not None
        self.query_one("#form-save", Button).label = "Save Changes" if editing else "Add Item"
        self.query_one("#form-cancel", Button).disabled = not editing
        self.query_one("#form-delete", Button).disabled = not editing

    async def save(self) -> bool:
        """Create or update from the form fields.

        Returns:
            True if the store accepted the write
        """
        name = self.query_one("#form-name", Input).value
        quantity = self.query_one("#form-quantity", Input).value
        description = self.query_one("#form-description", Input).value

        if not name.strip() or not quantity.strip():
            self.notify("Name and quantity are required", severity="warning")
            return False

        try:
            await self.inventory.save_item(self.editing_id, name, quantity, description)
        except ValueError as e:
            self.notify(str(e), severity="warning")
            return False
        except InventoryError as e:
            logger.error(f"Error saving item: {e}")
            self.notify("Error saving item", severity="error")
            return False

        self.cancel_edit()
        self.refresh_table()
        self.post_message(self.Changed())
        return True

    async def delete_selected(self) -> bool:
        """Delete the item loaded in the form."""
        if self.editing_id is None:
            return False

        try:
            await self.inventory.delete_item(self.editing_id)
        except InventoryError as e:
            logger.error(f"Error deleting item: {e}")
            self.notify("Error deleting item", severity="error")
            return False

        self.cancel_edit()
        self.refresh_table()
        self.post_message(self.Changed())
        return True

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id == "form-save":
            event.stop()
            await self.save()
        elif button_id == "form-cancel":
            event.stop()
            self.cancel_edit()
        elif button_id == "form-delete":
            event.stop()
            await self.delete_selected()
        elif button_id == "page-prev":
            event.stop()
            self.page -= 1
            self.refresh_table()
        elif button_id == "page-next":
            event.stop()
            self.page += 1
            self.refresh_table()


__all__ = ["InventoryPanel"]
