"""CLI commands for the stockroom inventory assistant.

Provides subcommands for the form/table workflow and the chat interpreter.

Commands:
    stockroom list      - Show items (with search and pagination)
    stockroom add       - Create an item
    stockroom edit      - Change an item's name, quantity or description
    stockroom delete    - Delete an item by id
    stockroom ask       - Run one chat command and print the reply
    stockroom chat      - Interactive chat session
"""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import AppConfig
from .core.intent import CommandClassifier
from .core.inventory import Inventory, filter_items, paginate
from .core.session import ChatSession, Sender
from .core.store import create_store

console = Console()

CHAT_EXIT_WORDS = {"quit", "exit", "bye"}


def load_config(args: argparse.Namespace) -> AppConfig:
    """Build configuration from the config file, env and global flags."""
    return AppConfig.load(
        Path(args.project_path).resolve(),
        api_url=getattr(args, "api_url", None),
        offline=True if getattr(args, "offline", False) else None,
    )


def render_items_table(items, title: str = "Inventory") -> Table:
    """Build the rich table used by `list`."""
    table = Table(title=title)
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Item Name", style="cyan")
    table.add_column("Quantity", justify="right")
    table.add_column("Description", style="dim")

    for item in items:
        table.add_row(
            escape(str(item.id)),
            escape(item.name),
            str(item.quantity),
            escape(item.description) or "-",
        )
    return table


def list_items(args: argparse.Namespace) -> int:
    """Show items.

    Args:
        args: Parsed arguments (search, page)

    Returns:
        Exit code (0 for success)
    """
    config = load_config(args)

    async def _run() -> list:
        async with create_store(config) as store:
            return await store.list()

    items = asyncio.run(_run())
    filtered = filter_items(items, args.search or "")

    if not filtered:
        console.print("[dim]No items found.[/dim]")
        return 0

    page = paginate(filtered, args.page, config.page_size)
    console.print(render_items_table(page.items))
    if page.total_pages > 1:
        console.print(f"[dim]Page {page.number} of {page.total_pages}[/dim]")

    return 0


def add_item(args: argparse.Namespace) -> int:
    """Create an item.

    Args:
        args: Parsed arguments (name, quantity, description)

    Returns:
        Exit code (0 for success)
    """
    config = load_config(args)

    async def _run():
        async with create_store(config) as store:
            return await Inventory(store).save_item(
                None, args.name, args.quantity, args.description or ""
            )

    item = asyncio.run(_run())
    console.print(f"[green]✓[/green] Added {escape(item.name)} (qty: {item.quantity})")
    return 0


def edit_item(args: argparse.Namespace) -> int:
    """Change fields of an existing item.

    Unspecified fields keep their current values.

    Args:
        args: Parsed arguments (id, name, quantity, description)

    Returns:
        Exit code (0 for success, 1 if the item does not exist)
    """
    config = load_config(args)

    async def _run():
        async with create_store(config) as store:
            inventory = Inventory(store)
            await inventory.refresh()
            current = inventory.get(args.id)
            if current is None:
                return None
            return await inventory.save_item(
                current.id,
                args.name if args.name is not None else current.name,
                args.quantity if args.quantity is not None else current.quantity,
                args.description if args.description is not None else current.description,
            )

    item = asyncio.run(_run())
    if item is None:
        console.print(f"[red]Error:[/red] No item with id {escape(args.id)}")
        return 1

    console.print(f"[green]✓[/green] Saved {escape(item.name)} (qty: {item.quantity})")
    return 0


def delete_item(args: argparse.Namespace) -> int:
    """Delete an item by id.

    Args:
        args: Parsed arguments (id)

    Returns:
        Exit code (0 for success, 1 if the item does not exist)
    """
    config = load_config(args)

    async def _run():
        async with create_store(config) as store:
            inventory = Inventory(store)
            await inventory.refresh()
            current = inventory.get(args.id)
            if current is None:
                return None
            await inventory.delete_item(current.id)
            return current

    item = asyncio.run(_run())
    if item is None:
        console.print(f"[red]Error:[/red] No item with id {escape(args.id)}")
        return 1

    console.print(f"[green]✓[/green] Deleted {escape(item.name)}")
    return 0


def ask(args: argparse.Namespace) -> int:
    """Run a single chat command and print the reply.

    Args:
        args: Parsed arguments (text)

    Returns:
        Exit code (0 for success)
    """
    config = load_config(args)
    text = " ".join(args.text)

    async def _run() -> str | None:
        async with create_store(config) as store:
            inventory = Inventory(store)
            await inventory.refresh()
            session = ChatSession(
                inventory,
                classifier=CommandClassifier(config.low_stock_threshold),
                greeting=None,
            )
            await session.submit(text)
            return session.last_reply

    reply = asyncio.run(_run())
    if reply is None:
        console.print("[dim]Nothing to do.[/dim]")
        return 0

    console.print(escape(reply))
    return 0


def chat(args: argparse.Namespace) -> int:
    """Interactive chat session.

    Reads lines until EOF or one of quit/exit/bye.

    Args:
        args: Parsed arguments

    Returns:
        Exit code (0 for success)
    """
    config = load_config(args)

    async def _run() -> None:
        async with create_store(config) as store:
            inventory = Inventory(store)
            await inventory.refresh()
            session = ChatSession(
                inventory,
                classifier=CommandClassifier(config.low_stock_threshold),
            )
            console.print(f"[bold]bot>[/bold] {escape(session.messages[0].text)}")

            while True:
                try:
                    line = await asyncio.to_thread(console.input, "[bold cyan]you>[/bold cyan] ")
                except EOFError:
                    break
                if line.strip().lower() in CHAT_EXIT_WORDS:
                    break

                before = len(session.messages)
                await session.submit(line)
                for msg in session.messages[before:]:
                    if msg.sender is Sender.BOT:
                        console.print(f"[bold]bot>[/bold] {escape(msg.text)}")

    asyncio.run(_run())
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="stockroom",
        description="stockroom: Inventory manager with a rule-based chat assistant",
    )
    parser.add_argument(
        "--project",
        "-p",
        dest="project_path",
        default=".",
        help="Directory holding .stockroom/config.yaml (default: current directory)",
    )
    parser.add_argument(
        "--api-url",
        dest="api_url",
        help="URL of the items collection (overrides config)",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Use a throwaway in-memory store instead of the service",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # =========================================================================
    # list command
    # =========================================================================
    list_parser = subparsers.add_parser("list", help="Show items")
    list_parser.add_argument(
        "--search",
        "-s",
        help="Only show items whose name contains this text",
    )
    list_parser.add_argument(
        "--page",
        "-n",
        type=int,
        default=1,
        help="Page number (default: 1)",
    )
    list_parser.set_defaults(func=list_items)

    # =========================================================================
    # add command
    # =========================================================================
    add_parser = subparsers.add_parser("add", help="Create an item")
    add_parser.add_argument("name", help="Item name")
    add_parser.add_argument("quantity", type=int, help="Units in stock")
    add_parser.add_argument(
        "--description",
        "-d",
        help="Item description",
    )
    add_parser.set_defaults(func=add_item)

    # =========================================================================
    # edit command
    # =========================================================================
    edit_parser = subparsers.add_parser("edit", help="Change an item")
    edit_parser.add_argument("id", help="Item id")
    edit_parser.add_argument("--name", help="New name")
    edit_parser.add_argument("--quantity", "-q", type=int, help="New quantity")
    edit_parser.add_argument("--description", "-d", help="New description")
    edit_parser.set_defaults(func=edit_item)

    # =========================================================================
    # delete command
    # =========================================================================
    delete_parser = subparsers.add_parser("delete", help="Delete an item")
    delete_parser.add_argument("id", help="Item id")
    delete_parser.set_defaults(func=delete_item)

    # =========================================================================
    # chat commands
    # =========================================================================
    ask_parser = subparsers.add_parser("ask", help="Run one chat command")
    ask_parser.add_argument("text", nargs="+", help="Command text, e.g. 'low stock'")
    ask_parser.set_defaults(func=ask)

    chat_parser = subparsers.add_parser("chat", help="Interactive chat session")
    chat_parser.set_defaults(func=chat)

    return parser


def run_cli(args: list[str] | None = None) -> int | None:
    """Run the CLI.

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code, or None when no subcommand was given
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    if hasattr(parsed, "func"):
        try:
            return parsed.func(parsed)
        except KeyboardInterrupt:
            console.print("\n[dim]Cancelled.[/dim]")
            return 130
        except Exception as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            return 1

    # No subcommand = launch TUI
    return None


__all__ = [
    "create_parser",
    "run_cli",
    "list_items",
    "add_item",
    "edit_item",
    "delete_item",
    "ask",
    "chat",
]
