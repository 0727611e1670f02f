"""Tests for stockroom.cli module.

Tests cover:
- CLI argument parsing
- list/add/edit/delete commands
- ask command (one chat turn)
- run_cli exit codes
"""

from pathlib import Path

import pytest

import stockroom.cli as cli
from stockroom.cli import create_parser, load_config, run_cli
from stockroom.core.models import Item
from stockroom.core.store import WriteError
from stockroom.core.store.memory import MemoryInventoryStore

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def store(monkeypatch) -> MemoryInventoryStore:
    """Shared in-memory store used by every command in a test."""
    shared = MemoryInventoryStore(
        [
            Item(id=1, name="Mango", quantity=10, description="ripe"),
            Item(id=2, name="Apple", quantity=2),
        ]
    )
    monkeypatch.setattr(cli, "create_store", lambda config: shared)
    return shared


def run(tmp_path: Path, *argv: str) -> int | None:
    return run_cli(["--project", str(tmp_path), *argv])


# =============================================================================
# Parser Tests
# =============================================================================


class TestParser:
    """Tests for CLI argument parsing."""

    def test_no_subcommand(self):
        args = create_parser().parse_args([])
        assert args.command is None

    def test_global_flags(self):
        args = create_parser().parse_args(["--offline", "--api-url", "http://x/items", "list"])
        assert args.offline is True
        assert args.api_url == "http://x/items"

    def test_add_requires_int_quantity(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["add", "Mango", "ten"])

    def test_ask_joins_words(self):
        args = create_parser().parse_args(["ask", "low", "stock"])
        assert args.text == ["low", "stock"]

    def test_load_config_applies_flags(self, tmp_path: Path):
        args = create_parser().parse_args(
            ["--project", str(tmp_path), "--offline", "--api-url", "http://x/items", "list"]
        )
        config = load_config(args)
        assert config.offline is True
        assert config.api_url == "http://x/items"

    def test_run_cli_without_command_returns_none(self):
        assert run_cli([]) is None


# =============================================================================
# Command Tests
# =============================================================================


class TestListCommand:
    def test_lists_items(self, tmp_path, store, capsys):
        assert run(tmp_path, "list") == 0
        out = capsys.readouterr().out
        assert "Mango" in out
        assert "Apple" in out

    def test_search(self, tmp_path, store, capsys):
        assert run(tmp_path, "list", "--search", "man") == 0
        out = capsys.readouterr().out
        assert "Mango" in out
        assert "Apple" not in out

    def test_no_matches(self, tmp_path, store, capsys):
        assert run(tmp_path, "list", "-s", "kiwi") == 0
        assert "No items found" in capsys.readouterr().out


def stored(store: MemoryInventoryStore) -> list[Item]:
    """Current store contents, read without an event loop."""
    return list(store._items.values())


class TestWriteCommands:
    """add/edit/delete write through to the store."""

    def test_add(self, tmp_path, store, capsys):
        assert run(tmp_path, "add", "Pear", "3", "-d", "green") == 0
        assert stored(store)[-1] == Item(id=3, name="Pear", quantity=3, description="green")
        assert "Added Pear" in capsys.readouterr().out

    def test_edit_keeps_unspecified_fields(self, tmp_path, store):
        assert run(tmp_path, "edit", "1", "-q", "4") == 0
        mango = stored(store)[0]
        assert mango.quantity == 4
        assert mango.name == "Mango"
        assert mango.description == "ripe"

    def test_add_negative_quantity_rejected(self, tmp_path, store, capsys):
        assert run(tmp_path, "add", "Mango", "-5") == 1
        assert "negative" in capsys.readouterr().out
        assert len(stored(store)) == 2

    def test_edit_negative_quantity_rejected(self, tmp_path, store):
        assert run(tmp_path, "edit", "1", "-q", "-3") == 1
        assert stored(store)[0].quantity == 10

    def test_edit_missing(self, tmp_path, store, capsys):
        assert run(tmp_path, "edit", "99", "--name", "X") == 1
        assert "No item with id 99" in capsys.readouterr().out

    def test_delete(self, tmp_path, store):
        assert run(tmp_path, "delete", "2") == 0
        assert [i.name for i in stored(store)] == ["Mango"]

    def test_delete_missing(self, tmp_path, store):
        assert run(tmp_path, "delete", "99") == 1


class TestAskCommand:
    def test_total_stock(self, tmp_path, store, capsys):
        assert run(tmp_path, "ask", "total", "stock") == 0
        assert "Total stock across items: 12" in capsys.readouterr().out

    def test_add_via_chat(self, tmp_path, store, capsys):
        assert run(tmp_path, "ask", "add Pear 3") == 0
        assert 'Added "Pear"' in capsys.readouterr().out

    def test_store_failure_reported_as_reply(self, tmp_path, store, capsys, monkeypatch):
        async def failing_delete(item_id):
            raise WriteError("down")

        monkeypatch.setattr(store, "delete", failing_delete)
        assert run(tmp_path, "ask", "delete Mango") == 0
        assert "error performing that action" in capsys.readouterr().out


class TestErrors:
    def test_unexpected_error_returns_1(self, tmp_path, capsys, monkeypatch):
        def broken(config):
            raise RuntimeError("boom")

        monkeypatch.setattr(cli, "create_store", broken)
        assert run(tmp_path, "list") == 1
        assert "boom" in capsys.readouterr().out


class TestChatCommand:
    """Tests for the interactive chat loop."""

    @staticmethod
    def feed(monkeypatch, lines: list[str]) -> None:
        """Replace console input with scripted lines, then EOF."""
        pending = iter(lines)

        def fake_input(prompt: str = "") -> str:
            try:
                return next(pending)
            except StopIteration:
                raise EOFError from None

        monkeypatch.setattr(cli.console, "input", fake_input)

    def test_replies_until_exit_word(self, tmp_path, store, capsys, monkeypatch):
        self.feed(monkeypatch, ["total stock", "add Pear 3", "bye", "delete Mango"])
        assert run(tmp_path, "chat") == 0

        out = capsys.readouterr().out
        assert "Hello! I'm Inventory Assistant" in out
        assert "Total stock across items: 12" in out
        assert 'Added "Pear"' in out
        assert len(stored(store)) == 3

    def test_eof_ends_session(self, tmp_path, store, capsys, monkeypatch):
        self.feed(monkeypatch, [])
        assert run(tmp_path, "chat") == 0
        assert "Inventory Assistant" in capsys.readouterr().out

    def test_blank_lines_get_no_reply(self, tmp_path, store, capsys, monkeypatch):
        self.feed(monkeypatch, ["   ", "exit"])
        assert run(tmp_path, "chat") == 0
        assert capsys.readouterr().out.count("bot>") == 1
