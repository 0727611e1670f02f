"""Ordered pattern rules for the stockroom interpreter.

Each rule is an independent function `(text, context) -> Command | None`.
The classifier tries them in a fixed order and the first non-None result
wins. Several patterns overlap (e.g. "show items" is both a Find and a
listing phrase), so the order in RULES is part of the behavior.

Keywords match case-insensitively; captured names keep the user's casing.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from .taxonomy import (
    DEFAULT_LOW_STOCK_THRESHOLD,
    Add,
    Command,
    Delete,
    Find,
    LowStock,
    ShowInventory,
    TotalStock,
    Update,
    make_reference,
)

# Quantities are ASCII digits only; int() must never see other scripts' digits
_QTY = r"([0-9]+)"

ADD_RE = re.compile(rf"add(?:\s+item)?\s+(.+?)\s+{_QTY}", re.IGNORECASE)
UPDATE_RE = re.compile(rf"(?:update|set)\s+(.+?)\s+{_QTY}", re.IGNORECASE)
DELETE_RE = re.compile(r"(?:delete|remove)\s+(.+)", re.IGNORECASE)
FIND_RE = re.compile(r"(?:find|search|show)\s+(.+)", re.IGNORECASE)
BELOW_RE = re.compile(r"\bbelow\s+([0-9]+)", re.IGNORECASE)
LOW_STOCK_RE = re.compile(r"low\s+(?:stock|inventory)(?:\D*?([0-9]+)\s*$)?", re.IGNORECASE)

INVENTORY_PHRASES = frozenset({"inventory", "list items", "show items"})
TOTAL_PHRASES = ("total stock", "total items", "total quantity")

# Bare-word lookup limits for the fallback rule
BARE_WORD_MAX_CHARS = 30
BARE_WORD_MAX_TOKENS = 4


@dataclass(frozen=True)
class RuleContext:
    """Settings a rule may consult (kept out of module state)."""

    default_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD


Rule = Callable[[str, RuleContext], "Command | None"]


def match_add(text: str, ctx: RuleContext) -> Command | None:
    """`add <name> <qty>` / `add item <name> <qty>`."""
    m = ADD_RE.fullmatch(text)
    if not m:
        return None
    name = m.group(1).strip()
    # Whitespace-only names never reach the store
    if not name:
        return None
    return Add(name=name, qty=int(m.group(2)))


def match_update(text: str, ctx: RuleContext) -> Command | None:
    """`update <target> <qty>` / `set <target> <qty>`."""
    m = UPDATE_RE.fullmatch(text)
    if not m:
        return None
    target = m.group(1).strip()
    if not target:
        return None
    return Update(ref=make_reference(target), qty=int(m.group(2)))


def match_delete(text: str, ctx: RuleContext) -> Command | None:
    """`delete <target>` / `remove <target>`."""
    m = DELETE_RE.fullmatch(text)
    if not m:
        return None
    return Delete(ref=make_reference(m.group(1)))


def match_find(text: str, ctx: RuleContext) -> Command | None:
    """`find|search|show <query>`."""
    m = FIND_RE.fullmatch(text)
    if not m:
        return None
    return Find(query=m.group(1).strip())


def match_show_inventory(text: str, ctx: RuleContext) -> Command | None:
    lower = text.lower()
    if "show inventory" in lower or lower in INVENTORY_PHRASES:
        return ShowInventory()
    return None


def match_total_stock(text: str, ctx: RuleContext) -> Command | None:
    lower = text.lower()
    if any(phrase in lower for phrase in TOTAL_PHRASES):
        return TotalStock()
    return None


def match_low_stock(text: str, ctx: RuleContext) -> Command | None:
    """`below N` anywhere, or a low stock phrase with an optional trailing N."""
    below = BELOW_RE.search(text)
    if below:
        return LowStock(threshold=int(below.group(1)))
    low = LOW_STOCK_RE.search(text)
    if low:
        if low.group(1):
            return LowStock(threshold=int(low.group(1)))
        return LowStock(threshold=ctx.default_threshold)
    return None


def match_bare_word(text: str, ctx: RuleContext) -> Command | None:
    """Short free text is treated as a name lookup."""
    if len(text) <= BARE_WORD_MAX_CHARS and len(text.split()) <= BARE_WORD_MAX_TOKENS:
        return Find(query=text)
    return None


# Precedence order - first match wins
RULES: tuple[Rule, ...] = (
    match_add,
    match_update,
    match_delete,
    match_find,
    match_show_inventory,
    match_total_stock,
    match_low_stock,
    match_bare_word,
)
