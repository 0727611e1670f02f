"""Command taxonomy for the stockroom interpreter.

A classified utterance becomes exactly one Command. Commands are small
frozen dataclasses (one per intent) rather than a single record with
optional fields, so a handler can only read the parameters its intent
actually carries.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

DEFAULT_LOW_STOCK_THRESHOLD = 5


class CommandType(str, Enum):
    """Intent tags for classified commands."""

    SHOW_INVENTORY = "show_inventory"  # List everything
    TOTAL_STOCK = "total_stock"  # Sum of quantities
    LOW_STOCK = "low_stock"  # Items under a threshold
    FIND = "find"  # Name substring search
    ADD = "add"  # Create a record
    UPDATE = "update"  # Replace quantity of a record
    DELETE = "delete"  # Remove a record
    UNKNOWN = "unknown"  # Nothing matched


# =============================================================================
# References
# =============================================================================


@dataclass(frozen=True)
class ById:
    """Reference to an item by its numeric store id."""

    id: int


@dataclass(frozen=True)
class ByName:
    """Reference to an item by exact (case-insensitive) name."""

    name: str


Reference = Union[ById, ByName]


def make_reference(target: str) -> Reference:
    """Build a reference from a target token: all digits means an id."""
    target = target.strip()
    if target.isascii() and target.isdigit():
        return ById(int(target))
    return ByName(target)


# =============================================================================
# Commands
# =============================================================================


@dataclass(frozen=True)
class ShowInventory:
    kind: ClassVar[CommandType] = CommandType.SHOW_INVENTORY


@dataclass(frozen=True)
class TotalStock:
    kind: ClassVar[CommandType] = CommandType.TOTAL_STOCK


@dataclass(frozen=True)
class LowStock:
    threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    kind: ClassVar[CommandType] = CommandType.LOW_STOCK


@dataclass(frozen=True)
class Find:
    query: str
    kind: ClassVar[CommandType] = CommandType.FIND


@dataclass(frozen=True)
class Add:
    name: str
    qty: int
    kind: ClassVar[CommandType] = CommandType.ADD


@dataclass(frozen=True)
class Update:
    ref: Reference
    qty: int
    kind: ClassVar[CommandType] = CommandType.UPDATE


@dataclass(frozen=True)
class Delete:
    ref: Reference
    kind: ClassVar[CommandType] = CommandType.DELETE


@dataclass(frozen=True)
class Unknown:
    kind: ClassVar[CommandType] = CommandType.UNKNOWN


Command = Union[ShowInventory, TotalStock, LowStock, Find, Add, Update, Delete, Unknown]

# Intents that write to the store
MUTATING_COMMANDS: frozenset[CommandType] = frozenset(
    {CommandType.ADD, CommandType.UPDATE, CommandType.DELETE}
)
