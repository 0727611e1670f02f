"""Command interpretation for the stockroom inventory assistant.

This package turns a free-text line into a structured Command and
resolves item references against the live inventory snapshot.

The pipeline has two pure stages:
1. Classification - ordered regex/keyword rules, first match wins
2. Resolution - exact id or case-insensitive name lookup

Example usage:
    ```python
    from stockroom.core.intent import Add, ByName, Update, classify, resolve

    assert classify("add Mango 10") == Add(name="Mango", qty=10)

    cmd = classify("update mango 7")
    assert cmd == Update(ref=ByName("mango"), qty=7)
    item = resolve(cmd.ref, items)  # None if no item is called "mango"
    ```
"""

from .parser import (
    MAX_INPUT_LENGTH,
    CommandClassifier,
    classify,
    create_classifier,
)
from .patterns import (
    RULES,
    RuleContext,
)
from .resolver import resolve
from .taxonomy import (
    DEFAULT_LOW_STOCK_THRESHOLD,
    MUTATING_COMMANDS,
    Add,
    ById,
    ByName,
    Command,
    CommandType,
    Delete,
    Find,
    LowStock,
    Reference,
    ShowInventory,
    TotalStock,
    Unknown,
    Update,
    make_reference,
)

__all__ = [
    # Classifier
    "CommandClassifier",
    "classify",
    "create_classifier",
    "MAX_INPUT_LENGTH",
    # Rules
    "RULES",
    "RuleContext",
    # Resolution
    "resolve",
    # Taxonomy
    "Command",
    "CommandType",
    "MUTATING_COMMANDS",
    "DEFAULT_LOW_STOCK_THRESHOLD",
    "ShowInventory",
    "TotalStock",
    "LowStock",
    "Find",
    "Add",
    "Update",
    "Delete",
    "Unknown",
    "Reference",
    "ById",
    "ByName",
    "make_reference",
]
