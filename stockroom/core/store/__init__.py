"""Inventory stores for stockroom.

This package provides the CRUD capability the interpreter and the
form/table front-ends write through:
- HttpInventoryStore: REST items service via httpx
- MemoryInventoryStore: in-process store for offline use and tests

Usage:
    from stockroom.core.store import create_store

    async with create_store(config) as store:
        items = await store.list()
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import FetchError, InventoryError, InventoryStore, WriteError

if TYPE_CHECKING:
    from ...config import AppConfig


def create_store(config: "AppConfig") -> InventoryStore:
    """Create the store selected by configuration.

    Uses lazy imports so offline mode never touches httpx.

    Args:
        config: Application configuration

    Returns:
        An unopened InventoryStore
    """
    if config.offline:
        from .memory import MemoryInventoryStore

        return MemoryInventoryStore()

    from .http import HttpInventoryStore

    return HttpInventoryStore(config.api_url, timeout=config.timeout)


__all__ = [
    "FetchError",
    "InventoryError",
    "InventoryStore",
    "WriteError",
    "create_store",
]
