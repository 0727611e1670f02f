"""Abstract base class for inventory stores."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..models import Item


class InventoryError(Exception):
    """Base exception for inventory store failures."""

    pass


class FetchError(InventoryError):
    """Listing the inventory failed (transport or parse error)."""

    pass


class WriteError(InventoryError):
    """A create, update or delete call failed."""

    pass


class InventoryStore(ABC):
    """CRUD capability over stock records keyed by item id.

    The store assigns ids; callers only ever pass back ids they read from
    a previous `list()`. Implementations raise `FetchError` from `list()`
    and `WriteError` from the mutating calls. Timeouts are the store's own
    concern and surface as one of those two errors.

    Stores are async context managers; `close()` must be idempotent.
    """

    @abstractmethod
    async def list(self) -> list[Item]:
        """Fetch every item currently held by the store.

        Raises:
            FetchError: On transport or parse failure
        """
        ...

    @abstractmethod
    async def create(self, name: str, quantity: int, description: str = "") -> Item:
        """Create a record and return it with its store-assigned id.

        Raises:
            WriteError: On transport or validation failure
        """
        ...

    @abstractmethod
    async def update(
        self,
        item_id: int | str,
        name: str,
        quantity: int,
        description: str = "",
    ) -> Item:
        """Replace the full record stored under `item_id`.

        Raises:
            WriteError: If the id does not exist or the call fails
        """
        ...

    @abstractmethod
    async def delete(self, item_id: int | str) -> None:
        """Remove the record stored under `item_id`.

        Raises:
            WriteError: If the id does not exist or the call fails
        """
        ...

    async def close(self) -> None:
        """Release any held resources."""
        return None

    async def __aenter__(self) -> "InventoryStore":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


__all__ = ["FetchError", "InventoryError", "InventoryStore", "WriteError"]
