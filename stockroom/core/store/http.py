"""REST inventory store client for stockroom.

Talks to an items service exposing plain CRUD routes:

    GET    {base_url}          -> [item, ...]
    POST   {base_url}          -> item
    PUT    {base_url}/{id}     -> item
    DELETE {base_url}/{id}

Bodies are JSON objects of the form {"name", "quantity", "description"}.

Example:
    >>> async with HttpInventoryStore("http://localhost:8000/items") as store:
    ...     items = await store.list()
    ...     await store.create("Mango", 10)
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ..models import Item
from .base import FetchError, InventoryStore, WriteError

logger = logging.getLogger(__name__)


class HttpInventoryStore(InventoryStore):
    """Async httpx client for the items REST service.

    The underlying `httpx.AsyncClient` is created lazily on first use and
    released by `close()` (or by leaving the async context manager).
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000/items",
        timeout: float = 10.0,
    ):
        """Initialize the store client.

        Args:
            base_url: URL of the items collection
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    def _item_url(self, item_id: int | str) -> str:
        return f"{self.base_url}/{item_id}"

    async def list(self) -> list[Item]:
        try:
            client = await self._get_client()
            resp = await client.get(self.base_url)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            raise FetchError(f"Listing items failed with status {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise FetchError(f"Listing items failed: {e}") from e
        except ValueError as e:
            raise FetchError(f"Invalid JSON from {self.base_url}: {e}") from e

        if not isinstance(data, list):
            raise FetchError(f"Expected a list of items, got {type(data).__name__}")

        try:
            return [Item.from_dict(record) for record in data]
        except ValidationError as e:
            raise FetchError(f"Malformed item record: {e}") from e

    async def create(self, name: str, quantity: int, description: str = "") -> Item:
        payload = {"name": name, "quantity": quantity, "description": description}
        data = await self._write("POST", self.base_url, payload)
        return self._item_from_response(data, fallback=payload)

    async def update(
        self,
        item_id: int | str,
        name: str,
        quantity: int,
        description: str = "",
    ) -> Item:
        payload = {"name": name, "quantity": quantity, "description": description}
        data = await self._write("PUT", self._item_url(item_id), payload)
        return self._item_from_response(data, fallback={"id": item_id, **payload})

    async def delete(self, item_id: int | str) -> None:
        await self._write("DELETE", self._item_url(item_id))

    async def _write(
        self,
        method: str,
        url: str,
        payload: dict[str, Any] | None = None,
    ) -> Any:
        """Issue a mutating request and return the decoded body (or None)."""
        try:
            client = await self._get_client()
            resp = await client.request(method, url, json=payload)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise WriteError(
                f"{method} {url} failed with status {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise WriteError(f"{method} {url} failed: {e}") from e

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            logger.debug(f"{method} {url} returned a non-JSON body")
            return None

    def _item_from_response(self, data: Any, fallback: dict[str, Any]) -> Item:
        """Prefer the record echoed by the service; fall back to what was sent."""
        if isinstance(data, dict) and "id" in data:
            try:
                return Item.from_dict(data)
            except ValidationError as e:
                raise WriteError(f"Malformed item record in response: {e}") from e
        if "id" not in fallback:
            # Write succeeded; the id shows up on the next list()
            logger.warning("Store response did not include the new item id")
            return Item.from_dict({"id": "", **fallback})
        return Item.from_dict(fallback)

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None


__all__ = ["HttpInventoryStore"]
