"""Entity resolution for stockroom commands.

Turns a Reference produced by the classifier into at most one Item from
the current snapshot. Resolution is exact: ids compare numerically and
names compare case-insensitively with no partial matching (substring
search is what `Find` is for). A miss returns None.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..models import Item
from .taxonomy import ById, ByName, Reference


def _numeric_id(value: int | str) -> int | None:
    """Coerce a store id to int for comparison, or None if it is not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def resolve(ref: Reference, items: Sequence[Item]) -> Item | None:
    """Find the first item a reference points to.

    Args:
        ref: ById or ByName reference
        items: Current inventory snapshot, in store order

    Returns:
        The matching Item, or None if nothing matches
    """
    if isinstance(ref, ById):
        for item in items:
            if _numeric_id(item.id) == ref.id:
                return item
        return None

    if isinstance(ref, ByName):
        wanted = ref.name.casefold()
        for item in items:
            if item.name.casefold() == wanted:
                return item
        return None

    raise TypeError(f"Unsupported reference: {ref!r}")
