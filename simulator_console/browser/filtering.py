"""
Client-side filtering of the master collection by display key.
"""

from typing import Optional, Protocol, Sequence, TypeVar


class HasDisplayKey(Protocol):
    display_key: Optional[str]


T = TypeVar("T", bound=HasDisplayKey)


def normalize_query(query: Optional[str]) -> str:
    """Trimmed, case-folded query; empty means no filter."""
    return (query or "").strip().casefold()


def filter_items(items: Sequence[T], query: Optional[str]) -> Sequence[T]:
    """
    Keep the items whose display key contains the query, ignoring case.

    An empty or whitespace-only query returns ``items`` itself.
    """
    needle = normalize_query(query)
    if not needle:
        return items
    return [item for item in items if needle in (item.display_key or "").casefold()]
