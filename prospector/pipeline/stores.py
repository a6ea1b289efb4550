"""
Keyed side stores for data that arrives after a listing was first scored.
"""
import logging
from typing import Generic, Optional, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")


class ListingStore(Generic[T]):
    """
    Map of listing key -> value. Entries are only ever added or replaced
    whole; values are never mutated in place.
    """

    def __init__(self, name: str, write_once: bool = False):
        self.name = name
        self.write_once = write_once
        self._items: dict[str, T] = {}

    def get(self, key: Optional[str]) -> Optional[T]:
        if key is None:
            return None
        return self._items.get(key)

    def has(self, key: Optional[str]) -> bool:
        return key is not None and key in self._items

    def set(self, key: str, value: T) -> bool:
        """
        Store a value. Returns False when the store is write-once and the
        key is already present; the existing value is kept.
        """
        if self.write_once and key in self._items:
            logger.debug(f"{self.name}: {key} already stored, ignoring")
            return False
        self._items[key] = value
        return True

    def update(self, items: dict[str, T]) -> int:
        """Store several values; returns how many were written."""
        return sum(1 for key, value in items.items() if self.set(key, value))

    def clear(self) -> None:
        self._items = {}

    def __len__(self) -> int:
        return len(self._items)
