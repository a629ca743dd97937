from __future__ import annotations

from functools import cmp_to_key
from typing import Callable, Generic, Iterator, List, Optional, TypeVar

T = TypeVar("T")

Comparator = Callable[[T, T], int]


class OrderedQueue(Generic[T]):
    """
    A list kept in the order given by a three-way comparator.

    Index 0 is the front. Insertion is stable: a new item lands after every
    existing item it ties with. Removal by target uses identity, never the
    comparator, so two distinct items that rank equal are never conflated.
    """

    def __init__(self, comparator: Comparator) -> None:
        self._comparator = comparator
        self._items: List[T] = []

    def offer(self, item: T) -> int:
        """
        Insert ``item`` and return the zero-based index it was stored at.
        """
        index = 0
        while index < len(self._items) and self._comparator(self._items[index], item) <= 0:
            index += 1
        self._items.insert(index, item)
        return index

    def peek(self) -> Optional[T]:
        return self._items[0] if self._items else None

    def poll(self) -> Optional[T]:
        return self._items.pop(0) if self._items else None

    def at(self, index: int) -> Optional[T]:
        if index < 0 or index >= len(self._items):
            return None
        return self._items[index]

    def remove_matching(self, target: T) -> int:
        """
        Remove every entry that *is* ``target`` and return how many went.
        """
        kept = [item for item in self._items if item is not target]
        removed = len(self._items) - len(kept)
        self._items = kept
        return removed

    def remove_at(self, index: int) -> Optional[T]:
        if index < 0 or index >= len(self._items):
            return None
        return self._items.pop(index)

    def reorder(self) -> None:
        """
        Re-sort after keys were changed in place; equal items keep their order.
        """
        self._items.sort(key=cmp_to_key(self._comparator))

    def size(self) -> int:
        return len(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))
