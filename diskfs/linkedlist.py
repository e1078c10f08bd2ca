"""Ordered collections of distinct items: a plain list and a sorted list."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any, Generic, TypeVar

T = TypeVar("T")

Compare = Callable[[Any, Any], int]


def _natural_compare(x: Any, y: Any) -> int:
    """Return -1, 0 or 1 as ``x`` is less than, equal to or greater than ``y``."""
    if x < y:
        return -1
    if x == y:
        return 0
    return 1


class LinkedList(Generic[T]):
    """A sequence of distinct items with cheap access to both ends.

    Items are compared with ``==``; adding an item that is already present
    raises ValueError.
    """

    def __init__(self) -> None:
        self._items: list[T] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(tuple(self._items))

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"

    def _require_absent(self, item: T) -> None:
        if item in self._items:
            raise ValueError(f"{item!r} is already in the list")

    def prepend(self, item: T) -> None:
        """Put ``item`` at the front of the list."""
        self._require_absent(item)
        self._items.insert(0, item)

    def append(self, item: T) -> None:
        """Put ``item`` at the end of the list."""
        self._require_absent(item)
        self._items.append(item)

    def front(self) -> T:
        """Return the first item without removing it."""
        if not self._items:
            raise IndexError("front of an empty list")
        return self._items[0]

    def remove_front(self) -> T:
        """Remove and return the first item."""
        if not self._items:
            raise IndexError("remove_front from an empty list")
        return self._items.pop(0)

    def remove(self, item: T) -> T:
        """Remove ``item``, which must be in the list, and return it."""
        try:
            index = self._items.index(item)
        except ValueError:
            raise ValueError(f"{item!r} is not in the list") from None
        return self._items.pop(index)

    def is_empty(self) -> bool:
        """Return True if the list holds nothing."""
        return not self._items

    def apply(self, func: Callable[[T], object]) -> None:
        """Call ``func`` on every item, front to back."""
        for item in tuple(self._items):
            func(item)

    def sanity_check(self) -> None:
        """Raise RuntimeError if the list holds the same item twice."""
        seen: list[T] = []
        for item in self._items:
            if item in seen:
                raise RuntimeError(f"list corrupted: {item!r} appears twice")
            seen.append(item)


class SortedList(LinkedList[T]):
    """A list kept in increasing order, so the front is always the smallest.

    ``compare(x, y)`` returns a negative number, zero or a positive number as
    ``x`` sorts before, with or after ``y``; by default the items' own
    ordering is used. Equal items keep their insertion order.
    """

    def __init__(self, compare: Compare | None = None) -> None:
        super().__init__()
        self._compare: Compare = compare if compare is not None else _natural_compare

    def insert(self, item: T) -> None:
        """Put ``item`` in its place, after any items that compare equal."""
        self._require_absent(item)
        position = next(
            (
                index
                for index, existing in enumerate(self._items)
                if self._compare(item, existing) < 0
            ),
            len(self._items),
        )
        self._items.insert(position, item)

    def append(self, item: T) -> None:
        """Insert ``item`` in sorted order; the end has no meaning here."""
        self.insert(item)

    def prepend(self, item: T) -> None:
        """Insert ``item`` in sorted order; the front has no meaning here."""
        self.insert(item)

    def sanity_check(self) -> None:
        """Raise RuntimeError if items repeat or are out of order."""
        super().sanity_check()
        for before, after in zip(self._items, self._items[1:]):
            if self._compare(before, after) > 0:
                raise RuntimeError(
                    f"sorted list corrupted: {before!r} comes before {after!r}"
                )