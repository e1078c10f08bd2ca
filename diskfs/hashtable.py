"""A self-expanding hash table of items that carry their own keys."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterator
from typing import Any, Generic, TypeVar

from .linkedlist import LinkedList

T = TypeVar("T")

INITIAL_BUCKETS = 4
RESIZE_RATIO = 3
INCREASE_SIZE_BY = 4


class HashTable(Generic[T]):
    """A hash table that finds items by a key drawn from each item.

    ``get_key(item)`` returns an item's key and ``hash_func(key)`` returns a
    non-negative integer for a key; by default the built-in ``hash`` is used.
    Collisions are kept in per-bucket lists. The table grows by a factor of
    four whenever it holds three or more items per bucket.
    """

    def __init__(
        self,
        get_key: Callable[[T], Any],
        hash_func: Callable[[Any], int] | None = None,
    ) -> None:
        self._get_key = get_key
        self._hash: Callable[[Any], int] = hash_func if hash_func is not None else hash
        self._num_items = 0
        self._buckets: list[LinkedList[T]] = self._new_buckets(INITIAL_BUCKETS)

    @staticmethod
    def _new_buckets(count: int) -> list[LinkedList[T]]:
        return [LinkedList() for _ in range(count)]

    @property
    def num_buckets(self) -> int:
        return len(self._buckets)

    def __len__(self) -> int:
        return self._num_items

    def __contains__(self, key: Hashable) -> bool:
        return self._find_in_bucket(self._hash_value(key), key) is not None

    def __iter__(self) -> Iterator[T]:
        """Yield every item, bucket by bucket."""
        for bucket in tuple(self._buckets):
            yield from bucket

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"

    def _hash_value(self, key: Any) -> int:
        return self._hash(key) % len(self._buckets)

    def _find_in_bucket(self, bucket: int, key: Any) -> tuple[T] | None:
        for item in self._buckets[bucket]:
            if self._get_key(item) == key:
                return (item,)
        return None

    def _rehash(self) -> None:
        self.sanity_check()
        old = self._buckets
        self._buckets = self._new_buckets(len(old) * INCREASE_SIZE_BY)
        for bucket in old:
            while not bucket.is_empty():
                item = bucket.remove_front()
                self._buckets[self._hash_value(self._get_key(item))].append(item)
        self.sanity_check()

    def insert(self, item: T) -> None:
        """Add ``item``; raise ValueError if its key is already present."""
        key = self._get_key(item)
        if key in self:
            raise ValueError(f"key {key!r} is already in the table")
        if self._num_items // len(self._buckets) >= RESIZE_RATIO:
            self._rehash()
        self._buckets[self._hash_value(key)].append(item)
        self._num_items += 1

    def remove(self, key: Any) -> T:
        """Remove and return the item with ``key``; raise KeyError if absent."""
        bucket = self._hash_value(key)
        found = self._find_in_bucket(bucket, key)
        if found is None:
            raise KeyError(key)
        item = found[0]
        self._buckets[bucket].remove(item)
        self._num_items -= 1
        return item

    def find(self, key: Any) -> T | None:
        """Return the item with ``key``, or None if there is none."""
        found = self._find_in_bucket(self._hash_value(key), key)
        return found[0] if found is not None else None

    def is_empty(self) -> bool:
        """Return True if the table holds nothing."""
        return self._num_items == 0

    def apply(self, func: Callable[[T], object]) -> None:
        """Call ``func`` on every item, bucket by bucket."""
        for item in self:
            func(item)

    def sanity_check(self) -> None:
        """Raise RuntimeError if the table's structure is inconsistent."""
        found = 0
        for index, bucket in enumerate(self._buckets):
            bucket.sanity_check()
            found += len(bucket)
            for item in bucket:
                if self._hash_value(self._get_key(item)) != index:
                    raise RuntimeError(
                        f"hash table corrupted: {item!r} stored in bucket {index}"
                    )
        if found != self._num_items:
            raise RuntimeError(
                f"hash table corrupted: counted {found} items, expected {self._num_items}"
            )