"""A charge-aware least-recently-used cache."""

from __future__ import annotations

from collections import OrderedDict
from typing import Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LRUCache(Generic[K, V]):
    """LRU cache bounded by the total charge of its entries.

    Every entry carries a charge (for example its size in bytes). Whenever
    the total charge exceeds the capacity, the least recently used entries
    are evicted until it fits again. The cache is not thread-safe.
    """

    def __init__(self, capacity: int = 0) -> None:
        # Oldest entry first, most recently used last.
        self._entries: OrderedDict[K, tuple[V, int]] = OrderedDict()
        self._capacity = capacity
        self._usage = 0

    @property
    def size(self) -> int:
        """Number of entries held."""
        return len(self._entries)

    @property
    def usage(self) -> int:
        """Total charge of all entries."""
        return self._usage

    @property
    def capacity(self) -> int:
        """Maximum total charge."""
        return self._capacity

    @capacity.setter
    def capacity(self, capacity: int) -> None:
        self._capacity = capacity
        self._trim()

    def insert(self, key: K, value: V, charge: int) -> None:
        """Insert or replace ``key`` and make it the most recently used entry."""
        previous = self._entries.pop(key, None)
        if previous is not None:
            self._usage -= previous[1]
        self._entries[key] = (value, charge)
        self._usage += charge
        self._trim()

    def lookup(self, key: K) -> V | None:
        """Return the value for ``key`` and mark it as recently used, or None."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        self._entries.move_to_end(key)
        return entry[0]

    def remove(self, key: K) -> V | None:
        """Remove ``key`` and return its value, or None if it is absent."""
        entry = self._entries.pop(key, None)
        if entry is None:
            return None
        self._usage -= entry[1]
        return entry[0]

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()
        self._usage = 0

    def items(self) -> list[tuple[K, V]]:
        """Return ``(key, value)`` pairs, most recently used first."""
        return [(key, value) for key, (value, _) in reversed(self._entries.items())]

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def _trim(self) -> None:
        while self._usage > self._capacity and self._entries:
            _, (_, charge) = self._entries.popitem(last=False)
            self._usage -= charge