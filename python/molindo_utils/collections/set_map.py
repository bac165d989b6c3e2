"""Multi-value map keeping a set of values per key.

Example:
    >>> tags = SetMap.new_set_map()
    >>> tags.put("post-1", "python")
    True
    >>> tags.put_all("post-1", ["python", "typing"])
    True
    >>> sorted(tags.get("post-1"))
    ['python', 'typing']
"""

from __future__ import annotations

import threading
from collections.abc import Hashable, Iterable, Iterator
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V", bound=Hashable)


class SetMap(Generic[K, V]):
    """Map from keys to sets of values.

    Keys exist only while they have at least one value. Thread-safe for
    concurrent updates; the sets returned by ``get`` are live views and
    must not be mutated while other threads write.
    """

    def __init__(self) -> None:
        self._map: dict[K, set[V]] = {}
        self._lock = threading.RLock()

    @classmethod
    def new_set_map(cls) -> SetMap[K, V]:
        """Create an empty SetMap."""
        return cls()

    def put(self, key: K, value: V) -> bool:
        """Add a value to the key's set.

        Returns:
            True if the value was not present yet.
        """
        with self._lock:
            values = self._map.setdefault(key, set())
            if value in values:
                return False
            values.add(value)
            return True

    def put_all(self, key: K, values: Iterable[V]) -> bool:
        """Add several values to the key's set.

        Returns:
            True if at least one value was not present yet.
        """
        values = set(values)
        if not values:
            return False

        with self._lock:
            current = self._map.setdefault(key, set())
            before = len(current)
            current.update(values)
            return len(current) > before

    def get(self, key: K) -> set[V] | None:
        """Return the key's set, or None if the key has no values."""
        return self._map.get(key)

    def get_or_empty(self, key: K) -> frozenset[V]:
        """Return a snapshot of the key's values, empty if none."""
        with self._lock:
            return frozenset(self._map.get(key, ()))

    def contains(self, key: K, value: V) -> bool:
        return value in self._map.get(key, ())

    def remove(self, key: K, value: V) -> bool:
        """Remove a value; the key disappears with its last value.

        Returns:
            True if the value was present.
        """
        with self._lock:
            values = self._map.get(key)
            if values is None or value not in values:
                return False
            values.discard(value)
            if not values:
                del self._map[key]
            return True

    def remove_all(self, key: K) -> set[V] | None:
        """Remove a key and return its values, or None if absent."""
        with self._lock:
            return self._map.pop(key, None)

    def keys(self) -> set[K]:
        with self._lock:
            return set(self._map)

    def values(self) -> Iterator[V]:
        """Iterate over all values of all keys."""
        with self._lock:
            snapshot = [set(values) for values in self._map.values()]
        for values in snapshot:
            yield from values

    def size(self) -> int:
        """Total number of values across all keys."""
        with self._lock:
            return sum(len(values) for values in self._map.values())

    def clear(self) -> None:
        with self._lock:
            self._map.clear()

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, key: object) -> bool:
        return key in self._map

    def __iter__(self) -> Iterator[K]:
        return iter(self.keys())

    def __repr__(self) -> str:
        return f"SetMap({self._map!r})"


__all__ = [
    "SetMap",
]
