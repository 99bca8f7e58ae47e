"""Insertion-ordered map with O(1) get/set/delete.

The classic construction is two structures side by side: a hash index
for lookups and a list (or linked list) for order. Deleting from the
list is O(n) unless you also keep node pointers.

CPython's dict has preserved insertion order since 3.7, and it does
exactly what this container needs:
  - overwriting an existing key keeps its position
  - deleting a key and inserting it again moves it to the end
  - delete is O(1) (the slot becomes a tombstone)

So a single dict is both the index and the order sequence, and the
two can never disagree on membership.

NOT thread-safe. The repository wraps every access in its own
ReadWriteLock; nothing else should share an instance across threads.
"""
from __future__ import annotations

from typing import Generic, Iterator, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class OrderedMap(Generic[K, V]):
    """Mapping that remembers first-insertion order of its keys."""

    __slots__ = ("_values",)

    def __init__(self) -> None:
        self._values: dict[K, V] = {}

    def set(self, key: K, value: V) -> None:
        """Insert or overwrite. A new key goes to the end; an existing key stays put."""
        self._values[key] = value

    def get(self, key: K, default: V | None = None) -> V | None:
        """O(1) lookup. Returns default when the key is absent.

        Use contains() when None is a legitimate stored value.
        """
        return self._values.get(key, default)

    def contains(self, key: K) -> bool:
        return key in self._values

    def delete(self, key: K) -> bool:
        """Remove key. Returns True if it was present."""
        if key not in self._values:
            return False
        del self._values[key]
        return True

    def keys(self) -> list[K]:
        """Fresh copy of the key order. Mutating it does not touch the map."""
        return list(self._values)

    def values(self) -> list[V]:
        """Values in key order (snapshot)."""
        return list(self._values.values())

    def items(self) -> list[tuple[K, V]]:
        """(key, value) pairs in key order (snapshot)."""
        return list(self._values.items())

    def size(self) -> int:
        return len(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[K]:
        # Iterate a snapshot so callers may delete while looping.
        return iter(self.keys())

    def __repr__(self) -> str:
        return f"OrderedMap({self._values!r})"
