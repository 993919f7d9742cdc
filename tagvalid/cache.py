"""Read-mostly caches with lock-free reads.

Readers load the current snapshot with a single attribute read and never
block. Writers serialize on a lock, copy the snapshot, add their entry and
publish the new snapshot with a single assignment, so a reader sees either
the old mapping or the new one, never a partially updated one.
"""

import threading
from types import MappingProxyType
from typing import Callable, Generic, Hashable, Mapping, Optional, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class SnapshotCache(Generic[K, V]):
    """Copy-on-write mapping from key to value.

    Two callers may compute the same entry concurrently and both publish it;
    the last write wins. Entries must therefore be deterministic for a key.
    """

    def __init__(self) -> None:
        self._snapshot: Mapping[K, V] = MappingProxyType({})
        self._lock = threading.Lock()  # writers only

    def get(self, key: K) -> tuple[Optional[V], bool]:
        snapshot = self._snapshot
        try:
            return snapshot[key], True
        except KeyError:
            return None, False

    def save(self, key: K, value: V) -> None:
        with self._lock:
            updated = dict(self._snapshot)
            updated[key] = value
            self._snapshot = MappingProxyType(updated)

    def get_or_compute(self, key: K, compute: Callable[[K], V]) -> V:
        """Return the cached value for ``key``, computing and saving it on a miss."""
        value, found = self.get(key)
        if found:
            return value
        value = compute(key)
        self.save(key, value)
        return value

    def __len__(self) -> int:
        return len(self._snapshot)

    def __contains__(self, key: object) -> bool:
        return key in self._snapshot


class LiteralCache(Generic[V]):
    """Memoizes parsed numeric literals keyed by their source text."""

    def __init__(self, parse: Callable[[str], V]):
        self._parse = parse
        self._values: SnapshotCache[str, V] = SnapshotCache()

    def __call__(self, text: str) -> V:
        # Parse failures propagate and are not cached.
        return self._values.get_or_compute(text, self._parse)

    def __len__(self) -> int:
        return len(self._values)
