"""Fixed-capacity, recency-ordered duplicate filter."""

from __future__ import annotations

import math
from collections import OrderedDict
from numbers import Real
from typing import Optional

from .errors import ConfigurationError


def _validate_capacity(capacity: Optional[Real]) -> Optional[int]:
    if capacity is None:
        return None
    if isinstance(capacity, bool):
        raise ConfigurationError(f"Dedup cache capacity must be an integer, got {capacity!r}")
    if isinstance(capacity, float) and math.isinf(capacity) and capacity > 0:
        return None
    if not isinstance(capacity, int):
        raise ConfigurationError(f"Dedup cache capacity must be an integer, got {capacity!r}")
    if capacity <= 0:
        raise ConfigurationError(f"Dedup cache capacity must be positive, got {capacity}")
    return capacity


class BoundedDedupCache:
    """Answer "has this word been presented before?" in bounded memory.

    Every call to :meth:`seen` marks the word as most recently used.  When a
    bounded cache is full the least recently used word is evicted, so a word
    that was evicted and comes back is reported as new again.  ``None`` or
    ``math.inf`` disables eviction.
    """

    def __init__(self, capacity: Optional[Real] = None) -> None:
        self._capacity = _validate_capacity(capacity)
        self._entries: OrderedDict[str, bool] = OrderedDict()

    @property
    def capacity(self) -> Optional[int]:
        return self._capacity

    @property
    def unbounded(self) -> bool:
        return self._capacity is None

    def seen(self, word: str) -> bool:
        if word in self._entries:
            self._entries.move_to_end(word)
            return True

        self._entries[word] = True
        if self._capacity is not None:
            while len(self._entries) > self._capacity:
                self._entries.popitem(last=False)
        return False

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, word: object) -> bool:
        return word in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        capacity = "unbounded" if self._capacity is None else self._capacity
        return f"BoundedDedupCache(capacity={capacity}, size={len(self._entries)})"


__all__ = ["BoundedDedupCache"]
