"""Deterministic per-request seeds for the phrase generator."""

from __future__ import annotations

import hashlib
import random
from typing import Union

from .errors import InvalidCountError

CountLike = Union[int, str]


def _normalize_count(count: CountLike) -> int:
    if isinstance(count, bool):
        raise InvalidCountError(f"Count must be an integer. Value provided: {count!r}")
    if isinstance(count, int):
        if count < 0:
            raise InvalidCountError(f"Count must be non-negative. Value provided: {count}")
        return count
    if isinstance(count, str) and count.isascii() and count.isdigit():
        return int(count)
    raise InvalidCountError(f"Count must be an integer. Value provided: {count!r}")


def derive_seed(base_seed: str, count: CountLike) -> int:
    """Return the 128-bit seed for request number ``count``.

    The seed is the MD5 digest of ``base_seed`` followed by the decimal form
    of ``count``, read as a big-endian integer.  It is reproducible across
    processes and platforms; it is not meant to be unpredictable.
    """

    normalized = _normalize_count(count)
    material = f"{base_seed}{normalized}".encode("utf-8")
    digest = hashlib.md5(material).digest()
    return int.from_bytes(digest, "big")


def phrase_prng(base_seed: str, count: CountLike) -> random.Random:
    """Return a fresh uniform PRNG for request number ``count``."""

    return random.Random(derive_seed(base_seed, count))


class SeedDeriver:
    """Bind a base seed so callers only pass the request counter."""

    def __init__(self, base_seed: str = "") -> None:
        self.base_seed = "" if base_seed is None else str(base_seed)

    def derive(self, count: CountLike) -> int:
        return derive_seed(self.base_seed, count)

    def prng(self, count: CountLike) -> random.Random:
        return phrase_prng(self.base_seed, count)

    def __repr__(self) -> str:
        return f"SeedDeriver(base_seed={self.base_seed!r})"


__all__ = ["CountLike", "derive_seed", "phrase_prng", "SeedDeriver"]
