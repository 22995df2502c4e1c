"""Word store capability and the in-memory implementation."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Protocol, Sequence, Set, Union, runtime_checkable

from four_word_phrase.core.errors import StoreError
from four_word_phrase.utils.observability import get_logger

WordsArg = Optional[Union[str, Iterable[str]]]


@runtime_checkable
class WordStore(Protocol):
    """Dictionary storage with a stable, sorted index order.

    For a fixed set of appended words, ``word_at(i)`` must return the same
    word on every run no matter in which order the words were appended.
    """

    def append(self, words: WordsArg) -> None:
        ...

    def length(self) -> int:
        ...

    def word_at(self, index: int) -> str:
        ...

    def words_at(self, indices: Sequence[int]) -> List[str]:
        ...

    def contains(self, word: str) -> bool:
        ...

    def contains_words(self, words: Iterable[str]) -> List[bool]:
        ...

    def all_words(self) -> List[str]:
        """Every word in index order, in one pass."""
        ...


def coerce_words(words: WordsArg) -> List[str]:
    """Accept ``None``, a single word or an iterable of words."""

    if not words:
        return []
    if isinstance(words, str):
        return [words]
    collected: List[str] = []
    for word in words:
        if not isinstance(word, str):
            raise StoreError(f"Words must be strings, got {type(word).__name__}")
        if word:
            collected.append(word)
    return collected


def check_index(index: object, length: int) -> int:
    if isinstance(index, bool) or not isinstance(index, int):
        raise StoreError(f"Word index must be an integer, got {index!r}")
    if index < 0 or index >= length:
        raise StoreError(f"Word index {index} out of range for dictionary of {length} words")
    return index


class MemoryWordStore:
    """In-memory store suitable for tests and dictionaries that fit in RAM."""

    def __init__(self, words: WordsArg = None) -> None:
        self._members: Set[str] = set()
        self._ordered: List[str] = []
        self._logger = get_logger(__name__).bind(component="memory_word_store")
        if words:
            self.append(words)

    def append(self, words: WordsArg) -> None:
        incoming = coerce_words(words)
        if not incoming:
            return
        before = len(self._members)
        self._members.update(incoming)
        if len(self._members) != before:
            self._ordered = sorted(self._members)
        self._logger.debug(
            "Words appended",
            context={"offered": len(incoming), "added": len(self._members) - before},
        )

    def length(self) -> int:
        return len(self._ordered)

    def word_at(self, index: int) -> str:
        return self._ordered[check_index(index, len(self._ordered))]

    def words_at(self, indices: Sequence[int]) -> List[str]:
        length = len(self._ordered)
        return [self._ordered[check_index(index, length)] for index in indices]

    def contains(self, word: str) -> bool:
        return word in self._members

    def contains_words(self, words: Iterable[str]) -> List[bool]:
        if isinstance(words, str):
            words = [words]
        return [word in self._members for word in words]

    def all_words(self) -> List[str]:
        return list(self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._ordered))

    def __contains__(self, word: object) -> bool:
        return word in self._members


__all__ = ["WordStore", "MemoryWordStore", "WordsArg", "coerce_words", "check_index"]
