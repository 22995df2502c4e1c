"""Destinations for generated phrases."""

from __future__ import annotations

from typing import List, Protocol, Sequence, TextIO

from four_word_phrase.core.errors import InvalidArgumentError
from four_word_phrase.core.generator import PhraseGenerator


class PhraseSink(Protocol):
    def write_phrase(self, phrase: Sequence[str]) -> None:
        ...


class CollectingPhraseSink:
    """Keep every phrase in memory, in the order received."""

    def __init__(self) -> None:
        self.phrases: List[List[str]] = []

    def write_phrase(self, phrase: Sequence[str]) -> None:
        self.phrases.append(list(phrase))

    def __len__(self) -> int:
        return len(self.phrases)


class TextPhraseSink:
    """Write one phrase per line to a text handle."""

    def __init__(self, handle: TextIO, separator: str = " ") -> None:
        self.handle = handle
        self.separator = separator

    def write_phrase(self, phrase: Sequence[str]) -> None:
        self.handle.write(self.separator.join(phrase) + "\n")


def emit_phrases(
    generator: PhraseGenerator,
    sink: PhraseSink,
    total: int,
    phrase_length: int,
) -> int:
    """Generate ``total`` phrases into ``sink`` and return how many were written."""

    if isinstance(total, bool) or not isinstance(total, int) or total < 0:
        raise InvalidArgumentError(f"Phrase total must be a non-negative integer, got {total!r}")
    for _ in range(total):
        sink.write_phrase(generator.next_phrase(phrase_length))
    return total


__all__ = ["PhraseSink", "CollectingPhraseSink", "TextPhraseSink", "emit_phrases"]
