"""Deterministic pseudo-random phrase generation over a word store."""

from __future__ import annotations

import math
import random
import threading
from typing import TYPE_CHECKING, List

from ..utils.observability import create_counter, get_logger, record_exception, start_span
from .errors import EmptyDictionaryError, InvalidArgumentError, InvalidCountError
from .seeds import CountLike, SeedDeriver

if TYPE_CHECKING:
    from ..app.data.word_store import WordStore

_METRIC_PHRASES = create_counter(
    "four_word_phrase_phrases_generated_total",
    "Phrases returned by phrase generators.",
)
_METRIC_FAILURES = create_counter(
    "four_word_phrase_phrase_failures_total",
    "Phrase requests that raised an error.",
)


def _validate_phrase_length(phrase_length: object) -> int:
    if isinstance(phrase_length, bool) or not isinstance(phrase_length, int):
        raise InvalidArgumentError(
            f"Phrase length must be a positive integer. Value provided: {phrase_length!r}"
        )
    if phrase_length <= 0:
        raise InvalidArgumentError(
            f"Phrase length must be a positive integer. Value provided: {phrase_length}"
        )
    return phrase_length


class PhraseGenerator:
    """Generate reproducible phrases from a word store.

    The sequence of phrases depends only on ``base_seed``, the store contents
    and the request counter.  Two generators built with the same seed over
    the same words, starting from the same counter, return identical phrases.

    Each request increments the counter first, then derives a seed from
    ``base_seed`` and the new counter value, then samples word indices with
    replacement.  The counter is externally settable so a sequence can be
    replayed from any point.
    """

    def __init__(self, store: "WordStore", base_seed: str = "", *, count: int = 0) -> None:
        self.store = store
        self.seeds = SeedDeriver(base_seed)
        self._lock = threading.RLock()
        self._count = 0
        self.set_count(count)
        self._logger = get_logger(__name__).bind(component="phrase_generator")

    @property
    def base_seed(self) -> str:
        return self.seeds.base_seed

    @property
    def count(self) -> int:
        return self._count

    def get_count(self) -> int:
        return self._count

    def set_count(self, count: int) -> None:
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise InvalidCountError(f"Count must be a non-negative integer. Value provided: {count!r}")
        with self._lock:
            self._count = count

    def increment_count(self) -> int:
        with self._lock:
            self._count += 1
            return self._count

    def prng_for(self, count: CountLike) -> random.Random:
        return self.seeds.prng(count)

    def _reserve_request(self) -> tuple[int, int, random.Random]:
        # Length check, increment and derivation form one unit so that two
        # threads cannot end up with each other's sequence.
        with self._lock:
            dictionary_length = self.store.length()
            if dictionary_length <= 0:
                raise EmptyDictionaryError(
                    "Cannot generate a phrase from an empty dictionary"
                )
            count = self.increment_count()
            return dictionary_length, count, self.prng_for(count)

    def next_phrase(self, phrase_length: int) -> List[str]:
        phrase_length = _validate_phrase_length(phrase_length)

        with start_span("phrase_generator.next_phrase", {"phrase_length": phrase_length}) as span:
            try:
                dictionary_length, count, prng = self._reserve_request()
                indices = [
                    math.floor(prng.random() * dictionary_length)
                    for _ in range(phrase_length)
                ]
                words = list(self.store.words_at(indices))
            except Exception as exc:
                _METRIC_FAILURES.inc()
                record_exception(span, exc)
                self._logger.warning(
                    "Phrase generation failed",
                    context={"error": str(exc), "error_type": type(exc).__name__},
                )
                raise

        _METRIC_PHRASES.inc()
        self._logger.debug(
            "Phrase generated",
            context={"count": count, "phrase_length": phrase_length},
        )
        return words

    def next_phrases(self, total: int, phrase_length: int) -> List[List[str]]:
        if isinstance(total, bool) or not isinstance(total, int) or total < 0:
            raise InvalidArgumentError(
                f"Phrase total must be a non-negative integer. Value provided: {total!r}"
            )
        return [self.next_phrase(phrase_length) for _ in range(total)]


__all__ = ["PhraseGenerator"]
