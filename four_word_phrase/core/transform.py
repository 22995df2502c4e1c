"""Streaming stage turning raw text into unique, accepted words.

A :class:`TokenizingTransform` composes the :class:`Tokenizer`, the
:class:`WordFilter` and a :class:`BoundedDedupCache`.  Only the trailing
fragment, the incremental decoder state and the dedup cache survive between
chunks; emitted words are handed back per chunk and never accumulated.
"""

from __future__ import annotations

import codecs
import math
from dataclasses import dataclass, replace
from enum import Enum
from numbers import Real
from typing import Any, BinaryIO, Dict, Iterable, Iterator, List, Optional, TextIO, Union

from ..utils.observability import create_counter, get_logger
from .dedup_cache import BoundedDedupCache
from .errors import ConfigurationError, UpstreamIOError
from .tokenizer import (
    DEFAULT_ACCEPTANCE_PATTERN,
    DEFAULT_REJECTION_PATTERN,
    DEFAULT_WORD_DELIMITER,
    PatternLike,
    Tokenizer,
    WordFilter,
    normalize_word,
)

Chunk = Union[bytes, bytearray, memoryview, str]

DEFAULT_CHUNK_SIZE = 64 * 1024

_METRIC_SEGMENTS = create_counter(
    "four_word_phrase_transform_segments_total",
    "Candidate words considered by tokenizing transforms.",
    label_names=("outcome",),
)


class EmitMode(str, Enum):
    """How accepted words leave the transform."""

    TOKENS = "tokens"
    LINES = "lines"


@dataclass(frozen=True)
class TransformConfig:
    emit_mode: EmitMode = EmitMode.TOKENS
    word_delimiter: PatternLike = DEFAULT_WORD_DELIMITER
    acceptance_pattern: PatternLike = DEFAULT_ACCEPTANCE_PATTERN
    rejection_pattern: PatternLike = DEFAULT_REJECTION_PATTERN
    # None or math.inf means unbounded.
    dedup_cache_capacity: Optional[Real] = None
    encoding: str = "utf-8"
    decode_errors: str = "replace"

    def with_overrides(self, **overrides: Any) -> "TransformConfig":
        unknown = set(overrides) - set(self.__dataclass_fields__)
        if unknown:
            raise ConfigurationError(
                f"Unknown transform option(s): {', '.join(sorted(unknown))}"
            )
        return replace(self, **overrides)


def _resolve_emit_mode(value: Any) -> EmitMode:
    try:
        return EmitMode(value)
    except ValueError as exc:
        choices = ", ".join(mode.value for mode in EmitMode)
        raise ConfigurationError(f"Unknown emit mode {value!r}; expected one of {choices}") from exc


def _build_decoder(encoding: str, errors: str) -> codecs.IncrementalDecoder:
    try:
        codecs.lookup(encoding)
        codecs.lookup_error(errors)
    except LookupError as exc:
        raise ConfigurationError(str(exc)) from exc
    return codecs.getincrementaldecoder(encoding)(errors=errors)


class TokenizingTransform:
    """Tokenize, deduplicate and filter a stream of text chunks.

    ``push`` handles one chunk and ``flush`` ends the stream.  ``stream``
    drives both over any iterable of chunks and is the usual entry point.
    """

    def __init__(self, config: Optional[TransformConfig] = None, **overrides: Any) -> None:
        config = config or TransformConfig()
        if overrides:
            config = config.with_overrides(**overrides)

        self.emit_mode = _resolve_emit_mode(config.emit_mode)
        self.config = replace(config, emit_mode=self.emit_mode)
        self.tokenizer = Tokenizer(config.word_delimiter)
        self.word_filter = WordFilter(config.acceptance_pattern, config.rejection_pattern)
        self.cache = BoundedDedupCache(config.dedup_cache_capacity)
        self._decoder = _build_decoder(config.encoding, config.decode_errors)
        self._stats: Dict[str, int] = {
            "chunks": 0,
            "segments": 0,
            "duplicates": 0,
            "rejected": 0,
            "emitted": 0,
        }
        self._logger = get_logger(__name__).bind(
            component="tokenizing_transform",
            emit_mode=self.emit_mode.value,
        )
        self._logger.debug(
            "Tokenizing transform configured",
            context={
                "word_delimiter": self.tokenizer.delimiter.pattern,
                "acceptance_pattern": self.word_filter.acceptance.pattern,
                "rejection_pattern": self.word_filter.rejection.pattern,
                "dedup_cache_capacity": self.cache.capacity
                if self.cache.capacity is not None
                else math.inf,
            },
        )

    @property
    def stats(self) -> Dict[str, int]:
        return dict(self._stats)

    @property
    def fragment(self) -> str:
        return self.tokenizer.fragment

    def _decode(self, chunk: Chunk, *, final: bool = False) -> str:
        if isinstance(chunk, str):
            if not self._decoder.getstate()[0]:
                return chunk
            # The decoder is mid-character; route the text through it so the
            # buffered bytes resolve in stream order.
            chunk = chunk.encode(self.config.encoding, self.config.decode_errors)
        if isinstance(chunk, (bytes, bytearray, memoryview)):
            return self._decoder.decode(bytes(chunk), final)
        raise TypeError(f"Chunks must be bytes or str, got {type(chunk).__name__}")

    def consider(self, segment: str) -> Optional[str]:
        """Run one candidate through normalisation, dedup and filtering.

        The dedup check happens before filtering: a word is remembered once
        it has been *considered*, whether or not it was accepted.
        """

        word = normalize_word(segment)
        if not word:
            return None

        self._stats["segments"] += 1
        if self.cache.seen(word):
            self._stats["duplicates"] += 1
            _METRIC_SEGMENTS.labels(outcome="duplicate").inc()
            return None

        if not self.word_filter.accepts(word):
            self._stats["rejected"] += 1
            _METRIC_SEGMENTS.labels(outcome="rejected").inc()
            return None

        self._stats["emitted"] += 1
        _METRIC_SEGMENTS.labels(outcome="emitted").inc()
        if self.emit_mode is EmitMode.LINES:
            return word + "\n"
        return word

    def _consider_all(self, segments: Iterable[str]) -> List[str]:
        emitted: List[str] = []
        for segment in segments:
            output = self.consider(segment)
            if output is not None:
                emitted.append(output)
        return emitted

    def push(self, chunk: Chunk) -> List[str]:
        """Process one chunk and return what it caused to be emitted."""

        text = self._decode(chunk)
        self._stats["chunks"] += 1
        return self._consider_all(self.tokenizer.feed(text))

    def flush(self) -> List[str]:
        """End the stream: the remaining fragment is treated as a whole word."""

        tail = self._decoder.decode(b"", True)
        segments = self.tokenizer.feed(tail) if tail else []
        segments.extend(self.tokenizer.flush())
        self._decoder.reset()
        emitted = self._consider_all(segments)
        self._logger.debug("Tokenizing transform flushed", context=self.stats)
        return emitted

    def stream(self, chunks: Iterable[Chunk]) -> Iterator[str]:
        """Lazily transform ``chunks``, flushing once they are exhausted.

        An ``OSError`` raised while pulling from ``chunks`` halts the stream as
        :class:`UpstreamIOError`; words already yielded stay with the caller.
        """

        iterator = iter(chunks)
        while True:
            try:
                chunk = next(iterator)
            except StopIteration:
                break
            except UpstreamIOError:
                raise
            except OSError as exc:
                self._logger.error(
                    "Upstream text source failed",
                    context={"error": str(exc), "chunks": self._stats["chunks"]},
                )
                raise UpstreamIOError(f"Text source failed: {exc}") from exc
            yield from self.push(chunk)
        yield from self.flush()

    def __call__(self, chunks: Iterable[Chunk]) -> Iterator[str]:
        return self.stream(chunks)


def read_chunks(
    handle: Union[BinaryIO, TextIO],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Iterator[Chunk]:
    """Yield successive reads of ``chunk_size`` from ``handle`` until EOF."""

    if chunk_size <= 0:
        raise ConfigurationError(f"chunk_size must be positive, got {chunk_size}")
    while True:
        chunk = handle.read(chunk_size)
        if not chunk:
            return
        yield chunk


__all__ = [
    "Chunk",
    "DEFAULT_CHUNK_SIZE",
    "EmitMode",
    "TransformConfig",
    "TokenizingTransform",
    "read_chunks",
]
