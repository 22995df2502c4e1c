"""Import words from streamed text into a word store."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, Optional, Set, Union

from four_word_phrase.core.errors import InvalidArgumentError
from four_word_phrase.core.transform import (
    DEFAULT_CHUNK_SIZE,
    Chunk,
    EmitMode,
    TokenizingTransform,
    TransformConfig,
    read_chunks,
)
from four_word_phrase.utils.observability import (
    create_histogram,
    get_logger,
    record_exception,
    start_span,
    timed,
)

from ..data.word_store import WordStore

_METRIC_IMPORT_SECONDS = create_histogram(
    "four_word_phrase_import_seconds",
    "Duration of stream imports into a word store.",
)


@dataclass(frozen=True)
class ImportSummary:
    words_emitted: int
    words_appended: int
    batches: int
    chunks: int
    duplicates: int
    rejected: int


class StreamImporter:
    """Pipe a text stream through a :class:`TokenizingTransform` into a store.

    Accepted words are buffered and appended at the end of the stream, or
    every ``batch_size`` words when a batch size is given.  If the source
    fails part-way the error propagates and batches already appended stay in
    the store.
    """

    def __init__(
        self,
        store: WordStore,
        *,
        config: Optional[TransformConfig] = None,
        batch_size: Optional[int] = None,
    ) -> None:
        if batch_size is not None and (
            isinstance(batch_size, bool) or not isinstance(batch_size, int) or batch_size <= 0
        ):
            raise InvalidArgumentError(f"batch_size must be a positive integer, got {batch_size!r}")
        self.store = store
        self.config = (config or TransformConfig()).with_overrides(emit_mode=EmitMode.TOKENS)
        self.batch_size = batch_size
        self._logger = get_logger(__name__).bind(component="stream_importer")

    def _chunks(
        self,
        source: Union[Iterable[Chunk], object],
        chunk_size: int,
    ) -> Iterable[Chunk]:
        if source is None:
            raise InvalidArgumentError("A readable source is required")
        if hasattr(source, "read"):
            return read_chunks(source, chunk_size)  # type: ignore[arg-type]
        if isinstance(source, (str, bytes, bytearray)):
            return [source]
        return source  # type: ignore[return-value]

    def import_stream(
        self,
        source: Union[Iterable[Chunk], object],
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> ImportSummary:
        chunks = self._chunks(source, chunk_size)
        transform = TokenizingTransform(self.config)
        pending: Set[str] = set()
        emitted = 0
        appended = 0
        batches = 0

        def _append_pending() -> None:
            nonlocal appended, batches
            if not pending:
                return
            self.store.append(sorted(pending))
            appended += len(pending)
            batches += 1
            pending.clear()

        with start_span("stream_importer.import_stream") as span, timed(_METRIC_IMPORT_SECONDS):
            try:
                for word in transform.stream(chunks):
                    emitted += 1
                    pending.add(word)
                    if self.batch_size is not None and len(pending) >= self.batch_size:
                        _append_pending()
                _append_pending()
            except Exception as exc:
                record_exception(span, exc)
                self._logger.error(
                    "Import halted",
                    context={"error": str(exc), "words_appended": appended, "batches": batches},
                )
                raise

        stats = transform.stats
        summary = ImportSummary(
            words_emitted=emitted,
            words_appended=appended,
            batches=batches,
            chunks=stats["chunks"],
            duplicates=stats["duplicates"],
            rejected=stats["rejected"],
        )
        self._logger.info("Import complete", context=summary.__dict__)
        return summary

    def import_path(self, path: Union[str, os.PathLike], *, chunk_size: int = DEFAULT_CHUNK_SIZE) -> ImportSummary:
        with open(path, "rb") as handle:
            return self.import_stream(handle, chunk_size=chunk_size)


__all__ = ["ImportSummary", "StreamImporter"]
