import io

import pytest

from four_word_phrase.app.data.word_store import MemoryWordStore
from four_word_phrase.app.services.importer import StreamImporter
from four_word_phrase.core.errors import InvalidArgumentError, UpstreamIOError
from four_word_phrase.core.transform import EmitMode, TransformConfig


def test_import_stream_appends_in_batches(permissive_config):
    store = MemoryWordStore()
    importer = StreamImporter(store, config=permissive_config, batch_size=2)

    summary = importer.import_stream(io.BytesIO(b"one two three four five"), chunk_size=3)

    assert summary.words_emitted == 5
    assert summary.words_appended == 5
    assert summary.batches == 3
    assert summary.chunks == 8
    assert store.length() == 5


def test_import_stream_without_batch_size_appends_once(permissive_config):
    store = MemoryWordStore()

    summary = StreamImporter(store, config=permissive_config).import_stream(
        "Hello hello WORLD"
    )

    assert summary.batches == 1
    assert summary.duplicates == 1
    assert list(store) == ["hello", "world"]


def test_importer_always_stores_bare_tokens():
    store = MemoryWordStore()
    config = TransformConfig(emit_mode=EmitMode.LINES, acceptance_pattern=r"^[a-z]+$")

    StreamImporter(store, config=config).import_stream(["alpha beta"])

    assert list(store) == ["alpha", "beta"]


def test_failed_source_keeps_completed_batches(permissive_config, failing_source):
    store = MemoryWordStore()
    importer = StreamImporter(store, config=permissive_config, batch_size=2)

    with pytest.raises(UpstreamIOError):
        importer.import_stream(failing_source(b"alpha beta gamma "))

    assert list(store) == ["alpha", "beta"]


def test_import_path_reads_file(tmp_path):
    path = tmp_path / "novel.txt"
    path.write_text("Remarkable, extraordinary. Remarkable!", encoding="utf-8")
    store = MemoryWordStore()

    summary = StreamImporter(store).import_path(path)

    assert summary.words_appended == 2
    assert list(store) == ["extraordinary", "remarkable"]


@pytest.mark.parametrize("batch_size", [0, -1, True, 2.5])
def test_invalid_batch_size(batch_size):
    with pytest.raises(InvalidArgumentError):
        StreamImporter(MemoryWordStore(), batch_size=batch_size)


def test_missing_source():
    with pytest.raises(InvalidArgumentError):
        StreamImporter(MemoryWordStore()).import_stream(None)
