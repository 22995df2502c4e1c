import io

import pytest

from four_word_phrase.app.services.phrase_sink import (
    CollectingPhraseSink,
    TextPhraseSink,
    emit_phrases,
)
from four_word_phrase.core.errors import InvalidArgumentError
from four_word_phrase.core.generator import PhraseGenerator


def test_collecting_sink_receives_phrases_in_order(hyphenated_store):
    generator = PhraseGenerator(hyphenated_store, "sink")
    sink = CollectingPhraseSink()

    written = emit_phrases(generator, sink, 3, 2)

    expected = PhraseGenerator(hyphenated_store, "sink").next_phrases(3, 2)
    assert written == 3
    assert len(sink) == 3
    assert sink.phrases == expected
    assert generator.get_count() == 3


def test_text_sink_writes_one_line_per_phrase(hyphenated_store):
    buffer = io.StringIO()

    emit_phrases(PhraseGenerator(hyphenated_store), TextPhraseSink(buffer, "_"), 4, 3)

    lines = buffer.getvalue().splitlines()
    assert len(lines) == 4
    assert all(len(line.split("_")) == 3 for line in lines)


def test_negative_total_is_rejected(hyphenated_store):
    with pytest.raises(InvalidArgumentError):
        emit_phrases(PhraseGenerator(hyphenated_store), CollectingPhraseSink(), -1, 4)
