import io
import math

import pytest

from four_word_phrase.core.errors import ConfigurationError, UpstreamIOError
from four_word_phrase.core.transform import (
    EmitMode,
    TokenizingTransform,
    TransformConfig,
    read_chunks,
)

SENTENCE = "The quick brown fox jumps over the lazy dog. The quick fox!"


def _run(transform, chunks):
    return list(transform.stream(chunks))


def test_default_config_rejects_short_words():
    assert _run(TokenizingTransform(), [SENTENCE]) == []


def test_five_letter_acceptance_keeps_unique_matching_words():
    transform = TokenizingTransform(acceptance_pattern=r"^[a-z\-]{5,14}$")

    words = _run(transform, [SENTENCE])

    assert words == ["quick", "brown", "jumps"]
    stats = transform.stats
    assert stats["emitted"] == 3
    assert stats["duplicates"] == 4  # the, the, quick, fox
    assert stats["segments"] == 12


def test_repeated_hyphen_word_is_rejected_in_stream():
    # "jumps" has five letters, so the {5,14} acceptance lets it through.
    transform = TokenizingTransform(acceptance_pattern=r"^[a-z\-]{5,14}$")

    words = _run(transform, ["the quick, brown fox--fox jumps!"])

    assert words == ["quick", "brown", "jumps"]
    assert transform.stats["rejected"] == 2  # the, fox--fox


def test_words_are_lowercased_before_filtering(permissive_config):
    transform = TokenizingTransform(permissive_config)

    assert _run(transform, ["Hello HELLO hello World"]) == ["hello", "world"]


@pytest.mark.parametrize("split_at", range(len("alpha beta gamma delta") + 1))
def test_chunk_boundaries_do_not_change_output(permissive_config, split_at):
    text = "alpha beta gamma delta"
    transform = TokenizingTransform(permissive_config)

    words = _run(transform, [text[:split_at], text[split_at:]])

    assert words == ["alpha", "beta", "gamma", "delta"]


def test_one_byte_chunks_decode_multibyte_characters():
    text = "naïve café résumé naïve"
    data = text.encode("utf-8")
    transform = TokenizingTransform(acceptance_pattern=r"^\w+$")

    words = _run(transform, [data[index:index + 1] for index in range(len(data))])

    assert words == ["naïve", "café", "résumé"]


def test_text_chunk_after_partial_character_matches_byte_stream():
    config = TransformConfig(acceptance_pattern=r"^\S+$")
    mixed = TokenizingTransform(config)
    partial = "café".encode("utf-8")[:-1]

    words = mixed.push(partial) + mixed.push(" latte ") + mixed.flush()

    same_bytes = _run(TokenizingTransform(config), [partial + b" latte "])
    assert words == same_bytes == ["caf\ufffd", "latte"]


def test_text_chunk_after_complete_bytes_passes_straight_through(permissive_config):
    transform = TokenizingTransform(permissive_config)

    words = transform.push("ca".encode("utf-8")) + transform.push("ke pie") + transform.flush()

    assert words == ["cake", "pie"]


def test_trailing_word_without_delimiter_is_flushed(permissive_config):
    transform = TokenizingTransform(permissive_config)

    assert transform.push("first sec") == ["first"]
    assert transform.fragment == "sec"
    assert transform.push("ond") == []
    assert transform.flush() == ["second"]
    assert transform.fragment == ""


def test_lines_mode_appends_newline():
    transform = TokenizingTransform(
        emit_mode=EmitMode.LINES,
        acceptance_pattern=r"^[a-z\-]{5,14}$",
    )

    assert _run(transform, ["quick brown quick"]) == ["quick\n", "brown\n"]


def test_emit_mode_accepts_plain_string(permissive_config):
    transform = TokenizingTransform(permissive_config, emit_mode="lines")

    assert transform.emit_mode is EmitMode.LINES


def test_rejected_words_are_still_remembered():
    transform = TokenizingTransform()

    assert _run(transform, ["tiny tiny"]) == []
    assert transform.stats["rejected"] == 1
    assert transform.stats["duplicates"] == 1


def test_bounded_cache_lets_evicted_words_through_again(permissive_config):
    text = "alpha beta alpha gamma beta"

    bounded = TokenizingTransform(permissive_config, dedup_cache_capacity=2)
    unbounded = TokenizingTransform(permissive_config, dedup_cache_capacity=math.inf)

    assert _run(bounded, [text]) == ["alpha", "beta", "gamma", "beta"]
    assert _run(unbounded, [text]) == ["alpha", "beta", "gamma"]


def test_upstream_failure_keeps_words_already_emitted(permissive_config, failing_source):
    transform = TokenizingTransform(permissive_config)
    received = []

    with pytest.raises(UpstreamIOError) as excinfo:
        for word in transform.stream(failing_source(b"hello world ", b"again ")):
            received.append(word)

    assert received == ["hello", "world", "again"]
    assert isinstance(excinfo.value, OSError)
    assert excinfo.value.code == "upstream_io_error"


def test_read_chunks_streams_file_handles(permissive_config):
    handle = io.BytesIO(b"reading in small pieces")
    transform = TokenizingTransform(permissive_config)

    words = _run(transform, read_chunks(handle, chunk_size=4))

    assert words == ["reading", "in", "small", "pieces"]
    assert transform.stats["chunks"] == 6


def test_read_chunks_rejects_non_positive_size():
    with pytest.raises(ConfigurationError):
        list(read_chunks(io.BytesIO(b"x"), chunk_size=0))


@pytest.mark.parametrize(
    "overrides",
    [
        {"word_delimiter": r"\s*"},
        {"acceptance_pattern": "[oops"},
        {"rejection_pattern": "(unbalanced"},
        {"dedup_cache_capacity": 0},
        {"emit_mode": "csv"},
        {"encoding": "no-such-codec"},
        {"decode_errors": "no-such-handler"},
        {"unknown_option": True},
    ],
)
def test_invalid_configuration_is_reported(overrides):
    with pytest.raises(ConfigurationError):
        TokenizingTransform(**overrides)


def test_non_text_chunk_is_type_error():
    with pytest.raises(TypeError):
        TokenizingTransform().push(123)


def test_config_overrides_do_not_mutate_original():
    base = TransformConfig()
    changed = base.with_overrides(dedup_cache_capacity=10)

    assert base.dedup_cache_capacity is None
    assert changed.dedup_cache_capacity == 10
