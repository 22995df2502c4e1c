"""Word splitting across chunk boundaries and the accept/reject gate."""

from __future__ import annotations

import re
from typing import List, Pattern, Tuple, Union

from .errors import ConfigurationError

# Whitespace and a small punctuation set.
DEFAULT_WORD_DELIMITER = r"[\s.,!?<>]+"
# Fairly ordinary lowercase words, hyphens allowed.
DEFAULT_ACCEPTANCE_PATTERN = r"^[a-z\-]{6,14}$"
# Runs of hyphens, or more than one hyphen anywhere.
DEFAULT_REJECTION_PATTERN = r"-{2,}|-.*-"

PatternLike = Union[str, Pattern[str]]


def compile_pattern(value: PatternLike, *, name: str) -> Pattern[str]:
    """Return ``value`` as a compiled pattern or raise ``ConfigurationError``."""

    if isinstance(value, re.Pattern):
        if not isinstance(value.pattern, str):
            raise ConfigurationError(f"{name} must be a text pattern, not bytes")
        return value
    if not isinstance(value, str):
        raise ConfigurationError(
            f"{name} must be a string or compiled pattern, got {type(value).__name__}"
        )
    try:
        return re.compile(value)
    except re.error as exc:
        raise ConfigurationError(f"Invalid {name} {value!r}: {exc}") from exc


def compile_delimiter(value: PatternLike) -> Pattern[str]:
    pattern = compile_pattern(value, name="word delimiter")
    if pattern.fullmatch(""):
        raise ConfigurationError(
            f"Word delimiter {pattern.pattern!r} matches the empty string"
        )
    return pattern


def normalize_word(segment: str) -> str:
    return segment.lower()


def split_chunk(fragment: str, text: str, delimiter: Pattern[str]) -> Tuple[List[str], str]:
    """Split ``fragment + text`` into complete segments and a new fragment.

    The last piece of the split is never complete: the chunk may have ended
    in the middle of a word.  It is returned as the fragment to carry into
    the next call.
    """

    segments = delimiter.split(fragment + text)
    new_fragment = segments.pop()
    return segments, new_fragment


class Tokenizer:
    """Stateful wrapper over :func:`split_chunk` holding the trailing fragment."""

    def __init__(self, delimiter: PatternLike = DEFAULT_WORD_DELIMITER) -> None:
        self.delimiter = compile_delimiter(delimiter)
        self._fragment = ""

    @property
    def fragment(self) -> str:
        return self._fragment

    def feed(self, text: str) -> List[str]:
        segments, self._fragment = split_chunk(self._fragment, text, self.delimiter)
        return segments

    def flush(self) -> List[str]:
        """Return the remaining fragment as a final segment and clear it.

        At stream end there is no trailing delimiter to come, so whatever is
        left over is a complete word.
        """

        fragment, self._fragment = self._fragment, ""
        return [fragment] if fragment else []

    def reset(self) -> None:
        self._fragment = ""


class WordFilter:
    """Accept a word when it matches acceptance and does not match rejection."""

    def __init__(
        self,
        acceptance: PatternLike = DEFAULT_ACCEPTANCE_PATTERN,
        rejection: PatternLike = DEFAULT_REJECTION_PATTERN,
    ) -> None:
        self.acceptance = compile_pattern(acceptance, name="acceptance pattern")
        self.rejection = compile_pattern(rejection, name="rejection pattern")

    def accepts(self, word: str) -> bool:
        return bool(self.acceptance.search(word)) and not self.rejection.search(word)

    __call__ = accepts


__all__ = [
    "DEFAULT_WORD_DELIMITER",
    "DEFAULT_ACCEPTANCE_PATTERN",
    "DEFAULT_REJECTION_PATTERN",
    "PatternLike",
    "compile_pattern",
    "compile_delimiter",
    "normalize_word",
    "split_chunk",
    "Tokenizer",
    "WordFilter",
]
