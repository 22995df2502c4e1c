"""Error kinds raised by the tokenizer, the generator and the word stores."""

from __future__ import annotations


class PhraseError(Exception):
    """Base class for every error raised by :mod:`four_word_phrase`."""

    code = "phrase_error"

    def __init__(self, message: str, *, code: str | None = None) -> None:
        clean_message = str(message).strip() or "unspecified error"
        super().__init__(clean_message)
        self.message = clean_message
        if code:
            self.code = code

    def __str__(self) -> str:
        return self.message


class ConfigurationError(PhraseError, ValueError):
    """A pattern, capacity or path was invalid at construction time."""

    code = "configuration_error"


class UpstreamIOError(PhraseError, OSError):
    """The text source feeding a transform failed."""

    code = "upstream_io_error"


class InvalidCountError(PhraseError, ValueError):
    """A request counter value was not a non-negative integer."""

    code = "invalid_count"


class InvalidArgumentError(PhraseError, ValueError):
    """A caller passed an argument outside the accepted domain."""

    code = "invalid_argument"


class StoreError(PhraseError):
    """A word store operation failed."""

    code = "store_error"


class EmptyDictionaryError(StoreError):
    """Phrase generation was requested against a store with no words."""

    code = "empty_dictionary"


def format_error_text(exc: BaseException) -> str:
    """Render ``exc`` as ``code: message`` for the command line and UI."""

    code = getattr(exc, "code", None) or "error"
    message = str(exc).strip() or type(exc).__name__
    return f"{code}: {message}"


__all__ = [
    "PhraseError",
    "ConfigurationError",
    "UpstreamIOError",
    "InvalidCountError",
    "InvalidArgumentError",
    "StoreError",
    "EmptyDictionaryError",
    "format_error_text",
]
