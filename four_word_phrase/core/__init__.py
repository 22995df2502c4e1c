"""Streaming tokenizer and deterministic phrase generator."""

from .dedup_cache import BoundedDedupCache
from .errors import (
    ConfigurationError,
    EmptyDictionaryError,
    InvalidArgumentError,
    InvalidCountError,
    PhraseError,
    StoreError,
    UpstreamIOError,
)
from .generator import PhraseGenerator
from .seeds import SeedDeriver, derive_seed, phrase_prng
from .tokenizer import (
    DEFAULT_ACCEPTANCE_PATTERN,
    DEFAULT_REJECTION_PATTERN,
    DEFAULT_WORD_DELIMITER,
    Tokenizer,
    WordFilter,
    split_chunk,
)
from .transform import EmitMode, TokenizingTransform, TransformConfig, read_chunks

__all__ = [
    "BoundedDedupCache",
    "ConfigurationError",
    "EmptyDictionaryError",
    "InvalidArgumentError",
    "InvalidCountError",
    "PhraseError",
    "StoreError",
    "UpstreamIOError",
    "PhraseGenerator",
    "SeedDeriver",
    "derive_seed",
    "phrase_prng",
    "DEFAULT_ACCEPTANCE_PATTERN",
    "DEFAULT_REJECTION_PATTERN",
    "DEFAULT_WORD_DELIMITER",
    "Tokenizer",
    "WordFilter",
    "split_chunk",
    "EmitMode",
    "TokenizingTransform",
    "TransformConfig",
    "read_chunks",
]
