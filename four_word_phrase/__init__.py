"""Build word dictionaries from raw text and generate reproducible phrases."""

from .app.app import PhraseApp
from .app.data import MemoryWordStore, SQLiteWordStore, WordStore
from .app.services import StreamImporter
from .core import (
    BoundedDedupCache,
    EmitMode,
    PhraseGenerator,
    SeedDeriver,
    TokenizingTransform,
    TransformConfig,
)

__version__ = "0.1.0"

__all__ = [
    "PhraseApp",
    "MemoryWordStore",
    "SQLiteWordStore",
    "WordStore",
    "StreamImporter",
    "BoundedDedupCache",
    "EmitMode",
    "PhraseGenerator",
    "SeedDeriver",
    "TokenizingTransform",
    "TransformConfig",
]
