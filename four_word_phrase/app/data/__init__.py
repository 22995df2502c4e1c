"""Word storage backends and the dictionary file format."""

from .database import SQLiteWordStore
from .dictionary_file import format_dictionary, load_dictionary, read_dictionary, write_dictionary
from .word_store import MemoryWordStore, WordStore

__all__ = [
    "WordStore",
    "MemoryWordStore",
    "SQLiteWordStore",
    "format_dictionary",
    "load_dictionary",
    "read_dictionary",
    "write_dictionary",
]
