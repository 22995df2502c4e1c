"""Application wiring for four_word_phrase."""

from __future__ import annotations

import os
from typing import List, Optional, Union

from four_word_phrase.core.generator import PhraseGenerator
from four_word_phrase.core.transform import TransformConfig
from four_word_phrase.utils.observability import get_logger

from .data.database import SQLiteWordStore
from .data.dictionary_file import load_dictionary, write_dictionary
from .data.word_store import MemoryWordStore, WordStore
from .services.importer import ImportSummary, StreamImporter

SEED_ENV = "FOUR_WORD_PHRASE_SEED"


class PhraseApp:
    """High-level facade bundling a word store, an importer and a generator."""

    def __init__(
        self,
        db_path: Optional[str] = None,
        *,
        store: Optional[WordStore] = None,
        base_seed: Optional[str] = None,
        transform_config: Optional[TransformConfig] = None,
        batch_size: Optional[int] = None,
    ) -> None:
        self.db_path = db_path
        if base_seed is None:
            base_seed = os.environ.get(SEED_ENV, "")
        self._logger = get_logger(__name__).bind(component="app_facade")

        if store is not None:
            self.store = store
        elif db_path:
            self.store = SQLiteWordStore(db_path)
        else:
            self.store = MemoryWordStore()

        self.importer = StreamImporter(self.store, config=transform_config, batch_size=batch_size)
        self.generator = PhraseGenerator(self.store, base_seed)
        self._logger.info(
            "Application dependencies wired",
            context={
                "store": type(self.store).__name__,
                "db_path": db_path,
                "dictionary_size": self.store.length(),
            },
        )

    # Dictionary management -------------------------------------------------
    def import_file(self, path: Union[str, os.PathLike]) -> ImportSummary:
        return self.importer.import_path(path)

    def load_dictionary(self, path: Union[str, os.PathLike]) -> int:
        return load_dictionary(self.store, path)

    def save_dictionary(self, path: Union[str, os.PathLike]) -> int:
        return write_dictionary(path, self.store.all_words())

    # Phrase generation -----------------------------------------------------
    def set_base_seed(self, base_seed: str, *, count: int = 0) -> None:
        """Restart the phrase sequence for ``base_seed`` from ``count``."""

        self.generator = PhraseGenerator(self.store, base_seed, count=count)

    def generate_phrases(self, total: int, phrase_length: int = 4) -> List[List[str]]:
        return self.generator.next_phrases(total, phrase_length)

    def render_phrases(self, total: int, phrase_length: int = 4) -> str:
        phrases = self.generate_phrases(total, phrase_length)
        start = self.generator.count - len(phrases) + 1
        return "\n".join(
            f"{number}. {' '.join(phrase)}"
            for number, phrase in enumerate(phrases, start=start)
        )

    def create_gradio_interface(self):
        from .ui.gradio import create_interface

        return create_interface(self)


__all__ = ["PhraseApp", "SEED_ENV"]
