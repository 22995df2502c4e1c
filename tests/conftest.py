import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from four_word_phrase.app.data.word_store import MemoryWordStore
from four_word_phrase.core.transform import TransformConfig

ANY_LOWERCASE_WORD = r"^[a-z]+$"


class FailingSource:
    """Chunk iterable that yields ``chunks`` and then raises ``OSError``."""

    def __init__(self, *chunks) -> None:
        self.chunks = list(chunks)

    def __iter__(self):
        for chunk in self.chunks:
            yield chunk
        raise OSError("disk went away")


@pytest.fixture
def failing_source():
    return FailingSource


@pytest.fixture
def permissive_config():
    """Transform config accepting any run of lowercase letters."""

    return TransformConfig(acceptance_pattern=ANY_LOWERCASE_WORD)


@pytest.fixture
def hyphenated_store():
    return MemoryWordStore(["word-1", "word-2", "word-3"])


@pytest.fixture
def corpus_tree(tmp_path):
    """Small corpus: three English files and one that is mostly novel words."""

    root = tmp_path / "corpus"
    (root / "sub").mkdir(parents=True)
    (root / "english1.txt").write_text("apple banana cherry orange", encoding="utf-8")
    (root / "english2.txt").write_text("Apple banana, grape! Melon.", encoding="utf-8")
    (root / "sub" / "english3.txt").write_text("apple banana cherry lemon", encoding="utf-8")
    (root / "sub" / "foreign.txt").write_text("bonjour merci fromage maison", encoding="utf-8")
    return root
