"""Plain-text dictionary files: one word per line, sorted, UTF-8."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Union

from four_word_phrase.core.errors import StoreError
from four_word_phrase.utils.observability import get_logger

from .word_store import WordStore

PathLike = Union[str, os.PathLike]

_LOGGER = get_logger(__name__).bind(component="dictionary_file")


def format_dictionary(words: Iterable[str]) -> str:
    ordered = sorted({word for word in words if word})
    if not ordered:
        return ""
    return "\n".join(ordered) + "\n"


def write_dictionary(path: PathLike, words: Iterable[str]) -> int:
    """Write ``words`` to ``path`` in dictionary format and return the count.

    The file is written to a temporary sibling first and moved into place,
    so readers never see a half-written dictionary.
    """

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    text = format_dictionary(words)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", dir=str(target.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(text)
        os.replace(tmp_name, target)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    count = text.count("\n")
    _LOGGER.info("Dictionary written", context={"path": str(target), "words": count})
    return count


def read_dictionary(path: PathLike) -> List[str]:
    with open(path, "r", encoding="utf-8") as handle:
        return [line.strip() for line in handle if line.strip()]


def load_dictionary(store: WordStore, path: PathLike) -> int:
    """Append every word of the dictionary file at ``path`` to ``store``."""

    try:
        words = read_dictionary(path)
    except OSError as exc:
        raise StoreError(f"Cannot read dictionary {path}: {exc}") from exc
    store.append(words)
    _LOGGER.info("Dictionary loaded", context={"path": str(path), "words": len(words)})
    return len(words)


__all__ = ["format_dictionary", "write_dictionary", "read_dictionary", "load_dictionary"]
