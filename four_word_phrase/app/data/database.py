"""SQLite-backed word store."""

from __future__ import annotations

import os
import queue
import sqlite3
import threading
from contextlib import contextmanager
from typing import Dict, Generator, Iterable, Iterator, List, Sequence

from four_word_phrase.core.errors import StoreError
from four_word_phrase.utils.observability import get_logger

from .word_store import WordsArg, check_index, coerce_words


def _ensure_parent_directory(path: str) -> None:
    directory = os.path.dirname(os.path.abspath(path))
    if directory and not os.path.exists(directory):
        os.makedirs(directory, exist_ok=True)


class SQLiteWordStore:
    """Word store persisting one row per word.

    Index order is ``ORDER BY word``; SQLite's default BINARY collation
    compares UTF-8 bytes, which orders the same way Python sorts ``str``, so
    this store and :class:`MemoryWordStore` agree on every index.
    """

    def __init__(
        self,
        db_path: str,
        *,
        pool_size: int = 4,
        pool_timeout: float = 5.0,
    ) -> None:
        self.db_path = str(db_path)
        self._pool_size = max(1, int(pool_size))
        self._pool_timeout = max(0.0, float(pool_timeout))
        self._pool: queue.Queue = queue.Queue(maxsize=self._pool_size)
        self._pool_semaphore = threading.BoundedSemaphore(self._pool_size)
        self._length_cache: int | None = None
        self._logger = get_logger(__name__).bind(
            component="sqlite_word_store",
            db_path=self.db_path,
        )
        if self.db_path != ":memory:":
            _ensure_parent_directory(self.db_path)
        elif self._pool_size != 1:
            # Every new connection to ":memory:" is a separate empty database.
            self._pool_size = 1
            self._pool = queue.Queue(maxsize=1)
            self._pool_semaphore = threading.BoundedSemaphore(1)
        self.ensure_schema()

    def _create_connection(self) -> sqlite3.Connection:
        try:
            return sqlite3.connect(self.db_path, check_same_thread=False)
        except sqlite3.Error as exc:
            raise StoreError(f"Cannot open word database {self.db_path}: {exc}") from exc

    def _acquire_connection(self) -> sqlite3.Connection:
        if not self._pool_semaphore.acquire(timeout=self._pool_timeout or None):
            self._logger.error(
                "Database connection pool exhausted",
                context={"pool_size": self._pool_size, "timeout": self._pool_timeout},
            )
            raise StoreError("Database connection pool exhausted")

        try:
            return self._pool.get_nowait()
        except queue.Empty:
            try:
                return self._create_connection()
            except StoreError:
                self._pool_semaphore.release()
                raise

    def _release_connection(self, connection: sqlite3.Connection) -> None:
        try:
            self._pool.put_nowait(connection)
        except queue.Full:
            connection.close()
        finally:
            self._pool_semaphore.release()

    @contextmanager
    def _connect(self) -> Generator[sqlite3.Connection, None, None]:
        connection = self._acquire_connection()
        try:
            yield connection
            if connection.in_transaction:
                connection.commit()
        except sqlite3.Error as exc:
            if connection.in_transaction:
                connection.rollback()
            self._logger.error("SQLite operation failed", context={"error": str(exc)})
            raise StoreError(f"Word database operation failed: {exc}") from exc
        except Exception:
            if connection.in_transaction:
                connection.rollback()
            raise
        finally:
            self._release_connection(connection)

    def ensure_schema(self) -> int:
        """Create the ``words`` table when missing and return the row count."""

        with self._connect() as conn:
            conn.execute("CREATE TABLE IF NOT EXISTS words (word TEXT PRIMARY KEY)")
            (count,) = conn.execute("SELECT COUNT(*) FROM words").fetchone()
        self._length_cache = int(count)
        self._logger.info("Word database ready", context={"row_count": self._length_cache})
        return self._length_cache

    def append(self, words: WordsArg) -> None:
        incoming = coerce_words(words)
        if not incoming:
            return
        with self._connect() as conn:
            conn.executemany(
                "INSERT OR IGNORE INTO words (word) VALUES (?)",
                ((word,) for word in incoming),
            )
        self._length_cache = None
        self._logger.debug("Words appended", context={"offered": len(incoming)})

    def length(self) -> int:
        if self._length_cache is None:
            with self._connect() as conn:
                (count,) = conn.execute("SELECT COUNT(*) FROM words").fetchone()
            self._length_cache = int(count)
        return self._length_cache

    def word_at(self, index: int) -> str:
        return self.words_at([index])[0]

    def words_at(self, indices: Sequence[int]) -> List[str]:
        indices = list(indices)
        if not indices:
            return []
        length = self.length()
        for index in indices:
            check_index(index, length)

        resolved: Dict[int, str] = {}
        with self._connect() as conn:
            for index in sorted(set(indices)):
                row = conn.execute(
                    "SELECT word FROM words ORDER BY word LIMIT 1 OFFSET ?",
                    (index,),
                ).fetchone()
                if row is None:
                    raise StoreError(f"Word index {index} vanished during lookup")
                resolved[index] = row[0]
        return [resolved[index] for index in indices]

    def contains(self, word: str) -> bool:
        return self.contains_words([word])[0]

    def contains_words(self, words: Iterable[str]) -> List[bool]:
        if isinstance(words, str):
            words = [words]
        words = list(words)
        results: List[bool] = []
        with self._connect() as conn:
            for word in words:
                row = conn.execute("SELECT 1 FROM words WHERE word = ?", (word,)).fetchone()
                results.append(row is not None)
        return results

    def all_words(self) -> List[str]:
        with self._connect() as conn:
            return [row[0] for row in conn.execute("SELECT word FROM words ORDER BY word")]

    def close(self) -> None:
        while True:
            try:
                connection = self._pool.get_nowait()
            except queue.Empty:
                break
            connection.close()

    def __len__(self) -> int:
        return self.length()

    def __iter__(self) -> Iterator[str]:
        return iter(self.all_words())


__all__ = ["SQLiteWordStore"]
