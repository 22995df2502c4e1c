import pytest

from four_word_phrase.app.data.database import SQLiteWordStore
from four_word_phrase.app.data.word_store import MemoryWordStore, WordStore, coerce_words
from four_word_phrase.core.errors import StoreError

WORDS = ["zebra", "apple", "Émile", "apple-pie", "banana"]


@pytest.fixture(params=["memory", "sqlite"])
def make_store(request, tmp_path):
    stores = []

    def _make(words=None):
        if request.param == "memory":
            store = MemoryWordStore()
        else:
            store = SQLiteWordStore(str(tmp_path / f"words{len(stores)}.db"))
        stores.append(store)
        if words:
            store.append(words)
        return store

    yield _make
    for store in stores:
        if isinstance(store, SQLiteWordStore):
            store.close()


def test_stores_satisfy_protocol(make_store):
    assert isinstance(make_store(), WordStore)


def test_index_order_is_independent_of_append_order(make_store):
    forward = make_store(WORDS)
    backward = make_store(list(reversed(WORDS)))

    assert [forward.word_at(i) for i in range(forward.length())] == sorted(WORDS)
    assert forward.words_at([4, 0, 2]) == backward.words_at([4, 0, 2])


def test_duplicates_and_empty_words_are_ignored(make_store):
    store = make_store()
    store.append(["apple", "apple", ""])
    store.append("apple")
    store.append(None)

    assert store.length() == 1


def test_words_at_keeps_caller_order_and_repeats(make_store):
    store = make_store(["cherry", "apple", "banana"])

    assert store.words_at([2, 0, 2]) == ["cherry", "apple", "cherry"]
    assert store.words_at([]) == []


@pytest.mark.parametrize("index", [-1, 3, "1", True])
def test_out_of_range_index_is_store_error(make_store, index):
    store = make_store(["cherry", "apple", "banana"])

    with pytest.raises(StoreError):
        store.word_at(index)


def test_contains_words(make_store):
    store = make_store(["cherry", "apple"])

    assert store.contains("apple") is True
    assert store.contains("pear") is False
    assert store.contains_words(["pear", "cherry"]) == [False, True]


def test_all_words_lists_index_order(make_store):
    store = make_store(WORDS)

    assert store.all_words() == sorted(WORDS)
    assert list(store) == sorted(WORDS)


def test_memory_and_sqlite_agree_on_every_index(tmp_path):
    memory = MemoryWordStore(WORDS)
    sqlite = SQLiteWordStore(str(tmp_path / "agree.db"))
    sqlite.append(list(reversed(WORDS)))

    assert memory.words_at(range(len(WORDS))) == sqlite.words_at(range(len(WORDS)))
    assert sqlite.all_words() == sorted(WORDS)
    sqlite.close()


def test_sqlite_store_persists_between_instances(tmp_path):
    path = str(tmp_path / "nested" / "persist.db")
    first = SQLiteWordStore(path)
    first.append(["apple", "banana"])
    first.close()

    reopened = SQLiteWordStore(path)

    assert reopened.length() == 2
    assert reopened.word_at(1) == "banana"
    reopened.close()


def test_sqlite_in_memory_database_uses_single_connection():
    store = SQLiteWordStore(":memory:", pool_size=8)
    store.append(["apple", "banana"])

    assert store.length() == 2
    assert store.contains("banana")
    store.close()


def test_coerce_words_rejects_non_strings():
    with pytest.raises(StoreError):
        coerce_words(["apple", 3])
    assert coerce_words("single") == ["single"]
