import math

import pytest

from four_word_phrase.core.dedup_cache import BoundedDedupCache
from four_word_phrase.core.errors import ConfigurationError


def test_first_presentation_is_new_and_repeat_is_seen():
    cache = BoundedDedupCache()

    assert cache.seen("apple") is False
    assert cache.seen("apple") is True
    assert len(cache) == 1


def test_least_recently_used_word_is_evicted():
    cache = BoundedDedupCache(2)

    assert cache.seen("a") is False
    assert cache.seen("b") is False
    assert cache.seen("a") is True  # touches "a"; "b" is now oldest
    assert cache.seen("c") is False

    assert "b" not in cache
    assert "a" in cache and "c" in cache
    assert cache.seen("b") is False
    assert len(cache) == 2


def test_membership_check_does_not_touch_recency():
    cache = BoundedDedupCache(2)
    cache.seen("a")
    cache.seen("b")

    assert "a" in cache
    cache.seen("c")

    assert "a" not in cache


@pytest.mark.parametrize("capacity", [None, math.inf])
def test_unbounded_capacity_never_evicts(capacity):
    cache = BoundedDedupCache(capacity)
    for index in range(1000):
        cache.seen(f"word{index}")

    assert cache.unbounded
    assert cache.capacity is None
    assert len(cache) == 1000
    assert cache.seen("word0") is True


@pytest.mark.parametrize("capacity", [0, -3, True, 2.5, "10", -math.inf])
def test_invalid_capacity_is_rejected(capacity):
    with pytest.raises(ConfigurationError):
        BoundedDedupCache(capacity)


def test_clear_forgets_everything():
    cache = BoundedDedupCache(5)
    cache.seen("apple")
    cache.clear()

    assert len(cache) == 0
    assert cache.seen("apple") is False
    assert "capacity=5" in repr(cache)
