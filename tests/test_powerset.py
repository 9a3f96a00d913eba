import copy
import itertools

import pytest

from lazycomb import powerset, powerset_map
from lazycomb.core.size_hint import MAX_SIZE
from tests._iter_utils import CountingIterator, naturals


def test_powerset_basic():
    assert list(powerset([1, 2])) == [[], [1], [2], [1, 2]]


def test_powerset_empty_source():
    assert list(powerset([])) == [[]]


def test_powerset_matches_itertools_recipe():
    data = list(range(5))
    expected = [
        list(c)
        for r in range(len(data) + 1)
        for c in itertools.combinations(data, r)
    ]
    assert list(powerset(data)) == expected


def test_powerset_termination_is_fused():
    gen = powerset([1, 2, 3])
    assert len(list(gen)) == 8
    for _ in range(3):
        with pytest.raises(StopIteration):
            next(gen)


def test_powerset_grows_k_on_demand():
    source = CountingIterator(naturals())
    gen = powerset(source)
    assert next(gen) == []
    assert source.pulled == 0
    assert next(gen) == [0]
    assert source.pulled == 1
    assert gen.k == 1


def test_powerset_size_hint_counts_down():
    gen = powerset([1, 2, 3])
    assert gen.size_hint() == (8, 8)
    next(gen)
    assert gen.size_hint() == (7, 7)
    for _ in gen:
        pass
    assert gen.size_hint() == (0, 0)
    assert gen.n == 3


def test_powerset_size_hint_unbounded_and_huge():
    lower, upper = powerset(naturals()).size_hint()
    assert lower == 1
    assert upper is None
    assert powerset(range(100)).size_hint() == (MAX_SIZE, None)


def test_powerset_map_and_copy():
    gen = powerset_map("abc", "".join)
    assert next(gen) == ""
    assert next(gen) == "a"
    clone = copy.copy(gen)
    rest = list(gen)
    assert rest == ["b", "c", "ab", "ac", "bc", "abc"]
    assert list(clone) == rest
