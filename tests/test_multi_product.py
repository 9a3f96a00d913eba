import copy
import itertools

import pytest

from lazycomb import (
    EnumerationConfig,
    LaneError,
    LazyCombError,
    multi_cartesian_product,
    multi_cartesian_product_map,
)
from lazycomb.core.size_hint import MAX_SIZE
from tests._iter_utils import CountingIterator, Unsized, naturals


def test_product_basic():
    result = list(multi_cartesian_product([[0, 1], [2, 3]]))
    assert result == [[0, 2], [0, 3], [1, 2], [1, 3]]


def test_product_matches_itertools():
    lanes = [range(2), "ab", (None, False, 0)]
    expected = [list(t) for t in itertools.product(*lanes)]
    assert list(multi_cartesian_product(lanes)) == expected


def test_product_any_empty_lane_is_empty():
    assert list(multi_cartesian_product([[1, 2], []])) == []
    assert list(multi_cartesian_product([[], [1, 2]])) == []
    assert list(multi_cartesian_product([[1], [], [2]])) == []


def test_product_without_lanes_is_empty():
    gen = multi_cartesian_product([])
    assert list(gen) == []
    assert gen.size_hint() == (0, 0)
    assert gen.num_lanes == 0


def test_product_single_lane():
    assert list(multi_cartesian_product([[1, 2, 3]])) == [[1], [2], [3]]


def test_product_none_items_are_values():
    assert list(multi_cartesian_product([[None], [None, None]])) == [[None, None]] * 2


def test_product_termination_is_fused():
    gen = multi_cartesian_product([[1, 2], [3]])
    assert len(list(gen)) == 2
    for _ in range(3):
        with pytest.raises(StopIteration):
            next(gen)


def test_product_one_shot_lanes_are_replayed_lazily():
    first = CountingIterator([0, 1])
    second = CountingIterator(naturals())
    gen = multi_cartesian_product([first, second])
    assert next(gen) == [0, 0]
    assert next(gen) == [0, 1]
    assert second.pulled == 2
    assert first.pulled == 1


def test_product_rejects_one_shot_lanes_when_configured():
    config = EnumerationConfig(replay_one_shot_lanes=False)
    with pytest.raises(LaneError) as excinfo:
        multi_cartesian_product([[1], iter([2])], config=config)
    assert excinfo.value.lane == 1
    with pytest.raises(TypeError):
        multi_cartesian_product([[1], iter([2])], config=config)


def test_product_rejects_non_iterable_lanes():
    with pytest.raises(LaneError):
        multi_cartesian_product([[1], 5])


def test_product_accepts_factories():
    calls = []

    def lane():
        calls.append(1)
        return iter("xy")

    result = list(multi_cartesian_product([[0, 1], lane]))
    assert result == [[0, "x"], [0, "y"], [1, "x"], [1, "y"]]
    assert len(calls) == 2


def test_product_size_hint_and_count_track_progress():
    gen = multi_cartesian_product([[0, 1], [2, 3, 4]])
    assert gen.size_hint() == (6, 6)
    assert gen.count() == 6
    remaining = 6
    for _ in gen:
        remaining -= 1
        assert gen.size_hint() == (remaining, remaining)
        assert gen.count() == remaining
    assert gen.count() == 0
    assert gen.size_hint() == (0, 0)


def test_product_size_hint_unknown_lanes():
    gen = multi_cartesian_product([[0, 1], Unsized([1, 2])])
    assert gen.size_hint() == (0, None)
    assert gen.count() == 4
    next(gen)
    assert gen.size_hint()[1] is None
    assert gen.count() == 3


def test_product_size_hint_empty_lane_is_zero():
    gen = multi_cartesian_product([Unsized([1]), []])
    assert gen.size_hint() == (0, 0)


def test_product_last():
    gen = multi_cartesian_product([[0, 1], [2, 3]])
    assert gen.last() == [1, 3]
    assert list(gen) == []

    gen = multi_cartesian_product([[0, 1], [2, 3]])
    assert list(itertools.islice(gen, 4)) == [[0, 2], [0, 3], [1, 2], [1, 3]]
    assert gen.last() is None


def test_product_last_mid_iteration():
    gen = multi_cartesian_product([[0, 1], [2, 3]])
    next(gen)
    next(gen)
    assert gen.last() == [1, 3]


def test_product_map_uses_lane_count():
    gen = multi_cartesian_product_map([[1, 2], [10, 20]], sum)
    assert list(gen) == [11, 21, 12, 22]


def test_product_copy_is_independent():
    gen = multi_cartesian_product([iter([0, 1]), [2, 3]])
    next(gen)
    clone = copy.copy(gen)
    rest = list(gen)
    assert rest == [[0, 3], [1, 2], [1, 3]]
    assert list(clone) == rest


def test_product_tuple_output():
    config = EnumerationConfig(output="tuple")
    assert list(multi_cartesian_product(["ab", "c"], config=config)) == [("a", "c"), ("b", "c")]


class _HugeSized:
    """Re-iterable that claims more items than ``len()`` can report."""

    def __len__(self):
        return 10**30

    def __iter__(self):
        return naturals()


def test_product_count_handles_ranges_longer_than_maxsize():
    big = 10**30
    gen = multi_cartesian_product([range(3), range(big)])
    assert gen.count() == 3 * big
    assert next(gen) == [0, 0]
    assert gen.count() == 3 * big - 1
    assert gen.size_hint() == (MAX_SIZE, None)


def test_product_count_handles_descending_huge_ranges():
    gen = multi_cartesian_product([range(10**30, 0, -3), [0, 1]])
    assert gen.count() == 2 * -(-(10**30) // 3)


def test_product_last_on_huge_range_does_not_walk_the_lane():
    gen = multi_cartesian_product([range(2), range(10**30)])
    assert gen.last() == [1, 10**30 - 1]
    assert next(gen, None) is None


def test_product_count_rejects_uncountable_huge_lanes():
    gen = multi_cartesian_product([[0, 1], _HugeSized()])
    assert gen.size_hint() == (MAX_SIZE, None)
    with pytest.raises(LazyCombError):
        gen.count()


def test_product_size_hint_saturates_for_huge_lanes():
    gen = multi_cartesian_product([range(10**30), range(10**10), [1, 2]])
    assert gen.size_hint() == (MAX_SIZE, None)
    assert gen.__length_hint__() == MAX_SIZE
    assert next(gen) == [0, 0, 1]
    assert gen.size_hint() == (MAX_SIZE, None)


def test_product_size_hint_is_unbounded_for_endless_lanes():
    gen = multi_cartesian_product([[1, 2], naturals])
    assert gen.size_hint()[1] is None
    assert list(itertools.islice(gen, 3)) == [[1, 0], [1, 1], [1, 2]]
    assert gen.size_hint()[1] is None
