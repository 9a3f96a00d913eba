import math

import pytest

from lazycomb.core import size_hint
from lazycomb.core.size_hint import MAX_SIZE


def test_add_propagates_unbounded_upper():
    assert size_hint.add((1, 2), (3, 4)) == (4, 6)
    assert size_hint.add((1, None), (3, 4)) == (4, None)
    assert size_hint.add((MAX_SIZE, MAX_SIZE), (1, 1)) == (MAX_SIZE, None)


def test_scalar_arithmetic_saturates_and_floors():
    assert size_hint.add_scalar((2, 5), 3) == (5, 8)
    assert size_hint.add_scalar((MAX_SIZE, None), 1) == (MAX_SIZE, None)
    assert size_hint.sub_scalar((2, 5), 3) == (0, 2)
    assert size_hint.sub_scalar((2, None), 1) == (1, None)
    assert size_hint.mul_scalar((2, 5), 3) == (6, 15)


def test_mul_zero_upper_wins_over_unbounded():
    assert size_hint.mul((3, 3), (0, 0)) == (0, 0)
    assert size_hint.mul((2, None), (0, 0)) == (0, 0)
    assert size_hint.mul((2, None), (3, 3)) == (6, None)
    assert size_hint.mul((2**40, 2**40), (2**40, 2**40)) == (MAX_SIZE, None)


def test_pow_scalar_base():
    assert size_hint.pow_scalar_base(2, (3, 3)) == (8, 8)
    assert size_hint.pow_scalar_base(2, (3, None)) == (8, None)
    assert size_hint.pow_scalar_base(2, (200, 200)) == (MAX_SIZE, None)
    assert size_hint.pow_scalar_base(1, (10**30, None)) == (1, None)


@pytest.mark.parametrize("n,k", [(0, 0), (5, 0), (5, 2), (5, 5), (10, 3), (3, 5)])
def test_checked_binomial_matches_math_comb(n, k):
    assert size_hint.checked_binomial(n, k) == math.comb(n, k)


def test_checked_binomial_reports_overflow():
    assert size_hint.checked_binomial(200, 100) is None
    assert size_hint.checked_binomial(MAX_SIZE, 1) == MAX_SIZE


def test_of_iterable():
    assert size_hint.of_iterable([1, 2, 3]) == (3, 3)
    assert size_hint.of_iterable(range(10**30)) == (MAX_SIZE, None)
    assert size_hint.of_iterable(x for x in range(3)) == (0, None)
    assert size_hint.of_iterable(iter([1, 2])) == (2, None)
