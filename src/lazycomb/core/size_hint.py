"""Arithmetic on ``(lower, upper)`` size bounds.

A bound is a pair ``(lower, upper)`` where ``upper`` is ``None`` when the
count is unknown or unbounded. Lower bounds saturate at :data:`MAX_SIZE`;
an upper bound that would exceed it becomes ``None``. ``MAX_SIZE`` is the
largest value ``__length_hint__`` may report.
"""

from __future__ import annotations

import operator
import sys
from typing import Any, Optional, Tuple

SizeHint = Tuple[int, Optional[int]]

MAX_SIZE = sys.maxsize


def _saturate(value: int) -> int:
    return value if value < MAX_SIZE else MAX_SIZE


def _checked(value: Optional[int]) -> Optional[int]:
    if value is None or value > MAX_SIZE:
        return None
    return value


def exact(n: int) -> SizeHint:
    return (_saturate(n), _checked(n))


def add(a: SizeHint, b: SizeHint) -> SizeHint:
    lower = _saturate(a[0] + b[0])
    upper = None
    if a[1] is not None and b[1] is not None:
        upper = _checked(a[1] + b[1])
    return (lower, upper)


def add_scalar(hint: SizeHint, x: int) -> SizeHint:
    lower, upper = hint
    return (_saturate(lower + x), _checked(None if upper is None else upper + x))


def sub_scalar(hint: SizeHint, x: int) -> SizeHint:
    lower, upper = hint
    return (max(lower - x, 0), None if upper is None else max(upper - x, 0))


def mul(a: SizeHint, b: SizeHint) -> SizeHint:
    lower = _saturate(a[0] * b[0])
    a_upper, b_upper = a[1], b[1]
    if a_upper == 0 or b_upper == 0:
        # Zero times anything, including unbounded, is zero.
        return (lower, 0)
    if a_upper is None or b_upper is None:
        return (lower, None)
    return (lower, _checked(a_upper * b_upper))


def mul_scalar(hint: SizeHint, x: int) -> SizeHint:
    lower, upper = hint
    return (_saturate(lower * x), _checked(None if upper is None else upper * x))


def pow_scalar_base(base: int, exponent: SizeHint) -> SizeHint:
    """Bounds of ``base ** e`` for ``e`` within ``exponent``."""
    lower, upper = exponent
    return (_saturating_pow(base, lower), None if upper is None else _checked_pow(base, upper))


def _checked_pow(base: int, exponent: int) -> Optional[int]:
    if base in (0, 1):
        return base if exponent else 1
    # base ** exponent > MAX_SIZE as soon as exponent reaches the bit width.
    if exponent >= MAX_SIZE.bit_length():
        return None
    return _checked(base**exponent)


def _saturating_pow(base: int, exponent: int) -> int:
    value = _checked_pow(base, exponent)
    return MAX_SIZE if value is None else value


def checked_binomial(n: int, k: int) -> Optional[int]:
    """``C(n, k)``, or ``None`` once the result exceeds :data:`MAX_SIZE`."""
    if k < 0 or n < k:
        return 0
    k = min(k, n - k)
    c = 1
    for i in range(1, k + 1):
        # C(n - k + i, i) grows with i, so bailing out early is safe.
        c = c * (n - k + i) // i
        if c > MAX_SIZE:
            return None
    return c


def of_iterable(obj: Any) -> SizeHint:
    """Bounds on the number of items ``obj`` will produce from its start."""
    try:
        n = len(obj)
    except TypeError:
        return of_iterator(obj)
    except OverflowError:
        return (MAX_SIZE, None)
    return exact(n)


def of_iterator(it: Any) -> SizeHint:
    """Bounds on what a partly consumed iterator of unknown length yields."""
    try:
        lower = operator.length_hint(it, 0)
    except OverflowError:
        lower = MAX_SIZE
    return (_saturate(lower), None)
