from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Generic, Iterable, Optional, Sequence, TypeVar

from . import size_hint
from .combinations import Combinations
from .config import EnumerationConfig, resolve_config
from .output import WindowStrategy, make_strategy
from .size_hint import SizeHint

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Powerset(Generic[T]):
    """Every subset of a source, by increasing size then lexicographically.

    Wraps a :class:`Combinations` generator and bumps its size each time it
    runs out, so an unbounded source is only pulled as far as demand goes.
    """

    def __init__(self, source: Iterable[T], manager: WindowStrategy[T]):
        self._combs: Combinations[T] = Combinations(source, 0, manager)
        # Count of yielded subsets; saturates and is only used for bounds.
        self._pos = 0

    @property
    def k(self) -> int:
        """Size of the subsets currently being produced."""
        return self._combs.k

    @property
    def n(self) -> int:
        return self._combs.n

    def __iter__(self) -> "Powerset[T]":
        return self

    def __next__(self) -> Any:
        combs = self._combs
        try:
            item = next(combs)
        except StopIteration:
            if not (combs.k < combs.n or combs.k == 0):
                raise
            combs.reset(combs.k + 1)
            logger.debug("powerset advancing to subsets of size %d", combs.k)
            item = next(combs)
        if self._pos < size_hint.MAX_SIZE:
            self._pos += 1
        return item

    def size_hint(self) -> SizeHint:
        combs = self._combs
        src_total = size_hint.add_scalar(combs.pool.size_hint(), combs.n)
        self_total = size_hint.pow_scalar_base(2, src_total)
        if self._pos < size_hint.MAX_SIZE:
            return size_hint.sub_scalar(self_total, self._pos)
        # The saturated counter no longer says how many were yielded.
        return (0, self_total[1])

    def __length_hint__(self) -> int:
        return self.size_hint()[0]

    def __copy__(self) -> "Powerset[T]":
        clone: Powerset[T] = Powerset.__new__(Powerset)
        clone._combs = copy.copy(self._combs)
        clone._pos = self._pos
        return clone

    def __repr__(self) -> str:
        return f"Powerset(pos={self._pos}, combs={self._combs!r})"


def powerset(
    source: Iterable[T],
    *,
    config: Optional[EnumerationConfig] = None,
) -> Powerset[T]:
    """Lazily enumerate every subset of ``source``.

    >>> list(powerset([1, 2]))
    [[], [1], [2], [1, 2]]
    """
    return Powerset(source, make_strategy(resolve_config(config)))


def powerset_map(
    source: Iterable[T],
    func: Callable[[Sequence[T]], Any],
    *,
    config: Optional[EnumerationConfig] = None,
) -> Powerset[T]:
    """Like :func:`powerset`, but yield ``func(subset)`` for each subset."""
    return Powerset(source, make_strategy(resolve_config(config), func))
