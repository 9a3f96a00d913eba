from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Generic, Iterable, List, NoReturn, Optional, Sequence, TypeVar

from . import size_hint
from .combinations import check_size
from .config import EnumerationConfig, resolve_config
from .lazy_buffer import LazyBuffer, fill_window
from .output import WindowStrategy, make_strategy
from .size_hint import SizeHint

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CombinationsWithReplacement(Generic[T]):
    """All ``k``-length multiset combinations of a source.

    Index tuples are non-decreasing and produced in lexicographic order.
    ``k == 0`` yields a single empty combination.
    """

    def __init__(self, source: Iterable[T], k: int, manager: WindowStrategy[T]):
        k = check_size(k)
        self._manager = manager
        self._pool: LazyBuffer[T] = LazyBuffer(source)
        self._indices: List[int] = [0] * k
        self._first = True
        self._done = False

    @property
    def k(self) -> int:
        return len(self._indices)

    @property
    def n(self) -> int:
        return len(self._pool)

    def __iter__(self) -> "CombinationsWithReplacement[T]":
        return self

    def __next__(self) -> Any:
        if self._done:
            raise StopIteration
        if self._first:
            self._first = False
            if self._indices:
                self._pool.prefill(1)
                if not len(self._pool):
                    self._finish()
            return self._emit()
        if not self._indices:
            self._finish()

        # Grows the pool while the first index is still climbing.
        self._pool.get_next()
        last = len(self._pool) - 1
        indices = self._indices
        for i in range(len(indices) - 1, -1, -1):
            if indices[i] < last:
                value = indices[i] + 1
                for j in range(i, len(indices)):
                    indices[j] = value
                return self._emit()
        self._finish()

    def _emit(self) -> Any:
        return self._manager.new_item(fill_window(self._pool, self._indices))

    def _finish(self) -> NoReturn:
        self._done = True
        logger.debug("combinations with replacement of size %d exhausted over %d items", self.k, self.n)
        raise StopIteration

    def size_hint(self) -> SizeHint:
        if self._done:
            return (0, 0)
        lower, upper = size_hint.add_scalar(self._pool.size_hint(), self.n)
        low = _remaining_for(lower, self._first, self._indices)
        return (
            size_hint.MAX_SIZE if low is None else low,
            None if upper is None else _remaining_for(upper, self._first, self._indices),
        )

    def __length_hint__(self) -> int:
        return self.size_hint()[0]

    def __copy__(self) -> "CombinationsWithReplacement[T]":
        clone: CombinationsWithReplacement[T] = CombinationsWithReplacement.__new__(
            CombinationsWithReplacement
        )
        clone._manager = copy.copy(self._manager)
        clone._pool = copy.copy(self._pool)
        clone._indices = list(self._indices)
        clone._first = self._first
        clone._done = self._done
        return clone

    def __repr__(self) -> str:
        return (
            f"CombinationsWithReplacement(k={self.k}, indices={self._indices}, "
            f"pool={self._pool!r})"
        )


def _count(n: int, k: int) -> Optional[int]:
    # Multisets of size k drawn from n items: C(n + k - 1, k).
    positions = max(k - 1, 0) if n == 0 else n - 1 + k
    return size_hint.checked_binomial(positions, k)


def _remaining_for(n: int, first: bool, indices: Sequence[int]) -> Optional[int]:
    k = len(indices)
    if first:
        return _count(n, k)
    total = 0
    for i, index in enumerate(indices):
        count = _count(n - 1 - index, k - i)
        if count is None:
            return None
        total += count
    return total if total <= size_hint.MAX_SIZE else None


def combinations_with_replacement(
    source: Iterable[T],
    k: int,
    *,
    config: Optional[EnumerationConfig] = None,
) -> CombinationsWithReplacement[T]:
    """Lazily enumerate ``k``-length combinations of ``source`` with repeats.

    >>> list(combinations_with_replacement([1, 2], 2))
    [[1, 1], [1, 2], [2, 2]]
    """
    cfg = resolve_config(config)
    return CombinationsWithReplacement(source, k, make_strategy(cfg))


def combinations_with_replacement_map(
    source: Iterable[T],
    k: int,
    func: Callable[[Sequence[T]], Any],
    *,
    config: Optional[EnumerationConfig] = None,
) -> CombinationsWithReplacement[T]:
    """Like :func:`combinations_with_replacement`, but yield ``func(window)``."""
    return CombinationsWithReplacement(source, k, make_strategy(resolve_config(config), func))
