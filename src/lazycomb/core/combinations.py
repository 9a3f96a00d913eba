from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Generic, Iterable, List, NoReturn, Optional, Sequence, TypeVar

from . import size_hint
from .config import EnumerationConfig, resolve_config
from .exceptions import InvalidArgumentError
from .lazy_buffer import LazyBuffer, fill_window
from .output import WindowStrategy, make_strategy
from .size_hint import SizeHint

logger = logging.getLogger(__name__)

T = TypeVar("T")


def check_size(k: Any) -> int:
    if isinstance(k, bool) or not isinstance(k, int):
        raise InvalidArgumentError(f"combination size must be an int, got {type(k).__name__}")
    if k < 0:
        raise InvalidArgumentError(f"combination size must be >= 0, got {k}")
    return k


class Combinations(Generic[T]):
    """All ``k``-length combinations of a source, in lexicographic order.

    Source items are pulled only when the combination space needs to grow,
    so the source may be unbounded.
    """

    def __init__(self, source: Iterable[T], k: int, manager: WindowStrategy[T]):
        k = check_size(k)
        self._manager = manager
        self._pool: LazyBuffer[T] = LazyBuffer(source)
        self._pool.prefill(k)
        self._indices: List[int] = list(range(k))
        self._first = True
        self._done = False

    @property
    def k(self) -> int:
        """Length of each combination produced."""
        return len(self._indices)

    @property
    def n(self) -> int:
        """Current length of the buffered pool; may grow between calls."""
        return len(self._pool)

    @property
    def pool(self) -> LazyBuffer[T]:
        return self._pool

    def reset(self, k: int) -> None:
        """Restart at combinations of length ``k`` over the same pool.

        The pool is prefilled so that it holds ``k`` items when possible.
        """
        k = check_size(k)
        self._first = True
        self._done = False
        indices = self._indices
        if k < len(indices):
            del indices[k:]
            for i in range(k):
                indices[i] = i
        else:
            for i in range(len(indices)):
                indices[i] = i
            indices.extend(range(len(indices), k))
            self._pool.prefill(k)

    def __iter__(self) -> "Combinations[T]":
        return self

    def __next__(self) -> Any:
        if self._done:
            raise StopIteration
        if self._first:
            if self.k > self.n:
                self._finish()
            self._first = False
        elif not self._indices:
            self._finish()
        else:
            self._advance()
        return self._manager.new_item(fill_window(self._pool, self._indices))

    def _advance(self) -> None:
        indices = self._indices
        pool = self._pool
        k = len(indices)
        i = k - 1

        # The last index sitting on the newest item means the pool may grow.
        if indices[i] == len(pool) - 1:
            pool.get_next()

        n = len(pool)
        while indices[i] == i + n - k:
            if i == 0:
                self._finish()
            i -= 1

        indices[i] += 1
        for j in range(i + 1, k):
            indices[j] = indices[j - 1] + 1

    def _finish(self) -> NoReturn:
        self._done = True
        logger.debug("combinations of size %d exhausted over %d items", self.k, self.n)
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

    def __copy__(self) -> "Combinations[T]":
        clone: Combinations[T] = Combinations.__new__(Combinations)
        clone._manager = copy.copy(self._manager)
        clone._pool = copy.copy(self._pool)
        clone._indices = list(self._indices)
        clone._first = self._first
        clone._done = self._done
        return clone

    def __repr__(self) -> str:
        return f"Combinations(k={self.k}, indices={self._indices}, pool={self._pool!r})"


def _remaining_for(n: int, first: bool, indices: Sequence[int]) -> Optional[int]:
    """Combinations left to yield when the source totals ``n`` items."""
    k = len(indices)
    if n < k:
        return 0
    if first:
        return size_hint.checked_binomial(n, k)
    total = 0
    for i, index in enumerate(indices):
        count = size_hint.checked_binomial(n - 1 - index, k - i)
        if count is None:
            return None
        total += count
    return total if total <= size_hint.MAX_SIZE else None


def combinations(
    source: Iterable[T],
    k: int,
    *,
    config: Optional[EnumerationConfig] = None,
) -> Combinations[T]:
    """Lazily enumerate the ``k``-length combinations of ``source``.

    >>> list(combinations([1, 2, 3], 2))
    [[1, 2], [1, 3], [2, 3]]
    """
    cfg = resolve_config(config)
    return Combinations(source, k, make_strategy(cfg))


def combinations_map(
    source: Iterable[T],
    k: int,
    func: Callable[[Sequence[T]], Any],
    *,
    config: Optional[EnumerationConfig] = None,
) -> Combinations[T]:
    """Like :func:`combinations`, but yield ``func(window)`` for each one."""
    return Combinations(source, k, make_strategy(resolve_config(config), func))
