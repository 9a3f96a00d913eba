from __future__ import annotations

import itertools
import logging
from typing import Any, Generic, Iterable, Iterator, List, Optional, TypeVar

from . import size_hint
from .size_hint import SizeHint

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LazyBuffer(Generic[T]):
    """Position-addressable cache over a forward-only source.

    Items are pulled from the source only when a caller asks the buffer to
    grow, and every pulled item is kept, so generators can address the
    source by integer index without consuming it twice. The cache only ever
    grows.
    """

    def __init__(self, source: Iterable[T]):
        try:
            total: Optional[int] = len(source)  # type: ignore[arg-type]
        except (TypeError, OverflowError):
            total = None
        self._total = total
        self._source: Optional[Iterator[T]] = iter(source)
        self._items: List[T] = []

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __repr__(self) -> str:
        state = "exhausted" if self.exhausted else "open"
        return f"LazyBuffer(len={len(self._items)}, {state})"

    @property
    def exhausted(self) -> bool:
        return self._source is None

    def get_next(self) -> bool:
        """Pull one more item. Returns ``True`` iff the cache grew."""
        if self._source is None:
            return False
        try:
            item = next(self._source)
        except StopIteration:
            self._mark_exhausted()
            return False
        self._items.append(item)
        return True

    def prefill(self, n: int) -> None:
        """Pull until at least ``n`` items are cached or the source runs dry.

        Callers must check ``len()`` afterwards.
        """
        missing = n - len(self._items)
        if missing <= 0 or self._source is None:
            return
        self._items.extend(itertools.islice(self._source, missing))
        if len(self._items) < n:
            self._mark_exhausted()

    def size_hint(self) -> SizeHint:
        """Bounds on the number of items not yet pulled from the source."""
        if self._source is None:
            return (0, 0)
        if self._total is not None:
            return size_hint.exact(max(self._total - len(self._items), 0))
        return size_hint.of_iterator(self._source)

    def replay(self) -> Iterator[T]:
        """Iterate the whole source from position 0, pulling lazily."""
        index = 0
        while index < len(self._items) or self.get_next():
            yield self._items[index]
            index += 1

    def _mark_exhausted(self) -> None:
        self._source = None
        logger.debug("source exhausted after %d items", len(self._items))

    def __copy__(self) -> "LazyBuffer[T]":
        clone: LazyBuffer[T] = LazyBuffer.__new__(LazyBuffer)
        clone._total = self._total
        clone._items = list(self._items)
        if self._source is None:
            clone._source = None
        else:
            self._source, clone._source = itertools.tee(self._source)
        return clone


def fill_window(pool: LazyBuffer[Any], indices: Iterable[int]) -> Iterator[Any]:
    for index in indices:
        assert index < len(pool), f"index {index} outside buffered range {len(pool)}"
        yield pool[index]
