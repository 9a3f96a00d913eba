from __future__ import annotations

from typing import Callable, Generic, Iterable, Iterator, Optional, TypeVar

from . import size_hint
from .size_hint import SizeHint

T = TypeVar("T")
B = TypeVar("B")

_FINISHED = object()


class AccumulateFrom(Generic[T, B]):
    """Running fold: yields ``init``, then each successive accumulator."""

    def __init__(self, iterable: Iterable[T], init: B, func: Callable[[B, T], B]):
        self._iter: Iterator[T] = iter(iterable)
        try:
            self._total: Optional[int] = len(iterable)  # type: ignore[arg-type]
        except (TypeError, OverflowError):
            self._total = None
        self._pulled = 0
        self._accum: object = init
        self._func = func

    def __iter__(self) -> "AccumulateFrom[T, B]":
        return self

    def __next__(self) -> B:
        acc = self._accum
        if acc is _FINISHED:
            raise StopIteration
        try:
            item = next(self._iter)
        except StopIteration:
            self._accum = _FINISHED
        else:
            self._pulled += 1
            self._accum = self._func(acc, item)  # type: ignore[arg-type]
        return acc  # type: ignore[return-value]

    def size_hint(self) -> SizeHint:
        if self._accum is _FINISHED:
            return (0, 0)
        if self._total is not None:
            source: SizeHint = size_hint.exact(max(self._total - self._pulled, 0))
        else:
            source = size_hint.of_iterator(self._iter)
        return size_hint.add_scalar(source, 1)

    def __length_hint__(self) -> int:
        return self.size_hint()[0]


def accumulate_from(
    iterable: Iterable[T],
    init: B,
    func: Callable[[B, T], B],
) -> AccumulateFrom[T, B]:
    """Prefix scan starting at ``init``.

    >>> list(accumulate_from([1, 2, 3], 0, lambda acc, x: acc + x))
    [0, 1, 3, 6]
    """
    return AccumulateFrom(iterable, init, func)
