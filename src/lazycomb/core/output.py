from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, List, Optional, Sequence, TypeVar

import numpy as np

from .config import EnumerationConfig

T = TypeVar("T")
R = TypeVar("R")


class WindowStrategy(Generic[T]):
    """Turns a window of buffered elements into one yielded value."""

    def new_item(self, window: Iterable[T]) -> Any:
        raise NotImplementedError

    def __copy__(self) -> "WindowStrategy[T]":
        return self


class CollectToList(WindowStrategy[T]):
    def new_item(self, window: Iterable[T]) -> List[T]:
        return list(window)

    def __repr__(self) -> str:
        return "CollectToList()"


class CollectToTuple(WindowStrategy[T]):
    def new_item(self, window: Iterable[T]) -> tuple:
        return tuple(window)

    def __repr__(self) -> str:
        return "CollectToTuple()"


class CollectToArray(WindowStrategy[T]):
    def __init__(self, dtype: Optional[Any] = None):
        self.dtype = dtype

    def new_item(self, window: Iterable[T]) -> np.ndarray:
        return np.array(list(window), dtype=self.dtype)

    def __repr__(self) -> str:
        return f"CollectToArray(dtype={self.dtype!r})"


class MapSlice(WindowStrategy[T], Generic[T, R]):
    """Fill one scratch list per call and hand it to ``func``.

    The scratch list is emptied before and after every call, including when
    ``func`` raises, so ``func`` only ever sees the current window. It must
    not keep a reference to the list.
    """

    def __init__(self, func: Callable[[Sequence[T]], R]):
        if not callable(func):
            raise TypeError(f"MapSlice requires a callable, got {func!r}")
        self.func = func
        self._scratch: List[T] = []

    def new_item(self, window: Iterable[T]) -> R:
        scratch = self._scratch
        assert not scratch, "scratch buffer was not cleared"
        scratch.extend(window)
        try:
            return self.func(scratch)
        finally:
            scratch.clear()

    def __copy__(self) -> "MapSlice[T, R]":
        return MapSlice(self.func)

    def __repr__(self) -> str:
        name = getattr(self.func, "__name__", repr(self.func))
        return f"MapSlice({name})"


def make_strategy(
    config: EnumerationConfig,
    func: Optional[Callable[[Sequence[Any]], Any]] = None,
) -> WindowStrategy[Any]:
    if func is not None:
        return MapSlice(func)
    if config.output == "tuple":
        return CollectToTuple()
    if config.output == "array":
        return CollectToArray(config.dtype)
    return CollectToList()
