from __future__ import annotations

import collections.abc
import copy
import functools
import itertools
import logging
from typing import Any, Callable, Iterable, Iterator, List, Optional, Sequence

from . import size_hint
from .config import EnumerationConfig, resolve_config
from .exceptions import LaneError, LazyCombError
from .lazy_buffer import LazyBuffer
from .output import WindowStrategy, make_strategy
from .size_hint import SizeHint

logger = logging.getLogger(__name__)

LaneFactory = Callable[[], Iterable[Any]]


def _range_length(r: range) -> int:
    # len() is limited to sys.maxsize; the arithmetic is not.
    step = r.step
    return max(0, (r.stop - r.start + step - (1 if step > 0 else -1)) // step)


class _Lane:
    """One input sequence of a :class:`MultiProduct`.

    ``restart`` returns a fresh iterable positioned at the start of the lane;
    ``pos`` counts the items pulled in the current pass.
    """

    def __init__(self, restart: LaneFactory, sized: Any = None):
        self.restart = restart
        self.sized = sized
        self.iter: Optional[Iterator[Any]] = None
        self.current: Any = None
        self.active = False
        self.pos = 0

    def step(self) -> None:
        assert self.iter is not None, "lane stepped before reset"
        try:
            self.current = next(self.iter)
        except StopIteration:
            self.current = None
            self.active = False
        else:
            self.active = True
            self.pos += 1

    def reset(self) -> None:
        self.iter = iter(self.restart())
        self.pos = 0

    def total_hint(self) -> SizeHint:
        if self.sized is not None:
            return size_hint.of_iterable(self.sized)
        return (0, None)

    def remaining_hint(self) -> SizeHint:
        lower, upper = self.total_hint()
        if upper is not None:
            return size_hint.exact(max(upper - self.pos, 0))
        return (max(lower - self.pos, 0), None)

    def total_count(self) -> int:
        if self.sized is not None:
            try:
                return len(self.sized)
            except TypeError:
                pass
            except OverflowError:
                if isinstance(self.sized, range):
                    return _range_length(self.sized)
                raise LazyCombError(
                    f"lane of type {type(self.sized).__name__} is too long to count"
                ) from None
        return sum(1 for _ in self.restart())

    def last_item(self) -> Any:
        """Final item of a full pass. The lane must not be empty."""
        if isinstance(self.sized, collections.abc.Sequence):
            return self.sized[-1]
        item = None
        for item in self.restart():
            pass
        return item

    def __copy__(self) -> "_Lane":
        clone = type(self).__new__(type(self))
        clone.__dict__.update(self.__dict__)
        if self.iter is not None:
            self.iter, clone.iter = itertools.tee(self.iter)
        return clone


class _ReplayLane(_Lane):
    """A one-shot iterator lane, restarted by replaying a shared buffer."""

    def __init__(self, pool: LazyBuffer[Any]):
        super().__init__(pool.replay)
        self.pool = pool

    def total_hint(self) -> SizeHint:
        return size_hint.add_scalar(self.pool.size_hint(), len(self.pool))

    def total_count(self) -> int:
        self.pool.prefill(size_hint.MAX_SIZE)
        return len(self.pool)


def _make_lane(obj: Any, index: int, config: EnumerationConfig) -> _Lane:
    try:
        it = iter(obj)
    except TypeError:
        if callable(obj):
            return _Lane(obj)
        raise LaneError(f"lane of type {type(obj).__name__} is not iterable", lane=index) from None
    if it is not obj:
        return _Lane(functools.partial(iter, obj), sized=obj)
    if not config.replay_one_shot_lanes:
        raise LaneError(
            "lane is a one-shot iterator and cannot be restarted; pass a re-iterable "
            "or a factory, or enable replay_one_shot_lanes",
            lane=index,
        )
    logger.debug("lane %d is a one-shot iterator; replaying it through a buffer", index)
    return _ReplayLane(LazyBuffer(obj))


class MultiProduct:
    """Cartesian product of several restartable lanes, last lane fastest.

    Advancing works like an odometer: the rightmost lane steps, and a lane
    that runs out restarts once every lane to its left has advanced. An
    empty lane makes the whole product empty, as does having no lanes.
    """

    def __init__(self, lanes: Sequence[_Lane], manager: WindowStrategy[Any]):
        self._lanes: List[_Lane] = list(lanes)
        self._manager = manager
        self._done = False

    @property
    def num_lanes(self) -> int:
        return len(self._lanes)

    def __iter__(self) -> "MultiProduct":
        return self

    def __next__(self) -> Any:
        if self._done or not self._advance():
            self._done = True
            raise StopIteration
        return self._manager.new_item(lane.current for lane in self._lanes)

    def _in_progress(self) -> bool:
        return bool(self._lanes) and self._lanes[-1].active

    def _advance(self) -> bool:
        lanes = self._lanes
        if not lanes:
            return False
        on_first_iter = not lanes[-1].active

        # Carry leftwards until some lane still has an item.
        pivot = len(lanes) - 1
        while pivot >= 0:
            lane = lanes[pivot]
            if not on_first_iter:
                lane.step()
            if lane.active:
                break
            pivot -= 1
        if pivot < 0 and not on_first_iter:
            logger.debug("cartesian product over %d lanes exhausted", len(lanes))
            return False

        # Restart every lane right of the carry.
        for index in range(pivot + 1, len(lanes)):
            lane = lanes[index]
            lane.reset()
            lane.step()
            if not lane.active:
                logger.debug("lane %d is empty; cartesian product is empty", index)
                return False
        return True

    def size_hint(self) -> SizeHint:
        if self._done or not self._lanes:
            return (0, 0)
        if not self._in_progress():
            hint: SizeHint = (1, 1)
            for lane in self._lanes:
                hint = size_hint.mul(hint, lane.remaining_hint())
            return hint
        hint = (0, 0)
        for lane in self._lanes:
            hint = size_hint.add(size_hint.mul(hint, lane.total_hint()), lane.remaining_hint())
        return hint

    def __length_hint__(self) -> int:
        return self.size_hint()[0]

    def count(self) -> int:
        """Exact number of tuples left, without advancing the product.

        Lanes without a length are counted by iterating a fresh pass, so this
        does not return for unbounded lanes.
        """
        if self._done or not self._lanes:
            return 0
        if not self._in_progress():
            result = 1
            for lane in self._lanes:
                result *= lane.total_count()
            return result
        result = 0
        for lane in self._lanes:
            total = lane.total_count()
            result = result * total + (total - lane.pos)
        return result

    def last(self) -> Optional[Any]:
        """Consume the product and return its final tuple, if any remain."""
        if self.count() == 0:
            self._done = True
            return None
        lasts = [lane.last_item() for lane in self._lanes]
        self._done = True
        return self._manager.new_item(lasts)

    def __copy__(self) -> "MultiProduct":
        clone = MultiProduct.__new__(MultiProduct)
        clone._lanes = [copy.copy(lane) for lane in self._lanes]
        clone._manager = copy.copy(self._manager)
        clone._done = self._done
        return clone

    def __repr__(self) -> str:
        return f"MultiProduct(lanes={len(self._lanes)}, done={self._done})"


def _build_lanes(lanes: Iterable[Any], config: EnumerationConfig) -> List[_Lane]:
    return [_make_lane(obj, index, config) for index, obj in enumerate(lanes)]


def multi_cartesian_product(
    lanes: Iterable[Any],
    *,
    config: Optional[EnumerationConfig] = None,
) -> MultiProduct:
    """Lazily enumerate the cartesian product of ``lanes``.

    Each lane must be restartable: a re-iterable object such as a list or
    range, a zero-argument callable returning an iterable, or (when the
    configuration allows it) a one-shot iterator, which is then buffered.

    >>> list(multi_cartesian_product([[0, 1], [2, 3]]))
    [[0, 2], [0, 3], [1, 2], [1, 3]]
    """
    cfg = resolve_config(config)
    built = _build_lanes(lanes, cfg)
    return MultiProduct(built, make_strategy(cfg))


def multi_cartesian_product_map(
    lanes: Iterable[Any],
    func: Callable[[Sequence[Any]], Any],
    *,
    config: Optional[EnumerationConfig] = None,
) -> MultiProduct:
    cfg = resolve_config(config)
    built = _build_lanes(lanes, cfg)
    return MultiProduct(built, make_strategy(cfg, func))
