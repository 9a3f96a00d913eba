from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from .exceptions import InvalidArgumentError

_OUTPUT_KINDS = {"list", "tuple", "array"}


@dataclass(frozen=True)
class EnumerationConfig:
    """
    Switches shared by every generator in :mod:`lazycomb`.

    * ``output`` selects the container built for each yielded value:
      ``"list"`` (default), ``"tuple"``, or ``"array"`` for a NumPy array.
    * ``dtype`` is forwarded to NumPy when ``output == "array"``.
    * ``replay_one_shot_lanes`` lets the cartesian product accept plain
      iterators as lanes by buffering them so they can be replayed. When
      disabled, such lanes are rejected with :class:`LaneError`.
    """

    output: str = "list"  # "list" | "tuple" | "array"
    dtype: Optional[Any] = None
    replay_one_shot_lanes: bool = True

    def normalized(self) -> "EnumerationConfig":
        output = (self.output or "list").lower()
        if output not in _OUTPUT_KINDS:
            raise InvalidArgumentError(f"Unsupported output kind: {self.output}")
        dtype = self.dtype
        if dtype is not None:
            if output != "array":
                raise InvalidArgumentError("dtype is only meaningful when output='array'")
            try:
                dtype = np.dtype(dtype)
            except TypeError as exc:
                raise InvalidArgumentError(f"Unsupported dtype: {self.dtype!r}") from exc
        return EnumerationConfig(
            output=output,
            dtype=dtype,
            replay_one_shot_lanes=bool(self.replay_one_shot_lanes),
        )


def resolve_config(config: Optional[EnumerationConfig]) -> EnumerationConfig:
    return (config or EnumerationConfig()).normalized()
