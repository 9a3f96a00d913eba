from __future__ import annotations


class LazyCombError(Exception):
    """Base class for lazycomb-specific exceptions."""


class InvalidArgumentError(LazyCombError, ValueError):
    pass


class LaneError(LazyCombError, TypeError):
    def __init__(self, message: str, *, lane: int | None = None):
        detail = "" if lane is None else f" (lane {lane})"
        super().__init__(f"{message}{detail}")
        self.lane = lane
