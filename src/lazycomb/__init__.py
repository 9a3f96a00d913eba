import logging
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _load_version

from .core.accumulate import AccumulateFrom, accumulate_from
from .core.combinations import Combinations, combinations, combinations_map
from .core.combinations_with_replacement import (
    CombinationsWithReplacement,
    combinations_with_replacement,
    combinations_with_replacement_map,
)
from .core.config import EnumerationConfig
from .core.exceptions import InvalidArgumentError, LaneError, LazyCombError
from .core.lazy_buffer import LazyBuffer
from .core.multi_product import (
    MultiProduct,
    multi_cartesian_product,
    multi_cartesian_product_map,
)
from .core.output import (
    CollectToArray,
    CollectToList,
    CollectToTuple,
    MapSlice,
    WindowStrategy,
)
from .core.powerset import Powerset, powerset, powerset_map
from .core.size_hint import MAX_SIZE, SizeHint

logging.getLogger(__name__).addHandler(logging.NullHandler())

try:
    __version__ = _load_version("lazycomb")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "combinations",
    "combinations_map",
    "combinations_with_replacement",
    "combinations_with_replacement_map",
    "powerset",
    "powerset_map",
    "multi_cartesian_product",
    "multi_cartesian_product_map",
    "accumulate_from",
    "Combinations",
    "CombinationsWithReplacement",
    "Powerset",
    "MultiProduct",
    "AccumulateFrom",
    "LazyBuffer",
    "EnumerationConfig",
    "WindowStrategy",
    "CollectToList",
    "CollectToTuple",
    "CollectToArray",
    "MapSlice",
    "SizeHint",
    "MAX_SIZE",
    "LazyCombError",
    "InvalidArgumentError",
    "LaneError",
    "__version__",
]
