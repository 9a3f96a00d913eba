#!/usr/bin/env python3
"""
Throughput of the lazy generators against their ``itertools`` counterparts.

``itertools`` materializes its input up front; the lazy generators only pull
what they need, at the cost of per-item Python overhead. This script measures
that overhead on fully consumed, finite inputs.
"""

from __future__ import annotations

import argparse
import itertools
import sys
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional

import numpy as np

from lazycomb import (
    combinations,
    combinations_map,
    combinations_with_replacement,
    multi_cartesian_product,
    powerset,
)


@dataclass
class BenchmarkResult:
    name: str
    min_s: float
    mean_s: float
    iterations: int
    items: int
    items_per_s: Optional[float]


def _drain(iterable: Iterable[Any]) -> int:
    count = 0
    for _ in iterable:
        count += 1
    return count


def bench(name: str, fn: Callable[[], Iterable[Any]], *, iterations: int) -> BenchmarkResult:
    timings = []
    items = 0
    for _ in range(iterations):
        start = time.perf_counter()
        items = _drain(fn())
        timings.append(time.perf_counter() - start)
    arr = np.asarray(timings)
    min_s = float(arr.min())
    return BenchmarkResult(
        name=name,
        min_s=min_s,
        mean_s=float(arr.mean()),
        iterations=iterations,
        items=items,
        items_per_s=items / min_s if min_s > 0 else None,
    )


def build_cases(n: int, k: int) -> Dict[str, Callable[[], Iterable[Any]]]:
    data = list(range(n))
    lanes = [data[: max(n // 2, 1)]] * 3
    return {
        "combinations": lambda: combinations(data, k),
        "combinations_map(sum)": lambda: combinations_map(data, k, sum),
        "itertools.combinations": lambda: itertools.combinations(data, k),
        "combinations_with_replacement": lambda: combinations_with_replacement(data, k),
        "itertools.combinations_with_replacement": lambda: itertools.combinations_with_replacement(
            data, k
        ),
        "powerset": lambda: powerset(data[: min(n, 16)]),
        "multi_cartesian_product": lambda: multi_cartesian_product(lanes),
        "itertools.product": lambda: itertools.product(*lanes),
    }


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--n", type=int, default=24, help="Source length")
    parser.add_argument("--k", type=int, default=4, help="Combination size")
    parser.add_argument("--iterations", type=int, default=5)
    args = parser.parse_args(argv)

    for name, fn in build_cases(args.n, args.k).items():
        result = bench(name, fn, iterations=args.iterations)
        rate = f"{result.items_per_s:,.0f}/s" if result.items_per_s else "n/a"
        print(
            f"{result.name:<42} items={result.items:<9} "
            f"min={result.min_s * 1e3:8.2f}ms mean={result.mean_s * 1e3:8.2f}ms {rate}"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
