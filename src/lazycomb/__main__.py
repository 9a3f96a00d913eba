from __future__ import annotations

import argparse
import itertools
import json
import logging
import sys
from pathlib import Path
from typing import Any, Iterator, List, Optional

import numpy as np

from . import (
    combinations,
    combinations_with_replacement,
    multi_cartesian_product,
    powerset,
)
from .core.config import EnumerationConfig
from .core.exceptions import LazyCombError
from .core.size_hint import SizeHint


def _parse_item(text: str) -> Any:
    try:
        value = json.loads(text)
    except json.JSONDecodeError:
        return text
    if isinstance(value, (list, dict)):
        return text
    return value


def _parse_lane(text: str) -> List[Any]:
    if not text:
        return []
    return [_parse_item(part) for part in text.split(",")]


def _build_generator(args: argparse.Namespace) -> Any:
    config = EnumerationConfig(output="list")
    if args.cmd == "combinations":
        return combinations([_parse_item(x) for x in args.items], args.k, config=config)
    if args.cmd == "cwr":
        return combinations_with_replacement(
            [_parse_item(x) for x in args.items], args.k, config=config
        )
    if args.cmd == "powerset":
        return powerset([_parse_item(x) for x in args.items], config=config)
    if args.cmd == "product":
        return multi_cartesian_product([_parse_lane(x) for x in args.lanes], config=config)
    raise ValueError(f"Unknown command: {args.cmd}")


def _format_hint(hint: SizeHint) -> str:
    lower, upper = hint
    return json.dumps({"lower": lower, "upper": upper})


def _write_output(path: Path, values: Iterator[Any]) -> int:
    path.parent.mkdir(parents=True, exist_ok=True)
    suffix = path.suffix.lower()
    if suffix == ".jsonl":
        written = 0
        with path.open("w", encoding="utf-8") as handle:
            for value in values:
                handle.write(json.dumps(value) + "\n")
                written += 1
        return written
    rows = list(values)
    if suffix == ".json":
        path.write_text(json.dumps(rows, indent=2), encoding="utf-8")
    else:
        # Ragged rows (powerset) cannot form a rectangular array.
        widths = {len(row) for row in rows}
        if len(widths) > 1:
            raise SystemExit(f"Cannot write rows of differing lengths to {path}; use .json/.jsonl")
        np.save(path, np.asarray(rows))
    return len(rows)


def _run(args: argparse.Namespace) -> None:
    try:
        generator = _build_generator(args)
    except LazyCombError as exc:
        raise SystemExit(f"error: {exc}") from exc

    if args.count:
        print(_format_hint(generator.size_hint()))
        return

    values: Iterator[Any] = iter(generator)
    if args.limit is not None:
        values = itertools.islice(values, args.limit)

    if args.out is not None:
        written = _write_output(args.out, values)
        logging.getLogger("lazycomb").info("wrote %d rows to %s", written, args.out)
        return
    for value in values:
        print(json.dumps(value))


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Stop after this many values",
    )
    parser.add_argument(
        "--count",
        action="store_true",
        help="Print the lower/upper size bounds instead of enumerating",
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Optional output path (.json/.jsonl/.npy). If omitted, prints one JSON row per line",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="lazycomb command line utilities")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity")
    subparsers = parser.add_subparsers(dest="cmd")

    comb = subparsers.add_parser("combinations", help="k-combinations of ITEMS")
    comb.add_argument("items", nargs="*", help="Source items (JSON scalars or strings)")
    comb.add_argument("-k", type=int, required=True, help="Combination size")
    _add_common_options(comb)

    cwr = subparsers.add_parser("cwr", help="k-combinations of ITEMS with replacement")
    cwr.add_argument("items", nargs="*", help="Source items (JSON scalars or strings)")
    cwr.add_argument("-k", type=int, required=True, help="Combination size")
    _add_common_options(cwr)

    power = subparsers.add_parser("powerset", help="All subsets of ITEMS")
    power.add_argument("items", nargs="*", help="Source items (JSON scalars or strings)")
    _add_common_options(power)

    product = subparsers.add_parser("product", help="Cartesian product of LANES")
    product.add_argument("lanes", nargs="*", help="Comma-separated lane items, e.g. 0,1 2,3")
    _add_common_options(product)
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        level = logging.DEBUG if args.verbose > 1 else logging.INFO
        logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if args.cmd is not None:
        _run(args)
        return

    parser.print_help()


if __name__ == "__main__":  # pragma: no cover
    main(sys.argv[1:])
