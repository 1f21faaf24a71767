from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Sequence

from .config import DEFAULT_INSTANCE_COUNT, INSTANCE_COUNT_ENV, LOG_FORMAT, AffinityCLIArgs

MAX_INSTANCES = 32

LOGGER = logging.getLogger("ProfileLauncher.Affinity")


class AffinityIndexError(ValueError):
    """Raised when an instance index has no single-core mask."""


def get_affinity_mask(index: int) -> int:
    """Return the single-bit CPU affinity mask for a 0-based instance index."""

    if index < 0 or index >= MAX_INSTANCES:
        raise AffinityIndexError(
            f"Instance index must be between 0 and {MAX_INSTANCES - 1}"
        )
    return 1 << index


def format_mask(mask: int) -> str:
    return f"0x{mask:08X}"


def affinity_table(count: int) -> list[tuple[int, int]]:
    if count < 0:
        raise ValueError("Instance count must be non-negative.")
    return [(index, get_affinity_mask(index)) for index in range(count)]


def describe(index: int, mask: int) -> str:
    return f"Instance {index} → Affinity Mask: {format_mask(mask)}"


def parse_args(argv: Sequence[str] | None = None) -> AffinityCLIArgs:
    parser = argparse.ArgumentParser(
        description="Print single-core CPU affinity masks for browser instances."
    )
    parser.add_argument(
        "--count",
        type=int,
        default=int(os.environ.get(INSTANCE_COUNT_ENV, DEFAULT_INSTANCE_COUNT)),
        help=(
            "Number of instances to print masks for. "
            f"Defaults to {INSTANCE_COUNT_ENV} or {DEFAULT_INSTANCE_COUNT}."
        ),
    )
    parser.add_argument(
        "--index",
        type=int,
        default=None,
        help="Print the mask for a single 0-based instance index instead.",
    )
    args = parser.parse_args(argv)
    return AffinityCLIArgs(count=args.count, index=args.index)


def main(argv: Sequence[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    args = parse_args(argv)

    try:
        if args.index is not None:
            rows = [(args.index, get_affinity_mask(args.index))]
        else:
            rows = affinity_table(args.count)
    except ValueError as exc:
        LOGGER.error("%s", exc)
        return 1

    for index, mask in rows:
        print(describe(index, mask))
    return 0


if __name__ == "__main__":
    sys.exit(main())
