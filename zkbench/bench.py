"""Benchmark table of seconds per hash for batches of 512-bit messages."""

from __future__ import annotations

import argparse
import math
import os
import sys
from typing import Iterable, TextIO

from . import registry
from .hasher import MESSAGE_SIZE, SmolHasher
from .timing import human, measure

LENGTHS = (4, 16, 64, 256, 1 << 15)
DEFAULT_DURATION = 0.01


def print_table(
    duration: float, hashers: Iterable[SmolHasher], out: TextIO | None = None
) -> None:
    """Time every hasher on each batch size and write the table to ``out``."""
    out = sys.stdout if out is None else out
    print("seconds per hash for batches of 512 bit messages.", file=out)
    header = "hash \\ batch size              " + "".join(f"\t{n}" for n in LENGTHS)
    print(header, file=out)
    for hasher in hashers:
        out.write(hasher.describe())
        out.flush()
        for length in LENGTHS:
            messages = os.urandom(length * MESSAGE_SIZE)
            seconds = measure(duration, lambda data=messages: hasher.hash(data))
            out.write(f"\t{human(seconds / length, alternate=True)}")
            out.flush()
        out.write("\n")
    out.write("\n")


def main(argv: list[str] | None = None) -> int:
    """Benchmark all registered hashers."""
    parser = argparse.ArgumentParser(
        prog="zkbench",
        description="Benchmark various regular and zk-friendly hash functions "
        "for batches of 512-bit messages.",
    )
    parser.add_argument(
        "--duration", type=float, default=None, help="duration of the benchmark in seconds."
    )
    args = parser.parse_args(argv)
    duration = DEFAULT_DURATION if args.duration is None else args.duration
    if not math.isfinite(duration) or duration < 0:
        parser.error("duration must be a non-negative number of seconds")
    print_table(duration, registry.hashers(), sys.stdout)
    return 0