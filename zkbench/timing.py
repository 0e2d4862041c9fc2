"""Timing and human-readable number formatting."""

from __future__ import annotations

import math
import sys
import time
from datetime import timedelta
from typing import Any, Callable

_SI_SUFFIXES = "qryzafpnμm kMGTPEZYRQ"


def measure(duration: float | timedelta, func: Callable[[], Any]) -> float:
    """Run ``func`` repeatedly for at least ``duration`` seconds.

    Returns the best observed time per call in seconds, or infinity if no
    batch of calls could be timed.
    """
    if isinstance(duration, timedelta):
        duration = duration.total_seconds()
    start_total = time.perf_counter()
    best = math.inf
    repeats = 1
    while time.perf_counter() - start_total < duration:
        start = time.perf_counter()
        for _ in range(repeats):
            func()
        elapsed = time.perf_counter() - start
        if elapsed < 1.0e-6:
            repeats *= 10
        else:
            best = min(best, elapsed / repeats)
    return best


def _is_normal(value: float) -> bool:
    return math.isfinite(value) and abs(value) >= sys.float_info.min


def human(value: float, precision: int | None = None, alternate: bool = False) -> str:
    """Format a number with an SI prefix and ``precision`` significant digits.

    Without ``alternate`` a narrow no-break space separates the number from
    the prefix.
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    log10 = math.log10(abs(value)) if _is_normal(value) else 0.0
    si_power = min(10, max(-10, math.floor(log10 / 3.0)))
    scaled = value * 10.0 ** (-si_power * 3)
    leading = max(0, int(log10 - 3.0 * si_power)) if math.isfinite(log10) else 0
    digits = (3 if precision is None else precision) - 1 - leading
    if digits < 0:
        raise ValueError(f"cannot format {value} with the requested precision")
    separator = "" if alternate else "\u202f"
    suffix = _SI_SUFFIXES[si_power + 10]
    text = f"{scaled:.{digits}f}{separator}"
    if suffix != " ":
        text += suffix
    return text