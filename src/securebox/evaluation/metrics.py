from __future__ import annotations

import numpy as np


def unlock_rate(locked_flags) -> float:
    flags = list(locked_flags)
    if not flags:
        return 0.0
    return sum(1 for locked in flags if not locked) / len(flags)


def toggles_used(plan) -> int:
    # each planned cell is toggled exactly once
    return len(plan)


def scaling_exponent(sizes, seconds) -> float:
    """Slope of log(seconds) against log(size).

    For square n x n grids the solver is O(n^6), so the slope should come
    out close to 6 once the sizes are large enough for elimination to
    dominate.
    """
    sizes = np.asarray(sizes, dtype=float)
    seconds = np.asarray(seconds, dtype=float)
    keep = (sizes > 0) & (seconds > 0)
    if keep.sum() < 2:
        raise ValueError("Need at least two positive (size, time) points.")
    slope, _ = np.polyfit(np.log(sizes[keep]), np.log(seconds[keep]), 1)
    return float(slope)
