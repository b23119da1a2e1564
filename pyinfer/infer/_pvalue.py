"""
Tail-proportion p-values from an empirical distribution.

greater: fraction of values >= observed
less:    fraction of values <= observed
both:    min(1, 2 * min(greater, less))
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def tail_fractions(values: NDArray, observed: float) -> tuple[float, float]:
    """Return (fraction >= observed, fraction <= observed)."""
    n = len(values)
    upper = float(np.sum(values >= observed)) / n
    lower = float(np.sum(values <= observed)) / n
    return upper, lower


def compute_p_value(values: NDArray, observed: float, direction: str) -> float:
    """
    P-value for a canonical direction ("less", "greater" or "both").

    Ties with the observed statistic count toward both tails.
    """
    upper, lower = tail_fractions(values, observed)

    if direction == "greater":
        return upper
    if direction == "less":
        return lower
    return min(1.0, 2.0 * min(upper, lower))
