"""
Confidence intervals from an empirical distribution.

Implements three methods:
- percentile: rank-based percentile interval
- se: point estimate +/- normal quantile times the distribution's sd
- bias-corrected: percentile interval with levels shifted by z0
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray
from scipy import stats as sp_stats

from pyinfer.core.exceptions import InvalidParameterError


def _rank(position: float) -> float:
    # Float noise in level (e.g. 1 + 0.95) must never move a rank.
    return round(position, 10)


def ci_percentile(values: NDArray, level: float) -> tuple[float, float]:
    """
    Percentile CI.

    With v sorted ascending and N = len(v):
        lower = v[floor(N * (1 - level) / 2)]
        upper = v[ceil(N * (1 + level) / 2)]
    0-indexed, each rank clamped to [0, N - 1].
    """
    v = np.sort(values)
    n = len(v)
    lo = math.floor(_rank(n * (1.0 - level) / 2.0))
    hi = math.ceil(_rank(n * (1.0 + level) / 2.0))
    lo = min(max(lo, 0), n - 1)
    hi = min(max(hi, 0), n - 1)
    return float(v[lo]), float(v[hi])


def ci_se(
    values: NDArray,
    level: float,
    point_estimate: float,
) -> tuple[float, float]:
    """
    Standard-error CI.

    CI = point_estimate -/+ z_{(1+level)/2} * sd(values)
    """
    z = sp_stats.norm.ppf((1.0 + level) / 2.0)
    se = float(np.std(values, ddof=1))
    return point_estimate - z * se, point_estimate + z * se


def ci_bias_corrected(
    values: NDArray,
    level: float,
    point_estimate: float,
) -> tuple[float, float]:
    """
    Bias-corrected percentile CI.

    Steps:
    1. z0 = Phi^{-1}(proportion of values < point_estimate)
    2. Adjusted levels a1 = Phi(2*z0 + z_{alpha/2}),
       a2 = Phi(2*z0 + z_{1-alpha/2})
    3. CI from the a1 and a2 quantiles of values
    """
    n = len(values)
    alpha = 1.0 - level

    prop_below = np.sum(values < point_estimate) / n
    # Clamp to avoid infinite z0
    prop_below = np.clip(prop_below, 1.0 / (2.0 * n), 1.0 - 1.0 / (2.0 * n))
    z0 = sp_stats.norm.ppf(prop_below)

    a1 = sp_stats.norm.cdf(2.0 * z0 + sp_stats.norm.ppf(alpha / 2.0))
    a2 = sp_stats.norm.cdf(2.0 * z0 + sp_stats.norm.ppf(1.0 - alpha / 2.0))

    return (
        float(np.quantile(values, a1)),
        float(np.quantile(values, a2)),
    )


def compute_ci(
    values: NDArray,
    level: float,
    type: str,
    point_estimate: float | None,
) -> tuple[float, float]:
    """
    Dispatch to a CI method.

    Args:
        values: 1D distribution with at least 2 values.
        level: Confidence level in (0, 1).
        type: "percentile", "se" or "bias-corrected".
        point_estimate: Observed statistic; required by "se" and
            "bias-corrected".
    """
    if type == "percentile":
        return ci_percentile(values, level)

    if point_estimate is None:
        raise InvalidParameterError(
            f"type={type!r} needs point_estimate (the observed statistic)",
            parameter="point_estimate",
        )
    if not np.isfinite(point_estimate):
        raise InvalidParameterError(
            f"point_estimate must be finite, got {point_estimate}",
            parameter="point_estimate",
            value=point_estimate,
        )

    if type == "se":
        return ci_se(values, level, float(point_estimate))
    if type == "bias-corrected":
        return ci_bias_corrected(values, level, float(point_estimate))
    raise InvalidParameterError(
        f"Unknown CI type: {type!r}", parameter="type", value=type,
    )
