"""
Common types and defaults for simulation-based inference.

DistributionParams is the payload wrapped by Result[P] and exposed
through DistributionSolution. The module-level constants are the
library's configuration defaults.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


DEFAULT_REPS = 1000
DEFAULT_CONF_LEVEL = 0.95
DEFAULT_ALPHA = 0.05

STAT_PROP = "prop"
STAT_DIFF_IN_PROPS = "diff in props"
STAT_MEAN = "mean"
STAT_DIFF_IN_MEANS = "diff in means"
STAT_SLOPE = "slope"

VALID_STATS = (
    STAT_PROP,
    STAT_DIFF_IN_PROPS,
    STAT_MEAN,
    STAT_DIFF_IN_MEANS,
    STAT_SLOPE,
)

DIFFERENCE_STATS = (STAT_DIFF_IN_PROPS, STAT_DIFF_IN_MEANS)

TYPE_BOOTSTRAP = "bootstrap"
TYPE_PERMUTATION = "permutation"
TYPE_DRAW = "draw"

VALID_TYPES = (TYPE_BOOTSTRAP, TYPE_PERMUTATION, TYPE_DRAW)

NULL_INDEPENDENCE = "independence"
NULL_POINT = "point"

VALID_NULLS = (NULL_INDEPENDENCE, NULL_POINT)

VALID_CI_TYPES = ("percentile", "se", "bias-corrected")

# Accepted spellings -> canonical direction
DIRECTION_ALIASES = {
    "less": "less",
    "left": "less",
    "greater": "greater",
    "right": "greater",
    "both": "both",
    "two-sided": "both",
    "two_sided": "both",
    "two sided": "both",
}

VALID_DIRECTIONS = tuple(DIRECTION_ALIASES)


@dataclass(frozen=True)
class DistributionParams:
    """
    Parameter payload for an empirical distribution.

    - stats: statistic value per replicate, in generation order
    - reps: number of replicates
    - mean, se: mean and standard deviation (ddof=1) of stats
    """
    stats: NDArray[np.floating[Any]]           # shape (reps,)
    reps: int
    stat: str
    type: str
    null: str | None
    mean: float
    se: float
