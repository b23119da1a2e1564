"""
Simulation-based inference.

Bootstrap, permutation and point-null draw distributions for five
statistics, reduced to percentile/se/bias-corrected confidence intervals
and tail-proportion p-values.

Usage:
    from pyinfer.infer import (
        specify, hypothesize, generate, calculate,
        get_confidence_interval, get_p_value,
    )

    # Bootstrap confidence interval
    design = specify(sample, "price")
    boot = calculate(generate(design, 1000, type="bootstrap", seed=42))
    ci = get_confidence_interval(boot, 0.95)

    # Permutation test
    design = specify(sample, "salary", explanatory="league")
    obs = calculate(design)
    null = hypothesize(design, "independence")
    dist = calculate(generate(null, 1000, type="permutation", seed=42))
    p = get_p_value(dist, obs, direction="both")
"""

from pyinfer.infer.solvers import (
    specify,
    hypothesize,
    generate,
    calculate,
    get_confidence_interval,
    get_p_value,
)
from pyinfer.infer._statistics import (
    proportion,
    diff_in_proportions,
    mean,
    diff_in_means,
    slope,
)
from pyinfer.infer.design import InferenceDesign
from pyinfer.infer.solution import (
    ReplicateSequence,
    DistributionSolution,
    ConfidenceInterval,
    PValue,
)

__all__ = [
    "specify",
    "hypothesize",
    "generate",
    "calculate",
    "get_confidence_interval",
    "get_p_value",
    "proportion",
    "diff_in_proportions",
    "mean",
    "diff_in_means",
    "slope",
    "InferenceDesign",
    "ReplicateSequence",
    "DistributionSolution",
    "ConfidenceInterval",
    "PValue",
]
