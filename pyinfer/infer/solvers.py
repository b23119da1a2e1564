"""
Public verbs for simulation-based inference.

    specify()                 - choose response/explanatory roles and statistic
    hypothesize()             - attach a null hypothesis
    generate()                - lazy sequence of resampled samples
    calculate()               - statistic of a sample, or its distribution
                                over a ReplicateSequence
    get_confidence_interval() - percentile / se / bias-corrected interval
    get_p_value()             - tail-proportion p-value
"""

from __future__ import annotations

import warnings
from typing import Any, Literal, Sequence

import numpy as np
from numpy.typing import ArrayLike

from pyinfer.core.exceptions import InvalidParameterError
from pyinfer.core.validation import (
    check_array, check_1d, check_choice, check_min_samples,
    check_open_unit_interval, check_positive_int,
)
from pyinfer.infer._common import (
    DEFAULT_REPS, DEFAULT_CONF_LEVEL, DIRECTION_ALIASES, VALID_DIRECTIONS,
    VALID_CI_TYPES, TYPE_BOOTSTRAP,
)
from pyinfer.infer._ci import compute_ci
from pyinfer.infer._pvalue import compute_p_value
from pyinfer.infer._resample import SeedLike, check_regime, root_seed_sequence
from pyinfer.infer._statistics import compute_statistic
from pyinfer.infer.backends.cpu import CPUResampleBackend
from pyinfer.infer.design import InferenceDesign
from pyinfer.infer.solution import (
    ConfidenceInterval, DistributionSolution, PValue, ReplicateSequence,
)
from pyinfer.sample.design import Sample


Direction = Literal[
    "less", "greater", "both", "left", "right",
    "two-sided", "two_sided", "two sided",
]
CIType = Literal["percentile", "se", "bias-corrected"]
GenerateType = Literal["bootstrap", "permutation", "draw"]


def _get_backend(backend: str = 'cpu'):
    """Select backend. Resampling runs on CPU only."""
    if backend in ('cpu', 'auto'):
        return CPUResampleBackend()
    raise InvalidParameterError(
        f"Unknown backend: {backend!r}. Use 'cpu'.",
        parameter="backend",
        value=backend,
    )


def specify(
    sample: Sample,
    response: str,
    *,
    explanatory: str | None = None,
    success: Any = None,
    stat: str | None = None,
    order: Sequence[Any] | None = None,
) -> InferenceDesign:
    """
    Declare the variables and statistic of an analysis.

    Parameters
    ----------
    sample : Sample
        Observed data.
    response : str
        Response variable.
    explanatory : str or None
        Explanatory variable. Categorical for group differences, numeric
        for a regression slope.
    success : level or None
        Level of a categorical response counted as a success.
    stat : str or None
        "prop", "diff in props", "mean", "diff in means" or "slope".
        Inferred from the variable kinds when omitted.
    order : pair of levels or None
        Subtraction order for difference statistics; order[0] comes
        first. Defaults to the first two observed levels.

    Returns
    -------
    InferenceDesign
    """
    return InferenceDesign.for_specify(
        sample, response,
        explanatory=explanatory,
        success=success,
        stat=stat,
        order=order,
    )


def hypothesize(
    design: InferenceDesign,
    null: Literal["independence", "point"],
    *,
    p: float | None = None,
    mu: float | None = None,
) -> InferenceDesign:
    """
    Attach a null hypothesis to a design.

    "independence" (response unrelated to the explanatory variable) is
    simulated by permutation. "point" fixes a single proportion (p,
    simulated by draw) or mean (mu, simulated by a shifted bootstrap).
    """
    if not isinstance(design, InferenceDesign):
        raise InvalidParameterError(
            f"design must be an InferenceDesign, got {type(design).__name__}",
            parameter="design",
        )
    return design.with_null(null, p=p, mu=mu)


def generate(
    design: InferenceDesign,
    reps: int = DEFAULT_REPS,
    *,
    type: GenerateType = "bootstrap",
    seed: SeedLike = None,
    workers: int = 1,
) -> ReplicateSequence:
    """
    Lazy sequence of resampled samples.

    Parameters
    ----------
    design : InferenceDesign
        Output of specify() or hypothesize().
    reps : int
        Number of replicates. Must be >= 1. Default 1000.
    type : str
        "bootstrap" (with replacement; stratified by a categorical
        explanatory variable), "permutation" (response shuffled against
        the explanatory variable) or "draw" (point-null proportion).
    seed : int, SeedSequence, Generator or None
        Root of the run's random streams. Replicate b always uses the
        b-th child stream, so equal seeds give identical sequences.
    workers : int
        Threads used when the sequence is passed to calculate().

    Returns
    -------
    ReplicateSequence
    """
    if not isinstance(design, InferenceDesign):
        raise InvalidParameterError(
            "design must be an InferenceDesign built by specify()",
            parameter="design",
        )
    reps = check_positive_int(reps, "reps")
    workers = check_positive_int(workers, "workers")
    check_regime(design, type)

    return ReplicateSequence(
        design=design,
        reps=reps,
        type=type,
        root=root_seed_sequence(seed),
        workers=workers,
    )


def calculate(
    x,
    stat: str | None = None,
    *,
    response: str | None = None,
    explanatory: str | None = None,
    success: Any = None,
    order: Sequence[Any] | None = None,
    backend: str = 'cpu',
):
    """
    Compute a statistic.

    Parameters
    ----------
    x : Sample, InferenceDesign or ReplicateSequence
        - Sample: the statistic named by stat with the given roles.
        - InferenceDesign: the design's statistic on its observed sample.
        - ReplicateSequence: the design's statistic on every replicate,
          returned as a DistributionSolution.
    stat : str or None
        Statistic name. Required for a Sample; for a design or sequence
        it must match the design's statistic if given.
    response, explanatory, success, order
        Roles, used only when x is a Sample.
    backend : str
        'cpu' (default).

    Returns
    -------
    float or DistributionSolution
    """
    if isinstance(x, (InferenceDesign, ReplicateSequence)):
        design = x.design if isinstance(x, ReplicateSequence) else x
        if stat is not None and stat != design.stat:
            raise InvalidParameterError(
                f"stat {stat!r} does not match the design's statistic "
                f"{design.stat!r}",
                parameter="stat",
                value=stat,
            )
        if any(r is not None for r in (response, explanatory, success, order)):
            raise InvalidParameterError(
                "roles come from the design; do not pass response, "
                "explanatory, success or order with a design",
                parameter="response",
            )

        if isinstance(x, ReplicateSequence):
            be = _get_backend(backend)
            result = be.solve(x)
            return DistributionSolution(_result=result, _design=x)

        return compute_statistic(
            design.sample,
            design.stat,
            design.response,
            explanatory=design.explanatory,
            success=design.success,
            order=design.order,
        )

    if isinstance(x, Sample):
        if stat is None or response is None:
            raise InvalidParameterError(
                "calculate() on a Sample needs stat and response",
                parameter="stat" if stat is None else "response",
            )
        return compute_statistic(
            x, stat, response,
            explanatory=explanatory,
            success=success,
            order=order,
        )

    raise InvalidParameterError(
        f"calculate() expects a Sample, InferenceDesign or "
        f"ReplicateSequence, got {type(x).__name__}",
        parameter="x",
    )


def _distribution_values(distribution: DistributionSolution | ArrayLike):
    if isinstance(distribution, DistributionSolution):
        return np.asarray(distribution.stats, dtype=np.float64)
    values = check_array(distribution, "distribution")
    check_1d(values, "distribution")
    return values


def get_confidence_interval(
    distribution: DistributionSolution | ArrayLike,
    level: float = DEFAULT_CONF_LEVEL,
    *,
    type: CIType = "percentile",
    point_estimate: float | None = None,
) -> ConfidenceInterval:
    """
    Confidence interval from an empirical distribution.

    Parameters
    ----------
    distribution : DistributionSolution or 1D array-like
        Resampled statistic values (N >= 2).
    level : float
        Confidence level in (0, 1). Default 0.95.
    type : str
        "percentile" (default): lower = v[floor(N(1-level)/2)],
        upper = v[ceil(N(1+level)/2)] of the sorted values, clamped to
        [0, N-1]. "se" and "bias-corrected" also need point_estimate.
    point_estimate : float or None
        The observed statistic.

    Returns
    -------
    ConfidenceInterval
    """
    check_open_unit_interval(level, "level")
    check_choice(type, VALID_CI_TYPES, "type")
    values = _distribution_values(distribution)
    check_min_samples(values, 2, "distribution")
    if not np.all(np.isfinite(values)):
        raise InvalidParameterError(
            "distribution: contains non-finite values",
            parameter="distribution",
        )

    if (
        isinstance(distribution, DistributionSolution)
        and (
            distribution.type != TYPE_BOOTSTRAP
            or distribution.null is not None
        )
    ):
        # Permutation simulates independence even without hypothesize().
        null = distribution.null or "independence"
        warnings.warn(
            f"confidence interval computed from a {distribution.type} "
            f"distribution simulated under the {null!r} null, which is "
            f"centred on the null rather than on the estimate",
            stacklevel=2,
        )

    lower, upper = compute_ci(values, float(level), type, point_estimate)
    return ConfidenceInterval(
        lower=float(lower),
        upper=float(upper),
        level=float(level),
        type=type,
    )


def get_p_value(
    distribution: DistributionSolution | ArrayLike,
    obs_stat: float,
    direction: Direction = "both",
) -> PValue:
    """
    Tail-proportion p-value of an observed statistic.

    Parameters
    ----------
    distribution : DistributionSolution or 1D array-like
        Null distribution of the statistic.
    obs_stat : float
        Statistic computed on the observed sample.
    direction : str
        "greater" ("right"): fraction of values >= obs_stat.
        "less" ("left"): fraction of values <= obs_stat.
        "both" ("two-sided"): min(1, 2 * min(greater, less)).

    Returns
    -------
    PValue
    """
    check_choice(direction, VALID_DIRECTIONS, "direction")
    values = _distribution_values(distribution)
    if len(values) == 0:
        raise InvalidParameterError(
            "distribution: is empty",
            parameter="distribution",
        )
    if not np.isfinite(obs_stat):
        raise InvalidParameterError(
            f"obs_stat must be finite, got {obs_stat}",
            parameter="obs_stat",
            value=obs_stat,
        )

    canonical = DIRECTION_ALIASES[direction]
    p = compute_p_value(values, float(obs_stat), canonical)

    notes: list[str] = []
    if p == 0.0:
        notes.append(
            f"p-value of 0 means p < 1/{len(values)}; generate more "
            f"replicates for a finer estimate"
        )

    return PValue(
        value=p,
        direction=canonical,
        observed_stat=float(obs_stat),
        reps=len(values),
        warnings=tuple(notes),
    )
