"""
Replicate builders for bootstrap, permutation and draw regimes.

Each builder takes an InferenceDesign and a numpy Generator and returns
one synthetic Sample. Seeding lives in replicate_rng(): replicate b of a
run always draws from the b-th child stream of the run's root
SeedSequence, so replicates are independent and any one of them can be
rebuilt on its own.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pyinfer.core.exceptions import InvalidParameterError
from pyinfer.infer._common import (
    TYPE_BOOTSTRAP, TYPE_PERMUTATION, TYPE_DRAW, VALID_TYPES,
    STAT_PROP, NULL_POINT,
)
from pyinfer.infer.design import InferenceDesign
from pyinfer.sample.design import Sample


SeedLike = int | np.random.SeedSequence | np.random.Generator | None


def root_seed_sequence(seed: SeedLike) -> np.random.SeedSequence:
    """
    Turn a user seed into the root SeedSequence of a run.

    A Generator is advanced once to draw the root entropy; None captures
    fresh OS entropy. Either way the returned root is fixed, so a run
    built on it can be replayed.
    """
    if isinstance(seed, np.random.SeedSequence):
        return np.random.SeedSequence(
            seed.entropy, spawn_key=seed.spawn_key, pool_size=seed.pool_size,
        )
    if isinstance(seed, np.random.Generator):
        entropy = int(seed.integers(0, np.iinfo(np.int64).max))
        return np.random.SeedSequence(entropy)
    if seed is None or (
        isinstance(seed, (int, np.integer)) and not isinstance(seed, bool)
    ):
        return np.random.SeedSequence(seed)
    raise InvalidParameterError(
        f"seed must be an int, SeedSequence, Generator or None, got "
        f"{type(seed).__name__}",
        parameter="seed",
        value=seed,
    )


def replicate_rng(root: np.random.SeedSequence, index: int) -> np.random.Generator:
    """Generator for replicate `index`: the index-th spawned child of root."""
    child = np.random.SeedSequence(
        root.entropy,
        spawn_key=tuple(root.spawn_key) + (index,),
        pool_size=root.pool_size,
    )
    return np.random.default_rng(child)


def check_regime(design: InferenceDesign, type: str) -> None:
    """
    Verify a resampling regime fits the design.

    Raises:
        InvalidParameterError: If the regime is unknown or incompatible.
    """
    if type not in VALID_TYPES:
        raise InvalidParameterError(
            f"type must be one of {VALID_TYPES}, got {type!r}",
            parameter="type",
            value=type,
        )

    if type == TYPE_PERMUTATION:
        if design.explanatory is None:
            raise InvalidParameterError(
                "type='permutation' shuffles the response against an "
                "explanatory variable; the design has none",
                parameter="type",
                value=type,
            )
        if design.null == NULL_POINT:
            raise InvalidParameterError(
                "type='permutation' simulates independence, not a point null",
                parameter="type",
                value=type,
            )

    if type == TYPE_DRAW:
        if design.stat != STAT_PROP or design.null != NULL_POINT:
            raise InvalidParameterError(
                "type='draw' needs a proportion with a point null; call "
                "hypothesize(design, 'point', p=...) first",
                parameter="type",
                value=type,
            )
        if len(design.sample.levels(design.response)) < 2:
            raise InvalidParameterError(
                f"type='draw' needs a non-success level in "
                f"{design.response!r}; levels: "
                f"{design.sample.levels(design.response)!r}",
                parameter="type",
                value=type,
            )

    if type == TYPE_BOOTSTRAP and design.null == NULL_POINT and design.mu is None:
        raise InvalidParameterError(
            "a bootstrap under a point null needs mu; use type='draw' for "
            "a proportion",
            parameter="type",
            value=type,
        )


def _strata_codes(sample: Sample, variable: str) -> NDArray[np.intp]:
    """Integer code per record: level index, or -1 when missing."""
    lookup = {lv: i for i, lv in enumerate(sample.levels(variable))}
    return np.array(
        [-1 if v is None else lookup[v] for v in sample.column(variable)],
        dtype=np.intp,
    )


def _stratified_sample(
    n: int,
    strata: NDArray,
    rng: np.random.Generator,
) -> NDArray[np.intp]:
    """Sample with replacement within each stratum."""
    indices = np.empty(n, dtype=np.intp)
    for s in np.unique(strata):
        mask = strata == s
        s_indices = np.where(mask)[0]
        indices[mask] = rng.choice(s_indices, size=len(s_indices), replace=True)
    return indices


def bootstrap_replicate(
    design: InferenceDesign,
    rng: np.random.Generator,
) -> Sample:
    """
    Draw n records with replacement.

    Stratified by the explanatory variable when the sample is grouped,
    so every level keeps its size. Under a point null on the mean the
    response is first shifted to have mean mu.
    """
    sample = design.sample
    n = sample.n_observations

    if design.null == NULL_POINT and design.mu is not None:
        y = sample.column(design.response)
        shift = design.mu - float(np.nanmean(y))
        sample = sample.with_column(design.response, y + shift)

    if design.stratified:
        strata = _strata_codes(sample, design.explanatory)
        indices = _stratified_sample(n, strata, rng)
    else:
        indices = rng.choice(n, size=n, replace=True)

    return sample.take(indices)


def permutation_replicate(
    design: InferenceDesign,
    rng: np.random.Generator,
) -> Sample:
    """Shuffle the response across all records; other columns stay put."""
    sample = design.sample
    shuffled = rng.permutation(sample.column(design.response))
    return sample.with_column(design.response, shuffled)


def draw_replicate(
    design: InferenceDesign,
    rng: np.random.Generator,
) -> Sample:
    """
    Simulate the response under a point null proportion p.

    Each non-missing record becomes the success level with probability
    p, else the first other level. Missing records stay missing.
    """
    sample = design.sample
    failure = next(
        lv for lv in sample.levels(design.response) if lv != design.success
    )
    present = ~sample.missing(design.response)
    hits = rng.random(sample.n_observations) < design.p

    drawn = np.empty(sample.n_observations, dtype=object)
    drawn[:] = None
    drawn[present & hits] = design.success
    drawn[present & ~hits] = failure
    return sample.with_column(design.response, drawn)


_BUILDERS = {
    TYPE_BOOTSTRAP: bootstrap_replicate,
    TYPE_PERMUTATION: permutation_replicate,
    TYPE_DRAW: draw_replicate,
}


def build_replicate(
    design: InferenceDesign,
    type: str,
    rng: np.random.Generator,
) -> Sample:
    """Build one replicate under the given regime."""
    return _BUILDERS[type](design, rng)
