"""
Solution types for simulation-based inference.

ReplicateSequence is the lazy output of generate(). DistributionSolution
wraps Result[DistributionParams] and provides accessors and a text
summary. ConfidenceInterval and PValue are the reduced outputs.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Iterator, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pyinfer.core.result import Result
from pyinfer.core.validation import check_open_unit_interval
from pyinfer.infer._common import (
    DistributionParams, DEFAULT_ALPHA, DEFAULT_CONF_LEVEL,
)
from pyinfer.infer._resample import build_replicate, replicate_rng
from pyinfer.sample.design import Sample

if TYPE_CHECKING:
    from pyinfer.infer.design import InferenceDesign


@dataclass(frozen=True, eq=False)
class ReplicateSequence(Sequence):
    """
    Lazy, restartable sequence of resampled samples.

    Replicate b is rebuilt on demand from the b-th child stream of root,
    so indexing, repeated iteration and parallel evaluation all see the
    same replicates.
    """
    design: 'InferenceDesign'
    reps: int
    type: str
    root: np.random.SeedSequence
    workers: int = 1

    def __len__(self) -> int:
        return self.reps

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(self.reps))]
        if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
            raise TypeError(
                f"replicate indices must be integers or slices, got "
                f"{type(index).__name__}"
            )
        b = int(index)
        if b < 0:
            b += self.reps
        if not 0 <= b < self.reps:
            raise IndexError(f"replicate {index} out of range for {self.reps}")
        return build_replicate(self.design, self.type, replicate_rng(self.root, b))

    def __iter__(self) -> Iterator[Sample]:
        for b in range(self.reps):
            yield build_replicate(
                self.design, self.type, replicate_rng(self.root, b),
            )

    @property
    def seed(self) -> int | tuple[int, ...]:
        """Root entropy; passing it back as seed replays the sequence."""
        return self.root.entropy

    def __repr__(self) -> str:
        return (
            f"ReplicateSequence(reps={self.reps}, type={self.type!r}, "
            f"stat={self.design.stat!r})"
        )


@dataclass(frozen=True)
class ConfidenceInterval:
    """Interval (lower, upper) at a confidence level; lower <= upper."""
    lower: float
    upper: float
    level: float
    type: str = "percentile"

    @property
    def width(self) -> float:
        return self.upper - self.lower

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper

    def as_tuple(self) -> tuple[float, float]:
        return (self.lower, self.upper)

    def summary(self) -> str:
        """Bounds rounded to 2 decimals."""
        return (
            f"{self.level * 100:g}% {self.type} CI: "
            f"({self.lower:.2f}, {self.upper:.2f})"
        )

    def __repr__(self) -> str:
        return (
            f"ConfidenceInterval(lower={self.lower:.4g}, "
            f"upper={self.upper:.4g}, level={self.level}, type={self.type!r})"
        )


@dataclass(frozen=True)
class PValue:
    """Tail-proportion p-value in [0, 1]."""
    value: float
    direction: str
    observed_stat: float
    reps: int
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def is_significant(self, alpha: float = DEFAULT_ALPHA) -> bool:
        """Reject the null at significance level alpha (p <= alpha)."""
        check_open_unit_interval(alpha, "alpha")
        return self.value <= alpha

    def summary(self, alpha: float = DEFAULT_ALPHA) -> str:
        """P-value rounded to 5 decimals, with the decision at alpha."""
        decision = "reject" if self.is_significant(alpha) else "fail to reject"
        lines = [
            f"Observed statistic: {self.observed_stat:.6g}",
            f"p-value ({self.direction}): {self.value:.5f}",
            f"Decision at alpha={alpha:g}: {decision} the null hypothesis",
        ]
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        return "\n".join(lines)

    def __float__(self) -> float:
        return self.value

    def __repr__(self) -> str:
        return f"PValue({self.value:.5g}, direction={self.direction!r})"


@dataclass
class DistributionSolution:
    """
    User-facing empirical distribution of a statistic.

    stats holds one value per replicate in generation order.
    """
    _result: Result[DistributionParams]
    _design: ReplicateSequence

    # --- Core fields ---

    @property
    def stats(self) -> NDArray[np.floating[Any]]:
        """Statistic per replicate, shape (reps,)."""
        return self._result.params.stats

    @property
    def reps(self) -> int:
        return self._result.params.reps

    @property
    def stat(self) -> str:
        """Name of the statistic."""
        return self._result.params.stat

    @property
    def type(self) -> str:
        """Resampling regime used."""
        return self._result.params.type

    @property
    def null(self) -> str | None:
        """Null hypothesis simulated, or None for a bootstrap CI run."""
        return self._result.params.null

    @property
    def mean(self) -> float:
        return self._result.params.mean

    @property
    def se(self) -> float:
        """Standard deviation (ddof=1) of the distribution."""
        return self._result.params.se

    # --- Metadata ---

    @property
    def design(self) -> 'InferenceDesign':
        return self._design.design

    @property
    def seed(self) -> int | tuple[int, ...]:
        return self._design.seed

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # --- Reductions ---

    def get_confidence_interval(
        self,
        level: float = DEFAULT_CONF_LEVEL,
        *,
        type: str = "percentile",
        point_estimate: float | None = None,
    ) -> ConfidenceInterval:
        """Shortcut for get_confidence_interval(self, ...)."""
        from pyinfer.infer.solvers import get_confidence_interval
        return get_confidence_interval(
            self, level, type=type, point_estimate=point_estimate,
        )

    def get_p_value(self, obs_stat: float, direction: str = "both") -> PValue:
        """Shortcut for get_p_value(self, ...)."""
        from pyinfer.infer.solvers import get_p_value
        return get_p_value(self, obs_stat, direction)

    # --- Display ---

    def summary(self) -> str:
        """
        Text summary of the distribution.

        Produces:
            SIMULATION-BASED DISTRIBUTION

            Statistic: diff in means
            Generated by: permutation (null: independence)
            Replicates: 1000
            Mean: 0.00123
            Std. error: 0.28031
        """
        null = f" (null: {self.null})" if self.null else ""
        lines = [
            "\nSIMULATION-BASED DISTRIBUTION",
            "",
            f"Statistic: {self.stat}",
            f"Generated by: {self.type}{null}",
            f"Replicates: {self.reps}",
            f"Mean: {self.mean:.5f}",
            f"Std. error: {self.se:.5f}",
        ]
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"DistributionSolution(reps={self.reps}, stat={self.stat!r}, "
            f"type={self.type!r}, backend={self.backend_name!r})"
        )
