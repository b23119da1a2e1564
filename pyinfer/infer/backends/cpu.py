"""
CPU backend for simulation-based distributions.

CPUResampleBackend: builds every replicate of a ReplicateSequence and
evaluates the design's statistic on it, sequentially or on a thread pool.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import numpy as np

from pyinfer.core.result import Result
from pyinfer.core.compute.timing import Timer
from pyinfer.core.exceptions import InvalidParameterError, NumericalError
from pyinfer.infer._common import DistributionParams, TYPE_BOOTSTRAP
from pyinfer.infer._resample import build_replicate, replicate_rng
from pyinfer.infer._statistics import compute_statistic
from pyinfer.infer.solution import ReplicateSequence

# Below this many replicates percentile ranks are coarse.
MIN_RECOMMENDED_REPS = 100


class CPUResampleBackend:
    """
    CPU backend for resampled statistic distributions.

    Replicate b uses its own child random stream, so the distribution is
    identical for any worker count.
    """

    @property
    def name(self) -> str:
        return 'cpu_resample'

    def solve(self, design: ReplicateSequence) -> Result[DistributionParams]:
        """Evaluate the statistic on every replicate and return Result[DistributionParams]."""
        timer = Timer()
        timer.start()

        reps = design.reps
        warnings_list: list[str] = []

        with timer.section('replicates'):
            if design.workers > 1:
                with ThreadPoolExecutor(max_workers=design.workers) as pool:
                    values = list(pool.map(
                        lambda b: self._replicate_stat(design, b), range(reps),
                    ))
            else:
                values = [self._replicate_stat(design, b) for b in range(reps)]

        stats = np.asarray(values, dtype=np.float64)
        if not np.all(np.isfinite(stats)):
            bad = int(np.sum(~np.isfinite(stats)))
            raise NumericalError(
                f"{bad} of {reps} replicates produced a non-finite "
                f"{design.design.stat!r} statistic"
            )
        stats.flags.writeable = False

        with timer.section('summary_statistics'):
            mean = float(np.mean(stats))
            se = float(np.std(stats, ddof=1)) if reps > 1 else float('nan')

        if reps < MIN_RECOMMENDED_REPS:
            warnings_list.append(
                f"only {reps} replicates; intervals and p-values are coarse "
                f"(at least {MIN_RECOMMENDED_REPS} recommended)"
            )

        timer.stop()

        inner = design.design
        params = DistributionParams(
            stats=stats,
            reps=reps,
            stat=inner.stat,
            type=design.type,
            null=inner.null,
            mean=mean,
            se=se,
        )

        return Result(
            params=params,
            info={
                'n': inner.n_observations,
                'response': inner.response,
                'explanatory': inner.explanatory,
                'order': inner.order,
                'stratified': design.type == TYPE_BOOTSTRAP and inner.stratified,
                'workers': design.workers,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )

    @staticmethod
    def _replicate_stat(design: ReplicateSequence, b: int) -> float:
        inner = design.design
        replicate = build_replicate(
            inner, design.type, replicate_rng(design.root, b),
        )
        try:
            return compute_statistic(
                replicate,
                inner.stat,
                inner.response,
                explanatory=inner.explanatory,
                success=inner.success,
                order=inner.order,
            )
        except InvalidParameterError as e:
            # Observed sample was valid; this resample is degenerate.
            raise NumericalError(
                f"replicate {b}: {inner.stat!r} statistic is undefined on "
                f"this {design.type} resample ({e}); the sample is too small "
                f"or too unbalanced for resampling, so use more records or "
                f"a different seed"
            ) from e
