"""
Generic result container for all PyInfer computations.

The Result class provides a standardized envelope that simulation results
use. Diagnostics ride on the envelope instead of a logger: info carries
metadata, timing the section breakdown, and warnings any non-fatal notes.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (n, regime, seed)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for resampling computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific payload (distribution, estimates, etc.)
        info: Structured metadata (statistic, regime, sample size)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=DistributionParams(stats=t, ...),
        ...     info={'stat': 'mean', 'type': 'bootstrap', 'n': 50},
        ...     timing={'total_seconds': 0.2, 'replicates': 0.19},
        ...     backend_name='cpu_resample'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
