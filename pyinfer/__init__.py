"""
PyInfer: simulation-based statistical inference for Python.

Bootstrap resampling and permutation testing for proportions,
differences in proportions, means, differences in means and
regression slopes.

Submodules:
    sample: Immutable observed-data containers
    infer: Resampling, statistics, confidence intervals and p-values
"""

__version__ = "0.1.0"

from pyinfer import sample
from pyinfer import infer
from pyinfer.sample import Sample, GroupedSample
from pyinfer.infer import (
    specify,
    hypothesize,
    generate,
    calculate,
    get_confidence_interval,
    get_p_value,
)
from pyinfer.core.exceptions import (
    PyInferError,
    InvalidParameterError,
    InsufficientDataError,
)

__all__ = [
    "__version__",
    "sample",
    "infer",
    "Sample",
    "GroupedSample",
    "specify",
    "hypothesize",
    "generate",
    "calculate",
    "get_confidence_interval",
    "get_p_value",
    "PyInferError",
    "InvalidParameterError",
    "InsufficientDataError",
]
