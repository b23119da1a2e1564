"""
Sample store.

Immutable containers for observed data:
    Sample         - records with numeric and categorical variables
    GroupedSample  - Sample plus a grouping variable and a two-level order
"""

from pyinfer.sample.design import (
    Sample,
    GroupedSample,
    VariableKind,
    NUMERIC,
    CATEGORICAL,
)

__all__ = [
    "Sample",
    "GroupedSample",
    "VariableKind",
    "NUMERIC",
    "CATEGORICAL",
]
