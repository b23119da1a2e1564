"""
Scalar statistics computed on a single sample.

All functions are pure: they read the sample's columns and return a
Python float. Missing values are dropped per variable (per pair for the
slope). Failures raise InvalidParameterError, or its subclass
InsufficientDataError when there is too little data.
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np

from pyinfer.core.exceptions import InvalidParameterError, InsufficientDataError
from pyinfer.infer._common import (
    STAT_PROP, STAT_DIFF_IN_PROPS, STAT_MEAN, STAT_DIFF_IN_MEANS, STAT_SLOPE,
    VALID_STATS,
)
from pyinfer.sample.design import (
    Sample, GroupedSample, NUMERIC, CATEGORICAL, resolve_order,
)


def _require_kind(sample: Sample, variable: str, kind: str) -> None:
    actual = sample.kind(variable)
    if actual != kind:
        raise InvalidParameterError(
            f"variable {variable!r} must be {kind}, got {actual}",
            parameter=variable,
        )


def _group_masks(
    sample: Sample,
    group: str | None,
    order: Sequence[Any] | None,
) -> tuple[np.ndarray, np.ndarray]:
    """Boolean row masks of the two ordered groups."""
    if group is None:
        if not isinstance(sample, GroupedSample):
            raise InvalidParameterError(
                "a difference statistic needs a grouping variable",
                parameter="group",
            )
        group = sample.group
        if order is None:
            order = sample.order

    _require_kind(sample, group, CATEGORICAL)
    g1, g2 = resolve_order(order, sample.observed_levels(group), group)
    col = sample.column(group)
    return col == g1, col == g2


def _proportion_of(values: np.ndarray, success: Any, name: str) -> float:
    present = np.array([v is not None for v in values], dtype=bool)
    n = int(present.sum())
    if n == 0:
        raise InsufficientDataError(
            f"variable {name!r}: no non-missing observations",
            parameter=name,
            required=1,
            available=0,
        )
    return float(np.sum(values[present] == success)) / n


def _mean_of(values: np.ndarray, name: str) -> float:
    present = values[~np.isnan(values)]
    if len(present) == 0:
        raise InsufficientDataError(
            f"variable {name!r}: no non-missing observations",
            parameter=name,
            required=1,
            available=0,
        )
    return float(np.mean(present))


def proportion(sample: Sample, variable: str, success: Any) -> float:
    """Fraction of non-missing records where variable == success."""
    _require_kind(sample, variable, CATEGORICAL)
    levels = sample.levels(variable)
    if success not in levels:
        raise InvalidParameterError(
            f"success {success!r} is not a level of {variable!r}; "
            f"levels: {levels!r}",
            parameter="success",
            value=success,
        )
    return _proportion_of(sample.column(variable), success, variable)


def diff_in_proportions(
    sample: Sample,
    variable: str,
    success: Any,
    group: str | None = None,
    order: Sequence[Any] | None = None,
) -> float:
    """
    proportion(order[0]) - proportion(order[1]).

    group and order default to those of a GroupedSample.
    """
    _require_kind(sample, variable, CATEGORICAL)
    levels = sample.levels(variable)
    if success not in levels:
        raise InvalidParameterError(
            f"success {success!r} is not a level of {variable!r}; "
            f"levels: {levels!r}",
            parameter="success",
            value=success,
        )
    m1, m2 = _group_masks(sample, group, order)
    col = sample.column(variable)
    return (
        _proportion_of(col[m1], success, variable)
        - _proportion_of(col[m2], success, variable)
    )


def mean(sample: Sample, variable: str) -> float:
    """Arithmetic mean of the non-missing values of a numeric variable."""
    _require_kind(sample, variable, NUMERIC)
    return _mean_of(sample.column(variable), variable)


def diff_in_means(
    sample: Sample,
    variable: str,
    group: str | None = None,
    order: Sequence[Any] | None = None,
) -> float:
    """
    mean(order[0]) - mean(order[1]).

    group and order default to those of a GroupedSample.
    """
    _require_kind(sample, variable, NUMERIC)
    m1, m2 = _group_masks(sample, group, order)
    col = sample.column(variable)
    return _mean_of(col[m1], variable) - _mean_of(col[m2], variable)


def slope(sample: Sample, response: str, explanatory: str) -> float:
    """
    OLS slope of response regressed on a single explanatory variable.

    slope = cov(x, y) / var(x), over records where both are present.
    """
    _require_kind(sample, response, NUMERIC)
    _require_kind(sample, explanatory, NUMERIC)

    y = sample.column(response)
    x = sample.column(explanatory)
    complete = ~(np.isnan(x) | np.isnan(y))
    n = int(complete.sum())
    if n < 2:
        raise InsufficientDataError(
            f"slope of {response!r} on {explanatory!r}: requires at least 2 "
            f"complete observations, got {n}",
            parameter=explanatory,
            required=2,
            available=n,
        )

    x = x[complete]
    y = y[complete]
    x_c = x - np.mean(x)
    sxx = float(np.sum(x_c * x_c))
    if sxx == 0.0:
        raise InvalidParameterError(
            f"explanatory variable {explanatory!r} has zero variance; "
            f"the slope is undefined",
            parameter="explanatory",
            value=explanatory,
        )
    return float(np.sum(x_c * (y - np.mean(y)))) / sxx


def compute_statistic(
    sample: Sample,
    stat: str,
    response: str,
    explanatory: str | None = None,
    success: Any = None,
    order: Sequence[Any] | None = None,
) -> float:
    """Dispatch a statistic by name with explicit roles."""
    if stat == STAT_PROP:
        return proportion(sample, response, success)
    if stat == STAT_DIFF_IN_PROPS:
        return diff_in_proportions(
            sample, response, success, group=explanatory, order=order,
        )
    if stat == STAT_MEAN:
        return mean(sample, response)
    if stat == STAT_DIFF_IN_MEANS:
        return diff_in_means(sample, response, group=explanatory, order=order)
    if stat == STAT_SLOPE:
        if explanatory is None:
            raise InvalidParameterError(
                "slope needs an explanatory variable",
                parameter="explanatory",
            )
        return slope(sample, response, explanatory)
    raise InvalidParameterError(
        f"stat must be one of {VALID_STATS}, got {stat!r}",
        parameter="stat",
        value=stat,
    )
