"""
InferenceDesign: the roles, statistic and null hypothesis of one analysis.

Built by specify() and refined by hypothesize(). Immutable, validated at
construction, and consumed by the resampler and the backend.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Sequence

import numpy as np

from pyinfer.core.exceptions import InvalidParameterError
from pyinfer.core.validation import check_choice, check_open_unit_interval
from pyinfer.infer._common import (
    STAT_PROP, STAT_DIFF_IN_PROPS, STAT_MEAN, STAT_DIFF_IN_MEANS, STAT_SLOPE,
    VALID_STATS, DIFFERENCE_STATS, NULL_INDEPENDENCE, NULL_POINT, VALID_NULLS,
)
from pyinfer.sample.design import Sample, GroupedSample, NUMERIC, CATEGORICAL


# (response kind, explanatory kind or None) -> statistic
_STAT_BY_ROLES = {
    (CATEGORICAL, None): STAT_PROP,
    (NUMERIC, None): STAT_MEAN,
    (CATEGORICAL, CATEGORICAL): STAT_DIFF_IN_PROPS,
    (NUMERIC, CATEGORICAL): STAT_DIFF_IN_MEANS,
    (NUMERIC, NUMERIC): STAT_SLOPE,
}

_ROLES_BY_STAT = {stat: roles for roles, stat in _STAT_BY_ROLES.items()}


@dataclass(frozen=True)
class InferenceDesign:
    """
    Frozen design for one inference.

    Attributes:
        sample: Observed data. A GroupedSample when the explanatory
            variable is categorical.
        response: Name of the response variable.
        explanatory: Name of the explanatory/grouping variable, or None.
        success: Success level of a categorical response, else None.
        stat: Statistic name, one of VALID_STATS.
        order: Subtraction order for difference statistics, else None.
        null: None, "independence" or "point".
        p: Null proportion for a point null on a proportion.
        mu: Null mean for a point null on a mean.
    """
    sample: Sample
    response: str
    explanatory: str | None
    success: Any
    stat: str
    order: tuple[Any, Any] | None
    null: str | None = None
    p: float | None = None
    mu: float | None = None

    @classmethod
    def for_specify(
        cls,
        sample: Sample,
        response: str,
        *,
        explanatory: str | None = None,
        success: Any = None,
        stat: str | None = None,
        order: Sequence[Any] | None = None,
    ) -> InferenceDesign:
        """
        Create a design with validation.

        Args:
            sample: Observed data.
            response: Response variable name.
            explanatory: Optional explanatory variable name.
            success: Level counted as success. Required iff the response
                is categorical.
            stat: Statistic name. Inferred from the variable kinds if None.
            order: Two levels of a categorical explanatory variable, minuend
                first. Defaults to its first two observed levels.

        Returns:
            Validated InferenceDesign.

        Raises:
            InvalidParameterError: If the roles do not fit the sample or the
                statistic.
        """
        if not isinstance(sample, Sample):
            raise InvalidParameterError(
                f"sample must be a Sample, got {type(sample).__name__}",
                parameter="sample",
            )

        response_kind = sample.kind(response)
        explanatory_kind = None
        if explanatory is not None:
            if explanatory == response:
                raise InvalidParameterError(
                    f"explanatory must differ from response, both are "
                    f"{response!r}",
                    parameter="explanatory",
                    value=explanatory,
                )
            explanatory_kind = sample.kind(explanatory)

        if response_kind == CATEGORICAL:
            if success is None:
                raise InvalidParameterError(
                    f"success is required for the categorical response "
                    f"{response!r}; levels: {sample.levels(response)!r}",
                    parameter="success",
                )
            if success not in sample.levels(response):
                raise InvalidParameterError(
                    f"success {success!r} is not a level of {response!r}; "
                    f"levels: {sample.levels(response)!r}",
                    parameter="success",
                    value=success,
                )
        elif success is not None:
            raise InvalidParameterError(
                f"success is only meaningful for a categorical response; "
                f"{response!r} is numeric",
                parameter="success",
                value=success,
            )

        roles = (response_kind, explanatory_kind)
        if stat is None:
            if roles not in _STAT_BY_ROLES:
                raise InvalidParameterError(
                    f"no statistic applies to a {response_kind} response with "
                    f"a {explanatory_kind} explanatory variable",
                    parameter="explanatory",
                    value=explanatory,
                )
            stat = _STAT_BY_ROLES[roles]
        else:
            check_choice(stat, VALID_STATS, "stat")
            if _ROLES_BY_STAT[stat] != roles:
                want_r, want_e = _ROLES_BY_STAT[stat]
                raise InvalidParameterError(
                    f"stat {stat!r} needs a {want_r} response and "
                    f"{'no' if want_e is None else 'a ' + want_e} explanatory "
                    f"variable; got {response_kind} and {explanatory_kind}",
                    parameter="stat",
                    value=stat,
                )

        resolved_order = None
        if stat in DIFFERENCE_STATS:
            sample = GroupedSample.from_sample(sample, explanatory, order)
            resolved_order = sample.order
        elif order is not None:
            raise InvalidParameterError(
                f"order only applies to difference statistics, not {stat!r}",
                parameter="order",
                value=order,
            )

        return cls(
            sample=sample,
            response=response,
            explanatory=explanatory,
            success=success,
            stat=stat,
            order=resolved_order,
        )

    def with_null(
        self,
        null: str,
        *,
        p: float | None = None,
        mu: float | None = None,
    ) -> InferenceDesign:
        """
        Return a copy of this design carrying a null hypothesis.

        Raises:
            InvalidParameterError: If the null does not fit the design.
        """
        check_choice(null, VALID_NULLS, "null")

        if null == NULL_INDEPENDENCE:
            if self.explanatory is None:
                raise InvalidParameterError(
                    "null='independence' needs an explanatory variable",
                    parameter="null",
                    value=null,
                )
            if p is not None or mu is not None:
                raise InvalidParameterError(
                    "p and mu only apply to null='point'",
                    parameter="null",
                    value=null,
                )
            return replace(self, null=null, p=None, mu=None)

        if self.explanatory is not None:
            raise InvalidParameterError(
                "null='point' applies to a single variable; this design has "
                f"explanatory variable {self.explanatory!r}",
                parameter="null",
                value=null,
            )
        if self.stat == STAT_PROP:
            if p is None or mu is not None:
                raise InvalidParameterError(
                    "a point null on a proportion needs p (and not mu)",
                    parameter="p",
                    value=p,
                )
            check_open_unit_interval(p, "p")
            return replace(self, null=null, p=float(p), mu=None)

        if mu is None or p is not None:
            raise InvalidParameterError(
                "a point null on a mean needs mu (and not p)",
                parameter="mu",
                value=mu,
            )
        if (
            isinstance(mu, bool)
            or not isinstance(mu, (int, float, np.number))
            or not np.isfinite(mu)
        ):
            raise InvalidParameterError(
                f"mu must be a finite number, got {mu!r}",
                parameter="mu",
                value=mu,
            )
        return replace(self, null=null, p=None, mu=float(mu))

    @property
    def n_observations(self) -> int:
        return self.sample.n_observations

    @property
    def stratified(self) -> bool:
        """True when bootstrap draws happen within explanatory levels."""
        return isinstance(self.sample, GroupedSample)
