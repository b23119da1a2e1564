"""
Tests for get_confidence_interval().

Tests the percentile rank formula exactly, the se and bias-corrected
methods, monotonicity in the level, the N=2 boundary and validation.
"""

import warnings

import numpy as np
import pytest
from scipy import stats as sp_stats

from pyinfer.core.exceptions import InsufficientDataError, InvalidParameterError
from pyinfer.infer import (
    ConfidenceInterval, calculate, generate, get_confidence_interval,
    hypothesize, specify,
)


# ---------------------------------------------------------------------------
# Tests: Percentile
# ---------------------------------------------------------------------------

class TestPercentileCI:

    def test_rank_formula(self):
        values = np.arange(1000.0)[::-1]  # unsorted input
        ci = get_confidence_interval(values, 0.95)
        # floor(1000 * 0.05 / 2) = 25, ceil(1000 * 1.95 / 2) = 975
        assert ci.lower == 25.0
        assert ci.upper == 975.0
        assert ci.level == 0.95
        assert ci.type == "percentile"

    def test_rank_formula_90(self):
        values = np.arange(1000.0)
        ci = get_confidence_interval(values, 0.90)
        assert (ci.lower, ci.upper) == (50.0, 950.0)

    def test_upper_rank_clamped(self):
        values = np.arange(10.0)
        ci = get_confidence_interval(values, 0.99)
        # ceil(10 * 1.99 / 2) = 10 -> clamped to 9
        assert (ci.lower, ci.upper) == (0.0, 9.0)

    def test_two_values_boundary(self):
        ci = get_confidence_interval([3.0, -1.0], 0.999999)
        assert ci.lower == -1.0
        assert ci.upper == 3.0

    def test_lower_not_above_upper(self, rng):
        for level in (0.01, 0.5, 0.8, 0.95, 0.99):
            ci = get_confidence_interval(rng.normal(size=37), level)
            assert ci.lower <= ci.upper

    def test_width_monotone_in_level(self, rng):
        values = rng.standard_normal(501)
        widths = [
            get_confidence_interval(values, level).width
            for level in np.linspace(0.05, 0.999, 60)
        ]
        assert all(b >= a for a, b in zip(widths, widths[1:]))

    def test_from_distribution_solution(self, housing):
        dist = calculate(generate(specify(housing, "price"), 1000, seed=42))
        ci = dist.get_confidence_interval(0.95)
        assert ci == get_confidence_interval(dist.stats, 0.95)
        assert ci.contains(float(np.mean(housing["price"])))


# ---------------------------------------------------------------------------
# Tests: se and bias-corrected
# ---------------------------------------------------------------------------

class TestOtherMethods:

    def test_se_formula(self, rng):
        values = rng.normal(5.0, 2.0, 400)
        ci = get_confidence_interval(values, 0.95, type="se", point_estimate=5.0)
        z = sp_stats.norm.ppf(0.975)
        half = z * np.std(values, ddof=1)
        assert ci.lower == pytest.approx(5.0 - half, rel=1e-12)
        assert ci.upper == pytest.approx(5.0 + half, rel=1e-12)
        assert ci.type == "se"

    def test_bias_corrected_equals_quantiles_when_centred(self):
        # Half the values below the estimate -> z0 = 0 -> plain quantiles.
        values = np.arange(1.0, 1001.0)
        ci = get_confidence_interval(
            values, 0.90, type="bias-corrected", point_estimate=500.5,
        )
        assert ci.lower == pytest.approx(np.quantile(values, 0.05))
        assert ci.upper == pytest.approx(np.quantile(values, 0.95))

    def test_bias_corrected_shifts_with_bias(self):
        values = np.arange(1.0, 1001.0)
        centred = get_confidence_interval(
            values, 0.90, type="bias-corrected", point_estimate=500.5,
        )
        shifted = get_confidence_interval(
            values, 0.90, type="bias-corrected", point_estimate=700.0,
        )
        assert shifted.lower > centred.lower
        assert shifted.upper > centred.upper

    @pytest.mark.parametrize("ci_type", ["se", "bias-corrected"])
    def test_point_estimate_required(self, ci_type):
        with pytest.raises(InvalidParameterError, match="point_estimate"):
            get_confidence_interval(np.arange(10.0), 0.9, type=ci_type)


# ---------------------------------------------------------------------------
# Tests: Validation and display
# ---------------------------------------------------------------------------

class TestCIValidation:

    @pytest.mark.parametrize("level", [0.0, 1.0, -0.1, 95])
    def test_level_out_of_range(self, level):
        with pytest.raises(InvalidParameterError, match="level"):
            get_confidence_interval(np.arange(10.0), level)

    def test_single_value(self):
        with pytest.raises(InsufficientDataError):
            get_confidence_interval([1.0], 0.95)

    def test_empty(self):
        with pytest.raises(InvalidParameterError):
            get_confidence_interval([], 0.95)

    def test_unknown_type(self):
        with pytest.raises(InvalidParameterError, match="type must be one of"):
            get_confidence_interval(np.arange(10.0), 0.95, type="bca")

    def test_non_finite(self):
        with pytest.raises(InvalidParameterError, match="non-finite"):
            get_confidence_interval([1.0, np.nan, 2.0], 0.95)

    def test_warns_on_null_distribution(self, housing):
        design = specify(housing, "price", explanatory="size")
        dist = calculate(generate(design, 100, type="permutation", seed=1))
        with pytest.warns(UserWarning, match="centred on the null"):
            dist.get_confidence_interval(0.95)

    def test_warns_on_shifted_bootstrap(self, housing):
        design = hypothesize(specify(housing, "price"), "point", mu=100.0)
        dist = calculate(generate(design, 500, seed=1))
        assert dist.type == "bootstrap"
        with pytest.warns(UserWarning, match="'point' null") as record:
            dist.get_confidence_interval(0.95)
        assert len(record) == 1

    def test_no_warning_on_bootstrap(self, housing):
        dist = calculate(generate(specify(housing, "price"), 100, seed=1))
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            dist.get_confidence_interval(0.95)

    def test_summary_rounds_to_two_decimals(self):
        ci = ConfidenceInterval(lower=0.123456, upper=0.987654, level=0.95)
        assert ci.summary() == "95% percentile CI: (0.12, 0.99)"
        assert ci.as_tuple() == (0.123456, 0.987654)
