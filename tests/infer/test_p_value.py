"""
Tests for get_p_value().

Validates the tail fractions for every direction and alias, ties,
the [0, 1] range, the zero-p warning and validation.
"""

import numpy as np
import pytest

from pyinfer.core.exceptions import InvalidParameterError
from pyinfer.infer import PValue, get_p_value


VALUES = np.arange(-5.0, 5.0)  # -5, -4, ..., 4 (10 values)


class TestDirections:

    def test_greater(self):
        p = get_p_value(VALUES, 3.0, "greater")
        assert p.value == pytest.approx(0.2)  # 3, 4
        assert p.direction == "greater"

    def test_less(self):
        p = get_p_value(VALUES, -4.0, "less")
        assert p.value == pytest.approx(0.2)  # -5, -4

    def test_both(self):
        p = get_p_value(VALUES, 3.0, "both")
        assert p.value == pytest.approx(0.4)

    def test_both_is_capped(self):
        p = get_p_value(VALUES, 0.0, "both")
        # >= 0: 5/10, <= 0: 6/10 -> min(1, 2 * 0.5)
        assert p.value == 1.0

    def test_ties_count_toward_tail(self):
        p = get_p_value([1.0, 1.0, 1.0, 2.0], 1.0, "greater")
        assert p.value == 1.0

    @pytest.mark.parametrize("alias, canonical", [
        ("right", "greater"),
        ("left", "less"),
        ("two-sided", "both"),
        ("two_sided", "both"),
        ("two sided", "both"),
    ])
    def test_aliases(self, alias, canonical):
        assert get_p_value(VALUES, 2.0, alias) == get_p_value(VALUES, 2.0, canonical)
        assert get_p_value(VALUES, 2.0, alias).direction == canonical

    def test_default_is_two_sided(self):
        assert get_p_value(VALUES, 3.0).direction == "both"


class TestRange:

    @pytest.mark.parametrize("direction", ["less", "greater", "both"])
    def test_within_unit_interval(self, rng, direction):
        values = rng.normal(size=200)
        for obs in (-10.0, -1.0, 0.0, 0.3, 1.0, 10.0):
            p = get_p_value(values, obs, direction).value
            assert 0.0 <= p <= 1.0

    def test_zero_p_warns(self):
        p = get_p_value(VALUES, 100.0, "greater")
        assert p.value == 0.0
        assert any("1/10" in w for w in p.warnings)

    def test_single_value_distribution(self):
        assert get_p_value([0.0], 0.0, "both").value == 1.0


class TestPValueObject:

    def test_decision(self):
        p = PValue(value=0.03, direction="both", observed_stat=1.2, reps=1000)
        assert p.is_significant()
        assert not p.is_significant(alpha=0.01)
        assert float(p) == 0.03

    def test_alpha_validated(self):
        p = PValue(value=0.03, direction="both", observed_stat=1.2, reps=1000)
        with pytest.raises(InvalidParameterError, match="alpha"):
            p.is_significant(alpha=5)

    def test_summary_rounds_to_five_decimals(self):
        p = PValue(value=0.0123456789, direction="less", observed_stat=-2.0, reps=1000)
        s = p.summary()
        assert "p-value (less): 0.01235" in s
        assert "reject the null hypothesis" in s


class TestPValueValidation:

    def test_unknown_direction(self):
        with pytest.raises(InvalidParameterError, match="direction"):
            get_p_value(VALUES, 0.0, "sideways")

    def test_empty_distribution(self):
        with pytest.raises(InvalidParameterError, match="empty"):
            get_p_value([], 0.0, "both")

    def test_non_finite_observed(self):
        with pytest.raises(InvalidParameterError, match="obs_stat"):
            get_p_value(VALUES, float("nan"), "both")

    def test_non_numeric_distribution(self):
        with pytest.raises(InvalidParameterError):
            get_p_value(["a", "b"], 0.0, "both")
