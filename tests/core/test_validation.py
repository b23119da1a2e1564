"""
Tests for input validation utilities.

Validates every function in core/validation.py.
"""

import numpy as np
import pytest

from pyinfer.core.exceptions import InsufficientDataError, InvalidParameterError
from pyinfer.core.validation import (
    check_1d,
    check_array,
    check_choice,
    check_consistent_length,
    check_min_samples,
    check_open_unit_interval,
    check_positive_int,
)


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:
    """check_array converts to float64 and rejects non-numeric data."""

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "x")
        assert result.dtype == np.float64
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_strings_rejected(self):
        with pytest.raises(InvalidParameterError, match="non-numeric"):
            check_array(["a", "b"], "x")

    def test_bools_rejected(self):
        with pytest.raises(InvalidParameterError, match="non-numeric"):
            check_array([True, False], "x")

    def test_mixed_types_rejected(self):
        with pytest.raises(InvalidParameterError, match="x"):
            check_array([1.0, "a", None], "x")


# ═══════════════════════════════════════════════════════════════════════
# Shape and length checks
# ═══════════════════════════════════════════════════════════════════════


class TestShapeChecks:

    def test_1d_passes(self):
        check_1d(np.zeros(3), "x")

    def test_2d_fails(self):
        with pytest.raises(InvalidParameterError, match="expected 1D"):
            check_1d(np.zeros((3, 2)), "x")

    def test_consistent_length_passes(self):
        check_consistent_length(np.zeros(3), np.ones(3), names=("a", "b"))

    def test_inconsistent_length_fails(self):
        with pytest.raises(InvalidParameterError, match="a=3, b=4"):
            check_consistent_length(np.zeros(3), np.ones(4), names=("a", "b"))

    def test_names_mismatch_is_programming_error(self):
        with pytest.raises(ValueError):
            check_consistent_length(np.zeros(3), names=("a", "b"))

    def test_min_samples(self):
        check_min_samples(np.zeros(2), 2, "x")
        with pytest.raises(InsufficientDataError) as exc:
            check_min_samples(np.zeros(1), 2, "x")
        assert exc.value.required == 2
        assert exc.value.available == 1


# ═══════════════════════════════════════════════════════════════════════
# Scalar checks
# ═══════════════════════════════════════════════════════════════════════


class TestScalarChecks:

    def test_choice(self):
        check_choice("less", ("less", "greater"), "direction")
        with pytest.raises(InvalidParameterError, match="direction"):
            check_choice("up", ("less", "greater"), "direction")

    @pytest.mark.parametrize("value", [0.0, 1.0, -0.5, 1.5])
    def test_open_unit_interval_rejects_bounds(self, value):
        with pytest.raises(InvalidParameterError, match="level"):
            check_open_unit_interval(value, "level")

    def test_open_unit_interval_rejects_non_numbers(self):
        with pytest.raises(InvalidParameterError):
            check_open_unit_interval("0.95", "level")
        with pytest.raises(InvalidParameterError):
            check_open_unit_interval(True, "level")

    def test_open_unit_interval_accepts(self):
        check_open_unit_interval(0.95, "level")

    def test_positive_int(self):
        assert check_positive_int(np.int64(5), "reps") == 5
        with pytest.raises(InvalidParameterError, match="reps must be >= 1"):
            check_positive_int(0, "reps")
        with pytest.raises(InvalidParameterError, match="integer"):
            check_positive_int(10.0, "reps")
