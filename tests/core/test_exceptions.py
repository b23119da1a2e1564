"""
Tests for PyInfer exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyInferError)
    - InsufficientDataError is an InvalidParameterError
    - Diagnostic attributes and their defaults
"""

import pytest

from pyinfer.core.exceptions import (
    InsufficientDataError,
    InvalidParameterError,
    NumericalError,
    PyInferError,
    ValidationError,
)


class TestInheritance:
    """Every exception is catchable via PyInferError."""

    def test_validation_error_is_pyinfer_error(self):
        with pytest.raises(PyInferError):
            raise ValidationError("bad input")

    def test_invalid_parameter_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise InvalidParameterError("bad level")

    def test_insufficient_data_is_invalid_parameter(self):
        with pytest.raises(InvalidParameterError):
            raise InsufficientDataError("too few")

    def test_numerical_error_is_pyinfer_error(self):
        with pytest.raises(PyInferError):
            raise NumericalError("nan replicate")

    def test_numerical_error_is_not_validation_error(self):
        assert not issubclass(NumericalError, ValidationError)


class TestAttributes:
    """Diagnostic attributes are stored and default to None."""

    def test_invalid_parameter_attributes(self):
        err = InvalidParameterError("bad", parameter="level", value=2.0)
        assert err.parameter == "level"
        assert err.value == 2.0
        assert str(err) == "bad"

    def test_invalid_parameter_defaults(self):
        err = InvalidParameterError("bad")
        assert err.parameter is None
        assert err.value is None

    def test_insufficient_data_attributes(self):
        err = InsufficientDataError(
            "too few", parameter="x", required=2, available=1,
        )
        assert err.parameter == "x"
        assert err.required == 2
        assert err.available == 1
        assert err.value is None
