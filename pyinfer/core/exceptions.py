"""
Exception hierarchy for PyInfer.

All exceptions inherit from PyInferError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyInferError(Exception):
    """Base exception for all PyInfer errors."""
    pass


class ValidationError(PyInferError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class InvalidParameterError(ValidationError):
    """
    A parameter is malformed or out of range.

    Raised for a wrong variable type, an unknown level, statistic, regime or
    direction, a degenerate predictor, or a non-positive replicate count.

    Attributes:
        parameter: Name of the offending parameter, if known
        value: The rejected value, if relevant
    """

    def __init__(
        self,
        message: str,
        parameter: str | None = None,
        value: object = None,
    ):
        super().__init__(message)
        self.parameter = parameter
        self.value = value


class InsufficientDataError(InvalidParameterError):
    """
    The sample is too small for the requested computation.

    Raised for too few (non-missing) observations or too few distinct group
    levels. Subclasses InvalidParameterError so that callers guarding
    against malformed input also catch undersized input.

    Attributes:
        required: Minimum number of observations or levels needed
        available: Number actually available
    """

    def __init__(
        self,
        message: str,
        parameter: str | None = None,
        required: int | None = None,
        available: int | None = None,
    ):
        super().__init__(message, parameter=parameter)
        self.required = required
        self.available = available


class NumericalError(PyInferError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass
