"""
Core infrastructure for PyInfer.

This module provides shared abstractions and utilities used by the
sample store and the inference engine.

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing
"""

from pyinfer.core.protocols import Backend
from pyinfer.core.result import Result
from pyinfer.core.exceptions import (
    PyInferError,
    ValidationError,
    InvalidParameterError,
    InsufficientDataError,
    NumericalError,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    # Exceptions
    "PyInferError",
    "ValidationError",
    "InvalidParameterError",
    "InsufficientDataError",
    "NumericalError",
]
