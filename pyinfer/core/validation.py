"""
Input validation utilities for PyInfer.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from typing import Any, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyinfer.core.exceptions import InvalidParameterError, InsufficientDataError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Rejects inputs that result in object dtype (indicating mixed types or
    non-numeric data) and non-numeric dtypes such as strings.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with float64 dtype

    Raises:
        InvalidParameterError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise InvalidParameterError(
            f"{name}: cannot convert to array: {e}", parameter=name,
        ) from e

    if result.dtype == object:
        raise InvalidParameterError(
            f"{name}: converted to object dtype, indicating mixed types "
            f"or non-numeric data",
            parameter=name,
        )

    if result.dtype == bool or not np.issubdtype(result.dtype, np.number):
        raise InvalidParameterError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data",
            parameter=name,
        )

    return result.astype(np.float64)


def check_1d(array: NDArray, name: str) -> None:
    """
    Verify array is 1-dimensional.

    Raises:
        InvalidParameterError: If array is not 1D
    """
    if array.ndim != 1:
        raise InvalidParameterError(
            f"{name}: expected 1D array, got {array.ndim}D with shape "
            f"{array.shape}",
            parameter=name,
        )


def check_consistent_length(
    *arrays: Sequence[Any] | NDArray,
    names: tuple[str, ...]
) -> None:
    """
    Verify all columns have the same length.

    Args:
        *arrays: Arrays or sequences to check
        names: Parameter names for error messages (must match number of arrays)

    Raises:
        ValueError: If number of names doesn't match number of arrays
        InvalidParameterError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names "
            f"({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [len(arr) for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(
            f"{name}={length}" for name, length in zip(names, lengths)
        )
        raise InvalidParameterError(f"Inconsistent lengths: {details}")


def check_min_samples(array: NDArray, min_samples: int, name: str) -> None:
    """
    Verify array has at least the minimum number of samples.

    Args:
        array: Array to check
        min_samples: Minimum required samples (first dimension)
        name: Parameter name for error messages

    Raises:
        InsufficientDataError: If array has fewer than min_samples
    """
    n = array.shape[0]
    if n < min_samples:
        raise InsufficientDataError(
            f"{name}: requires at least {min_samples} observations, got {n}",
            parameter=name,
            required=min_samples,
            available=n,
        )


def check_choice(value: Any, choices: tuple, name: str) -> None:
    """
    Verify value is one of an enumerated set of choices.

    Raises:
        InvalidParameterError: If value is not in choices
    """
    if value not in choices:
        raise InvalidParameterError(
            f"{name} must be one of {choices}, got {value!r}",
            parameter=name,
            value=value,
        )


def check_open_unit_interval(value: float, name: str) -> None:
    """
    Verify a scalar lies strictly between 0 and 1.

    Raises:
        InvalidParameterError: If value is not a real number in (0, 1)
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, np.number)):
        raise InvalidParameterError(
            f"{name} must be a number in (0, 1), got {value!r}",
            parameter=name,
            value=value,
        )
    if not (0.0 < float(value) < 1.0):
        raise InvalidParameterError(
            f"{name} must be in (0, 1), got {value}",
            parameter=name,
            value=value,
        )


def check_positive_int(value: Any, name: str) -> int:
    """
    Verify value is an integer >= 1 and return it as int.

    Raises:
        InvalidParameterError: If value is not a positive integer
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidParameterError(
            f"{name} must be an integer, got {type(value).__name__}",
            parameter=name,
            value=value,
        )
    if value < 1:
        raise InvalidParameterError(
            f"{name} must be >= 1, got {value}",
            parameter=name,
            value=value,
        )
    return int(value)
