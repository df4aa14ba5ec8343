"""
Input validation utilities for mcmle.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent. All of them run before any
random draw, so a rejected call never advances a generator.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import math
import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from mcmle.core.exceptions import (
    DimensionError,
    InvalidArgumentError,
    InvalidParameterError,
    ValidationError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to a numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if result.dtype == bool:
        return result.astype(np.float64)

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array is 1-dimensional.

    Raises:
        DimensionError: If array is not 1D
    """
    if array.ndim != 1:
        raise DimensionError(
            f"{name}: expected 1D array, got {array.ndim}D with shape {array.shape}"
        )


def check_consistent_length(
    *arrays: NDArray[np.floating[Any]],
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [len(arr) for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")


def check_min_samples(array: NDArray[np.floating[Any]], min_samples: int, name: str) -> None:
    """
    Verify array has at least the minimum number of samples.

    Raises:
        InvalidArgumentError: If array has fewer than min_samples
    """
    n = array.shape[0]
    if n < min_samples:
        raise InvalidArgumentError(
            f"{name}: requires at least {min_samples} samples, got {n}"
        )


def check_count(value: Any, name: str, *, minimum: int = 1) -> int:
    """
    Verify value is an integer count >= minimum.

    Booleans are rejected even though they subclass int.

    Returns:
        The count as a Python int

    Raises:
        InvalidArgumentError: If value is not an integer or is too small
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidArgumentError(
            f"{name}: expected an integer, got {type(value).__name__} {value!r}"
        )
    value = int(value)
    if value < minimum:
        raise InvalidArgumentError(f"{name}: must be >= {minimum}, got {value}")
    return value


def check_positive(value: Any, name: str) -> float:
    """
    Verify a scalar parameter is finite and strictly positive.

    Raises:
        InvalidParameterError: If value is not a finite number > 0
    """
    value = _as_real(value, name)
    if not value > 0:
        raise InvalidParameterError(
            f"{name}: must be > 0, got {value}", parameter=name, value=value
        )
    return value


def check_real(value: Any, name: str) -> float:
    """
    Verify a scalar parameter is a finite real number.

    Raises:
        InvalidParameterError: If value is not finite
    """
    return _as_real(value, name)


def check_probability(value: Any, name: str) -> float:
    """
    Verify a scalar is a probability in [0, 1].

    Raises:
        InvalidParameterError: If value is outside [0, 1]
    """
    value = _as_real(value, name)
    if not 0.0 <= value <= 1.0:
        raise InvalidParameterError(
            f"{name}: must lie in [0, 1], got {value}", parameter=name, value=value
        )
    return value


def check_weights(weights: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    """
    Validate a non-negative weight vector and normalise it to sum to 1.

    Weights need not pre-sum to 1; they only need a positive total.

    Returns:
        Normalised copy of the weights

    Raises:
        InvalidParameterError: If any weight is negative or non-finite,
            or if all weights are zero
        DimensionError: If weights are not 1D
    """
    w = check_array(weights, name)
    check_1d(w, name)
    if w.size == 0:
        raise InvalidParameterError(f"{name}: empty weight vector", parameter=name)
    if not np.all(np.isfinite(w)):
        raise InvalidParameterError(
            f"{name}: contains non-finite weights", parameter=name, value=w
        )
    if np.any(w < 0):
        bad = np.where(w < 0)[0].tolist()
        raise InvalidParameterError(
            f"{name}: weights must be non-negative, negative at positions {bad}",
            parameter=name, value=w,
        )
    total = float(np.sum(w))
    if total <= 0:
        raise InvalidParameterError(
            f"{name}: weights sum to zero", parameter=name, value=w
        )
    return w / total


def _as_real(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameterError(
            f"{name}: expected a real number, got {type(value).__name__} {value!r}",
            parameter=name, value=value,
        )
    value = float(value)
    if not math.isfinite(value):
        raise InvalidParameterError(
            f"{name}: must be finite, got {value}", parameter=name, value=value
        )
    return value
