"""
Input validation utilities for pylinmodels.

Validators fail fast and loud: they raise immediately with a message naming
the offending parameter instead of silently correcting the input.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Each function validates ONE thing
    - Parameter names and actual values included in all error messages
"""

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pylinmodels.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float numpy array.

    Objects exposing ``.values`` (e.g. DataFrames) are unwrapped first.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    if hasattr(array, 'values') and not isinstance(array, np.ndarray):
        array = array.values

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


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_consistent_length(
    *arrays: NDArray[np.floating[Any]],
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Args:
        *arrays: Arrays to check
        names: Parameter names for error messages (must match number of arrays)

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

    lengths = [arr.shape[0] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")


def check_n_columns(array: NDArray[np.floating[Any]], n_columns: int, name: str) -> None:
    """
    Verify a 2D array has the expected number of columns.

    Raises:
        DimensionError: If the column count differs
    """
    if array.shape[1] != n_columns:
        raise DimensionError(
            f"{name}: expected {n_columns} columns, got {array.shape[1]}"
        )


def check_min_samples(array: NDArray[np.floating[Any]], min_samples: int, name: str) -> None:
    """
    Verify array has at least the minimum number of samples.

    Raises:
        ValidationError: If array has fewer than min_samples
    """
    n = array.shape[0]
    if n < min_samples:
        raise ValidationError(
            f"{name}: requires at least {min_samples} samples, got {n}"
        )


def check_non_negative_scalar(value: float, name: str) -> None:
    """
    Verify a scalar is finite and >= 0.

    Raises:
        ValidationError: If value is negative, NaN or infinite
    """
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name}: expected a real number, got {value!r}") from e

    if not math.isfinite(value) or value < 0:
        raise ValidationError(f"{name}: must be a finite value >= 0, got {value}")


def check_count_data(y: NDArray[np.floating[Any]], name: str, atol: float = 1e-8) -> None:
    """
    Verify every entry is a non-negative integer (within atol).

    Raises:
        ValidationError: If any value is negative or not integer-valued
    """
    negative = np.flatnonzero(y < 0)
    if negative.size > 0:
        raise ValidationError(
            f"{name}: count data must be non-negative, "
            f"found {negative.size} negative values (first at index {int(negative[0])})"
        )

    fractional = np.flatnonzero(np.abs(y - np.round(y)) > atol)
    if fractional.size > 0:
        idx = int(fractional[0])
        raise ValidationError(
            f"{name}: count data must be integer-valued, "
            f"found {fractional.size} non-integer values (first: {y[idx]!r} at index {idx})"
        )


def check_binary(y: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify every entry is exactly 0 or 1.

    Raises:
        ValidationError: If any value lies outside {0, 1}
    """
    invalid = np.flatnonzero((y != 0.0) & (y != 1.0))
    if invalid.size > 0:
        bad = np.unique(y[invalid])[:5].tolist()
        raise ValidationError(
            f"{name}: expected binary values in {{0, 1}}, got {bad}"
        )
