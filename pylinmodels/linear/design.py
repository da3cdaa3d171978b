"""
Linear model design.

LinearDesign validates a feature matrix X (n x p) and target y (n,) once,
at the fit boundary, and hands out the bias-augmented matrix the losses
operate on. The bias column is never stored in user-facing arrays: it is
prepended transiently by add_bias_term.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinmodels.core.validation import (
    check_array,
    check_finite,
    check_2d,
    check_1d,
    check_consistent_length,
    check_min_samples,
)


def add_bias_term(X: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """Prepend a constant 1.0 column: [1 | X]."""
    return np.hstack([np.ones((X.shape[0], 1), dtype=np.float64), X])


def check_features(X: ArrayLike, name: str = 'X') -> NDArray[np.floating[Any]]:
    """
    Validate a feature matrix and return it as float64.

    1D input is treated as a single column.
    """
    X_arr = check_array(X, name).astype(np.float64, copy=False)
    if X_arr.ndim == 1:
        X_arr = X_arr.reshape(-1, 1)
    check_2d(X_arr, name)
    check_finite(X_arr, name)
    return X_arr


@dataclass(frozen=True)
class LinearDesign:
    """
    Validated (X, y) pair for fitting a linear model.

    Immutable after construction; the stored arrays are read-only copies,
    so an objective closing over them cannot observe later changes to the
    caller's arrays.

    Construction:
        LinearDesign.from_arrays(X, y)
    """
    _X: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _p: int

    @classmethod
    def from_arrays(cls, X: ArrayLike, y: ArrayLike) -> LinearDesign:
        """Build a design from array-likes, validating shapes and values."""
        X_arr = check_features(X, 'X')

        y_arr = check_array(y, 'y').astype(np.float64, copy=False)
        if y_arr.ndim == 2 and y_arr.shape[1] == 1:
            y_arr = y_arr.ravel()
        check_1d(y_arr, 'y')
        check_finite(y_arr, 'y')

        check_consistent_length(X_arr, y_arr, names=('X', 'y'))
        check_min_samples(X_arr, 1, 'X')

        X_arr = np.array(X_arr, dtype=np.float64, copy=True)
        y_arr = np.array(y_arr, dtype=np.float64, copy=True)
        X_arr.flags.writeable = False
        y_arr.flags.writeable = False

        return cls(_X=X_arr, _y=y_arr, _p=X_arr.shape[1])

    # === Properties ===

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Target vector (n,)."""
        return self._y

    @property
    def p(self) -> int:
        """Number of features (excluding bias)."""
        return self._p

    def X_with_bias(self) -> NDArray[np.floating[Any]]:
        """Read-only [1 | X] (n x (p + 1))."""
        X_bias = add_bias_term(self._X)
        X_bias.flags.writeable = False
        return X_bias
