"""
Finite-difference gradients.

Used to verify that a model's analytic gradient is the derivative of its
loss, and available to callers who want to check their own objectives.
"""

from typing import Any, Callable

import numpy as np
from numpy.typing import NDArray

from pylinmodels.core.compute.tolerances import ToleranceTier, GRADIENT_CHECK


def approx_gradient(
    fun: Callable[[NDArray[np.floating[Any]]], float],
    x: NDArray[np.floating[Any]],
    h: float = 1e-5,
) -> NDArray[np.floating[Any]]:
    """
    Centered finite-difference gradient of a scalar function.

        grad_i ~= (f(x + h e_i) - f(x - h e_i)) / (2h)

    x is not modified.
    """
    x = np.asarray(x, dtype=np.float64)
    grad = np.empty_like(x)
    step = np.zeros_like(x)
    for i in range(x.size):
        step[i] = h
        grad[i] = (fun(x + step) - fun(x - step)) / (2.0 * h)
        step[i] = 0.0
    return grad


def check_gradient(
    fun: Callable[[NDArray[np.floating[Any]]], float],
    grad: Callable[[NDArray[np.floating[Any]]], NDArray[np.floating[Any]]],
    x: NDArray[np.floating[Any]],
    tier: ToleranceTier = GRADIENT_CHECK,
    h: float = 1e-5,
) -> bool:
    """True if grad(x) agrees with approx_gradient(fun, x) within tier."""
    return tier.allclose(grad(x), approx_gradient(fun, x, h=h))
