"""
Ridge (L2) regularization.

    R(w)      = (lambda / 2) * sum(w_i^2)
    dR/dw     = lambda * w

Callers pass the weights WITHOUT the bias term; the intercept is never
penalized. lambda = 0 disables regularization entirely.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinmodels.core.validation import check_non_negative_scalar


def ridge_loss(w: NDArray[np.floating[Any]], lambda_: float) -> float:
    """Ridge penalty (lambda / 2) * ||w||^2."""
    return 0.5 * lambda_ * float(w @ w)


def ridge_loss_grad(w: NDArray[np.floating[Any]], lambda_: float) -> NDArray[np.floating[Any]]:
    """Gradient of ridge_loss with respect to w."""
    return lambda_ * w


def check_regularization_strength(lambda_: float) -> None:
    """
    Raises:
        ValidationError: If lambda_ is negative or not finite
    """
    check_non_negative_scalar(lambda_, 'lambda_ (L2 regularization strength)')
