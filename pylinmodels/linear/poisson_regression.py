"""
Poisson regression (log link) with ridge regularization.

    mu = exp(Xw)
    loss(w) = (1/n) * sum(exp(Xw) - y * Xw) + (lambda / 2) * ||w[1:]||^2

The log(y!) term of the Poisson log-likelihood is constant in w and is
dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

import numpy as np
from numpy.typing import NDArray

from pylinmodels.core.validation import check_count_data
from pylinmodels.linear.base import LinearModel
from pylinmodels.linear.links import Link, LogLink
from pylinmodels.linear.regularization import ridge_loss


@dataclass(frozen=True, eq=False)
class PoissonRegression(LinearModel):
    """
    An immutable Poisson regression model with ridge regularization.

    The target must be count data (non-negative integers).

    Examples:
        >>> model = PoissonRegression(lambda_=0.5).fit(X, counts)
        >>> expected_counts = model.predict(X)
    """

    link: ClassVar[Link] = LogLink()

    def _validate_target(self, y: NDArray[np.floating[Any]]) -> None:
        check_count_data(y, 'y')

    def _predict(self, w: NDArray[np.floating[Any]], X: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        return self.link.linkinv(X @ w)

    def loss(self, w, X, y) -> float:
        eta = X @ w
        return float(np.mean(np.exp(eta) - y * eta)) + ridge_loss(w[1:], self.lambda_)

    def loss_grad(self, w, X, y) -> NDArray[np.floating[Any]]:
        grad = X.T @ (np.exp(X @ w) - y) / X.shape[0]
        return self._penalized(grad, w)
