"""
Linear regression with ridge regularization.

    mu = Xw
    loss(w) = (1 / 2n) * ||y - Xw||^2 + (lambda / 2) * ||w[1:]||^2
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

import numpy as np
from numpy.typing import NDArray

from pylinmodels.linear.base import LinearModel
from pylinmodels.linear.links import IdentityLink, Link
from pylinmodels.linear.regularization import ridge_loss


@dataclass(frozen=True, eq=False)
class LinearRegression(LinearModel):
    """
    An immutable linear regression model with ridge regularization.

    Examples:
        >>> model = LinearRegression()
        >>> model = LinearRegression(lambda_=1.5).fit(X, y)
        >>> y_hat = model.predict(X)
    """

    link: ClassVar[Link] = IdentityLink()

    def _predict(self, w: NDArray[np.floating[Any]], X: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        return self.link.linkinv(X @ w)

    def loss(self, w, X, y) -> float:
        residuals = y - X @ w
        return 0.5 * float(residuals @ residuals) / X.shape[0] + ridge_loss(w[1:], self.lambda_)

    def loss_grad(self, w, X, y) -> NDArray[np.floating[Any]]:
        residuals = y - X @ w
        grad = -(X.T @ residuals) / X.shape[0]
        return self._penalized(grad, w)
