"""
Binary logistic regression with ridge regularization.

    p = sigmoid(Xw)
    loss(w) = -(1/n) * sum(y log p + (1 - y) log(1 - p)) + (lambda / 2) * ||w[1:]||^2

The log-likelihood is evaluated as mean(log(1 + exp(Xw)) - y * Xw), which
is algebraically identical and does not overflow for large |Xw|.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

import numpy as np
from numpy.typing import NDArray

from pylinmodels.core.exceptions import ValidationError
from pylinmodels.core.validation import check_binary
from pylinmodels.linear.base import LinearClassifier
from pylinmodels.linear.links import Link, LogitLink
from pylinmodels.linear.regularization import ridge_loss


@dataclass(frozen=True, eq=False)
class LogisticRegression(LinearClassifier):
    """
    An immutable binary logistic regression model with ridge regularization.

    Targets must be coded 0/1 and both classes must be present.

    Examples:
        >>> model = LogisticRegression(lambda_=1.5).fit(X, y)
        >>> model.predict(X)        # 0.0 / 1.0 labels
        >>> model.predict_proba(X)  # (n, 1) probabilities of class 1
    """

    link: ClassVar[Link] = LogitLink()

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.num_classes is not None:
            _check_two_classes(self.num_classes)

    def _with_num_classes(self, num_classes: int) -> LogisticRegression:
        _check_two_classes(num_classes)
        return super()._with_num_classes(num_classes)

    def _validate_target(self, y: NDArray[np.floating[Any]]) -> None:
        check_binary(y, 'y')

    def _predict_proba(self, w: NDArray[np.floating[Any]], X: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        return self.link.linkinv(X @ w).reshape(-1, 1)

    def _predict(self, w: NDArray[np.floating[Any]], X: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        return (self._predict_proba(w, X)[:, 0] > 0.5).astype(np.float64)

    def loss(self, w, X, y) -> float:
        eta = X @ w
        nll = float(np.mean(np.logaddexp(0.0, eta) - y * eta))
        return nll + ridge_loss(w[1:], self.lambda_)

    def loss_grad(self, w, X, y) -> NDArray[np.floating[Any]]:
        grad = X.T @ (self.link.linkinv(X @ w) - y) / X.shape[0]
        return self._penalized(grad, w)


def _check_two_classes(num_classes: int) -> None:
    if num_classes != 2:
        raise ValidationError(
            "Logistic regression must be trained on a dataset with exactly 2 categories, "
            f"got {num_classes}"
        )
