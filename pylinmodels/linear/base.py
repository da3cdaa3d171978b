"""
Linear model contract.

A linear model is an immutable value: a regularization strength and,
once fitted, a weight vector w whose entry 0 is the bias. Concrete models
supply three stateless functions of (w, X) where X already carries the
bias column:

    _predict(w, X)      deterministic prediction
    loss(w, X, y)       mean negative log-likelihood + ridge penalty
    loss_grad(w, X, y)  exact gradient of loss with respect to w

fit() is written once, here, against that interface: validate, prepend
the bias column, start from zero weights, minimize (loss, loss_grad) with
L-BFGS and return a NEW model holding the minimizer. The receiver is
never modified.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, ClassVar

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinmodels.core.exceptions import NotFittedError, ValidationError
from pylinmodels.core.result import Result
from pylinmodels.core.validation import check_n_columns
from pylinmodels.core.compute.optimization import OptimizerConfig, OptimizeParams, minimize
from pylinmodels.core.compute.optimization.solvers import BackendChoice
from pylinmodels.linear.design import LinearDesign, add_bias_term, check_features
from pylinmodels.linear.links import Link
from pylinmodels.linear.regularization import check_regularization_strength, ridge_loss_grad


@dataclass(frozen=True, eq=False)
class LinearModel(ABC):
    """
    Base class for linear models fit by maximum likelihood.

    Attributes:
        lambda_: L2 regularization strength, >= 0 (0 disables it)
        w: Weights (bias first), or None while unfitted. Read-only.
        optimization: Optimizer Result of the fit that produced w
    """
    lambda_: float = 0.0
    w: NDArray[np.floating[Any]] | None = field(default=None, repr=False)
    optimization: Result[OptimizeParams] | None = field(default=None, repr=False)

    link: ClassVar[Link]

    def __post_init__(self) -> None:
        check_regularization_strength(self.lambda_)
        object.__setattr__(self, 'lambda_', float(self.lambda_))
        if self.w is not None:
            w = np.array(self.w, dtype=np.float64, copy=True)
            if w.ndim != 1 or w.size < 1:
                raise ValidationError(
                    f"w: expected a non-empty 1D weight vector, got shape {w.shape}"
                )
            w.flags.writeable = False
            object.__setattr__(self, 'w', w)

    # === Model-specific stateless functions ===

    @abstractmethod
    def _predict(
        self, w: NDArray[np.floating[Any]], X: NDArray[np.floating[Any]]
    ) -> NDArray[np.floating[Any]]:
        ...

    @abstractmethod
    def loss(
        self,
        w: NDArray[np.floating[Any]],
        X: NDArray[np.floating[Any]],
        y: NDArray[np.floating[Any]],
    ) -> float:
        """Loss at w. X must include the bias column."""
        ...

    @abstractmethod
    def loss_grad(
        self,
        w: NDArray[np.floating[Any]],
        X: NDArray[np.floating[Any]],
        y: NDArray[np.floating[Any]],
    ) -> NDArray[np.floating[Any]]:
        """Gradient of loss at w. X must include the bias column."""
        ...

    def _validate_target(self, y: NDArray[np.floating[Any]]) -> None:
        """Model-specific target checks; raise ValidationError on violation."""

    # === Fit / predict protocol ===

    @property
    def is_fitted(self) -> bool:
        return self.w is not None

    def fit(
        self,
        X: ArrayLike,
        y: ArrayLike,
        *,
        config: OptimizerConfig | None = None,
        backend: BackendChoice = 'auto',
    ) -> LinearModel:
        """
        Fit the model by maximum likelihood.

        Args:
            X: Feature matrix (n x p), without bias column
            y: Target vector (n,)
            config: Optimizer configuration (default: tol=1e-4, max_iter=100)
            backend: Optimizer backend, see minimize()

        Returns:
            A new fitted model with the same lambda_

        Raises:
            ValidationError: If X, y are malformed or y violates the
                model's distributional assumptions
            DimensionError: If X and y have different row counts
        """
        design = LinearDesign.from_arrays(X, y)
        model = self._prepare(design)

        X_bias = design.X_with_bias()
        y_arr = design.y
        w0 = np.zeros(design.p + 1, dtype=np.float64)

        def objective(w: NDArray[np.floating[Any]]) -> tuple[float, NDArray[np.floating[Any]]]:
            return model.loss(w, X_bias, y_arr), model.loss_grad(w, X_bias, y_arr)

        result = minimize(objective, w0, config=config, backend=backend, stacklevel=3)

        return replace(model, w=result.params.x, optimization=result)

    def _prepare(self, design: LinearDesign) -> LinearModel:
        """Validate the target and return the model the weights are fit on."""
        self._validate_target(design.y)
        return self

    def predict(self, X: ArrayLike) -> NDArray[np.floating[Any]]:
        """
        Predict targets for X (n x p, without bias column).

        Raises:
            NotFittedError: If the model has not been fitted
            DimensionError: If X has the wrong number of columns
        """
        w = self._require_fitted()
        return self._predict(w, add_bias_term(self._check_features(X, w)))

    # === Fitted-state accessors ===

    @property
    def intercept(self) -> float:
        """Bias weight w[0]."""
        return float(self._require_fitted()[0])

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        """Feature weights w[1:]."""
        return self._require_fitted()[1:]

    @property
    def converged(self) -> bool:
        """Whether the optimizer met its tolerance during fit."""
        self._require_fitted()
        if self.optimization is None:
            return True
        return self.optimization.params.converged

    @property
    def n_iter(self) -> int | None:
        """Optimizer iterations used by fit (None for user-supplied weights)."""
        self._require_fitted()
        if self.optimization is None:
            return None
        return self.optimization.params.n_iter

    # === Helpers ===

    def _require_fitted(self) -> NDArray[np.floating[Any]]:
        if self.w is None:
            name = type(self).__name__
            raise NotFittedError(
                f"{name} is not fitted; call fit(X, y) first", estimator=name
            )
        return self.w

    @staticmethod
    def _check_features(X: ArrayLike, w: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        X_arr = check_features(X, 'X')
        check_n_columns(X_arr, w.size - 1, 'X')
        return X_arr

    def _penalized(self, grad: NDArray[np.floating[Any]], w: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        """Add the ridge gradient to grad[1:]; the bias is not penalized."""
        grad[1:] += ridge_loss_grad(w[1:], self.lambda_)
        return grad


@dataclass(frozen=True, eq=False)
class LinearClassifier(LinearModel):
    """
    Linear model over categorical targets.

    Attributes:
        num_classes: Number of target categories seen during fit
    """
    num_classes: int | None = None

    def _prepare(self, design: LinearDesign) -> LinearClassifier:
        model = self._with_num_classes(int(np.unique(design.y).size))
        model._validate_target(design.y)
        return model

    def _with_num_classes(self, num_classes: int) -> LinearClassifier:
        return replace(self, num_classes=num_classes)

    @abstractmethod
    def _predict_proba(
        self, w: NDArray[np.floating[Any]], X: NDArray[np.floating[Any]]
    ) -> NDArray[np.floating[Any]]:
        ...

    def predict_proba(self, X: ArrayLike) -> NDArray[np.floating[Any]]:
        """
        Class probabilities for X (n x p, without bias column).

        Raises:
            NotFittedError: If the model has not been fitted
        """
        w = self._require_fitted()
        return self._predict_proba(w, add_bias_term(self._check_features(X, w)))
