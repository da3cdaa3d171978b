"""
Linear models fit by maximum likelihood.

Public API:
    LinearRegression(lambda_=0.0)    identity link, squared error
    LogisticRegression(lambda_=0.0)  logit link, Bernoulli likelihood
    PoissonRegression(lambda_=0.0)   log link, Poisson likelihood

Every model is an immutable value. fit(X, y) returns a new fitted model;
predict(X) requires a fitted one.

Example:
    >>> from pylinmodels.linear import PoissonRegression
    >>> model = PoissonRegression(lambda_=0.5).fit(X, counts)
    >>> print(model.intercept, model.coefficients)
"""

from pylinmodels.linear.base import LinearModel, LinearClassifier
from pylinmodels.linear.design import LinearDesign, add_bias_term
from pylinmodels.linear.regularization import ridge_loss, ridge_loss_grad
from pylinmodels.linear.linear_regression import LinearRegression
from pylinmodels.linear.logistic_regression import LogisticRegression
from pylinmodels.linear.poisson_regression import PoissonRegression

__all__ = [
    "LinearModel",
    "LinearClassifier",
    "LinearDesign",
    "add_bias_term",
    "ridge_loss",
    "ridge_loss_grad",
    "LinearRegression",
    "LogisticRegression",
    "PoissonRegression",
]
