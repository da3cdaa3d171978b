"""
pylinmodels: immutable linear models and feature preprocessing for Python.

Linear, logistic and Poisson regression with ridge regularization, fit by
maximum likelihood with L-BFGS, plus quantile discretization of numerical
features.

Submodules:
    linear: LinearRegression, LogisticRegression, PoissonRegression
    preprocessing: QuantileDiscretizer, FeatureIndex
    core: exceptions, validation, optimization
"""

__version__ = "0.1.0"

from pylinmodels import linear
from pylinmodels import preprocessing

__all__ = [
    "__version__",
    "linear",
    "preprocessing",
]
