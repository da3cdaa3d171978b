"""
Inverse link functions.

Each Link maps the linear predictor eta = Xw to the mean of the response:

    identity:  mu = eta                 (linear regression)
    logit:     mu = 1 / (1 + exp(-eta)) (logistic regression)
    log:       mu = exp(eta)            (Poisson regression)

References:
    McCullagh, P., & Nelder, J. A. (1989). Generalized Linear Models (2nd ed.)
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np
from numpy.typing import NDArray
from scipy.special import expit


class Link(ABC):
    """Inverse of a link function g(mu) = eta."""

    @abstractmethod
    def linkinv(self, eta: NDArray) -> NDArray:
        """g^-1(eta) -> mu."""
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class IdentityLink(Link):

    def linkinv(self, eta: NDArray) -> NDArray:
        return eta.copy()


class LogitLink(Link):
    """Logistic sigmoid; expit saturates to 0 / 1 without overflow."""

    def linkinv(self, eta: NDArray) -> NDArray:
        return expit(eta)


class LogLink(Link):

    def linkinv(self, eta: NDArray) -> NDArray:
        # exp(709) is the float64 limit; predictions saturate instead of overflowing
        return np.exp(np.clip(eta, -500, 500))
