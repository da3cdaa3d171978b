"""
Optimization utilities for pylinmodels.

Quasi-Newton minimization of smooth differentiable objectives, used to
fit linear models by maximum likelihood.

Public API:
    minimize(objective, x0, ...) -> Result[OptimizeParams]
"""

from pylinmodels.core.compute.optimization.config import OptimizerConfig, DEFAULT_CONFIG
from pylinmodels.core.compute.optimization.solution import OptimizeParams
from pylinmodels.core.compute.optimization.lbfgs import LBFGSOptimizer
from pylinmodels.core.compute.optimization.scipy_lbfgsb import ScipyLBFGSBOptimizer
from pylinmodels.core.compute.optimization.solvers import minimize
from pylinmodels.core.compute.optimization.gradients import approx_gradient, check_gradient

__all__ = [
    "minimize",
    "OptimizerConfig",
    "DEFAULT_CONFIG",
    "OptimizeParams",
    "LBFGSOptimizer",
    "ScipyLBFGSBOptimizer",
    "approx_gradient",
    "check_gradient",
]
