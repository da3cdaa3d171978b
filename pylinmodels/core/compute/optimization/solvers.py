"""
Solver dispatch for numeric optimization.

This module provides the minimize() function (public API) and backend
selection.
"""

from typing import Literal
import warnings

import numpy as np
from numpy.typing import ArrayLike

from pylinmodels.core.exceptions import ConvergenceError
from pylinmodels.core.protocols import Objective, Optimizer
from pylinmodels.core.result import Result
from pylinmodels.core.validation import check_array, check_1d, check_finite
from pylinmodels.core.compute.optimization.config import OptimizerConfig, DEFAULT_CONFIG
from pylinmodels.core.compute.optimization.lbfgs import LBFGSOptimizer
from pylinmodels.core.compute.optimization.scipy_lbfgsb import ScipyLBFGSBOptimizer
from pylinmodels.core.compute.optimization.solution import OptimizeParams


# Type alias for backend selection
BackendChoice = Literal['auto', 'lbfgs', 'cpu_lbfgs', 'scipy', 'scipy_lbfgsb']


def minimize(
    objective: Objective,
    x0: ArrayLike,
    *,
    config: OptimizerConfig | None = None,
    backend: BackendChoice = 'auto',
    stacklevel: int = 2,
) -> Result[OptimizeParams]:
    """
    Minimize a differentiable objective with L-BFGS.

    Non-convergence is not fatal by default: the best iterate is returned,
    the reason is recorded in ``Result.warnings`` and a RuntimeWarning is
    emitted. Set ``config.raise_on_failure`` to raise ConvergenceError
    instead. Every other entry of ``Result.warnings`` (such as line-search
    fallbacks) is emitted as a RuntimeWarning too, also on converged runs.

    Args:
        objective: Callable returning (value, gradient) at a point
        x0: Starting point (1D)
        config: Optimizer configuration (tolerance, iteration cap, history)
        backend: Optimizer backend:
            - 'auto' / 'lbfgs' / 'cpu_lbfgs': native L-BFGS
            - 'scipy' / 'scipy_lbfgsb': scipy.optimize L-BFGS-B
        stacklevel: Passed to warnings.warn; callers that wrap minimize
            add one per wrapping frame so warnings point at user code

    Returns:
        Result[OptimizeParams] with the minimizer in ``params.x``

    Raises:
        ValidationError: If x0 is not a finite 1D numeric array
        NumericalError: If the objective is non-finite at x0
        ConvergenceError: If config.raise_on_failure and no convergence
        ValueError: If backend is unknown

    Example:
        >>> def quadratic(x):
        ...     return float(x @ x), 2.0 * x
        >>> result = minimize(quadratic, np.ones(3))
        >>> np.allclose(result.params.x, 0.0, atol=1e-4)
        True
    """
    x0_arr = check_array(x0, 'x0')
    check_1d(x0_arr, 'x0')
    check_finite(x0_arr, 'x0')

    config = config if config is not None else DEFAULT_CONFIG
    backend_impl = _get_backend(backend, config)

    result = backend_impl.minimize(objective, x0_arr.astype(np.float64))

    if not result.params.converged and config.raise_on_failure:
        message = result.warnings[0] if result.warnings else result.params.message
        raise ConvergenceError(
            message,
            iterations=result.params.n_iter,
            final_change=result.params.grad_norm,
            reason=result.info.get('reason'),
            threshold=config.tol,
        )

    for message in result.warnings:
        warnings.warn(message, RuntimeWarning, stacklevel=stacklevel)

    return result


def _get_backend(choice: BackendChoice, config: OptimizerConfig) -> Optimizer:
    """
    Select and instantiate the appropriate backend.

    Raises:
        ValueError: If unknown backend specified
    """
    if choice in ('auto', 'lbfgs', 'cpu_lbfgs'):
        return LBFGSOptimizer(config)

    elif choice in ('scipy', 'scipy_lbfgsb'):
        return ScipyLBFGSBOptimizer(config)

    else:
        raise ValueError(f"Unknown backend: {choice!r}")
