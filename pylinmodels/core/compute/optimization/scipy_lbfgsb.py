"""
scipy backend: L-BFGS-B through scipy.optimize.minimize.

Unbounded use of the Fortran L-BFGS-B routine. Useful as an independent
cross-check of the native optimizer; configuration maps onto scipy's
options (maxiter, maxcor, gtol).
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy.optimize import minimize

from pylinmodels.core.exceptions import NumericalError
from pylinmodels.core.protocols import Objective
from pylinmodels.core.result import Result
from pylinmodels.core.compute.timing import Timer
from pylinmodels.core.compute.optimization.config import OptimizerConfig, DEFAULT_CONFIG
from pylinmodels.core.compute.optimization.solution import OptimizeParams


class ScipyLBFGSBOptimizer:
    """L-BFGS-B backend delegating to scipy.optimize.minimize."""

    def __init__(self, config: OptimizerConfig | None = None):
        self._config = config if config is not None else DEFAULT_CONFIG

    @property
    def name(self) -> str:
        return 'scipy_lbfgsb'

    @property
    def config(self) -> OptimizerConfig:
        return self._config

    def minimize(
        self,
        objective: Objective,
        x0: NDArray[np.floating[Any]],
    ) -> Result[OptimizeParams]:
        config = self._config
        timer = Timer()
        timer.start()
        warnings_list: list[str] = []

        x0 = np.array(x0, dtype=np.float64, copy=True).ravel()
        f0, g0 = objective(x0)
        if not np.isfinite(f0) or not np.all(np.isfinite(g0)):
            raise NumericalError(
                f"Objective is not finite at the starting point (f={f0})"
            )

        with timer.section('optimization'):
            opt_result = minimize(
                objective,
                x0,
                jac=True,
                method='L-BFGS-B',
                options={
                    'maxiter': config.max_iter,
                    'maxcor': config.history_size,
                    'gtol': config.tol,
                    'maxls': config.max_line_search,
                },
            )

        x = np.asarray(opt_result.x, dtype=np.float64)
        fun = float(opt_result.fun)
        grad = np.asarray(opt_result.jac, dtype=np.float64)
        grad_norm = float(np.linalg.norm(grad))
        converged = bool(opt_result.success)
        message = str(getattr(opt_result, 'message', ''))
        n_iter = int(getattr(opt_result, 'nit', 0))
        n_fev = int(getattr(opt_result, 'nfev', 0))

        if not converged:
            warnings_list.append(
                f"L-BFGS-B did not converge after {n_iter} iterations: {message}"
            )

        timer.stop()

        params = OptimizeParams(
            x=x,
            fun=fun,
            grad=grad,
            grad_norm=grad_norm,
            n_iter=n_iter,
            n_fev=n_fev,
            converged=converged,
            message=message,
        )

        return Result(
            params=params,
            info={
                'method': 'L-BFGS-B',
                'converged': converged,
                'n_iter': n_iter,
                'n_fev': n_fev,
                'history_size': config.history_size,
                'reason': None if converged else 'scipy',
                'message': message,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
