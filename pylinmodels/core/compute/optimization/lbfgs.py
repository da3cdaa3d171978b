"""
Limited-memory BFGS.

Reference CPU optimizer for the smooth, convex objectives produced by the
linear models. Each iteration:

    1. d = -H g, where H (the inverse-Hessian approximation) is applied
       implicitly by the two-loop recursion over the last m (s, y) pairs
       with initial scaling gamma = s'y / y'y
    2. alpha from a strong-Wolfe line search (scipy.optimize.line_search);
       if that fails, Armijo backtracking down to config.min_step
    3. x <- x + alpha d, store s = x_new - x, y = g_new - g when s'y > 0

Stops when ||g||_2 <= tol * max(1, |f|), when max_iter iterations have run,
or when the line search can no longer decrease f. Every accepted step
strictly decreases f, so the final iterate is also the best one seen.

References:
    Nocedal, J. & Wright, S. J. (2006). Numerical Optimization (2nd ed.),
    Algorithm 7.4 (two-loop recursion) and 7.5 (L-BFGS).
"""

from __future__ import annotations

import warnings
from collections import deque
from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy.optimize import line_search

from pylinmodels.core.exceptions import NumericalError
from pylinmodels.core.protocols import Objective
from pylinmodels.core.result import Result
from pylinmodels.core.compute.timing import Timer
from pylinmodels.core.compute.optimization.config import OptimizerConfig, DEFAULT_CONFIG
from pylinmodels.core.compute.optimization.solution import OptimizeParams


# (s, y, 1 / s'y)
_Correction = tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]], float]


class _CachedObjective:
    """
    Wraps an Objective so value and gradient requests at the same point
    share one evaluation, and counts evaluations.
    """

    def __init__(self, objective: Objective):
        self._objective = objective
        self._x: NDArray | None = None
        self._f = 0.0
        self._g: NDArray | None = None
        self.n_fev = 0

    def __call__(self, x: NDArray) -> tuple[float, NDArray]:
        if self._x is None or not np.array_equal(x, self._x):
            f, g = self._objective(x)
            self._x = np.array(x, dtype=np.float64, copy=True)
            self._f = float(f)
            self._g = np.array(g, dtype=np.float64, copy=True)
            self.n_fev += 1
        return self._f, self._g

    def value(self, x: NDArray) -> float:
        f = self(x)[0]
        # NaN never satisfies a comparison; the line search treats inf as "too far"
        return f if not np.isnan(f) else np.inf

    def gradient(self, x: NDArray) -> NDArray:
        return self(x)[1]


def two_loop_recursion(
    grad: NDArray[np.floating[Any]],
    history: deque[_Correction],
) -> NDArray[np.floating[Any]]:
    """
    Apply the L-BFGS inverse-Hessian approximation to grad.

    With an empty history this is the identity, i.e. steepest descent.
    """
    q = grad.copy()
    alphas = []
    for s, y, rho in reversed(history):
        a = rho * float(s @ q)
        q -= a * y
        alphas.append(a)

    if history:
        s, y, _ = history[-1]
        q *= float(s @ y) / float(y @ y)

    for (s, y, rho), a in zip(history, reversed(alphas)):
        b = rho * float(y @ q)
        q += (a - b) * s

    return q


class LBFGSOptimizer:
    """
    CPU L-BFGS backend.

    Implements the Optimizer protocol. Deterministic: identical objective,
    start point and configuration always give the identical result.
    """

    def __init__(self, config: OptimizerConfig | None = None):
        self._config = config if config is not None else DEFAULT_CONFIG

    @property
    def name(self) -> str:
        return 'cpu_lbfgs'

    @property
    def config(self) -> OptimizerConfig:
        return self._config

    def minimize(
        self,
        objective: Objective,
        x0: NDArray[np.floating[Any]],
    ) -> Result[OptimizeParams]:
        """
        Minimize objective starting from x0.

        Raises:
            NumericalError: If the objective or its gradient is non-finite at x0
        """
        config = self._config
        timer = Timer()
        timer.start()

        fobj = _CachedObjective(objective)
        x = np.array(x0, dtype=np.float64, copy=True).ravel()

        with timer.section('objective'):
            f, g = fobj(x)
        if not np.isfinite(f) or not np.all(np.isfinite(g)):
            raise NumericalError(
                f"Objective is not finite at the starting point (f={f})"
            )

        history: deque[_Correction] = deque(maxlen=config.history_size)
        # scipy's BFGS trick: makes the first trial step ~ 1 / ||g||
        old_old_fval = f + float(np.linalg.norm(g)) / 2.0

        converged = False
        reason: str | None = None
        message = ''
        n_iter = 0
        n_fallback = 0

        while True:
            grad_norm = float(np.linalg.norm(g))
            if grad_norm <= config.gradient_threshold(f):
                converged = True
                message = 'gradient norm below tolerance'
                break
            if n_iter >= config.max_iter:
                reason = 'max_iterations'
                message = f'maximum number of iterations ({config.max_iter}) reached'
                break

            with timer.section('direction'):
                d = -two_loop_recursion(g, history)
                slope = float(g @ d)
                if not slope < 0:
                    history.clear()
                    d = -g
                    slope = -grad_norm ** 2

            with timer.section('line_search'):
                step, used_fallback = self._line_search(
                    fobj, x, f, g, d, slope,
                    old_old_fval if not history else None,
                )
            n_fallback += used_fallback

            if step is None:
                reason = 'line_search'
                message = 'line search could not decrease the objective'
                break

            x_new = x + step * d
            f_new, g_new = fobj(x_new)
            if not f_new < f:
                reason = 'line_search'
                message = 'line search could not decrease the objective'
                break

            s = x_new - x
            y = g_new - g
            sy = float(s @ y)
            if sy > 1e-10 * float(np.linalg.norm(s)) * float(np.linalg.norm(y)):
                history.append((s, y, 1.0 / sy))

            old_old_fval = f
            x, f, g = x_new, f_new, g_new
            n_iter += 1

        timer.stop()

        warnings_list: list[str] = []
        if not converged:
            warnings_list.append(
                f"L-BFGS did not converge after {n_iter} iterations: {message} "
                f"(gradient norm={grad_norm:.3e}, "
                f"threshold={config.gradient_threshold(f):.3e})"
            )
        if n_fallback > 0:
            warnings_list.append(
                f"line search fell back to Armijo backtracking {n_fallback} times "
                f"(Wolfe conditions could not be met)"
            )

        params = OptimizeParams(
            x=x,
            fun=f,
            grad=g,
            grad_norm=grad_norm,
            n_iter=n_iter,
            n_fev=fobj.n_fev,
            converged=converged,
            message=message,
        )

        return Result(
            params=params,
            info={
                'method': 'lbfgs',
                'converged': converged,
                'n_iter': n_iter,
                'n_fev': fobj.n_fev,
                'history_size': config.history_size,
                'line_search_fallbacks': n_fallback,
                'reason': reason,
                'message': message,
                'threshold': config.gradient_threshold(f),
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )

    def _line_search(
        self,
        fobj: _CachedObjective,
        x: NDArray,
        f: float,
        g: NDArray,
        d: NDArray,
        slope: float,
        old_old_fval: float | None,
    ) -> tuple[float | None, bool]:
        """
        Step length along d. Returns (step, used_fallback); step is None
        when no step down to config.min_step gives sufficient decrease.
        """
        config = self._config

        with warnings.catch_warnings():
            warnings.filterwarnings(
                'ignore', message='The line search algorithm', category=RuntimeWarning,
            )
            step = line_search(
                fobj.value, fobj.gradient, x, d,
                gfk=g,
                old_fval=f,
                old_old_fval=old_old_fval,
                c1=config.c1,
                c2=config.c2,
                maxiter=config.max_line_search,
            )[0]

        if step is not None and self._sufficient_decrease(fobj, x, f, d, slope, step):
            return float(step), False

        return self._backtrack(fobj, x, f, d, slope), True

    def _backtrack(
        self,
        fobj: _CachedObjective,
        x: NDArray,
        f: float,
        d: NDArray,
        slope: float,
    ) -> float | None:
        """Armijo backtracking, halving from a unit step down to min_step."""
        step = min(1.0, 1.0 / max(float(np.linalg.norm(d)), 1e-300))
        while step >= self._config.min_step:
            if self._sufficient_decrease(fobj, x, f, d, slope, step):
                return step
            step *= 0.5
        return None

    def _sufficient_decrease(
        self,
        fobj: _CachedObjective,
        x: NDArray,
        f: float,
        d: NDArray,
        slope: float,
        step: float,
    ) -> bool:
        f_new = fobj.value(x + step * d)
        return bool(np.isfinite(f_new) and f_new <= f + self._config.c1 * step * slope)
