"""
Optimizer configuration.

All optimizer tunables live in one frozen dataclass so a fit can be
reproduced from its configuration alone.
"""

from __future__ import annotations

from dataclasses import dataclass

from pylinmodels.core.exceptions import ValidationError


@dataclass(frozen=True)
class OptimizerConfig:
    """
    Configuration shared by all optimizer backends.

    Attributes:
        tol: Relative gradient tolerance. Iteration stops once
            ||grad||_2 <= tol * max(1, |f|).
        max_iter: Maximum number of quasi-Newton iterations.
        history_size: Number of (s, y) correction pairs kept by L-BFGS.
        c1: Sufficient-decrease (Armijo) constant of the Wolfe conditions.
        c2: Curvature constant of the Wolfe conditions.
        min_step: Step-length floor of the backtracking fallback.
        max_line_search: Maximum trial steps per line search.
        raise_on_failure: Raise ConvergenceError instead of warning when
            the iteration budget is exhausted or the line search stalls.
    """
    tol: float = 1e-4
    max_iter: int = 100
    history_size: int = 10
    c1: float = 1e-4
    c2: float = 0.9
    min_step: float = 1e-20
    max_line_search: int = 20
    raise_on_failure: bool = False

    def __post_init__(self) -> None:
        if not self.tol > 0:
            raise ValidationError(f"tol: must be > 0, got {self.tol}")
        if self.max_iter < 1:
            raise ValidationError(f"max_iter: must be >= 1, got {self.max_iter}")
        if self.history_size < 1:
            raise ValidationError(f"history_size: must be >= 1, got {self.history_size}")
        if not 0 < self.c1 < self.c2 < 1:
            raise ValidationError(
                f"Wolfe constants must satisfy 0 < c1 < c2 < 1, got c1={self.c1}, c2={self.c2}"
            )
        if not self.min_step > 0:
            raise ValidationError(f"min_step: must be > 0, got {self.min_step}")
        if self.max_line_search < 1:
            raise ValidationError(
                f"max_line_search: must be >= 1, got {self.max_line_search}"
            )

    def gradient_threshold(self, fval: float) -> float:
        """Gradient-norm threshold at objective value fval."""
        return self.tol * max(1.0, abs(fval))


DEFAULT_CONFIG = OptimizerConfig()
