"""
Core protocols for pylinmodels.

Structural interfaces (Protocol rather than ABC) shared between the
optimizers and the models that feed them:

    Objective: a differentiable function returning (value, gradient)
    Optimizer: a backend that minimizes an Objective from a start point
"""

from typing import Protocol, Any, TYPE_CHECKING, runtime_checkable

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from pylinmodels.core.result import Result


@runtime_checkable
class Objective(Protocol):
    """
    Differentiable objective f: R^d -> R.

    Calling the objective at x returns the pair (f(x), grad f(x)).
    Objectives must be pure: the same x always yields the same pair and
    x is never modified.
    """

    def __call__(
        self, x: NDArray[np.floating[Any]]
    ) -> tuple[float, NDArray[np.floating[Any]]]:
        ...


@runtime_checkable
class Optimizer(Protocol):
    """
    Protocol for optimizer backends.

    Backends are stateless apart from their configuration, so one instance
    can minimize any number of objectives.
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}', e.g. 'cpu_lbfgs', 'scipy_lbfgsb'.
        """
        ...

    def minimize(
        self,
        objective: Objective,
        x0: NDArray[np.floating[Any]],
    ) -> 'Result[Any]':
        """
        Minimize objective starting from x0.

        Returns:
            Result envelope whose params carry the minimizer

        Raises:
            NumericalError: If the objective is non-finite at x0
            ConvergenceError: If configured to treat non-convergence as fatal
        """
        ...
