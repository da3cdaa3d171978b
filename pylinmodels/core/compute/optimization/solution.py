"""
Optimizer result payload.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class OptimizeParams:
    """
    Parameter payload produced by every optimizer backend.

    ``x`` is the best iterate found, which is the minimizer whenever
    ``converged`` is True.
    """
    x: NDArray[np.floating[Any]]
    fun: float
    grad: NDArray[np.floating[Any]]
    grad_norm: float
    n_iter: int
    n_fev: int
    converged: bool
    message: str
