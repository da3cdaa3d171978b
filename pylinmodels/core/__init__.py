"""
Core infrastructure for pylinmodels.

This module provides shared abstractions and utilities used by the model
and preprocessing subpackages.

Key components:
    protocols: Objective, Optimizer protocols
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, tolerances, optimization
"""

from pylinmodels.core.protocols import Objective, Optimizer
from pylinmodels.core.result import Result
from pylinmodels.core.exceptions import (
    PyLinModelsError,
    ValidationError,
    DimensionError,
    NotFittedError,
    InternalConsistencyError,
    NumericalError,
    ConvergenceError,
)

__all__ = [
    # Protocols
    "Objective",
    "Optimizer",
    # Result
    "Result",
    # Exceptions
    "PyLinModelsError",
    "ValidationError",
    "DimensionError",
    "NotFittedError",
    "InternalConsistencyError",
    "NumericalError",
    "ConvergenceError",
]
