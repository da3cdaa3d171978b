"""
Shared compute infrastructure for pylinmodels.

IMPORTANT: This is NOT where model-specific code lives. Those go in
their own subpackages. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    tolerances: Named comparison tolerances
    optimization: L-BFGS minimization and gradient checking
"""

from pylinmodels.core.compute.timing import Timer, timed
from pylinmodels.core.compute.tolerances import ToleranceTier, GRADIENT_CHECK, LOSS_VALUE

__all__ = [
    # Timing
    "Timer",
    "timed",
    # Tolerances
    "ToleranceTier",
    "GRADIENT_CHECK",
    "LOSS_VALUE",
]
