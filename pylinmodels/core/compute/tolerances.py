"""
Tolerance tiers for numerical comparison.

Named (rtol, atol) pairs used wherever two numerically computed quantities
are compared, most notably analytic gradients against centered finite
differences.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str

    def allclose(self, actual, desired) -> bool:
        """Elementwise |actual - desired| <= atol + rtol * |desired|."""
        return bool(np.allclose(actual, desired, rtol=self.rtol, atol=self.atol))


# Analytic gradient vs. centered finite differences
GRADIENT_CHECK = ToleranceTier(
    rtol=1e-4,
    atol=1e-4,
    name='gradient_check',
    description='Analytic gradient matches centered finite differences',
)

# Loss values reported by the models vs. closed-form references
LOSS_VALUE = ToleranceTier(
    rtol=1e-10,
    atol=1e-4,
    name='loss_value',
    description='Loss value matches a hand-computed reference',
)
