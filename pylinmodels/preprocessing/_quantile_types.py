"""
Continuous sample quantile definitions (Hyndman & Fan types 4-9).

Each type places the k-th order statistic at plotting position
p_k = (k - a) / (n + 1 - a - b) and interpolates linearly between them:

    type 4: a=0,   b=1       type 7: a=1,   b=1
    type 5: a=1/2, b=1/2     type 8: a=1/3, b=1/3
    type 6: a=0,   b=0       type 9: a=3/8, b=3/8

Type 6 (position p * (n + 1)) is the percentile used by the quantile
discretizer by default.

Reference:
    Hyndman, R.J. and Fan, Y. (1996) "Sample Quantiles in Statistical
    Packages", The American Statistician, 50(4), 361-365.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pylinmodels.core.exceptions import ValidationError

_PLOTTING_POSITIONS: dict[int, tuple[float, float]] = {
    4: (0.0, 1.0),
    5: (0.5, 0.5),
    6: (0.0, 0.0),
    7: (1.0, 1.0),
    8: (1.0 / 3.0, 1.0 / 3.0),
    9: (3.0 / 8.0, 3.0 / 8.0),
}

# 4 * machine epsilon, as in R's quantile.default
_FUZZ = 4.0 * np.finfo(np.float64).eps

QUANTILE_TYPES = tuple(sorted(_PLOTTING_POSITIONS))


def check_quantile_type(qtype: int) -> None:
    if qtype not in _PLOTTING_POSITIONS:
        raise ValidationError(
            f"quantile_type: must be one of {QUANTILE_TYPES}, got {qtype!r}"
        )


def sample_quantiles(x_sorted: NDArray, probs: NDArray, qtype: int = 6) -> NDArray:
    """
    Quantiles of a sorted, NaN-free 1D sample.

    Positions below the first order statistic clamp to the minimum, those
    beyond the last clamp to the maximum.

    Args:
        x_sorted: Ascending 1D sample, length >= 1
        probs: Probabilities in [0, 1]
        qtype: Hyndman-Fan type, 4-9

    Returns:
        One quantile per probability
    """
    check_quantile_type(qtype)
    n = x_sorted.shape[0]
    if n == 0:
        raise ValidationError("sample_quantiles: empty sample")

    probs = np.asarray(probs, dtype=np.float64)
    if n == 1:
        return np.full(probs.shape, x_sorted[0], dtype=np.float64)

    a, b = _PLOTTING_POSITIONS[qtype]
    pos = a + probs * (n + 1.0 - a - b)
    j = np.floor(pos + _FUZZ).astype(np.int64)
    h = pos - j
    h = np.where(np.abs(h) < _FUZZ, 0.0, h)

    # pos is 1-indexed: order statistic k lives at x_sorted[k - 1]
    lo = x_sorted[np.clip(j - 1, 0, n - 1)]
    hi = x_sorted[np.clip(j, 0, n - 1)]
    result = (1.0 - h) * lo + h * hi
    result = np.where(j < 1, x_sorted[0], result)
    result = np.where(j >= n, x_sorted[n - 1], result)
    return result
