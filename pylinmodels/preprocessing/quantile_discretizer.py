"""
Quantile discretization.

Replaces each numerical feature value with the index of the empirical
quantile bucket it falls into. Bucket boundaries are learned once, at fit
time, from the percentiles k / B (k = 0..B) of each numerical column:

    cuts       q_0 <= q_1 <= ... <= q_B
    buckets    (-inf, q_1), (q_1, q_2), ..., (q_{B-1}, +inf)

The outer bounds are widened to -inf / +inf, so every finite value seen
later falls in some bucket. Bounds are inclusive on both sides and the
first matching bucket wins, so a value equal to a shared cut goes to the
lower bucket.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Iterable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinmodels.core.exceptions import (
    InternalConsistencyError,
    NotFittedError,
    ValidationError,
)
from pylinmodels.core.validation import (
    check_array,
    check_2d,
    check_finite,
    check_min_samples,
    check_n_columns,
)
from pylinmodels.preprocessing._quantile_types import check_quantile_type, sample_quantiles
from pylinmodels.preprocessing.feature_index import FeatureIndex

Buckets = tuple[tuple[float, float], ...]


@dataclass(frozen=True, eq=False)
class QuantileDiscretizer:
    """
    An immutable preprocessor that discretizes numerical features into
    quantile buckets. Categorical columns are passed through unchanged.

    Attributes:
        bucket_counts: Number of buckets for each numerical column, in the
            order of feature_index.numerical
        feature_index: Feature types of the matrices this discretizer sees
        quantile_type: Hyndman-Fan sample quantile definition (4-9)
        quantiles: Learned (lower, upper) bounds per numerical column, or
            None while unfitted

    Examples:
        Quartiles of one numerical and one categorical column:

        >>> index = FeatureIndex.from_types(['numerical', 'categorical'])
        >>> X = np.array([[-1.0, 0.0], [0.0, 1.0], [2.0, 0.0], [5.0, 0.0]])
        >>> discretizer = QuantileDiscretizer.from_bucket_count(4, index).fit(X)
        >>> discretizer.transform(X)[:, 0]
        array([0., 1., 2., 3.])
    """
    bucket_counts: tuple[int, ...]
    feature_index: FeatureIndex
    quantile_type: int = 6
    quantiles: tuple[Buckets, ...] | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        counts = tuple(_as_bucket_count(c) for c in _iterable(self.bucket_counts))
        object.__setattr__(self, 'bucket_counts', counts)

        n_numerical = len(self.feature_index.numerical)
        if n_numerical != 0 and n_numerical != len(counts):
            raise ValidationError(
                "A bucket count should be given for every numerical column: "
                f"{n_numerical} numerical columns, {len(counts)} bucket counts"
            )
        check_quantile_type(self.quantile_type)

        if self.quantiles is not None and len(self.quantiles) != n_numerical:
            raise ValidationError(
                f"quantiles: expected boundaries for {n_numerical} numerical columns, "
                f"got {len(self.quantiles)}"
            )

    @classmethod
    def from_bucket_count(
        cls,
        bucket_count: int,
        feature_index: FeatureIndex,
        *,
        quantile_type: int = 6,
    ) -> QuantileDiscretizer:
        """Use the same number of buckets for every numerical column."""
        n_numerical = len(feature_index.numerical)
        return cls(
            bucket_counts=(bucket_count,) * n_numerical,
            feature_index=feature_index,
            quantile_type=quantile_type,
        )

    @property
    def is_fitted(self) -> bool:
        return self.quantiles is not None

    def fit(self, X: ArrayLike) -> QuantileDiscretizer:
        """
        Learn bucket boundaries from X.

        Returns:
            A new fitted discretizer; self is unchanged

        Raises:
            ValidationError: If X is not a finite 2D matrix with at least
                one row
            DimensionError: If X's column count differs from the feature index
        """
        X_arr = self._check_matrix(X)
        check_min_samples(X_arr, 1, 'X')

        quantiles = tuple(
            compute_buckets(np.sort(X_arr[:, col]), count, self.quantile_type)
            for col, count in zip(self.feature_index.numerical, self.bucket_counts)
        )
        return replace(self, quantiles=quantiles)

    def transform(self, X: ArrayLike) -> NDArray[np.floating[Any]]:
        """
        Replace numerical values by their bucket index.

        Works on a copy; X is not modified.

        Raises:
            NotFittedError: If the discretizer has not been fitted
            ValidationError: If a numerical value is NaN
            DimensionError: If X's column count differs from the feature index
            InternalConsistencyError: If a value matches no bucket
        """
        if self.quantiles is None:
            raise NotFittedError(
                "QuantileDiscretizer is not fitted; call fit(X) first",
                estimator=type(self).__name__,
            )

        X_out = np.array(self._check_matrix(X, finite=False), dtype=np.float64, copy=True)
        numerical = X_out[:, list(self.feature_index.numerical)]
        if np.any(np.isnan(numerical)):
            raise ValidationError(
                f"X: numerical columns contain {int(np.sum(np.isnan(numerical)))} NaN values"
            )
        for col, buckets in zip(self.feature_index.numerical, self.quantiles):
            X_out[:, col] = assign_buckets(X_out[:, col], buckets)
        return X_out

    def fit_transform(self, X: ArrayLike) -> NDArray[np.floating[Any]]:
        """Equivalent to fit(X).transform(X)."""
        return self.fit(X).transform(X)

    def _check_matrix(self, X: ArrayLike, finite: bool = True) -> NDArray[np.floating[Any]]:
        X_arr = check_array(X, 'X')
        check_2d(X_arr, 'X')
        check_n_columns(X_arr, len(self.feature_index), 'X')
        if finite:
            check_finite(X_arr[:, list(self.feature_index.numerical)], 'X')
        return X_arr


def compute_buckets(x_sorted: NDArray[np.floating[Any]], bucket_count: int, qtype: int = 6) -> Buckets:
    """
    Bucket boundaries for one sorted column.

    Cut points sit at percentiles k / bucket_count, k = 0..bucket_count;
    consecutive cuts form the buckets and the outer bounds are widened to
    -inf / +inf.
    """
    probs = np.arange(bucket_count + 1, dtype=np.float64) / bucket_count
    cuts = sample_quantiles(x_sorted, probs, qtype)
    cuts[0] = -np.inf
    cuts[-1] = np.inf
    return tuple((float(lo), float(hi)) for lo, hi in zip(cuts[:-1], cuts[1:]))


def assign_buckets(values: NDArray[np.floating[Any]], buckets: Buckets) -> NDArray[np.floating[Any]]:
    """Index of the first (lo, hi) with lo <= v <= hi, for every v."""
    bounds = np.asarray(buckets, dtype=np.float64)
    lo, hi = bounds[:, 0], bounds[:, 1]
    matches = (lo[np.newaxis, :] <= values[:, np.newaxis]) & (values[:, np.newaxis] <= hi[np.newaxis, :])

    unmatched = np.flatnonzero(~matches.any(axis=1))
    if unmatched.size > 0:
        raise InternalConsistencyError(
            f"Value {values[unmatched[0]]!r} at row {int(unmatched[0])} "
            f"falls in none of {len(buckets)} buckets"
        )
    return matches.argmax(axis=1).astype(np.float64)


def _iterable(bucket_counts: Any) -> Iterable[Any]:
    if isinstance(bucket_counts, (int, np.integer)):
        return (bucket_counts,)
    return np.asarray(bucket_counts).ravel().tolist()


def _as_bucket_count(value: Any) -> int:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, (int, np.integer)) or isinstance(value, bool) or value < 1:
        raise ValidationError(f"bucket_counts: each count must be an integer >= 1, got {value!r}")
    return int(value)
