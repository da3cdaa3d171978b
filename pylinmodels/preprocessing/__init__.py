"""
Feature preprocessing.

Public API:
    QuantileDiscretizer(bucket_counts, feature_index)
    QuantileDiscretizer.from_bucket_count(bucket_count, feature_index)
    FeatureIndex, FeatureType

Example:
    >>> from pylinmodels.preprocessing import FeatureIndex, QuantileDiscretizer
    >>> index = FeatureIndex.all_numerical(X.shape[1])
    >>> X_binned = QuantileDiscretizer.from_bucket_count(4, index).fit_transform(X)
"""

from pylinmodels.preprocessing.feature_index import FeatureIndex, FeatureType
from pylinmodels.preprocessing.quantile_discretizer import QuantileDiscretizer

__all__ = [
    "FeatureIndex",
    "FeatureType",
    "QuantileDiscretizer",
]
