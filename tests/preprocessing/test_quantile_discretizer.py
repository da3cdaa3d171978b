"""
Tests for QuantileDiscretizer and sample quantile definitions.
"""

from dataclasses import FrozenInstanceError

import numpy as np
import pytest

from pylinmodels.core.exceptions import (
    DimensionError,
    InternalConsistencyError,
    NotFittedError,
    ValidationError,
)
from pylinmodels.preprocessing import FeatureIndex, QuantileDiscretizer
from pylinmodels.preprocessing._quantile_types import QUANTILE_TYPES, sample_quantiles
from pylinmodels.preprocessing.quantile_discretizer import assign_buckets, compute_buckets


NUM_CAT = FeatureIndex.from_types(['numerical', 'categorical'])


@pytest.fixture
def quartile_data():
    return np.array([
        [-1.0, 0.0],
        [0.0, 1.0],
        [2.0, 0.0],
        [5.0, 0.0],
    ])


# ═══════════════════════════════════════════════════════════════════════
# Sample quantiles
# ═══════════════════════════════════════════════════════════════════════


NUMPY_METHODS = {
    4: 'interpolated_inverted_cdf',
    5: 'hazen',
    6: 'weibull',
    7: 'linear',
    8: 'median_unbiased',
    9: 'normal_unbiased',
}


class TestSampleQuantiles:

    @pytest.mark.parametrize("qtype", QUANTILE_TYPES)
    def test_matches_numpy(self, rng, qtype):
        x = np.sort(rng.standard_normal(37))
        probs = np.linspace(0.0, 1.0, 11)
        np.testing.assert_allclose(
            sample_quantiles(x, probs, qtype),
            np.quantile(x, probs, method=NUMPY_METHODS[qtype]),
            rtol=1e-12, atol=1e-12,
        )

    def test_type6_quartiles(self):
        x = np.array([-1.0, 0.0, 2.0, 5.0])
        np.testing.assert_allclose(
            sample_quantiles(x, np.array([0.0, 0.25, 0.5, 0.75, 1.0])),
            [-1.0, -0.75, 1.0, 4.25, 5.0],
        )

    def test_single_value(self):
        np.testing.assert_array_equal(
            sample_quantiles(np.array([3.0]), np.array([0.0, 0.5, 1.0])),
            [3.0, 3.0, 3.0],
        )

    def test_empty_sample(self):
        with pytest.raises(ValidationError, match="empty"):
            sample_quantiles(np.array([]), np.array([0.5]))

    @pytest.mark.parametrize("qtype", [1, 3, 10])
    def test_unsupported_type(self, qtype):
        with pytest.raises(ValidationError, match="quantile_type"):
            sample_quantiles(np.array([1.0, 2.0]), np.array([0.5]), qtype)


# ═══════════════════════════════════════════════════════════════════════
# Bucket construction and assignment
# ═══════════════════════════════════════════════════════════════════════


class TestBuckets:

    def test_outer_bounds_widened(self):
        buckets = compute_buckets(np.array([-1.0, 0.0, 2.0, 5.0]), 4)
        assert buckets == (
            (-np.inf, -0.75),
            (-0.75, 1.0),
            (1.0, 4.25),
            (4.25, np.inf),
        )

    def test_single_bucket(self):
        assert compute_buckets(np.array([1.0, 2.0]), 1) == ((-np.inf, np.inf),)

    def test_shared_cut_goes_to_lower_bucket(self):
        buckets = ((-np.inf, 1.0), (1.0, np.inf))
        np.testing.assert_array_equal(assign_buckets(np.array([1.0]), buckets), [0.0])

    def test_gap_between_buckets(self):
        buckets = ((-np.inf, 0.0), (1.0, np.inf))
        with pytest.raises(InternalConsistencyError, match="falls in none of 2 buckets"):
            assign_buckets(np.array([-3.0, 0.5]), buckets)


# ═══════════════════════════════════════════════════════════════════════
# Discretizer
# ═══════════════════════════════════════════════════════════════════════


class TestFitTransform:

    def test_quartiles(self, quartile_data):
        discretizer = QuantileDiscretizer.from_bucket_count(4, NUM_CAT).fit(quartile_data)
        np.testing.assert_array_equal(discretizer.transform(quartile_data)[:, 0], [0, 1, 2, 3])

    def test_categorical_passed_through(self, quartile_data):
        discretizer = QuantileDiscretizer.from_bucket_count(4, NUM_CAT).fit(quartile_data)
        np.testing.assert_array_equal(
            discretizer.transform(quartile_data)[:, 1], quartile_data[:, 1]
        )

    def test_categorical_nan_passed_through(self, quartile_data):
        discretizer = QuantileDiscretizer.from_bucket_count(4, NUM_CAT).fit(quartile_data)
        X = quartile_data.copy()
        X[2, 1] = np.nan
        out = discretizer.transform(X)
        assert np.isnan(out[2, 1])
        assert out[2, 0] == 2.0

    def test_values_outside_training_range(self, quartile_data):
        discretizer = QuantileDiscretizer.from_bucket_count(4, NUM_CAT).fit(quartile_data)
        out = discretizer.transform([[-1000.0, 1.0], [1000.0, 0.0]])
        np.testing.assert_array_equal(out[:, 0], [0.0, 3.0])

    def test_bucket_indices_in_range(self, rng):
        X = rng.standard_normal((200, 3))
        discretizer = QuantileDiscretizer((2, 5, 10), FeatureIndex.all_numerical(3))
        out = discretizer.fit_transform(X)
        for col, count in enumerate((2, 5, 10)):
            assert out[:, col].min() >= 0
            assert out[:, col].max() <= count - 1
            np.testing.assert_array_equal(out[:, col], np.round(out[:, col]))

    def test_buckets_are_monotone(self, rng):
        x = rng.standard_normal(100)
        discretizer = QuantileDiscretizer.from_bucket_count(
            10, FeatureIndex.all_numerical(1)
        )
        out = discretizer.fit_transform(x.reshape(-1, 1))[:, 0]
        order = np.argsort(x)
        assert np.all(np.diff(out[order]) >= 0)

    def test_roughly_equal_bucket_sizes(self, rng):
        X = rng.uniform(size=(1000, 1))
        out = QuantileDiscretizer((4,), FeatureIndex.all_numerical(1)).fit_transform(X)
        counts = np.bincount(out[:, 0].astype(int))
        assert counts.size == 4
        assert np.all(np.abs(counts - 250) <= 2)

    def test_constant_column(self):
        X = np.ones((5, 1))
        out = QuantileDiscretizer((3,), FeatureIndex.all_numerical(1)).fit_transform(X)
        np.testing.assert_array_equal(out[:, 0], np.zeros(5))

    def test_single_row(self):
        out = QuantileDiscretizer((4,), FeatureIndex.all_numerical(1)).fit_transform([[2.5]])
        assert out[0, 0] == 0.0

    def test_fit_transform_matches_fit_then_transform(self, rng):
        X = rng.standard_normal((50, 2))
        index = FeatureIndex.all_numerical(2)
        discretizer = QuantileDiscretizer((3, 6), index)
        np.testing.assert_array_equal(
            discretizer.fit_transform(X), discretizer.fit(X).transform(X)
        )

    def test_transform_is_deterministic(self, rng):
        X = rng.standard_normal((50, 2))
        fitted = QuantileDiscretizer((3, 6), FeatureIndex.all_numerical(2)).fit(X)
        np.testing.assert_array_equal(fitted.transform(X), fitted.transform(X))

    def test_does_not_modify_input(self, quartile_data):
        original = quartile_data.copy()
        QuantileDiscretizer.from_bucket_count(4, NUM_CAT).fit_transform(quartile_data)
        np.testing.assert_array_equal(quartile_data, original)

    def test_no_numerical_columns(self):
        index = FeatureIndex.all_categorical(2)
        discretizer = QuantileDiscretizer.from_bucket_count(5, index)
        assert discretizer.bucket_counts == ()
        X = np.array([[1.0, 2.0], [3.0, 4.0]])
        np.testing.assert_array_equal(discretizer.fit_transform(X), X)

    def test_quantile_type_changes_cuts(self):
        x = np.array([[-1.0], [0.0], [2.0], [5.0]])
        index = FeatureIndex.all_numerical(1)
        weibull = QuantileDiscretizer((4,), index).fit(x)
        linear = QuantileDiscretizer((4,), index, quantile_type=7).fit(x)
        assert weibull.quantiles[0][0][1] == pytest.approx(-0.75)
        assert linear.quantiles[0][0][1] == pytest.approx(-0.25)


class TestDiscretizerValue:

    def test_fit_returns_new_discretizer(self, quartile_data):
        discretizer = QuantileDiscretizer.from_bucket_count(4, NUM_CAT)
        fitted = discretizer.fit(quartile_data)
        assert fitted is not discretizer
        assert not discretizer.is_fitted
        assert fitted.is_fitted

    def test_frozen(self):
        discretizer = QuantileDiscretizer.from_bucket_count(4, NUM_CAT)
        with pytest.raises(FrozenInstanceError):
            discretizer.quantile_type = 7

    def test_single_int_bucket_count(self):
        discretizer = QuantileDiscretizer(4, NUM_CAT)
        assert discretizer.bucket_counts == (4,)

    def test_explicit_quantiles_with_gap(self):
        discretizer = QuantileDiscretizer(
            (2,),
            FeatureIndex.all_numerical(1),
            quantiles=(((-np.inf, 0.0), (1.0, np.inf)),),
        )
        with pytest.raises(InternalConsistencyError):
            discretizer.transform([[0.5]])


class TestDiscretizerValidation:

    def test_bucket_count_mismatch(self):
        with pytest.raises(ValidationError, match="every numerical column"):
            QuantileDiscretizer((3,), FeatureIndex.all_numerical(2))

    @pytest.mark.parametrize("count", [0, -2, 2.5, True])
    def test_invalid_bucket_count(self, count):
        with pytest.raises(ValidationError, match="bucket_counts"):
            QuantileDiscretizer((count,), FeatureIndex.all_numerical(1))

    def test_invalid_quantile_type(self):
        with pytest.raises(ValidationError, match="quantile_type"):
            QuantileDiscretizer((2,), FeatureIndex.all_numerical(1), quantile_type=2)

    def test_quantiles_length_mismatch(self):
        with pytest.raises(ValidationError, match="quantiles"):
            QuantileDiscretizer((2,), FeatureIndex.all_numerical(1), quantiles=())

    def test_transform_before_fit(self, quartile_data):
        with pytest.raises(NotFittedError, match="not fitted"):
            QuantileDiscretizer.from_bucket_count(4, NUM_CAT).transform(quartile_data)

    def test_transform_nan(self, quartile_data):
        fitted = QuantileDiscretizer.from_bucket_count(4, NUM_CAT).fit(quartile_data)
        with pytest.raises(ValidationError, match="NaN"):
            fitted.transform([[np.nan, 0.0]])

    def test_fit_nan(self):
        X = np.array([[1.0, 0.0], [np.nan, 1.0]])
        with pytest.raises(ValidationError, match="NaN"):
            QuantileDiscretizer.from_bucket_count(2, NUM_CAT).fit(X)

    def test_fit_empty(self):
        with pytest.raises(ValidationError, match="at least 1"):
            QuantileDiscretizer.from_bucket_count(2, NUM_CAT).fit(np.zeros((0, 2)))

    def test_column_mismatch(self, quartile_data):
        fitted = QuantileDiscretizer.from_bucket_count(4, NUM_CAT).fit(quartile_data)
        with pytest.raises(DimensionError, match="expected 2 columns, got 3"):
            fitted.transform(np.zeros((1, 3)))

    def test_one_dimensional_input(self):
        with pytest.raises(DimensionError):
            QuantileDiscretizer((2,), FeatureIndex.all_numerical(1)).fit(np.zeros(3))
