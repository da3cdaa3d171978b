"""
Tests for PoissonRegression.
"""

import numpy as np
import pytest

from pylinmodels.core.exceptions import ValidationError
from pylinmodels.core.compute.optimization import OptimizerConfig, check_gradient
from pylinmodels.core.compute.tolerances import LOSS_VALUE
from pylinmodels.linear import PoissonRegression, add_bias_term


class TestLoss:

    def test_known_value(self):
        # The loss takes X as given: no bias column is added here.
        w = np.array([1.0, 2.0, 3.0])
        X = np.array([[3.0, 1.0, 2.0], [-1.0, -2.0, 2.0]])
        y = np.array([3.0, 4.0])
        loss = PoissonRegression(lambda_=1.0).loss(w, X, y)
        assert LOSS_VALUE.allclose(loss, 29926.429998513137)

    def test_penalty_excludes_bias(self):
        X = add_bias_term(np.zeros((2, 1)))
        y = np.array([1.0, 1.0])
        w = np.array([0.0, 3.0])
        unpenalized = PoissonRegression().loss(w, X, y)
        penalized = PoissonRegression(lambda_=2.0).loss(w, X, y)
        assert penalized - unpenalized == pytest.approx(9.0)

        w_bias_only = np.array([3.0, 0.0])
        assert (
            PoissonRegression(lambda_=2.0).loss(w_bias_only, X, y)
            == PoissonRegression().loss(w_bias_only, X, y)
        )

    @pytest.mark.parametrize("lambda_", [0.0, 1.0])
    def test_gradient_matches_finite_differences(self, rng, lambda_):
        X = add_bias_term(rng.standard_normal((25, 3)))
        y = rng.poisson(2.0, size=25).astype(np.float64)
        model = PoissonRegression(lambda_=lambda_)
        for _ in range(20):
            w = 0.5 * rng.standard_normal(4)
            assert check_gradient(
                lambda v: model.loss(v, X, y),
                lambda v: model.loss_grad(v, X, y),
                w,
            )


class TestFit:

    def test_recovers_generating_weights(self, count_data):
        X, y = count_data
        model = PoissonRegression().fit(X, y)
        np.testing.assert_allclose(model.w, [0.3, 0.4, -0.2], atol=0.15)

    def test_score_equation_at_optimum(self, count_data):
        # With an unpenalized intercept the fitted means sum to the counts.
        X, y = count_data
        model = PoissonRegression(lambda_=0.5).fit(X, y, config=OptimizerConfig(tol=1e-7))
        assert model.predict(X).sum() == pytest.approx(y.sum(), rel=1e-4)

    def test_predictions_positive(self, count_data):
        X, y = count_data
        model = PoissonRegression(lambda_=0.1).fit(X, y)
        assert np.all(model.predict(X) > 0.0)

    @pytest.mark.filterwarnings("ignore::RuntimeWarning")
    def test_all_zero_counts(self):
        X = np.array([[0.0], [1.0], [2.0]])
        model = PoissonRegression(lambda_=1.0).fit(X, np.zeros(3), config=OptimizerConfig(max_iter=20))
        assert np.all(model.predict(X) < 1.0)

    def test_scipy_backend_agrees(self, count_data):
        X, y = count_data
        native = PoissonRegression(lambda_=0.2).fit(X, y)
        wrapped = PoissonRegression(lambda_=0.2).fit(X, y, backend='scipy')
        np.testing.assert_allclose(native.w, wrapped.w, atol=1e-2)


class TestTargetValidation:

    def test_negative_lambda(self):
        with pytest.raises(ValidationError, match="L2 regularization strength"):
            PoissonRegression(lambda_=-1.0)

    def test_fractional_counts(self, rng):
        X = rng.standard_normal((10, 2))
        with pytest.raises(ValidationError, match="integer-valued"):
            PoissonRegression().fit(X, rng.uniform(size=10))

    def test_negative_counts(self):
        with pytest.raises(ValidationError, match="non-negative"):
            PoissonRegression().fit(np.zeros((2, 1)), [1.0, -2.0])
