"""
Unit tests for the maximum-entropy classifier
"""
import numpy as np
import pytest
from scipy.sparse import csr_matrix
from sklearn.exceptions import NotFittedError

from restaurant_nlu.core.maxent import MaxEntClassifier


@pytest.fixture
def separable_data():
    X = csr_matrix(np.array([
        [1.0, 0.0, 0.0],
        [0.9, 0.1, 0.0],
        [0.0, 1.0, 0.0],
        [0.1, 0.9, 0.0],
        [0.0, 0.0, 1.0],
        [0.0, 0.1, 0.9],
    ]))
    y = np.array([0, 0, 1, 1, 2, 2])
    return X, y


class TestMaxEntClassifier:
    """Fitting and prediction"""

    def test_fits_separable_data(self, separable_data):
        X, y = separable_data

        model = MaxEntClassifier().fit(X, y)

        assert list(model.predict(X)) == list(y)
        assert model.coef_.shape == (3, 3)
        assert model.intercept_.shape == (3,)
        assert model.n_iter_ > 0

    def test_probabilities_sum_to_one(self, separable_data):
        X, y = separable_data

        proba = MaxEntClassifier().fit(X, y).predict_proba(X)

        assert proba.shape == (6, 3)
        assert proba.sum(axis=1) == pytest.approx(np.ones(6))
        assert np.all(proba >= 0.0)

    def test_confident_on_training_points(self, separable_data):
        X, y = separable_data

        proba = MaxEntClassifier().fit(X, y).predict_proba(X)

        assert np.all(proba[np.arange(6), y] > 0.5)

    def test_non_negative_weights(self, separable_data):
        X, y = separable_data

        model = MaxEntClassifier(enforce_non_negativity=True).fit(X, y)

        assert np.all(model.coef_ >= 0.0)

    def test_unconstrained_weights_allowed(self, separable_data):
        X, y = separable_data

        model = MaxEntClassifier(enforce_non_negativity=False).fit(X, y)

        assert list(model.predict(X)) == list(y)

    def test_string_labels(self, separable_data):
        X, _ = separable_data
        y = np.array(["Greeting", "Greeting", "Goodbye", "Goodbye", "Order", "Order"])

        model = MaxEntClassifier().fit(X, y)

        assert list(model.classes_) == ["Goodbye", "Greeting", "Order"]
        assert model.predict(X[:1])[0] == "Greeting"

    def test_iteration_cap_reports_non_convergence(self, separable_data, caplog):
        X, y = separable_data

        model = MaxEntClassifier(max_iterations=1).fit(X, y)

        assert model.converged_ is False
        assert "did not converge" in caplog.text

    def test_predict_before_fit_raises(self, separable_data):
        X, _ = separable_data

        with pytest.raises(NotFittedError):
            MaxEntClassifier().predict(X)

    def test_get_params(self):
        params = MaxEntClassifier(l1_regularization=0.5).get_params()

        assert params["l1_regularization"] == 0.5
        assert params["max_iterations"] == 20000
