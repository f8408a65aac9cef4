"""
Maximum-entropy multiclass classifier

Softmax regression fitted with L-BFGS-B on the penalized negative
log-likelihood. Both L1 and L2 penalties apply to the feature weights; the
per-class intercepts are unpenalized. With ``enforce_non_negativity`` the
feature weights are bounded below by zero, which also makes the L1 term
smooth.
"""
import logging

import numpy as np
from scipy.optimize import minimize
from scipy.special import logsumexp, softmax
from sklearn.base import BaseEstimator, ClassifierMixin
from sklearn.utils.validation import check_array, check_is_fitted, check_X_y

logger = logging.getLogger(__name__)


class MaxEntClassifier(ClassifierMixin, BaseEstimator):
    """
    L1/L2-regularized softmax classifier

    Args:
        l1_regularization: Weight of the L1 penalty
        l2_regularization: Weight of the L2 penalty (applied as ``l2/2 * ||W||^2``)
        max_iterations: Iteration cap for L-BFGS-B
        tolerance: Convergence tolerance on the objective and projected gradient
        history_size: Number of L-BFGS correction pairs
        enforce_non_negativity: Constrain feature weights to be >= 0
    """

    def __init__(
        self,
        l1_regularization=1e-4,
        l2_regularization=1e-4,
        max_iterations=20000,
        tolerance=1e-8,
        history_size=10,
        enforce_non_negativity=True,
    ):
        self.l1_regularization = l1_regularization
        self.l2_regularization = l2_regularization
        self.max_iterations = max_iterations
        self.tolerance = tolerance
        self.history_size = history_size
        self.enforce_non_negativity = enforce_non_negativity

    def fit(self, X, y):
        X, y = check_X_y(X, y, accept_sparse="csr", dtype=np.float64)
        self.classes_, y_index = np.unique(y, return_inverse=True)
        n_samples, n_features = X.shape
        n_classes = len(self.classes_)
        n_weights = n_features * n_classes

        targets = np.zeros((n_samples, n_classes))
        targets[np.arange(n_samples), y_index] = 1.0

        l1 = self.l1_regularization
        l2 = self.l2_regularization

        def objective(theta):
            weights = theta[:n_weights].reshape(n_features, n_classes)
            intercept = theta[n_weights:]
            logits = np.asarray(X @ weights) + intercept
            log_proba = logits - logsumexp(logits, axis=1, keepdims=True)
            residual = np.exp(log_proba) - targets

            loss = -np.sum(targets * log_proba) + 0.5 * l2 * np.sum(weights * weights)
            grad_weights = np.asarray(X.T @ residual) + l2 * weights
            if self.enforce_non_negativity:
                loss += l1 * np.sum(weights)
                grad_weights += l1
            else:
                loss += l1 * np.sum(np.abs(weights))
                grad_weights += l1 * np.sign(weights)

            gradient = np.concatenate([grad_weights.ravel(), residual.sum(axis=0)])
            return loss, gradient

        bounds = None
        if self.enforce_non_negativity:
            bounds = [(0.0, None)] * n_weights + [(None, None)] * n_classes

        result = minimize(
            objective,
            x0=np.zeros(n_weights + n_classes),
            jac=True,
            method="L-BFGS-B",
            bounds=bounds,
            options={
                "maxiter": self.max_iterations,
                "maxcor": self.history_size,
                "ftol": self.tolerance,
                "gtol": self.tolerance,
            },
        )

        self.coef_ = result.x[:n_weights].reshape(n_features, n_classes).T.copy()
        self.intercept_ = result.x[n_weights:].copy()
        self.n_features_in_ = n_features
        self.n_iter_ = int(result.nit)
        self.converged_ = bool(result.success)
        self.loss_ = float(result.fun)

        if not self.converged_:
            logger.warning(f"MaxEntClassifier did not converge after {self.n_iter_} iterations: {result.message}")
        else:
            logger.debug(f"MaxEntClassifier converged after {self.n_iter_} iterations, loss={self.loss_:.6f}")
        return self

    def decision_function(self, X):
        check_is_fitted(self, ["coef_", "intercept_"])
        X = check_array(X, accept_sparse="csr", dtype=np.float64)
        return np.asarray(X @ self.coef_.T) + self.intercept_

    def predict_proba(self, X):
        return softmax(self.decision_function(X), axis=1)

    def predict(self, X):
        return self.classes_[np.argmax(self.decision_function(X), axis=1)]
