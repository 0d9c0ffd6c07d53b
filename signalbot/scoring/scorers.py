"""
Concrete predictive scorers.

These are lightweight stand-ins that sit behind the PredictiveScorer
interface; fitting their parameters happens outside this package.
"""
from typing import Callable, Sequence

import numpy as np

from .base import FEATURE_NAMES, PredictiveScorer
from ..errors import ConfigurationError


class ConstantScorer(PredictiveScorer):
    """Always returns the same score (0.5 = neutral)."""

    def __init__(self, score: float = 0.5):
        if not 0.0 <= score <= 1.0:
            raise ConfigurationError(f"score must be in [0, 1] (got {score})", parameter="score", value=score)
        self.score = float(score)

    def predict(self, features: Sequence[float]) -> float:
        return self.score


class LogisticScorer(PredictiveScorer):
    """
    Logistic model: sigmoid(weights . features + bias).

    Weights must match the feature vector length. Undefined (NaN) features
    contribute nothing to the linear term.
    """

    def __init__(self, weights: Sequence[float], bias: float = 0.0):
        weights = np.asarray(weights, dtype=float)
        if weights.shape != (len(FEATURE_NAMES),):
            raise ConfigurationError(
                f"weights must have {len(FEATURE_NAMES)} entries, one per feature (got {weights.shape})",
                parameter="weights",
            )
        if not np.all(np.isfinite(weights)) or not np.isfinite(bias):
            raise ConfigurationError("weights and bias must be finite", parameter="weights")
        self.weights = weights
        self.bias = float(bias)

    def predict(self, features: Sequence[float]) -> float:
        x = np.nan_to_num(np.asarray(features, dtype=float), nan=0.0)
        z = float(np.dot(self.weights, x) + self.bias)
        # Split by sign so exp() never overflows
        if z >= 0:
            return float(1.0 / (1.0 + np.exp(-z)))
        ez = np.exp(z)
        return float(ez / (1.0 + ez))


class CallableScorer(PredictiveScorer):
    """Adapts any callable features -> score to the PredictiveScorer interface."""

    def __init__(self, fn: Callable[[Sequence[float]], float]):
        if not callable(fn):
            raise ConfigurationError("fn must be callable", parameter="fn", value=fn)
        self.fn = fn

    def predict(self, features: Sequence[float]) -> float:
        return float(self.fn(features))
