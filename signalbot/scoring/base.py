"""
Predictive scorer interface.

A scorer maps the fusion feature vector to a probability-like score in
[0, 1]. The feature order is fixed because scorers are tuned against it.
"""
from abc import ABC, abstractmethod
from typing import Sequence

# Order of the feature vector handed to PredictiveScorer.predict
FEATURE_NAMES = (
    "rsi",
    "macd",
    "macd_signal",
    "close",
    "bollinger_upper",
    "bollinger_lower",
)


class PredictiveScorer(ABC):
    """
    Base class for predictive scorers.

    Scorers are opaque to the signal pipeline: fusion only relies on
    predict() returning a float in [0, 1] for a feature vector laid out as
    FEATURE_NAMES.
    """

    @abstractmethod
    def predict(self, features: Sequence[float]) -> float:
        """
        Score one feature vector.

        Args:
            features: [rsi, macd, macd_signal, close, bollinger_upper, bollinger_lower]

        Returns:
            Score in [0, 1]; > 0.7 favours Buy, < 0.3 favours Sell
        """
        pass
