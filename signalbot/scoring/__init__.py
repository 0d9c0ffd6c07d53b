"""
Predictive scorers consulted by signal fusion when technical rules are inconclusive.
"""
from .base import PredictiveScorer, FEATURE_NAMES
from .scorers import ConstantScorer, LogisticScorer, CallableScorer

__all__ = [
    'PredictiveScorer',
    'FEATURE_NAMES',
    'ConstantScorer',
    'LogisticScorer',
    'CallableScorer',
]
