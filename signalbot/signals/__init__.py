"""
Signal generation module.

Technical rules (RSI, MACD, Bollinger Bands) decide first; a predictive score
decides only when no rule fires. The tuner nudges rule thresholds from
historical success rates.
"""
from .config import StrategyConfig
from .config_loader import load_config_from_yaml, save_config_to_yaml
from .thresholds import ThresholdConfig, DEFAULT_THRESHOLDS, normalize_key
from .rules import SignalRule, BandReversalRule, get_fusion_rules, evaluate_rules
from .fusion import SignalFusion, FusionResult
from .tuner import ParameterTuner

__all__ = [
    'StrategyConfig',
    'load_config_from_yaml',
    'save_config_to_yaml',
    'ThresholdConfig',
    'DEFAULT_THRESHOLDS',
    'normalize_key',
    'SignalRule',
    'BandReversalRule',
    'get_fusion_rules',
    'evaluate_rules',
    'SignalFusion',
    'FusionResult',
    'ParameterTuner',
]
