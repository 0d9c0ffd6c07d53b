"""
Indicator calculation module.

Provides all technical indicators:
- Close-price indicators (EMA, RSI, MACD, Bollinger Bands, Momentum, Stochastic RSI)
- Bar-based indicators (ADX, Ichimoku, MFI, VWAP)
- TechnicalIndicators for computing the whole set in one pass

All indicators follow the Indicator interface: parameters are validated at
construction and calculate() returns output aligned with its input, with NaN
marking positions that are still in warm-up.
"""
from .base import Indicator, validate_period, validate_multiplier, to_ohlcv_frame, to_price_series
from .implementations import (
    EMAIndicator,
    RSIIndicator,
    MACDIndicator,
    BollingerBandsIndicator,
    MomentumIndicator,
    StochasticRSIIndicator,
)
from .ohlcv import ADXIndicator, IchimokuIndicator, MFIIndicator, VWAPIndicator, typical_price, true_range
from .technical import TechnicalIndicators, IndicatorValues

__all__ = [
    'Indicator',
    'validate_period',
    'validate_multiplier',
    'to_ohlcv_frame',
    'to_price_series',
    'EMAIndicator',
    'RSIIndicator',
    'MACDIndicator',
    'BollingerBandsIndicator',
    'MomentumIndicator',
    'StochasticRSIIndicator',
    'ADXIndicator',
    'IchimokuIndicator',
    'MFIIndicator',
    'VWAPIndicator',
    'typical_price',
    'true_range',
    'TechnicalIndicators',
    'IndicatorValues',
]
