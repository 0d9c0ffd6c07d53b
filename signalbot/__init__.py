"""
Technical-indicator engine with signal fusion and risk sizing.

Provides:
- Indicator calculations (RSI, EMA, MACD, Bollinger, ADX, Ichimoku, MFI, VWAP, ...)
- Signal fusion (technical rules first, predictive score as fallback)
- Position sizing with stop-loss / take-profit levels
- Threshold tuning from historical success rates
"""
from .errors import SignalBotError, ConfigurationError, InsufficientDataError, DegenerateInputError
from .shared.types import Bar, SignalType, TradeProposal
from .pipeline import TradePipeline

__all__ = [
    'SignalBotError',
    'ConfigurationError',
    'InsufficientDataError',
    'DegenerateInputError',
    'Bar',
    'SignalType',
    'TradeProposal',
    'TradePipeline',
]
