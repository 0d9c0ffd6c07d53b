"""
Shared types and defaults for the signal engine.

This module provides:
- Bar, SignalType and TradeProposal types
- Centralized default values for all indicator, fusion and risk parameters
"""
from .types import Bar, SignalType, TradeProposal, OHLCV_COLUMNS, bars_to_frame, frame_to_bars
from .defaults import (
    RSI_PERIOD, EMA_PERIOD,
    MACD_SHORT, MACD_LONG, MACD_SIGNAL,
    BOLLINGER_PERIOD, BOLLINGER_MULTIPLIER,
    ADX_PERIOD, MFI_PERIOD, MOMENTUM_PERIOD, STOCH_RSI_PERIOD,
    RSI_THRESHOLD_BUY, RSI_THRESHOLD_SELL,
    SCORE_BUY_THRESHOLD, SCORE_SELL_THRESHOLD,
    ACCOUNT_BALANCE, RISK_PER_TRADE, RISK_REWARD_RATIO, STOP_LOSS_PCT,
)

__all__ = [
    'Bar',
    'SignalType',
    'TradeProposal',
    'OHLCV_COLUMNS',
    'bars_to_frame',
    'frame_to_bars',
    'RSI_PERIOD', 'EMA_PERIOD',
    'MACD_SHORT', 'MACD_LONG', 'MACD_SIGNAL',
    'BOLLINGER_PERIOD', 'BOLLINGER_MULTIPLIER',
    'ADX_PERIOD', 'MFI_PERIOD', 'MOMENTUM_PERIOD', 'STOCH_RSI_PERIOD',
    'RSI_THRESHOLD_BUY', 'RSI_THRESHOLD_SELL',
    'SCORE_BUY_THRESHOLD', 'SCORE_SELL_THRESHOLD',
    'ACCOUNT_BALANCE', 'RISK_PER_TRADE', 'RISK_REWARD_RATIO', 'STOP_LOSS_PCT',
]
