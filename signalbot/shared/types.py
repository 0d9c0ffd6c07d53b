"""
Shared types for indicator, signal and sizing modules.

This module consolidates the Bar value type, the SignalType enum and the
TradeProposal dataclass that are used across multiple modules.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Union
from datetime import datetime

import pandas as pd

OHLCV_COLUMNS = ["Open", "High", "Low", "Close", "Volume"]


class SignalType(Enum):
    """Type of trading signal."""
    BUY = "buy"
    SELL = "sell"
    HOLD = "hold"


@dataclass(frozen=True)
class Bar:
    """
    One OHLCV observation for a fixed time interval.

    A sequence of bars is expected to be chronologically increasing with no
    duplicate timestamps. This is a caller precondition and is not validated.
    """
    timestamp: Union[pd.Timestamp, datetime]
    open: float
    high: float
    low: float
    close: float
    volume: float

    @property
    def typical_price(self) -> float:
        return (self.high + self.low + self.close) / 3


@dataclass(frozen=True)
class TradeProposal:
    """
    A sized trade suggestion built from one fusion decision.

    HOLD proposals carry a zero position size and no stop/target prices.
    """
    decision: SignalType
    entry_price: float
    position_size: float
    stop_loss_price: Optional[float] = None
    take_profit_price: Optional[float] = None
    risk_reward_ratio: Optional[float] = None
    reasoning: str = ""

    @property
    def is_actionable(self) -> bool:
        return self.decision != SignalType.HOLD and self.position_size > 0


def bars_to_frame(bars: Iterable[Bar]) -> pd.DataFrame:
    """
    Convert a sequence of Bars into an OHLCV DataFrame.

    Returns:
        DataFrame indexed by timestamp with Open/High/Low/Close/Volume float columns
    """
    bars = list(bars)
    index = pd.DatetimeIndex([pd.Timestamp(b.timestamp) for b in bars], name="timestamp")
    return pd.DataFrame(
        {
            "Open": [float(b.open) for b in bars],
            "High": [float(b.high) for b in bars],
            "Low": [float(b.low) for b in bars],
            "Close": [float(b.close) for b in bars],
            "Volume": [float(b.volume) for b in bars],
        },
        index=index,
        columns=OHLCV_COLUMNS,
    )


def frame_to_bars(df: pd.DataFrame) -> list:
    """Convert an OHLCV DataFrame back into a list of Bars (index used as timestamp)."""
    return [
        Bar(
            timestamp=ts,
            open=float(row["Open"]),
            high=float(row["High"]),
            low=float(row["Low"]),
            close=float(row["Close"]),
            volume=float(row["Volume"]),
        )
        for ts, row in df[OHLCV_COLUMNS].iterrows()
    ]
