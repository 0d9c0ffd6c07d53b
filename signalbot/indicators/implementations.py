"""
Price-series indicator implementations following the Indicator interface.

These classes provide a uniform interface for the close-price indicators
(EMA, RSI, MACD, Bollinger Bands, Momentum, Stochastic RSI). Recursive
smoothers (EMA, Wilder RSI) run over numpy arrays; windowed statistics use
pandas rolling windows.
"""
from typing import Tuple

import numpy as np
import pandas as pd

from .base import (
    Indicator,
    IndicatorInput,
    require_length,
    to_price_series,
    validate_multiplier,
    validate_period,
)
from ..errors import ConfigurationError
from ..shared.defaults import (
    RSI_PERIOD, EMA_PERIOD,
    MACD_SHORT, MACD_LONG, MACD_SIGNAL,
    BOLLINGER_PERIOD, BOLLINGER_MULTIPLIER,
    MOMENTUM_PERIOD, STOCH_RSI_PERIOD,
)


def ema_recurrence(values: np.ndarray, period: int) -> np.ndarray:
    """
    SMA-seeded exponential moving average.

    The seed is the mean of the first `period` defined values, placed at the
    last index of that window. Leading NaNs (e.g. an upstream warm-up) are
    skipped; everything before the seed stays NaN.
    """
    out = np.full(len(values), np.nan)
    defined = np.flatnonzero(~np.isnan(values))
    if len(defined) == 0:
        return out
    start = defined[0]
    seed_idx = start + period - 1
    if seed_idx >= len(values):
        return out

    out[seed_idx] = values[start:seed_idx + 1].mean()
    alpha = 2.0 / (period + 1)
    for i in range(seed_idx + 1, len(values)):
        out[i] = (values[i] - out[i - 1]) * alpha + out[i - 1]
    return out


def _rsi_from_averages(avg_gain: float, avg_loss: float) -> float:
    # No losses in the window saturates at 100
    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return 100.0 - (100.0 / (1.0 + rs))


def wilder_rsi(closes: np.ndarray, period: int) -> np.ndarray:
    """
    Wilder RSI. First defined value is at index `period`.

    Caller guarantees len(closes) >= period + 1.
    """
    out = np.full(len(closes), np.nan)
    deltas = np.diff(closes)
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    avg_gain = gains[:period].mean()
    avg_loss = losses[:period].mean()
    out[period] = _rsi_from_averages(avg_gain, avg_loss)

    for i in range(period + 1, len(closes)):
        avg_gain = (avg_gain * (period - 1) + gains[i - 1]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i - 1]) / period
        out[i] = _rsi_from_averages(avg_gain, avg_loss)
    return out


class EMAIndicator(Indicator):
    """Exponential Moving Average indicator."""

    name = "EMA"

    def __init__(self, period: int = EMA_PERIOD):
        self.period = validate_period("period", period)

    def calculate(self, data: IndicatorInput) -> pd.Series:
        """Calculate EMA values; indices before period-1 are NaN."""
        require_length(data, self.min_length, self.name)
        prices = to_price_series(data)
        ema = ema_recurrence(prices.to_numpy(dtype=float), self.period)
        return pd.Series(ema, index=prices.index, name="ema")


class RSIIndicator(Indicator):
    """Relative Strength Index indicator (Wilder smoothing)."""

    name = "RSI"

    def __init__(self, period: int = RSI_PERIOD):
        self.period = validate_period("period", period)

    @property
    def min_length(self) -> int:
        return self.period + 1

    def calculate(self, data: IndicatorInput) -> pd.Series:
        """
        Calculate RSI values.

        RSI = 100 - (100 / (1 + RS)), RS = Average Gain / Average Loss.
        The first valid value is at index `period`; Average Loss of 0 gives 100.
        """
        require_length(data, self.min_length, self.name)
        prices = to_price_series(data)
        rsi = wilder_rsi(prices.to_numpy(dtype=float), self.period)
        return pd.Series(rsi, index=prices.index, name="rsi")


class MACDIndicator(Indicator):
    """MACD (Moving Average Convergence Divergence) indicator."""

    name = "MACD"

    def __init__(
        self,
        short_period: int = MACD_SHORT,
        long_period: int = MACD_LONG,
        signal_period: int = MACD_SIGNAL,
    ):
        self.short_period = validate_period("short_period", short_period)
        self.long_period = validate_period("long_period", long_period)
        self.signal_period = validate_period("signal_period", signal_period)
        if self.short_period >= self.long_period:
            raise ConfigurationError(
                f"MACD short_period ({short_period}) must be less than long_period ({long_period})",
                parameter="short_period",
                value=short_period,
            )

    @property
    def min_length(self) -> int:
        return self.long_period

    def calculate(self, data: IndicatorInput) -> Tuple[pd.Series, pd.Series, pd.Series]:
        """
        Calculate all MACD components.

        The MACD line is defined from index long_period-1; the signal line and
        histogram from long_period+signal_period-2.

        Returns:
            Tuple of (MACD line, Signal line, Histogram)
        """
        require_length(data, self.min_length, self.name)
        prices = to_price_series(data)
        values = prices.to_numpy(dtype=float)

        macd_line = ema_recurrence(values, self.short_period) - ema_recurrence(values, self.long_period)
        signal_line = ema_recurrence(macd_line, self.signal_period)
        histogram = macd_line - signal_line

        idx = prices.index
        return (
            pd.Series(macd_line, index=idx, name="macd_line"),
            pd.Series(signal_line, index=idx, name="macd_signal"),
            pd.Series(histogram, index=idx, name="macd_histogram"),
        )


class BollingerBandsIndicator(Indicator):
    """Bollinger Bands: rolling mean +/- multiplier * population std."""

    name = "Bollinger Bands"

    def __init__(self, period: int = BOLLINGER_PERIOD, multiplier: float = BOLLINGER_MULTIPLIER):
        self.period = validate_period("period", period)
        self.multiplier = validate_multiplier("multiplier", multiplier)

    def calculate(self, data: IndicatorInput) -> Tuple[pd.Series, pd.Series, pd.Series]:
        """
        Calculate Bollinger Bands over a trailing window of `period` prices.

        Returns:
            Tuple of (upper band, middle band, lower band)
        """
        require_length(data, self.min_length, self.name)
        prices = to_price_series(data)
        window = prices.rolling(self.period, min_periods=self.period)
        middle = window.mean()
        std = window.std(ddof=0).clip(lower=0.0)

        upper = middle + self.multiplier * std
        lower = middle - self.multiplier * std
        return (
            upper.rename("bollinger_upper"),
            middle.rename("bollinger_middle"),
            lower.rename("bollinger_lower"),
        )

    def primary(self, result) -> pd.Series:
        return result[1]


class MomentumIndicator(Indicator):
    """Momentum: price change over `period` bars."""

    name = "Momentum"

    def __init__(self, period: int = MOMENTUM_PERIOD):
        self.period = validate_period("period", period)

    def calculate(self, data: IndicatorInput) -> pd.Series:
        """momentum[i] = price[i] - price[i - period]; first valid index is `period`."""
        require_length(data, self.min_length, self.name)
        prices = to_price_series(data)
        return (prices - prices.shift(self.period)).rename("momentum")


class StochasticRSIIndicator(Indicator):
    """
    Stochastic RSI: position of RSI within its trailing min/max range.

    Input is an RSI series, not raw prices. A window containing undefined RSI
    values is undefined.
    """

    name = "Stochastic RSI"

    def __init__(self, period: int = STOCH_RSI_PERIOD):
        self.period = validate_period("period", period)

    def calculate(self, data: IndicatorInput) -> pd.Series:
        """(rsi - min) / (max - min) over the trailing window; a flat window gives 0."""
        require_length(data, self.min_length, self.name)
        rsi = to_price_series(data)
        window = rsi.rolling(self.period, min_periods=self.period)
        lowest = window.min()
        highest = window.max()
        spread = highest - lowest

        stoch = (rsi - lowest) / spread
        return stoch.mask(spread == 0, 0.0).rename("stoch_rsi")

    @classmethod
    def from_prices(
        cls,
        data: IndicatorInput,
        rsi_period: int = RSI_PERIOD,
        period: int = STOCH_RSI_PERIOD,
    ) -> pd.Series:
        """Convenience: compute RSI from prices, then Stochastic RSI over it."""
        rsi = RSIIndicator(rsi_period).calculate(data)
        return cls(period).calculate(rsi)


__all__ = [
    'ema_recurrence',
    'wilder_rsi',
    'EMAIndicator',
    'RSIIndicator',
    'MACDIndicator',
    'BollingerBandsIndicator',
    'MomentumIndicator',
    'StochasticRSIIndicator',
]
