"""
Base indicator interface and shared input handling.

All indicators follow this pattern:
1. Validate parameters at construction (ConfigurationError)
2. Validate input length at the start of calculate (InsufficientDataError)
3. Return output aligned index-for-index with the input, NaN before warm-up

Input may be a sequence of Bars, an OHLCV DataFrame or (for price-only
indicators) a price Series / sequence of floats. Bars are expected in
chronological order with no duplicate timestamps; this is not validated.
"""
import math
import numbers
from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence, Union

import numpy as np
import pandas as pd

from ..errors import ConfigurationError, InsufficientDataError
from ..shared.types import Bar, OHLCV_COLUMNS, bars_to_frame

IndicatorInput = Union[pd.DataFrame, pd.Series, Sequence[Bar], Sequence[float]]


def validate_period(name: str, value: Any) -> int:
    """Return value if it is a positive integer, else raise ConfigurationError."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value <= 0:
        raise ConfigurationError(
            f"{name} must be a positive integer (got {value!r})",
            parameter=name,
            value=value,
        )
    return int(value)


def validate_multiplier(name: str, value: Any) -> float:
    """Return value as float if it is a positive finite number, else raise ConfigurationError."""
    if (
        isinstance(value, bool)
        or not isinstance(value, numbers.Real)
        or not math.isfinite(value)
        or value <= 0
    ):
        raise ConfigurationError(
            f"{name} must be a positive number (got {value!r})",
            parameter=name,
            value=value,
        )
    return float(value)


def require_length(data: Optional[IndicatorInput], minimum: int, indicator: str) -> int:
    """
    Fail fast when data is None, empty or shorter than minimum.

    Returns:
        Length of data
    """
    available = 0 if data is None else len(data)
    if available == 0 or available < minimum:
        raise InsufficientDataError(
            f"Not enough data to calculate {indicator}: need {minimum} bars, got {available}",
            required_count=minimum,
            available_count=available,
        )
    return available


def _is_bar_sequence(data: Any) -> bool:
    return not isinstance(data, (pd.DataFrame, pd.Series)) and len(data) > 0 and isinstance(data[0], Bar)


def to_ohlcv_frame(data: IndicatorInput) -> pd.DataFrame:
    """
    Coerce Bars or a DataFrame into an OHLCV DataFrame with float columns.

    Lower-case column names (open, high, ...) are accepted.
    """
    if isinstance(data, pd.DataFrame):
        df = data.rename(columns={c: c.capitalize() for c in data.columns if isinstance(c, str)})
        missing = [c for c in OHLCV_COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(f"OHLCV data is missing columns: {missing}")
        return df[OHLCV_COLUMNS].astype(float)
    if _is_bar_sequence(data):
        return bars_to_frame(data)
    raise ValueError(f"Expected a sequence of Bars or an OHLCV DataFrame, got {type(data).__name__}")


def to_price_series(data: IndicatorInput, column: str = "Close") -> pd.Series:
    """
    Coerce input into a float price Series.

    DataFrames and Bars contribute their Close column; a Series is used as-is;
    a plain sequence of floats gets a RangeIndex.
    """
    if isinstance(data, pd.Series):
        return data.astype(float)
    if isinstance(data, pd.DataFrame):
        lookup = {c.capitalize(): c for c in data.columns if isinstance(c, str)}
        if column not in lookup:
            raise ValueError(f"Price data is missing column: {column}")
        return data[lookup[column]].astype(float)
    if _is_bar_sequence(data):
        return to_ohlcv_frame(data)[column]
    return pd.Series(np.asarray(data, dtype=float))


class Indicator(ABC):
    """
    Base class for all indicators.

    Indicators calculate values from price data that can be used
    for signal generation. They do not generate signals directly.
    """

    name = "indicator"

    @property
    def min_length(self) -> int:
        """Minimum input length accepted by calculate."""
        return getattr(self, "period", 1)

    @abstractmethod
    def calculate(self, data: IndicatorInput):
        """
        Calculate indicator values from price data.

        Args:
            data: Bars, OHLCV DataFrame or price series

        Returns:
            Series (or tuple/DataFrame of Series) aligned with the input
        """
        pass

    def primary(self, result) -> pd.Series:
        """Select the headline series from a calculate() result."""
        if isinstance(result, pd.DataFrame):
            return result.iloc[:, 0]
        if isinstance(result, tuple):
            return result[0]
        return result

    def get_value_at(self, data: IndicatorInput, timestamp: pd.Timestamp) -> Optional[float]:
        """
        Get indicator value at a specific timestamp.

        Args:
            data: Input data (must include bars before timestamp)
            timestamp: Timestamp to get value for

        Returns:
            Indicator value at timestamp, or None if undefined or not present
        """
        values = self.primary(self.calculate(data))
        if timestamp in values.index:
            val = values[timestamp]
            return None if pd.isna(val) else float(val)
        return None

    def latest(self, data: IndicatorInput) -> Optional[float]:
        """Most recent indicator value, or None if still in warm-up."""
        values = self.primary(self.calculate(data))
        val = values.iloc[-1]
        return None if pd.isna(val) else float(val)

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in vars(self).items())
        return f"{type(self).__name__}({params})"
