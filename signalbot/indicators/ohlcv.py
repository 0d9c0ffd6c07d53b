"""
Bar-based indicators that need High/Low/Close/Volume, not just closes.

ADX, Ichimoku, MFI and VWAP. Input is a sequence of Bars or an OHLCV
DataFrame (columns Open/High/Low/Close/Volume).
"""
import pandas as pd

from .base import (
    Indicator,
    IndicatorInput,
    require_length,
    to_ohlcv_frame,
    validate_period,
)
from ..shared.defaults import (
    ADX_PERIOD, MFI_PERIOD,
    ICHIMOKU_TENKAN, ICHIMOKU_KIJUN, ICHIMOKU_SENKOU_B, ICHIMOKU_CHIKOU_LAG,
)


def typical_price(df: pd.DataFrame) -> pd.Series:
    """(High + Low + Close) / 3"""
    return (df["High"] + df["Low"] + df["Close"]) / 3


def true_range(df: pd.DataFrame) -> pd.Series:
    """
    TR = max(high - low, |high - prev_close|, |low - prev_close|).

    Undefined at the first bar (no previous close).
    """
    prev_close = df["Close"].shift(1)
    tr = pd.concat(
        [
            df["High"] - df["Low"],
            (df["High"] - prev_close).abs(),
            (df["Low"] - prev_close).abs(),
        ],
        axis=1,
    ).max(axis=1, skipna=False)
    return tr.rename("true_range")


class ADXIndicator(Indicator):
    """
    ADX (Average Directional Index) for trend strength.

    ADX measures trend strength (0-100):
    - ADX > 30: Strong trend
    - ADX 20-30: Moderate trend
    - ADX < 20: Weak/no trend

    TR, +DM and -DM are smoothed with a trailing mean over `period`, so +DI,
    -DI and DX are first defined at index `period` and ADX (a trailing mean
    of DX) at index 2*period - 1. A zero-range window yields DI = 0 and a
    window with no directional movement yields DX = 0.
    """

    name = "ADX"

    def __init__(self, period: int = ADX_PERIOD):
        self.period = validate_period("period", period)

    def calculate_components(self, data: IndicatorInput) -> pd.DataFrame:
        """Calculate +DI, -DI, DX and ADX as DataFrame columns."""
        require_length(data, self.min_length, self.name)
        df = to_ohlcv_frame(data)
        high, low = df["High"], df["Low"]

        tr = true_range(df)
        up_move = high.diff()
        down_move = low.shift(1) - low
        # Only the larger positive move counts; ties cancel both
        plus_dm = up_move.where((up_move > down_move) & (up_move > 0), 0.0).where(up_move.notna())
        minus_dm = down_move.where((down_move > up_move) & (down_move > 0), 0.0).where(down_move.notna())

        smoothed = pd.DataFrame(
            {"tr": tr, "plus_dm": plus_dm, "minus_dm": minus_dm}, index=df.index
        ).rolling(self.period, min_periods=self.period).mean()
        atr = smoothed["tr"]

        plus_di = (100 * smoothed["plus_dm"] / atr).mask(atr == 0, 0.0)
        minus_di = (100 * smoothed["minus_dm"] / atr).mask(atr == 0, 0.0)
        di_sum = plus_di + minus_di
        dx = (100 * (plus_di - minus_di).abs() / di_sum).mask(di_sum == 0, 0.0)
        adx = dx.rolling(self.period, min_periods=self.period).mean()

        return pd.DataFrame(
            {"plus_di": plus_di, "minus_di": minus_di, "dx": dx, "adx": adx},
            index=df.index,
        )

    def calculate(self, data: IndicatorInput) -> pd.Series:
        """Calculate ADX values."""
        return self.calculate_components(data)["adx"]


class IchimokuIndicator(Indicator):
    """
    Ichimoku Kinko Hyo (five components).

    Values are stored at their source index. Senkou Span A/B are meant to be
    plotted `kijun_period` bars ahead; that shift is left to the caller.
    Chikou Span holds close[i + chikou_span_lag] at index i (the close plotted
    backward), so its last `chikou_span_lag` positions are NaN.
    """

    name = "Ichimoku"

    def __init__(
        self,
        tenkan_period: int = ICHIMOKU_TENKAN,
        kijun_period: int = ICHIMOKU_KIJUN,
        senkou_span_b_period: int = ICHIMOKU_SENKOU_B,
        chikou_span_lag: int = ICHIMOKU_CHIKOU_LAG,
    ):
        self.tenkan_period = validate_period("tenkan_period", tenkan_period)
        self.kijun_period = validate_period("kijun_period", kijun_period)
        self.senkou_span_b_period = validate_period("senkou_span_b_period", senkou_span_b_period)
        self.chikou_span_lag = validate_period("chikou_span_lag", chikou_span_lag)

    @property
    def min_length(self) -> int:
        return max(self.tenkan_period, self.kijun_period, self.senkou_span_b_period)

    @staticmethod
    def _midpoint_line(df: pd.DataFrame, period: int) -> pd.Series:
        highest = df["High"].rolling(period, min_periods=period).max()
        lowest = df["Low"].rolling(period, min_periods=period).min()
        return (highest + lowest) / 2

    def calculate(self, data: IndicatorInput) -> pd.DataFrame:
        """
        Returns:
            DataFrame with columns tenkan_sen, kijun_sen, senkou_span_a,
            senkou_span_b, chikou_span (same index as input)
        """
        require_length(data, self.min_length, self.name)
        df = to_ohlcv_frame(data)

        tenkan = self._midpoint_line(df, self.tenkan_period)
        kijun = self._midpoint_line(df, self.kijun_period)
        return pd.DataFrame(
            {
                "tenkan_sen": tenkan,
                "kijun_sen": kijun,
                "senkou_span_a": (tenkan + kijun) / 2,
                "senkou_span_b": self._midpoint_line(df, self.senkou_span_b_period),
                "chikou_span": df["Close"].shift(-self.chikou_span_lag),
            },
            index=df.index,
        )


class MFIIndicator(Indicator):
    """
    Money Flow Index: volume-weighted RSI over typical price.

    Positive/negative money flow is decided by the typical price direction
    versus the previous bar, so the first valid value is at index `period`.
    A window with no negative flow uses 1 as the divisor.
    """

    name = "MFI"

    def __init__(self, period: int = MFI_PERIOD):
        self.period = validate_period("period", period)

    def calculate(self, data: IndicatorInput) -> pd.Series:
        """MFI = 100 - 100 / (1 + positive_flow / negative_flow)"""
        require_length(data, self.min_length, self.name)
        df = to_ohlcv_frame(data)
        tp = typical_price(df)
        money_flow = tp * df["Volume"]
        direction = tp.diff()

        positive = money_flow.where(direction > 0, 0.0).where(direction.notna())
        negative = money_flow.where(direction < 0, 0.0).where(direction.notna())
        positive_sum = positive.rolling(self.period, min_periods=self.period).sum()
        negative_sum = negative.rolling(self.period, min_periods=self.period).sum()

        ratio = positive_sum / negative_sum.mask(negative_sum == 0, 1.0)
        return (100 - 100 / (1 + ratio)).rename("mfi")


class VWAPIndicator(Indicator):
    """
    Volume Weighted Average Price, cumulative from the start of the input.

    No fixed window. Positions where cumulative volume is still zero are NaN.
    """

    name = "VWAP"

    @property
    def min_length(self) -> int:
        return 1

    def calculate(self, data: IndicatorInput) -> pd.Series:
        """VWAP = cumulative(typical_price * volume) / cumulative(volume)"""
        require_length(data, self.min_length, self.name)
        df = to_ohlcv_frame(data)
        cumulative_tpv = (typical_price(df) * df["Volume"]).cumsum()
        cumulative_volume = df["Volume"].cumsum()
        return (cumulative_tpv / cumulative_volume.where(cumulative_volume != 0)).rename("vwap")


__all__ = [
    'typical_price',
    'true_range',
    'ADXIndicator',
    'IchimokuIndicator',
    'MFIIndicator',
    'VWAPIndicator',
]
