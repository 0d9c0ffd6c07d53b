"""
Combined indicator calculation.

Runs every indicator in the library over one input and returns a single
DataFrame aligned with it, plus point-in-time snapshots (IndicatorValues).
"""
import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

import pandas as pd

from .base import IndicatorInput, require_length, to_ohlcv_frame, to_price_series
from .implementations import (
    EMAIndicator,
    RSIIndicator,
    MACDIndicator,
    BollingerBandsIndicator,
    MomentumIndicator,
    StochasticRSIIndicator,
)
from .ohlcv import ADXIndicator, IchimokuIndicator, MFIIndicator, VWAPIndicator
from ..shared.types import Bar, OHLCV_COLUMNS
from ..shared.defaults import (
    RSI_PERIOD, EMA_PERIOD,
    MACD_SHORT, MACD_LONG, MACD_SIGNAL,
    BOLLINGER_PERIOD, BOLLINGER_MULTIPLIER,
    ADX_PERIOD, MFI_PERIOD, MOMENTUM_PERIOD, STOCH_RSI_PERIOD,
    ICHIMOKU_TENKAN, ICHIMOKU_KIJUN, ICHIMOKU_SENKOU_B, ICHIMOKU_CHIKOU_LAG,
)

logger = logging.getLogger(__name__)

Block = Tuple[str, Dict[str, pd.Series], float]


@dataclass
class IndicatorValues:
    """Container for indicator values at a specific point in time (None = undefined)."""
    timestamp: pd.Timestamp
    price: float

    # Momentum oscillators
    rsi: Optional[float] = None
    stoch_rsi: Optional[float] = None
    momentum: Optional[float] = None

    # Trend
    ema: Optional[float] = None
    macd_line: Optional[float] = None
    macd_signal: Optional[float] = None
    macd_histogram: Optional[float] = None
    adx: Optional[float] = None

    # Volatility
    bollinger_upper: Optional[float] = None
    bollinger_middle: Optional[float] = None
    bollinger_lower: Optional[float] = None

    # Volume (OHLCV input only)
    mfi: Optional[float] = None
    vwap: Optional[float] = None

    # Ichimoku (OHLCV input only, unshifted)
    tenkan_sen: Optional[float] = None
    kijun_sen: Optional[float] = None
    senkou_span_a: Optional[float] = None
    senkou_span_b: Optional[float] = None

    @property
    def below_lower_band(self) -> bool:
        return self.bollinger_lower is not None and self.price < self.bollinger_lower

    @property
    def above_upper_band(self) -> bool:
        return self.bollinger_upper is not None and self.price > self.bollinger_upper


class TechnicalIndicators:
    """Calculates the full indicator set from price or OHLCV data."""

    def __init__(
        self,
        rsi_period: int = RSI_PERIOD,
        ema_period: int = EMA_PERIOD,
        macd_short: int = MACD_SHORT,
        macd_long: int = MACD_LONG,
        macd_signal: int = MACD_SIGNAL,
        bollinger_period: int = BOLLINGER_PERIOD,
        bollinger_multiplier: float = BOLLINGER_MULTIPLIER,
        adx_period: int = ADX_PERIOD,
        mfi_period: int = MFI_PERIOD,
        momentum_period: int = MOMENTUM_PERIOD,
        stoch_rsi_period: int = STOCH_RSI_PERIOD,
        ichimoku_tenkan: int = ICHIMOKU_TENKAN,
        ichimoku_kijun: int = ICHIMOKU_KIJUN,
        ichimoku_senkou_b: int = ICHIMOKU_SENKOU_B,
        ichimoku_chikou_lag: int = ICHIMOKU_CHIKOU_LAG,
    ):
        """
        Initialize indicator calculators. Every parameter is validated here,
        so a bad period fails before any data is seen.
        """
        self.rsi = RSIIndicator(rsi_period)
        self.ema = EMAIndicator(ema_period)
        self.macd = MACDIndicator(macd_short, macd_long, macd_signal)
        self.bollinger = BollingerBandsIndicator(bollinger_period, bollinger_multiplier)
        self.momentum = MomentumIndicator(momentum_period)
        self.stoch_rsi = StochasticRSIIndicator(stoch_rsi_period)
        self.adx = ADXIndicator(adx_period)
        self.mfi = MFIIndicator(mfi_period)
        self.vwap = VWAPIndicator()
        self.ichimoku = IchimokuIndicator(
            ichimoku_tenkan, ichimoku_kijun, ichimoku_senkou_b, ichimoku_chikou_lag
        )

    def price_min_length(self) -> int:
        """Minimum bars needed by the close-price indicators."""
        return max(
            self.rsi.min_length,
            self.ema.min_length,
            self.macd.min_length,
            self.bollinger.min_length,
            self.momentum.min_length,
            self.stoch_rsi.min_length,
        )

    def ohlcv_min_length(self) -> int:
        """Minimum bars needed when OHLCV indicators are included."""
        return max(
            self.price_min_length(),
            self.adx.min_length,
            self.mfi.min_length,
            self.ichimoku.min_length,
        )

    def _compute_rsi_block(self, prices: pd.Series) -> Block:
        """Compute RSI + Stochastic RSI; returns (timing_key, {col: series}, elapsed)."""
        t0 = time.perf_counter()
        rsi = self.rsi.calculate(prices)
        cols = {
            "rsi": rsi,
            "stoch_rsi": self.stoch_rsi.calculate(rsi),
        }
        return "indicator_rsi", cols, time.perf_counter() - t0

    def _compute_ema_block(self, prices: pd.Series) -> Block:
        t0 = time.perf_counter()
        cols = {"ema": self.ema.calculate(prices)}
        return "indicator_ema", cols, time.perf_counter() - t0

    def _compute_macd_block(self, prices: pd.Series) -> Block:
        t0 = time.perf_counter()
        macd_line, signal_line, histogram = self.macd.calculate(prices)
        cols = {
            "macd_line": macd_line,
            "macd_signal": signal_line,
            "macd_histogram": histogram,
        }
        return "indicator_macd", cols, time.perf_counter() - t0

    def _compute_bollinger_block(self, prices: pd.Series) -> Block:
        t0 = time.perf_counter()
        upper, middle, lower = self.bollinger.calculate(prices)
        cols = {
            "bollinger_upper": upper,
            "bollinger_middle": middle,
            "bollinger_lower": lower,
        }
        return "indicator_bollinger", cols, time.perf_counter() - t0

    def _compute_momentum_block(self, prices: pd.Series) -> Block:
        t0 = time.perf_counter()
        cols = {"momentum": self.momentum.calculate(prices)}
        return "indicator_momentum", cols, time.perf_counter() - t0

    def _compute_adx_block(self, df: pd.DataFrame) -> Block:
        t0 = time.perf_counter()
        components = self.adx.calculate_components(df)
        cols = {name: components[name] for name in ("plus_di", "minus_di", "adx")}
        return "indicator_adx", cols, time.perf_counter() - t0

    def _compute_volume_block(self, df: pd.DataFrame) -> Block:
        """Compute MFI + VWAP; returns (timing_key, {col: series}, elapsed)."""
        t0 = time.perf_counter()
        cols = {
            "mfi": self.mfi.calculate(df),
            "vwap": self.vwap.calculate(df),
        }
        return "indicator_volume", cols, time.perf_counter() - t0

    def _compute_ichimoku_block(self, df: pd.DataFrame) -> Block:
        t0 = time.perf_counter()
        ichimoku = self.ichimoku.calculate(df)
        cols = {name: ichimoku[name] for name in ichimoku.columns}
        return "indicator_ichimoku", cols, time.perf_counter() - t0

    def calculate_all(
        self,
        data: IndicatorInput,
        timings: Optional[Dict[str, float]] = None,
        max_workers: Optional[int] = None,
    ) -> pd.DataFrame:
        """
        Calculate all indicators and return as DataFrame.

        Price-only input (Series / floats) gets the close-price indicators;
        Bars or an OHLCV DataFrame also get ADX, MFI, VWAP and Ichimoku.
        Blocks run in parallel via ThreadPoolExecutor when max_workers > 1.

        Args:
            data: Price series, Bars or DataFrame with OHLCV columns
            timings: If provided, accumulate per-block elapsed seconds
            max_workers: Thread pool size (default: cpu_count); 1 = sequential.

        Returns:
            DataFrame with all indicator values (same index as input)

        Raises:
            InsufficientDataError: if data is shorter than the longest warm-up required
        """
        def _acc(key: str, elapsed: float) -> None:
            if timings is not None:
                timings[key] = timings.get(key, 0.0) + elapsed

        has_ohlcv = _has_ohlcv(data)
        required = self.ohlcv_min_length() if has_ohlcv else self.price_min_length()
        require_length(data, required, "indicator set")

        prices = to_price_series(data)
        df = pd.DataFrame(index=prices.index)
        df["price"] = prices

        tasks: List[Tuple[Callable[..., Block], object]] = [
            (self._compute_rsi_block, prices),
            (self._compute_ema_block, prices),
            (self._compute_macd_block, prices),
            (self._compute_bollinger_block, prices),
            (self._compute_momentum_block, prices),
        ]
        if has_ohlcv:
            ohlcv = to_ohlcv_frame(data)
            tasks += [
                (self._compute_adx_block, ohlcv),
                (self._compute_volume_block, ohlcv),
                (self._compute_ichimoku_block, ohlcv),
            ]

        workers = (
            max(1, max_workers)
            if max_workers is not None
            else (os.cpu_count() or 1)
        )

        if workers <= 1:
            results = [fn(arg) for fn, arg in tasks]
        else:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = [executor.submit(fn, arg) for fn, arg in tasks]
                results = [future.result() for future in as_completed(futures)]

        for key, cols, elapsed in results:
            _acc(key, elapsed)
            for k, v in cols.items():
                df[k] = v.to_numpy()

        logger.debug(f"Calculated {len(df.columns) - 1} indicator columns over {len(df)} bars")
        return df

    def get_indicators_at(
        self,
        data: IndicatorInput,
        timestamp: pd.Timestamp,
    ) -> Optional[IndicatorValues]:
        """
        Get indicator values at a specific timestamp.

        Args:
            data: Input data (must include data before timestamp for calculation)
            timestamp: Timestamp to get indicators for (nearest earlier bar if absent)

        Returns:
            IndicatorValues at the timestamp, or None if before the first bar
        """
        df = self.calculate_all(data, max_workers=1)

        if timestamp not in df.index:
            idx = df.index.get_indexer([timestamp], method='ffill')[0]
            if idx < 0:
                return None
            timestamp = df.index[idx]

        row = df.loc[timestamp]

        def _val(name: str) -> Optional[float]:
            if name not in row.index or pd.isna(row[name]):
                return None
            return float(row[name])

        return IndicatorValues(
            timestamp=timestamp,
            price=float(row['price']),
            rsi=_val('rsi'),
            stoch_rsi=_val('stoch_rsi'),
            momentum=_val('momentum'),
            ema=_val('ema'),
            macd_line=_val('macd_line'),
            macd_signal=_val('macd_signal'),
            macd_histogram=_val('macd_histogram'),
            adx=_val('adx'),
            bollinger_upper=_val('bollinger_upper'),
            bollinger_middle=_val('bollinger_middle'),
            bollinger_lower=_val('bollinger_lower'),
            mfi=_val('mfi'),
            vwap=_val('vwap'),
            tenkan_sen=_val('tenkan_sen'),
            kijun_sen=_val('kijun_sen'),
            senkou_span_a=_val('senkou_span_a'),
            senkou_span_b=_val('senkou_span_b'),
        )


def _has_ohlcv(data) -> bool:
    """True for Bars or a DataFrame carrying all OHLCV columns."""
    if data is None or isinstance(data, pd.Series):
        return False
    if isinstance(data, pd.DataFrame):
        columns = {c.capitalize() for c in data.columns if isinstance(c, str)}
        return set(OHLCV_COLUMNS) <= columns
    return len(data) > 0 and isinstance(data[0], Bar)
