"""
Tests for the Indicator base interface and input coercion.
"""
import pytest
from abc import ABC
import pandas as pd
import numpy as np

from signalbot.errors import ConfigurationError, InsufficientDataError
from signalbot.indicators.base import (
    Indicator,
    require_length,
    to_ohlcv_frame,
    to_price_series,
    validate_multiplier,
    validate_period,
)
from signalbot.indicators.implementations import RSIIndicator, EMAIndicator, MACDIndicator
from signalbot.indicators.ohlcv import ADXIndicator
from signalbot.shared.types import Bar, frame_to_bars


@pytest.fixture
def sample_ohlcv():
    """Create sample OHLCV data."""
    rng = np.random.default_rng(7)
    dates = pd.date_range('2020-01-01', periods=40, freq='D')
    base = 100 + np.arange(40) * 0.5
    noise = rng.normal(0, 1, 40)
    return pd.DataFrame({
        'Open': base + noise,
        'High': base + abs(noise) + 1,
        'Low': base - abs(noise) - 1,
        'Close': base + noise * 0.5,
        'Volume': rng.integers(1000, 5000, 40).astype(float),
    }, index=dates)


class TestIndicatorInterface:
    """Test Indicator abstract base class."""

    def test_indicator_is_abstract(self):
        """Indicator should be an ABC."""
        assert issubclass(Indicator, ABC)
        with pytest.raises(TypeError):
            Indicator()

    def test_concrete_indicators_implement_calculate(self):
        """All concrete indicators implement calculate."""
        for cls in (RSIIndicator, EMAIndicator, MACDIndicator, ADXIndicator):
            assert issubclass(cls, Indicator)
            assert cls.calculate is not Indicator.calculate

    def test_repr_shows_parameters(self):
        assert repr(RSIIndicator(10)) == "RSIIndicator(period=10)"


class TestValidation:
    """Constructor parameter validation."""

    @pytest.mark.parametrize("value", [0, -1, 2.5, True, None, "14"])
    def test_invalid_period_rejected(self, value):
        with pytest.raises(ConfigurationError) as exc:
            validate_period("period", value)
        assert exc.value.parameter == "period"

    def test_numpy_integer_period_accepted(self):
        assert validate_period("period", np.int64(5)) == 5

    @pytest.mark.parametrize("value", [0, -2.0, float("nan"), float("inf"), True])
    def test_invalid_multiplier_rejected(self, value):
        with pytest.raises(ConfigurationError):
            validate_multiplier("multiplier", value)

    def test_configuration_error_is_value_error(self):
        """Callers catching ValueError still see configuration failures."""
        with pytest.raises(ValueError):
            RSIIndicator(period=0)


class TestRequireLength:
    def test_none_and_empty_rejected(self):
        with pytest.raises(InsufficientDataError):
            require_length(None, 1, "test")
        with pytest.raises(InsufficientDataError):
            require_length([], 1, "test")

    def test_short_input_reports_counts(self):
        with pytest.raises(InsufficientDataError) as exc:
            require_length([1.0, 2.0], 5, "test")
        assert exc.value.required_count == 5
        assert exc.value.available_count == 2

    def test_sufficient_input_returns_length(self):
        assert require_length([1.0, 2.0, 3.0], 3, "test") == 3


class TestInputCoercion:
    """Bars, DataFrames, Series and float lists all reach the same calculation."""

    def test_lowercase_columns_accepted(self, sample_ohlcv):
        lower = sample_ohlcv.rename(columns=str.lower)
        df = to_ohlcv_frame(lower)
        assert list(df.columns) == ['Open', 'High', 'Low', 'Close', 'Volume']
        pd.testing.assert_series_equal(to_price_series(lower), sample_ohlcv['Close'], check_names=False)

    def test_missing_column_raises(self, sample_ohlcv):
        with pytest.raises(ValueError):
            to_ohlcv_frame(sample_ohlcv.drop(columns=['Volume']))

    def test_bars_round_trip_through_frame(self, sample_ohlcv):
        bars = frame_to_bars(sample_ohlcv)
        assert isinstance(bars[0], Bar)
        df = to_ohlcv_frame(bars)
        np.testing.assert_allclose(df['Close'].to_numpy(), sample_ohlcv['Close'].to_numpy())

    def test_float_list_gets_range_index(self):
        series = to_price_series([1.0, 2.0, 3.0])
        assert list(series.index) == [0, 1, 2]
        assert series.dtype == float

    def test_same_result_for_bars_and_frame(self, sample_ohlcv):
        rsi = RSIIndicator(14)
        from_frame = rsi.calculate(sample_ohlcv)
        from_bars = rsi.calculate(frame_to_bars(sample_ohlcv))
        np.testing.assert_allclose(from_frame.to_numpy(), from_bars.to_numpy(), equal_nan=True)


class TestValueLookup:
    def test_get_value_at(self, sample_ohlcv):
        """Should get value at specific timestamp."""
        rsi = RSIIndicator(period=14)
        value = rsi.get_value_at(sample_ohlcv, sample_ohlcv.index[30])
        assert value is not None
        assert 0 <= value <= 100

    def test_get_value_at_warmup_is_none(self, sample_ohlcv):
        rsi = RSIIndicator(period=14)
        assert rsi.get_value_at(sample_ohlcv, sample_ohlcv.index[5]) is None

    def test_get_value_at_unknown_timestamp_is_none(self, sample_ohlcv):
        rsi = RSIIndicator(period=14)
        assert rsi.get_value_at(sample_ohlcv, pd.Timestamp('1999-01-01')) is None

    def test_latest(self, sample_ohlcv):
        ema = EMAIndicator(period=5)
        expected = ema.calculate(sample_ohlcv).iloc[-1]
        assert ema.latest(sample_ohlcv) == pytest.approx(expected)
