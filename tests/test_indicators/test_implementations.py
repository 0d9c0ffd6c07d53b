"""
Tests for the close-price indicator implementations.
"""
import pytest
import pandas as pd
import numpy as np

from signalbot.errors import ConfigurationError, InsufficientDataError
from signalbot.indicators.implementations import (
    EMAIndicator,
    RSIIndicator,
    MACDIndicator,
    BollingerBandsIndicator,
    MomentumIndicator,
    StochasticRSIIndicator,
    ema_recurrence,
)


@pytest.fixture
def sample_prices():
    """Create sample price data."""
    rng = np.random.default_rng(42)
    dates = pd.date_range('2020-01-01', periods=100, freq='D')
    return pd.Series(100 + np.arange(100) * 0.5 + rng.normal(0, 2, 100), index=dates)


ALL_PRICE_INDICATORS = [
    EMAIndicator(10),
    RSIIndicator(14),
    MomentumIndicator(10),
    StochasticRSIIndicator(14),
]


class TestLengthAlignment:
    """Every indicator returns one value per input bar."""

    @pytest.mark.parametrize("indicator", ALL_PRICE_INDICATORS, ids=lambda i: i.name)
    def test_series_output_matches_input(self, indicator, sample_prices):
        values = indicator.calculate(sample_prices)
        assert len(values) == len(sample_prices)
        assert values.index.equals(sample_prices.index)

    def test_tuple_outputs_match_input(self, sample_prices):
        for indicator in (MACDIndicator(), BollingerBandsIndicator()):
            for series in indicator.calculate(sample_prices):
                assert len(series) == len(sample_prices)

    @pytest.mark.parametrize("indicator", ALL_PRICE_INDICATORS + [MACDIndicator(), BollingerBandsIndicator()],
                             ids=lambda i: i.name)
    @pytest.mark.parametrize("empty", [[], pd.Series([], dtype=float)])
    def test_empty_input_raises(self, indicator, empty):
        with pytest.raises(InsufficientDataError):
            indicator.calculate(empty)


class TestEMA:
    def test_known_values(self):
        """SMA seed at period-1, then alpha = 2 / (period + 1)."""
        values = EMAIndicator(3).calculate([1.0, 2.0, 3.0, 4.0, 5.0])
        assert values.iloc[:2].isna().all()
        assert values.iloc[2] == pytest.approx(2.0)
        assert values.iloc[3] == pytest.approx(3.0)
        assert values.iloc[4] == pytest.approx(4.0)

    def test_first_valid_index(self, sample_prices):
        values = EMAIndicator(20).calculate(sample_prices)
        assert values.iloc[:19].isna().all()
        assert values.iloc[19:].notna().all()

    def test_recurrence_skips_leading_nan(self):
        out = ema_recurrence(np.array([np.nan, np.nan, 2.0, 4.0, 6.0]), 2)
        assert np.isnan(out[:3]).all()
        assert out[3] == pytest.approx(3.0)

    def test_short_input_raises(self):
        with pytest.raises(InsufficientDataError):
            EMAIndicator(5).calculate([1.0, 2.0])


class TestRSI:
    def test_bounds(self, sample_prices):
        values = RSIIndicator(14).calculate(sample_prices).dropna()
        assert values.min() >= 0
        assert values.max() <= 100

    def test_first_valid_index_is_period(self, sample_prices):
        values = RSIIndicator(14).calculate(sample_prices)
        assert values.iloc[:14].isna().all()
        assert not np.isnan(values.iloc[14])

    def test_no_losses_gives_exactly_100(self):
        values = RSIIndicator(5).calculate([float(p) for p in range(1, 21)])
        assert (values.dropna() == 100.0).all()

    def test_known_values_wilder_smoothing(self):
        # deltas +1, -1, +1: avg 0.5/0.5 -> 50, then (0.75, 0.25) -> RS 3 -> 75
        values = RSIIndicator(2).calculate([1.0, 2.0, 1.0, 2.0])
        assert values.iloc[2] == pytest.approx(50.0)
        assert values.iloc[3] == pytest.approx(75.0)

    def test_needs_period_plus_one_bars(self):
        with pytest.raises(InsufficientDataError) as exc:
            RSIIndicator(14).calculate([1.0] * 14)
        assert exc.value.required_count == 15


class TestMACD:
    def test_short_must_be_less_than_long(self):
        with pytest.raises(ConfigurationError):
            MACDIndicator(short_period=26, long_period=12)
        with pytest.raises(ConfigurationError):
            MACDIndicator(short_period=12, long_period=12)

    def test_warmup_indices(self, sample_prices):
        macd_line, signal, histogram = MACDIndicator(3, 5, 2).calculate(sample_prices)
        assert macd_line.iloc[:4].isna().all()
        assert not np.isnan(macd_line.iloc[4])
        assert signal.iloc[:5].isna().all()
        assert not np.isnan(signal.iloc[5])
        assert histogram.iloc[:5].isna().all()

    def test_histogram_is_line_minus_signal(self, sample_prices):
        macd_line, signal, histogram = MACDIndicator().calculate(sample_prices)
        pd.testing.assert_series_equal(
            histogram.dropna(), (macd_line - signal).dropna(), check_names=False
        )

    def test_line_is_ema_difference(self, sample_prices):
        macd_line, _, _ = MACDIndicator(12, 26, 9).calculate(sample_prices)
        expected = EMAIndicator(12).calculate(sample_prices) - EMAIndicator(26).calculate(sample_prices)
        np.testing.assert_allclose(macd_line.to_numpy(), expected.to_numpy(), equal_nan=True)


class TestBollingerBands:
    def test_band_ordering(self, sample_prices):
        upper, middle, lower = BollingerBandsIndicator(20, 2.0).calculate(sample_prices)
        valid = middle.notna()
        assert (lower[valid] <= middle[valid]).all()
        assert (middle[valid] <= upper[valid]).all()

    def test_known_values_population_std(self):
        upper, middle, lower = BollingerBandsIndicator(3, 2.0).calculate([1.0, 2.0, 3.0])
        std = np.sqrt(2.0 / 3.0)
        assert middle.iloc[2] == pytest.approx(2.0)
        assert upper.iloc[2] == pytest.approx(2.0 + 2 * std)
        assert lower.iloc[2] == pytest.approx(2.0 - 2 * std)
        assert middle.iloc[:2].isna().all()

    def test_flat_prices_collapse_bands(self):
        upper, middle, lower = BollingerBandsIndicator(5).calculate([10.0] * 8)
        np.testing.assert_allclose(upper.dropna(), 10.0)
        np.testing.assert_allclose(lower.dropna(), 10.0)

    def test_invalid_multiplier(self):
        with pytest.raises(ConfigurationError):
            BollingerBandsIndicator(20, 0)


class TestMomentum:
    def test_values_and_warmup(self):
        values = MomentumIndicator(2).calculate([1.0, 3.0, 6.0, 10.0])
        assert values.iloc[:2].isna().all()
        assert values.iloc[2] == pytest.approx(5.0)
        assert values.iloc[3] == pytest.approx(7.0)


class TestStochasticRSI:
    def test_range(self, sample_prices):
        values = StochasticRSIIndicator.from_prices(sample_prices, rsi_period=14, period=14).dropna()
        assert len(values) > 0
        assert values.min() >= 0
        assert values.max() <= 1

    def test_flat_window_gives_zero(self):
        values = StochasticRSIIndicator(3).calculate([50.0, 50.0, 50.0, 50.0])
        assert (values.dropna() == 0.0).all()

    def test_undefined_rsi_propagates(self, sample_prices):
        rsi = RSIIndicator(14).calculate(sample_prices)
        values = StochasticRSIIndicator(5).calculate(rsi)
        # First full window of defined RSI ends at 14 + 5 - 1
        assert values.iloc[:18].isna().all()
        assert not np.isnan(values.iloc[18])
