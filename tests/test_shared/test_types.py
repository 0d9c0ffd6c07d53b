"""Tests for shared types and the error taxonomy."""
import pandas as pd
import pytest

from signalbot.errors import (
    ConfigurationError,
    DegenerateInputError,
    InsufficientDataError,
    SignalBotError,
)
from signalbot.shared.types import Bar, SignalType, TradeProposal, bars_to_frame, frame_to_bars


class TestBar:
    def test_typical_price(self):
        bar = Bar(pd.Timestamp('2020-01-01'), 10.0, 12.0, 6.0, 9.0, 100.0)
        assert bar.typical_price == pytest.approx(9.0)

    def test_frame_round_trip(self):
        bars = [
            Bar(pd.Timestamp('2020-01-01'), 1.0, 2.0, 0.5, 1.5, 10.0),
            Bar(pd.Timestamp('2020-01-02'), 1.5, 2.5, 1.0, 2.0, 20.0),
        ]
        df = bars_to_frame(bars)
        assert list(df.columns) == ['Open', 'High', 'Low', 'Close', 'Volume']
        assert df.index.name == 'timestamp'
        assert frame_to_bars(df) == bars


class TestTradeProposal:
    def test_hold_not_actionable(self):
        assert not TradeProposal(SignalType.HOLD, 100.0, 0.0).is_actionable

    def test_sized_buy_actionable(self):
        assert TradeProposal(SignalType.BUY, 100.0, 2.0, 98.0, 104.0, 2.0).is_actionable


class TestErrors:
    @pytest.mark.parametrize("cls", [ConfigurationError, InsufficientDataError, DegenerateInputError])
    def test_hierarchy(self, cls):
        assert issubclass(cls, SignalBotError)
        assert issubclass(cls, ValueError)

    def test_context_and_counts(self):
        err = InsufficientDataError("short", required_count=15, available_count=3, context={"indicator": "RSI"})
        assert err.required_count == 15
        assert err.available_count == 3
        assert err.context == {"indicator": "RSI"}
        assert str(err) == "short"

    def test_context_defaults_to_empty(self):
        assert DegenerateInputError("bad").context == {}
