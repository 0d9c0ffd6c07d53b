"""
Tests for the recommend CLI (CSV loading, argument handling, exit codes).
"""
import logging
from pathlib import Path

import pytest
import pandas as pd
import numpy as np

from cli.recommend import load_bars_csv, main, parse_weights

BASELINE = Path(__file__).resolve().parents[2] / "configs" / "baseline.yaml"


@pytest.fixture(autouse=True)
def restore_logging():
    """main() installs its own root handler; put the previous ones back."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def bars_csv(tmp_path):
    """Lower-case OHLCV CSV, written newest-first to check sorting."""
    dates = pd.date_range('2020-01-01', periods=60, freq='D')
    close = np.where(np.arange(60) % 2 == 0, 100.0, 101.0)
    df = pd.DataFrame({
        'timestamp': dates.strftime('%Y-%m-%d'),
        'open': close,
        'high': close + 0.5,
        'low': close - 0.5,
        'close': close,
        'volume': 1000,
    }).iloc[::-1]
    path = tmp_path / "bars.csv"
    df.to_csv(path, index=False)
    return path


class TestLoadBars:
    def test_columns_normalized_and_sorted(self, bars_csv):
        df = load_bars_csv(bars_csv)
        assert list(df.columns) == ['Open', 'High', 'Low', 'Close', 'Volume']
        assert df.index.is_monotonic_increasing
        assert df['Close'].iloc[-1] == 101.0

    def test_missing_column(self, tmp_path):
        path = tmp_path / "partial.csv"
        path.write_text("timestamp,close\n2020-01-01,1.0\n")
        with pytest.raises(ValueError):
            load_bars_csv(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_bars_csv(tmp_path / "none.csv")


class TestParseWeights:
    def test_six_weights(self):
        assert parse_weights("0.1, 0, 0, 0, 0, -0.1") == [0.1, 0.0, 0.0, 0.0, 0.0, -0.1]

    def test_wrong_count(self):
        with pytest.raises(ValueError):
            parse_weights("1,2,3")


class TestMain:
    def test_hold_recommendation(self, bars_csv, capsys):
        assert main([str(bars_csv), "--score", "0.5"]) == 0
        out = capsys.readouterr().out
        assert "TRADE RECOMMENDATION" in out
        assert "Decision:      HOLD" in out

    def test_buy_with_config_and_weights(self, bars_csv, capsys):
        code = main([str(bars_csv), "--config", str(BASELINE), "--weights", "0,0,0,0,0,0", "--bias", "3"])
        assert code == 0
        out = capsys.readouterr().out
        assert "Decision:      BUY" in out
        assert "Stop loss:" in out

    def test_stats_file_applied(self, bars_csv, tmp_path, capsys):
        stats = tmp_path / "stats.yaml"
        stats.write_text("rsiBuySuccessRate: 0.8\n")
        assert main([str(bars_csv), "--score", "0.5", "--stats", str(stats)]) == 0

    def test_missing_score_is_error(self, bars_csv, capsys):
        assert main([str(bars_csv)]) == 1
        assert "Error" in capsys.readouterr().out

    def test_missing_csv(self, tmp_path, capsys):
        assert main([str(tmp_path / "none.csv"), "--score", "0.5"]) == 1

    def test_bad_config(self, bars_csv, tmp_path, capsys):
        config = tmp_path / "bad.yaml"
        config.write_text("risk:\n  risk_per_trade: 5\n")
        assert main([str(bars_csv), "--config", str(config), "--score", "0.5"]) == 1

    def test_bad_weights(self, bars_csv, capsys):
        assert main([str(bars_csv), "--weights", "1,2"]) == 1
