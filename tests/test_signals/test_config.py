"""Tests for StrategyConfig validation and YAML loading."""
from pathlib import Path

import pytest

from signalbot.errors import ConfigurationError
from signalbot.signals.config import StrategyConfig
from signalbot.signals.config_loader import load_config_from_yaml, save_config_to_yaml
from signalbot.shared import defaults

BASELINE = Path(__file__).resolve().parents[2] / "configs" / "baseline.yaml"


class TestStrategyConfig:
    def test_defaults_come_from_shared_defaults(self):
        config = StrategyConfig()
        assert config.rsi_period == defaults.RSI_PERIOD
        assert config.macd_long == defaults.MACD_LONG
        assert config.score_buy_threshold == defaults.SCORE_BUY_THRESHOLD
        assert config.account_balance == defaults.ACCOUNT_BALANCE
        assert config.stop_loss_pct == defaults.STOP_LOSS_PCT

    @pytest.mark.parametrize("kwargs", [
        {"rsi_period": 0},
        {"macd_short": 26, "macd_long": 12},
        {"bollinger_period": 2.5},
        {"rsi_threshold_buy": 70, "rsi_threshold_sell": 30},
        {"bollinger_multiplier": 0},
        {"score_buy_threshold": 0.2, "score_sell_threshold": 0.4},
        {"score_buy_threshold": 1.2},
        {"account_balance": 0},
        {"risk_per_trade": 0},
        {"risk_per_trade": 1.5},
        {"risk_reward_ratio": -1},
        {"stop_loss_pct": 0},
        {"macd_threshold_buy": float("nan")},
    ])
    def test_invalid_values_fail_fast(self, kwargs):
        with pytest.raises(ConfigurationError):
            StrategyConfig(**kwargs)

    def test_error_names_parameter(self):
        with pytest.raises(ConfigurationError) as exc:
            StrategyConfig(account_balance=-5)
        assert exc.value.parameter == "account_balance"

    def test_thresholds_are_fresh(self):
        config = StrategyConfig(rsi_threshold_buy=25, bollinger_multiplier=2.5)
        first = config.thresholds()
        first["rsi_threshold_buy"] = 10
        second = config.thresholds()
        assert second["rsi_threshold_buy"] == 25.0
        assert second["bollinger_multiplier"] == 2.5


class TestConfigLoader:
    def test_baseline_matches_defaults(self):
        config = load_config_from_yaml(BASELINE)
        assert config.name == "baseline"
        default = StrategyConfig()
        for field in ("rsi_period", "macd_short", "macd_long", "macd_signal", "bollinger_period",
                      "rsi_threshold_buy", "rsi_threshold_sell", "bollinger_multiplier",
                      "score_buy_threshold", "score_sell_threshold",
                      "account_balance", "risk_per_trade", "risk_reward_ratio", "stop_loss_pct"):
            assert getattr(config, field) == getattr(default, field)

    def test_partial_file_uses_defaults(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("indicators:\n  rsi:\n    period: 10\nrisk:\n  risk_per_trade: 0.02\n")
        config = load_config_from_yaml(path)
        assert config.name == "custom"
        assert config.rsi_period == 10
        assert config.risk_per_trade == 0.02
        assert config.macd_long == defaults.MACD_LONG

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config_from_yaml(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        with pytest.raises(ConfigurationError):
            load_config_from_yaml(path)

    def test_invalid_value_in_file(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("indicators:\n  macd:\n    short: 30\n    long: 26\n")
        with pytest.raises(ConfigurationError):
            load_config_from_yaml(path)

    def test_section_must_be_mapping(self, tmp_path):
        path = tmp_path / "bad_section.yaml"
        path.write_text("risk: 5\n")
        with pytest.raises(ConfigurationError):
            load_config_from_yaml(path)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("risk: [unclosed\n")
        with pytest.raises(ConfigurationError):
            load_config_from_yaml(path)

    def test_save_then_load(self, tmp_path):
        config = StrategyConfig(name="tuned", rsi_period=9, rsi_threshold_buy=27.0, stop_loss_pct=0.03)
        path = tmp_path / "out" / "tuned.yaml"
        save_config_to_yaml(config, path)
        assert load_config_from_yaml(path) == config
