"""
Strategy configuration for the signal pipeline.

Holds indicator periods, fusion thresholds, score cut-offs and risk
parameters. Validation runs at construction time (fail fast with clear errors).
"""
import math
from dataclasses import dataclass

from .thresholds import ThresholdConfig
from ..errors import ConfigurationError
from ..shared.defaults import (
    RSI_PERIOD,
    MACD_SHORT, MACD_LONG, MACD_SIGNAL,
    BOLLINGER_PERIOD, BOLLINGER_MULTIPLIER,
    RSI_THRESHOLD_BUY, RSI_THRESHOLD_SELL,
    MACD_THRESHOLD_BUY, MACD_THRESHOLD_SELL,
    SCORE_BUY_THRESHOLD, SCORE_SELL_THRESHOLD,
    ACCOUNT_BALANCE, RISK_PER_TRADE, RISK_REWARD_RATIO, STOP_LOSS_PCT,
)


def _validate_config(config: "StrategyConfig") -> None:
    """Validate indicator, threshold and risk parameters. Raises ConfigurationError on failure."""
    for name in ("rsi_period", "macd_short", "macd_long", "macd_signal", "bollinger_period"):
        value = getattr(config, name)
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ConfigurationError(f"{name} must be a positive integer, got {value!r}", parameter=name, value=value)
    if config.macd_short >= config.macd_long:
        raise ConfigurationError(
            f"MACD short period ({config.macd_short}) must be less than long period ({config.macd_long})",
            parameter="macd_short",
            value=config.macd_short,
        )
    for name in (
        "rsi_threshold_buy", "rsi_threshold_sell", "macd_threshold_buy", "macd_threshold_sell",
        "bollinger_multiplier", "score_buy_threshold", "score_sell_threshold",
        "account_balance", "risk_per_trade", "risk_reward_ratio", "stop_loss_pct",
    ):
        value = getattr(config, name)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise ConfigurationError(f"{name} must be a finite number, got {value!r}", parameter=name, value=value)
    if not 0 <= config.rsi_threshold_buy < config.rsi_threshold_sell <= 100:
        raise ConfigurationError(
            f"RSI thresholds must satisfy 0 <= buy ({config.rsi_threshold_buy}) "
            f"< sell ({config.rsi_threshold_sell}) <= 100",
            parameter="rsi_threshold_buy",
            value=config.rsi_threshold_buy,
        )
    if config.bollinger_multiplier <= 0:
        raise ConfigurationError(
            f"bollinger_multiplier must be > 0, got {config.bollinger_multiplier}",
            parameter="bollinger_multiplier",
            value=config.bollinger_multiplier,
        )
    if not 0 <= config.score_sell_threshold <= config.score_buy_threshold <= 1:
        raise ConfigurationError(
            f"Score thresholds must satisfy 0 <= sell ({config.score_sell_threshold}) "
            f"<= buy ({config.score_buy_threshold}) <= 1",
            parameter="score_buy_threshold",
            value=config.score_buy_threshold,
        )
    if config.account_balance <= 0:
        raise ConfigurationError(
            f"account_balance must be > 0, got {config.account_balance}",
            parameter="account_balance",
            value=config.account_balance,
        )
    if not 0 < config.risk_per_trade <= 1:
        raise ConfigurationError(
            f"risk_per_trade must be in (0, 1], got {config.risk_per_trade}",
            parameter="risk_per_trade",
            value=config.risk_per_trade,
        )
    if config.risk_reward_ratio <= 0:
        raise ConfigurationError(
            f"risk_reward_ratio must be > 0, got {config.risk_reward_ratio}",
            parameter="risk_reward_ratio",
            value=config.risk_reward_ratio,
        )
    if not 0 < config.stop_loss_pct < 1:
        raise ConfigurationError(
            f"stop_loss_pct must be in (0, 1), got {config.stop_loss_pct}",
            parameter="stop_loss_pct",
            value=config.stop_loss_pct,
        )


@dataclass
class StrategyConfig:
    """Configuration for the indicator, fusion and sizing pipeline."""

    name: str = "baseline"
    description: str = ""

    # Indicator periods (from shared.defaults)
    rsi_period: int = RSI_PERIOD
    macd_short: int = MACD_SHORT
    macd_long: int = MACD_LONG
    macd_signal: int = MACD_SIGNAL
    bollinger_period: int = BOLLINGER_PERIOD

    # Rule thresholds; the tuner adjusts a copy of these, never the config
    rsi_threshold_buy: float = RSI_THRESHOLD_BUY
    rsi_threshold_sell: float = RSI_THRESHOLD_SELL
    macd_threshold_buy: float = MACD_THRESHOLD_BUY
    macd_threshold_sell: float = MACD_THRESHOLD_SELL
    bollinger_multiplier: float = BOLLINGER_MULTIPLIER

    # Predictive score cut-offs
    score_buy_threshold: float = SCORE_BUY_THRESHOLD
    score_sell_threshold: float = SCORE_SELL_THRESHOLD

    # Risk
    account_balance: float = ACCOUNT_BALANCE
    risk_per_trade: float = RISK_PER_TRADE
    risk_reward_ratio: float = RISK_REWARD_RATIO
    stop_loss_pct: float = STOP_LOSS_PCT  # default stop distance as fraction of entry

    def __post_init__(self):
        _validate_config(self)

    def thresholds(self) -> ThresholdConfig:
        """Fresh ThresholdConfig seeded from this config."""
        return ThresholdConfig({
            "rsi_threshold_buy": self.rsi_threshold_buy,
            "rsi_threshold_sell": self.rsi_threshold_sell,
            "macd_threshold_buy": self.macd_threshold_buy,
            "macd_threshold_sell": self.macd_threshold_sell,
            "bollinger_multiplier": self.bollinger_multiplier,
        })
