"""
YAML configuration loader for strategies.

Loads StrategyConfig from YAML files so parameters can be shared and
modified without code changes. Missing keys fall back to shared.defaults.
"""
import yaml
from pathlib import Path
from typing import Union

from .config import StrategyConfig
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


def _section(config_dict: dict, name: str) -> dict:
    section = config_dict.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"Config section '{name}' must be a mapping", parameter=name, value=section)
    return section


def load_config_from_yaml(yaml_path: Union[str, Path]) -> StrategyConfig:
    """
    Load strategy configuration from YAML file.

    Args:
        yaml_path: Path to YAML configuration file

    Returns:
        StrategyConfig object

    Raises:
        FileNotFoundError: If YAML file doesn't exist
        ConfigurationError: If YAML is empty, malformed or holds invalid values
    """
    yaml_path = Path(yaml_path)

    if not yaml_path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    with open(yaml_path, 'r') as f:
        try:
            config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {yaml_path}: {e}")

    if not config_dict:
        raise ConfigurationError(f"Empty config file: {yaml_path}")
    if not isinstance(config_dict, dict):
        raise ConfigurationError(f"Config file must contain a mapping: {yaml_path}")

    indicators = _section(config_dict, 'indicators')
    rsi = indicators.get('rsi') or {}
    macd = indicators.get('macd') or {}
    bollinger = indicators.get('bollinger') or {}
    thresholds = _section(config_dict, 'thresholds')
    scoring = _section(config_dict, 'scoring')
    risk = _section(config_dict, 'risk')

    return StrategyConfig(
        name=config_dict.get('name', yaml_path.stem),
        description=config_dict.get('description', ''),
        rsi_period=rsi.get('period', RSI_PERIOD),
        macd_short=macd.get('short', MACD_SHORT),
        macd_long=macd.get('long', MACD_LONG),
        macd_signal=macd.get('signal', MACD_SIGNAL),
        bollinger_period=bollinger.get('period', BOLLINGER_PERIOD),
        rsi_threshold_buy=thresholds.get('rsi_buy', RSI_THRESHOLD_BUY),
        rsi_threshold_sell=thresholds.get('rsi_sell', RSI_THRESHOLD_SELL),
        macd_threshold_buy=thresholds.get('macd_buy', MACD_THRESHOLD_BUY),
        macd_threshold_sell=thresholds.get('macd_sell', MACD_THRESHOLD_SELL),
        bollinger_multiplier=thresholds.get('bollinger_multiplier', BOLLINGER_MULTIPLIER),
        score_buy_threshold=scoring.get('buy_threshold', SCORE_BUY_THRESHOLD),
        score_sell_threshold=scoring.get('sell_threshold', SCORE_SELL_THRESHOLD),
        account_balance=risk.get('account_balance', ACCOUNT_BALANCE),
        risk_per_trade=risk.get('risk_per_trade', RISK_PER_TRADE),
        risk_reward_ratio=risk.get('risk_reward_ratio', RISK_REWARD_RATIO),
        stop_loss_pct=risk.get('stop_loss_pct', STOP_LOSS_PCT),
    )


def save_config_to_yaml(config: StrategyConfig, yaml_path: Union[str, Path]):
    """
    Save strategy configuration to YAML file.

    Args:
        config: StrategyConfig object to save
        yaml_path: Path where to save YAML file
    """
    yaml_path = Path(yaml_path)

    config_dict = {
        'name': config.name,
        'description': config.description,

        'indicators': {
            'rsi': {'period': config.rsi_period},
            'macd': {
                'short': config.macd_short,
                'long': config.macd_long,
                'signal': config.macd_signal,
            },
            'bollinger': {'period': config.bollinger_period},
        },

        'thresholds': {
            'rsi_buy': config.rsi_threshold_buy,
            'rsi_sell': config.rsi_threshold_sell,
            'macd_buy': config.macd_threshold_buy,
            'macd_sell': config.macd_threshold_sell,
            'bollinger_multiplier': config.bollinger_multiplier,
        },

        'scoring': {
            'buy_threshold': config.score_buy_threshold,
            'sell_threshold': config.score_sell_threshold,
        },

        'risk': {
            'account_balance': config.account_balance,
            'risk_per_trade': config.risk_per_trade,
            'risk_reward_ratio': config.risk_reward_ratio,
            'stop_loss_pct': config.stop_loss_pct,
        },
    }

    yaml_path.parent.mkdir(parents=True, exist_ok=True)

    with open(yaml_path, 'w') as f:
        yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)
