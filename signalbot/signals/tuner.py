"""
Parameter tuner: nudges fusion thresholds from historical success rates.

Each optimize() call applies one bounded step per parameter. The tuner owns
the ThresholdConfig it adjusts; hand the same object to SignalFusion so the
next decision sees the new values.
"""
import logging
from typing import Dict, Mapping, Optional

from .thresholds import (
    ThresholdConfig,
    normalize_key,
    RSI_THRESHOLD_BUY_KEY,
    RSI_THRESHOLD_SELL_KEY,
    BOLLINGER_MULTIPLIER_KEY,
)
from ..shared.defaults import (
    TUNER_SUCCESS_THRESHOLD,
    TUNER_NEUTRAL_RATE,
    TUNER_RSI_STEP,
    TUNER_BOLLINGER_STEP,
    TUNER_RSI_BUY_FLOOR,
    TUNER_RSI_SELL_CEILING,
    TUNER_BOLLINGER_FLOOR,
)

logger = logging.getLogger(__name__)

RSI_BUY_SUCCESS_RATE = "rsi_buy_success_rate"
RSI_SELL_SUCCESS_RATE = "rsi_sell_success_rate"
BOLLINGER_PERFORMANCE = "bollinger_performance"


class ParameterTuner:
    """Adjusts RSI thresholds and the Bollinger multiplier from performance stats."""

    def __init__(self, thresholds: Optional[ThresholdConfig] = None):
        self.thresholds = thresholds if thresholds is not None else ThresholdConfig()

    def optimize(self, stats: Optional[Mapping[str, float]] = None) -> Dict[str, float]:
        """
        Apply one tuning step.

        Args:
            stats: Success rates in [0, 1]; snake_case or camelCase keys.
                Missing entries count as neutral (0.5).

        Returns:
            Snapshot of the parameters after the step
        """
        rates = {normalize_key(k): float(v) for k, v in (stats or {}).items()}
        buy_rate = rates.get(RSI_BUY_SUCCESS_RATE, TUNER_NEUTRAL_RATE)
        sell_rate = rates.get(RSI_SELL_SUCCESS_RATE, TUNER_NEUTRAL_RATE)
        bollinger_rate = rates.get(BOLLINGER_PERFORMANCE, TUNER_NEUTRAL_RATE)

        before = self.parameters()

        if buy_rate > TUNER_SUCCESS_THRESHOLD:
            self.thresholds[RSI_THRESHOLD_BUY_KEY] = max(
                TUNER_RSI_BUY_FLOOR, self.thresholds[RSI_THRESHOLD_BUY_KEY] - TUNER_RSI_STEP
            )
        if sell_rate > TUNER_SUCCESS_THRESHOLD:
            self.thresholds[RSI_THRESHOLD_SELL_KEY] = min(
                TUNER_RSI_SELL_CEILING, self.thresholds[RSI_THRESHOLD_SELL_KEY] + TUNER_RSI_STEP
            )

        multiplier = self.thresholds[BOLLINGER_MULTIPLIER_KEY]
        if bollinger_rate > TUNER_SUCCESS_THRESHOLD:
            self.thresholds[BOLLINGER_MULTIPLIER_KEY] = multiplier + TUNER_BOLLINGER_STEP
        else:
            self.thresholds[BOLLINGER_MULTIPLIER_KEY] = max(TUNER_BOLLINGER_FLOOR, multiplier - TUNER_BOLLINGER_STEP)

        after = self.parameters()
        for key, value in after.items():
            if before.get(key) != value:
                logger.info(f"Tuned {key}: {before.get(key)} -> {value}")
        return after

    def get_parameter(self, name: str) -> float:
        """Current value; 0.0 for unknown names."""
        return self.thresholds.get(name, 0.0)

    def set_parameter(self, name: str, value: float) -> None:
        self.thresholds[name] = value

    def parameters(self) -> Dict[str, float]:
        return self.thresholds.as_dict()

    def log_parameters(self) -> None:
        """Write the current parameter set to the log."""
        logger.info("Current strategy parameters:")
        for key, value in self.parameters().items():
            logger.info(f"  {key}: {value}")
