"""
Threshold configuration read by signal fusion and adjusted by the tuner.

Keys are snake_case; camelCase spellings (rsiThresholdBuy) are normalized
on every access so statistics feeds using either style resolve the same
entry. One ThresholdConfig belongs to one fusion/tuner pairing and is not
safe for concurrent writers.
"""
import math
import re
from collections.abc import MutableMapping
from typing import Dict, Iterator, Mapping, Optional

from ..errors import ConfigurationError
from ..shared.defaults import (
    RSI_THRESHOLD_BUY, RSI_THRESHOLD_SELL,
    MACD_THRESHOLD_BUY, MACD_THRESHOLD_SELL,
    BOLLINGER_MULTIPLIER,
)

RSI_THRESHOLD_BUY_KEY = "rsi_threshold_buy"
RSI_THRESHOLD_SELL_KEY = "rsi_threshold_sell"
MACD_THRESHOLD_BUY_KEY = "macd_threshold_buy"
MACD_THRESHOLD_SELL_KEY = "macd_threshold_sell"
BOLLINGER_MULTIPLIER_KEY = "bollinger_multiplier"

DEFAULT_THRESHOLDS: Dict[str, float] = {
    RSI_THRESHOLD_BUY_KEY: RSI_THRESHOLD_BUY,
    RSI_THRESHOLD_SELL_KEY: RSI_THRESHOLD_SELL,
    MACD_THRESHOLD_BUY_KEY: MACD_THRESHOLD_BUY,
    MACD_THRESHOLD_SELL_KEY: MACD_THRESHOLD_SELL,
    BOLLINGER_MULTIPLIER_KEY: BOLLINGER_MULTIPLIER,
}

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def normalize_key(name: str) -> str:
    """rsiThresholdBuy -> rsi_threshold_buy; snake_case passes through."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


class ThresholdConfig(MutableMapping):
    """Mapping of threshold name -> float, seeded with defaults."""

    def __init__(self, values: Optional[Mapping[str, float]] = None, use_defaults: bool = True):
        self._values: Dict[str, float] = dict(DEFAULT_THRESHOLDS) if use_defaults else {}
        for key, value in (values or {}).items():
            self[key] = value

    def __getitem__(self, key: str) -> float:
        return self._values[normalize_key(key)]

    def __setitem__(self, key: str, value: float) -> None:
        key = normalize_key(key)
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f"Threshold {key} must be numeric (got {value!r})", parameter=key, value=value)
        if not math.isfinite(value):
            raise ConfigurationError(f"Threshold {key} must be finite (got {value})", parameter=key, value=value)
        if key == BOLLINGER_MULTIPLIER_KEY and value <= 0:
            raise ConfigurationError(
                f"{BOLLINGER_MULTIPLIER_KEY} must be > 0 (got {value})", parameter=key, value=value
            )
        self._values[key] = value

    def __delitem__(self, key: str) -> None:
        del self._values[normalize_key(key)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and normalize_key(key) in self._values

    def copy(self) -> "ThresholdConfig":
        return ThresholdConfig(self._values, use_defaults=False)

    def as_dict(self) -> Dict[str, float]:
        return dict(self._values)

    def __repr__(self) -> str:
        return f"ThresholdConfig({self._values!r})"
