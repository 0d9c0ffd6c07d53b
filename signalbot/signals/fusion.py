"""
Signal fusion: technical rules first, predictive score as fallback.

Computes RSI, MACD and Bollinger Bands over the input, evaluates the
technical rules on the latest bar, and only when no rule fires consults the
predictive score. A rule decision is never overridden by the score.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Tuple

import pandas as pd

from .rules import SignalRule, evaluate_rules, get_fusion_rules
from .thresholds import BOLLINGER_MULTIPLIER_KEY, ThresholdConfig
from ..errors import ConfigurationError, DegenerateInputError, InsufficientDataError
from ..indicators.base import IndicatorInput, require_length, to_price_series, validate_period
from ..indicators.implementations import BollingerBandsIndicator, MACDIndicator, RSIIndicator
from ..scoring.base import PredictiveScorer
from ..shared.types import SignalType
from ..shared.defaults import (
    RSI_PERIOD,
    MACD_SHORT, MACD_LONG, MACD_SIGNAL,
    BOLLINGER_PERIOD,
    SCORE_BUY_THRESHOLD, SCORE_SELL_THRESHOLD,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FusionResult:
    """Outcome of one fusion call."""
    decision: SignalType
    source: str  # "rules" or "score"
    features: Tuple[float, ...] = field(default_factory=tuple)
    score: Optional[float] = None
    reasoning: str = ""


class SignalFusion:
    """
    Combines RSI, MACD, Bollinger Bands and a predictive score into one decision.

    Thresholds are read from a ThresholdConfig on every call, so a tuner can
    adjust them between calls without rebuilding the fusion object.
    """

    def __init__(
        self,
        rsi_period: int = RSI_PERIOD,
        macd_short: int = MACD_SHORT,
        macd_long: int = MACD_LONG,
        macd_signal: int = MACD_SIGNAL,
        bollinger_period: int = BOLLINGER_PERIOD,
        scorer: Optional[PredictiveScorer] = None,
        score_buy_threshold: float = SCORE_BUY_THRESHOLD,
        score_sell_threshold: float = SCORE_SELL_THRESHOLD,
        rules: Optional[List[SignalRule]] = None,
    ):
        """
        Args:
            rsi_period: RSI lookback
            macd_short: MACD fast EMA period
            macd_long: MACD slow EMA period
            macd_signal: MACD signal line period
            bollinger_period: Bollinger window (multiplier comes from thresholds)
            scorer: Predictive scorer used when no explicit score is passed
            score_buy_threshold: Score above which the fallback says Buy
            score_sell_threshold: Score below which the fallback says Sell
            rules: Technical rules (default: get_fusion_rules())
        """
        if not 0.0 <= score_sell_threshold <= score_buy_threshold <= 1.0:
            raise ConfigurationError(
                f"Score thresholds must satisfy 0 <= sell ({score_sell_threshold}) "
                f"<= buy ({score_buy_threshold}) <= 1"
            )
        self.rsi = RSIIndicator(rsi_period)
        self.macd = MACDIndicator(macd_short, macd_long, macd_signal)
        self.bollinger_period = validate_period("bollinger_period", bollinger_period)
        self.scorer = scorer
        self.score_buy_threshold = score_buy_threshold
        self.score_sell_threshold = score_sell_threshold
        self.rules = rules if rules is not None else get_fusion_rules()

    @property
    def min_length(self) -> int:
        """Bars required before RSI, MACD and Bollinger can all be calculated."""
        return max(self.rsi.min_length, self.macd.min_length, self.bollinger_period)

    def latest_row(self, data: IndicatorInput, thresholds: Mapping[str, float]) -> pd.Series:
        """Latest indicator values used by the rules (NaN where still in warm-up)."""
        bollinger = BollingerBandsIndicator(self.bollinger_period, thresholds[BOLLINGER_MULTIPLIER_KEY])
        prices = to_price_series(data)

        rsi = self.rsi.calculate(prices)
        macd_line, signal_line, _ = self.macd.calculate(prices)
        upper, _, lower = bollinger.calculate(prices)

        return pd.Series({
            "rsi": rsi.iloc[-1],
            "macd_line": macd_line.iloc[-1],
            "macd_signal": signal_line.iloc[-1],
            "price": prices.iloc[-1],
            "bollinger_upper": upper.iloc[-1],
            "bollinger_lower": lower.iloc[-1],
        }, dtype=float)

    def evaluate(
        self,
        data: IndicatorInput,
        thresholds: Optional[Mapping[str, float]] = None,
        predictive_score: Optional[float] = None,
    ) -> FusionResult:
        """
        Decide Buy/Sell/Hold for the latest bar.

        Args:
            data: Bars, OHLCV DataFrame or close prices (chronological)
            thresholds: ThresholdConfig or mapping (default: fresh defaults)
            predictive_score: Score in [0, 1]; if None the configured scorer is asked

        Returns:
            FusionResult with decision, feature vector and reasoning

        Raises:
            InsufficientDataError: data is empty or shorter than min_length
            ConfigurationError: the fallback is needed but no score or scorer is available
            DegenerateInputError: the score is not a finite value in [0, 1]
        """
        if data is None or len(data) == 0:
            raise InsufficientDataError(
                "Insufficient market data for signal generation",
                required_count=self.min_length,
                available_count=0,
            )
        require_length(data, self.min_length, "signal fusion")
        if not isinstance(thresholds, ThresholdConfig):
            thresholds = ThresholdConfig(thresholds)

        row = self.latest_row(data, thresholds)
        features = (
            row["rsi"], row["macd_line"], row["macd_signal"],
            row["price"], row["bollinger_upper"], row["bollinger_lower"],
        )

        buy_reasons, sell_reasons = evaluate_rules(self.rules, row, thresholds)
        if buy_reasons:
            logger.debug(f"Rule-based BUY: {'; '.join(buy_reasons)}")
            return FusionResult(SignalType.BUY, "rules", features, None, " | ".join(buy_reasons))
        if sell_reasons:
            logger.debug(f"Rule-based SELL: {'; '.join(sell_reasons)}")
            return FusionResult(SignalType.SELL, "rules", features, None, " | ".join(sell_reasons))

        score = self._resolve_score(features, predictive_score)
        if score > self.score_buy_threshold:
            decision = SignalType.BUY
        elif score < self.score_sell_threshold:
            decision = SignalType.SELL
        else:
            decision = SignalType.HOLD

        logger.debug(f"No rule fired; score={score:.3f} -> {decision.value.upper()}")
        return FusionResult(decision, "score", features, score, f"Predictive score {score:.2f}")

    def generate_signal(
        self,
        data: IndicatorInput,
        thresholds: Optional[Mapping[str, float]] = None,
        predictive_score: Optional[float] = None,
    ) -> SignalType:
        """Decision only; see evaluate()."""
        return self.evaluate(data, thresholds, predictive_score).decision

    def _resolve_score(self, features: Tuple[float, ...], predictive_score: Optional[float]) -> float:
        if predictive_score is None:
            if self.scorer is None:
                raise ConfigurationError("No predictive score given and no scorer configured")
            predictive_score = self.scorer.predict(list(features))

        try:
            score = float(predictive_score)
        except (TypeError, ValueError):
            raise DegenerateInputError(f"Predictive score must be a number (got {predictive_score!r})")
        if not math.isfinite(score) or not 0.0 <= score <= 1.0:
            raise DegenerateInputError(f"Predictive score must be in [0, 1] (got {score})")
        return score
