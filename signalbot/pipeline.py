"""
Trade pipeline: bars -> fusion decision -> sized proposal.

Wires SignalFusion, RiskSizer and ParameterTuner together from one
StrategyConfig. Nothing here places orders; the output is a TradeProposal.
"""
import logging
import math
from typing import Mapping, Optional

from .errors import DegenerateInputError
from .indicators.base import IndicatorInput, to_price_series
from .risk.sizer import RiskSizer
from .scoring.base import PredictiveScorer
from .signals.config import StrategyConfig
from .signals.fusion import FusionResult, SignalFusion
from .signals.tuner import ParameterTuner
from .shared.types import SignalType, TradeProposal


logger = logging.getLogger(__name__)


class TradePipeline:
    """
    Produces one TradeProposal per call from the latest market data.

    The tuner owns the live thresholds; fusion reads them on every call, so
    update_parameters() takes effect on the next proposal.
    """

    def __init__(
        self,
        config: Optional[StrategyConfig] = None,
        scorer: Optional[PredictiveScorer] = None,
        tuner: Optional[ParameterTuner] = None,
    ):
        """
        Args:
            config: Strategy configuration (default: StrategyConfig())
            scorer: Predictive scorer for the fallback path
            tuner: Parameter tuner (default: one seeded from config thresholds)
        """
        self.config = config if config is not None else StrategyConfig()
        self.fusion = SignalFusion(
            rsi_period=self.config.rsi_period,
            macd_short=self.config.macd_short,
            macd_long=self.config.macd_long,
            macd_signal=self.config.macd_signal,
            bollinger_period=self.config.bollinger_period,
            scorer=scorer,
            score_buy_threshold=self.config.score_buy_threshold,
            score_sell_threshold=self.config.score_sell_threshold,
        )
        self.sizer = RiskSizer(self.config.account_balance, self.config.risk_per_trade)
        self.tuner = tuner if tuner is not None else ParameterTuner(self.config.thresholds())

    @property
    def thresholds(self):
        return self.tuner.thresholds

    def evaluate(self, data: IndicatorInput, predictive_score: Optional[float] = None) -> FusionResult:
        return self.fusion.evaluate(data, self.thresholds, predictive_score)

    def propose(
        self,
        data: IndicatorInput,
        entry_price: Optional[float] = None,
        stop_loss_distance: Optional[float] = None,
        predictive_score: Optional[float] = None,
    ) -> TradeProposal:
        """
        Build a trade proposal for the latest bar.

        Args:
            data: Bars, OHLCV DataFrame or close prices (chronological)
            entry_price: Entry price (default: latest close)
            stop_loss_distance: Per-unit stop distance (default: entry * stop_loss_pct)
            predictive_score: Score in [0, 1] for the fallback path

        Returns:
            TradeProposal; HOLD proposals have zero size and no stop/target
        """
        result = self.evaluate(data, predictive_score)

        if entry_price is None:
            entry_price = float(to_price_series(data).iloc[-1])
        if not math.isfinite(entry_price) or entry_price <= 0:
            raise DegenerateInputError(
                f"Entry price must be a positive finite number (got {entry_price})",
                context={"entry_price": entry_price},
            )

        if result.decision == SignalType.HOLD:
            logger.info(f"HOLD at {entry_price:.2f}: {result.reasoning}")
            return TradeProposal(
                decision=SignalType.HOLD,
                entry_price=entry_price,
                position_size=0.0,
                reasoning=result.reasoning,
            )

        if stop_loss_distance is None:
            stop_loss_distance = entry_price * self.config.stop_loss_pct

        size = self.sizer.position_size(stop_loss_distance)
        stop = self.sizer.stop_loss_price(entry_price, size, side=result.decision)
        target = self.sizer.take_profit_price(entry_price, stop, self.config.risk_reward_ratio)

        proposal = TradeProposal(
            decision=result.decision,
            entry_price=entry_price,
            position_size=size,
            stop_loss_price=stop,
            take_profit_price=target,
            risk_reward_ratio=self.config.risk_reward_ratio,
            reasoning=result.reasoning,
        )
        logger.info(
            f"{result.decision.value.upper()} {size:.4f} @ {entry_price:.2f} "
            f"(stop {stop:.2f}, target {target:.2f}) [{result.source}]"
        )
        return proposal

    def update_parameters(self, stats: Mapping[str, float]):
        """Feed historical success rates to the tuner."""
        return self.tuner.optimize(stats)
