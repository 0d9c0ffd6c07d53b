"""
Pluggable technical rules for the fusion short-circuit.

Rules read the latest indicator row and produce buy/sell "reasons". Fusion
takes a decision from the rules before it ever consults a predictive score.
Any condition involving an undefined (NaN) value is treated as not met.
"""
from typing import List, Mapping, Protocol, Tuple

import pandas as pd

from .thresholds import (
    RSI_THRESHOLD_BUY_KEY, RSI_THRESHOLD_SELL_KEY,
    MACD_THRESHOLD_BUY_KEY, MACD_THRESHOLD_SELL_KEY,
)


class SignalRule(Protocol):
    """Protocol for a rule that evaluates one row and returns buy/sell reason strings."""

    def evaluate(
        self,
        row: pd.Series,
        thresholds: Mapping[str, float],
    ) -> Tuple[List[str], List[str]]:
        """
        Evaluate rule at this row.

        Args:
            row: Latest indicator row (rsi, macd_line, macd_signal, price,
                bollinger_upper, bollinger_lower)
            thresholds: ThresholdConfig (or any mapping with the same keys)

        Returns:
            (buy_reasons, sell_reasons); either list may be empty
        """
        ...


def _defined(row: pd.Series, *names: str) -> bool:
    return all(not pd.isna(row.get(name)) for name in names)


class BandReversalRule:
    """
    Mean-reversion rule combining RSI, Bollinger Bands and MACD.

    Buy when RSI is under the buy threshold, price is below the lower band and
    MACD leads its signal line; Sell on the mirror image. Every condition must
    hold; one reason is returned when the rule fires.
    """

    def evaluate(
        self,
        row: pd.Series,
        thresholds: Mapping[str, float],
    ) -> Tuple[List[str], List[str]]:
        buy_reasons: List[str] = []
        sell_reasons: List[str] = []
        if not _defined(row, "rsi", "macd_line", "macd_signal", "price", "bollinger_upper", "bollinger_lower"):
            return buy_reasons, sell_reasons

        rsi = row["rsi"]
        price = row["price"]
        macd_spread = row["macd_line"] - row["macd_signal"]

        if (
            rsi < thresholds[RSI_THRESHOLD_BUY_KEY]
            and price < row["bollinger_lower"]
            and macd_spread > thresholds[MACD_THRESHOLD_BUY_KEY]
        ):
            buy_reasons.append(
                f"RSI={rsi:.1f} < {thresholds[RSI_THRESHOLD_BUY_KEY]:.0f}, "
                f"close below lower band ({row['bollinger_lower']:.2f}), MACD above signal"
            )
        if (
            rsi > thresholds[RSI_THRESHOLD_SELL_KEY]
            and price > row["bollinger_upper"]
            and -macd_spread > thresholds[MACD_THRESHOLD_SELL_KEY]
        ):
            sell_reasons.append(
                f"RSI={rsi:.1f} > {thresholds[RSI_THRESHOLD_SELL_KEY]:.0f}, "
                f"close above upper band ({row['bollinger_upper']:.2f}), MACD below signal"
            )
        return buy_reasons, sell_reasons


def get_fusion_rules() -> List[SignalRule]:
    """Return the technical rules evaluated ahead of the predictive score."""
    return [BandReversalRule()]


def evaluate_rules(
    rules: List[SignalRule],
    row: pd.Series,
    thresholds: Mapping[str, float],
) -> Tuple[List[str], List[str]]:
    """Merge buy/sell reasons from all rules (rule order preserved)."""
    buy_reasons: List[str] = []
    sell_reasons: List[str] = []
    for rule in rules:
        buy, sell = rule.evaluate(row, thresholds)
        buy_reasons.extend(buy)
        sell_reasons.extend(sell)
    return buy_reasons, sell_reasons
