"""
Fixed-fractional position sizing with stop-loss and take-profit levels.

The amount at risk is account_balance * risk_per_trade. Size follows from the
stop distance; the stop sits that amount (per unit) away from entry, and the
target sits risk_reward_ratio times the stop distance on the other side.
"""
import math
from numbers import Real

from ..errors import ConfigurationError, DegenerateInputError
from ..shared.types import SignalType
from ..shared.defaults import ACCOUNT_BALANCE, RISK_PER_TRADE


def _finite(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


class RiskSizer:
    """Sizes positions so that hitting the stop loses a fixed fraction of the account."""

    def __init__(self, account_balance: float = ACCOUNT_BALANCE, risk_per_trade: float = RISK_PER_TRADE):
        """
        Args:
            account_balance: Account value (> 0)
            risk_per_trade: Fraction of the balance risked per trade, in (0, 1]
        """
        if not _finite(account_balance) or account_balance <= 0:
            raise ConfigurationError(
                f"account_balance must be > 0 (got {account_balance})",
                parameter="account_balance",
                value=account_balance,
            )
        if not _finite(risk_per_trade) or not 0 < risk_per_trade <= 1:
            raise ConfigurationError(
                f"risk_per_trade must be in (0, 1] (got {risk_per_trade})",
                parameter="risk_per_trade",
                value=risk_per_trade,
            )
        self.account_balance = float(account_balance)
        self.risk_per_trade = float(risk_per_trade)

    @property
    def risk_amount(self) -> float:
        """Currency amount lost if the stop is hit."""
        return self.account_balance * self.risk_per_trade

    def position_size(self, stop_loss_distance: float) -> float:
        """
        Units to buy/sell for the given per-unit stop distance.

        Raises:
            DegenerateInputError: distance <= 0, non-finite, or the size overflows
        """
        if not _finite(stop_loss_distance) or stop_loss_distance <= 0:
            raise DegenerateInputError(
                f"Stop loss distance must be a positive finite number (got {stop_loss_distance})",
                context={"stop_loss_distance": stop_loss_distance},
            )
        size = self.risk_amount / stop_loss_distance
        if not math.isfinite(size):
            raise DegenerateInputError(
                f"Position size is not finite for stop distance {stop_loss_distance}",
                context={"stop_loss_distance": stop_loss_distance},
            )
        return size

    def stop_loss_price(self, entry_price: float, position_size: float, side: SignalType = SignalType.BUY) -> float:
        """
        Price at which the position loses risk_amount.

        Below entry for BUY, above entry for SELL.
        """
        if not _finite(position_size) or position_size <= 0:
            raise DegenerateInputError(
                f"Position size must be a positive finite number (got {position_size})",
                context={"position_size": position_size},
            )
        if not _finite(entry_price):
            raise DegenerateInputError(
                f"Entry price must be finite (got {entry_price})", context={"entry_price": entry_price}
            )
        if side == SignalType.HOLD:
            raise DegenerateInputError("HOLD has no stop loss", context={"side": side.value})

        distance = self.risk_amount / position_size
        if side == SignalType.BUY:
            return entry_price - distance
        return entry_price + distance

    def take_profit_price(self, entry_price: float, stop_loss_price: float, risk_reward_ratio: float) -> float:
        """entry + (entry - stop) * ratio; lands above entry for longs and below for shorts."""
        if not _finite(risk_reward_ratio) or risk_reward_ratio <= 0:
            raise DegenerateInputError(
                f"Risk/reward ratio must be a positive finite number (got {risk_reward_ratio})",
                context={"risk_reward_ratio": risk_reward_ratio},
            )
        if not _finite(entry_price) or not _finite(stop_loss_price):
            raise DegenerateInputError(
                f"Entry and stop prices must be finite (got {entry_price}, {stop_loss_price})",
                context={"entry_price": entry_price, "stop_loss_price": stop_loss_price},
            )
        return entry_price + (entry_price - stop_loss_price) * risk_reward_ratio

    def __repr__(self) -> str:
        return f"RiskSizer(account_balance={self.account_balance}, risk_per_trade={self.risk_per_trade})"
