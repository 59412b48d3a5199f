"""
Risk manager turning entry signals into sized bracket orders.

Sizing risks a fixed percentage of the balance over the stop distance and
clamps the result to the allowed position range. The daily-loss breaker is
checked before any arithmetic and refuses orders without raising.
"""

from dataclasses import dataclass
from typing import Optional

from ..config.defaults import RiskParams
from ..execution.models import OrderCommand
from ..logging.config import get_risk_logger, log_risk_decision
from ..signals.evaluator import TradeSignal
from ..state.models import DailyStats, Direction, OpenTrade

risk_logger = get_risk_logger(__name__)

REFUSED_DAILY_LOSS_LIMIT = "daily_loss_limit"
REFUSED_INVALID_PRICE = "invalid_price"


@dataclass(frozen=True)
class BracketOrder:
    """Entry with stop-loss and take-profit, sized by risk."""
    direction: Direction
    price: float
    stop_loss: float
    take_profit: float
    size: float
    risk_amount: float

    def to_trade(self, trade_id: str, entry_time: str) -> OpenTrade:
        return OpenTrade(
            trade_id=trade_id,
            direction=self.direction,
            entry_price=self.price,
            size=self.size,
            stop_loss=self.stop_loss,
            take_profit=self.take_profit,
            entry_time=entry_time,
        )

    def to_command(self, symbol: str) -> OrderCommand:
        return OrderCommand(
            direction=self.direction,
            symbol=symbol,
            price=self.price,
            stop_loss=self.stop_loss,
            take_profit=self.take_profit,
            volume=self.size,
        )


@dataclass(frozen=True)
class RiskDecision:
    """Either an approved order or the reason it was refused."""
    order: Optional[BracketOrder] = None
    refusal_reason: Optional[str] = None

    @property
    def approved(self) -> bool:
        return self.order is not None


class RiskManager:
    """Sizes and brackets orders under the configured risk limits."""

    def __init__(self, params: Optional[RiskParams] = None):
        self.params = params or RiskParams()
        self.logger = risk_logger

    def daily_loss_limit(self, balance: float) -> float:
        """Loss amount (positive) at which new trades stop for the day."""
        return balance * (self.params.max_daily_loss_percent / 100)

    def is_daily_loss_breached(self, daily_stats: DailyStats, balance: float) -> bool:
        """True once cumulative daily pnl has fallen below the loss limit."""
        return daily_stats.cumulative_pnl < -self.daily_loss_limit(balance)

    def bracket_prices(self, direction: Direction, price: float) -> tuple[float, float]:
        """
        Stop-loss and take-profit for an entry at price.

        BUY:  stop below, target above
        SELL: stop above, target below
        """
        stop_pct = self.params.stop_loss_percent / 100
        target_pct = self.params.take_profit_ratio * stop_pct

        if direction == Direction.BUY:
            return price * (1 - stop_pct), price * (1 + target_pct)
        return price * (1 + stop_pct), price * (1 - target_pct)

    def position_size(self, risk_amount: float, price: float, stop_loss: float) -> float:
        """Risk amount over stop distance, clamped to [min, max] position size."""
        raw_size = risk_amount / abs(price - stop_loss)
        return max(self.params.min_position_size, min(raw_size, self.params.max_position_size))

    def evaluate(
        self,
        signal: TradeSignal,
        price: float,
        balance: float,
        daily_stats: DailyStats
    ) -> RiskDecision:
        """
        Build a bracket order for a signal or refuse it.

        Args:
            signal: Entry signal
            price: Current ask price
            balance: Account balance
            daily_stats: Today's statistics for the loss breaker

        Returns:
            RiskDecision
        """
        if self.is_daily_loss_breached(daily_stats, balance):
            log_risk_decision(
                self.logger,
                approved=False,
                reason=REFUSED_DAILY_LOSS_LIMIT,
                context={
                    "daily_pnl": daily_stats.cumulative_pnl,
                    "loss_limit": self.daily_loss_limit(balance),
                    "balance": balance,
                    "direction": signal.action.value,
                }
            )
            return RiskDecision(refusal_reason=REFUSED_DAILY_LOSS_LIMIT)

        if price <= 0:
            log_risk_decision(
                self.logger,
                approved=False,
                reason=REFUSED_INVALID_PRICE,
                context={"price": price, "direction": signal.action.value}
            )
            return RiskDecision(refusal_reason=REFUSED_INVALID_PRICE)

        risk_amount = balance * (self.params.account_risk_percent / 100)
        stop_loss, take_profit = self.bracket_prices(signal.action, price)
        size = self.position_size(risk_amount, price, stop_loss)

        order = BracketOrder(
            direction=signal.action,
            price=price,
            stop_loss=stop_loss,
            take_profit=take_profit,
            size=size,
            risk_amount=risk_amount,
        )

        log_risk_decision(
            self.logger,
            approved=True,
            reason=signal.reason,
            context={
                "direction": signal.action.value,
                "price": price,
                "stop_loss": stop_loss,
                "take_profit": take_profit,
                "size": size,
                "risk_amount": risk_amount,
                "risk_percent": self.params.account_risk_percent,
            }
        )
        return RiskDecision(order=order)
