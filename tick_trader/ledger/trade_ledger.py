"""
Trade ledger owning every trade record plus daily and account aggregates.

The ledger is an immutable value. open() and reconcile() return a new
ledger; the engine persists each returned ledger before moving on.
"""

from dataclasses import dataclass, replace
from typing import Optional

import structlog

from ..errors import TradeStateError
from ..logging.config import get_trade_logger, log_trade_event
from ..state.models import (
    AccountState,
    ClosedTrade,
    DailyStats,
    LedgerSnapshot,
    OpenTrade,
    Trade,
)
from ..state.transitions import close_trade, should_close

logger = structlog.get_logger(__name__)
trade_logger = get_trade_logger(__name__)


@dataclass(frozen=True)
class TradeLedger:
    """All trades in entry order with the current day and account aggregates."""

    trades: tuple[Trade, ...]
    daily_stats: DailyStats
    account: AccountState

    @classmethod
    def empty(cls, balance: float, date: str) -> "TradeLedger":
        """Fresh ledger with no trades and zeroed daily statistics."""
        return cls(
            trades=(),
            daily_stats=DailyStats(date=date),
            account=AccountState(balance=balance),
        )

    @classmethod
    def from_snapshot(
        cls,
        snapshot: LedgerSnapshot,
        initial_balance: float,
        date: str
    ) -> "TradeLedger":
        """
        Restore a ledger from a persisted snapshot.

        Snapshots written without an account section fall back to the
        configured initial balance; a missing stats date falls back to date.
        """
        daily_stats = snapshot.daily_stats
        if not daily_stats.date:
            daily_stats = replace(daily_stats, date=date)

        account = snapshot.account or AccountState(balance=initial_balance)
        return cls(trades=tuple(snapshot.trades), daily_stats=daily_stats, account=account)

    @property
    def open_trades(self) -> list[OpenTrade]:
        return [trade for trade in self.trades if isinstance(trade, OpenTrade)]

    @property
    def closed_trades(self) -> list[ClosedTrade]:
        return [trade for trade in self.trades if isinstance(trade, ClosedTrade)]

    @property
    def has_open_trade(self) -> bool:
        return any(isinstance(trade, OpenTrade) for trade in self.trades)

    def open(self, trade: OpenTrade) -> "TradeLedger":
        """
        Record a newly opened trade and count it in the daily statistics.

        Raises:
            TradeStateError: Another trade is still open
        """
        if self.has_open_trade:
            raise TradeStateError(
                "Cannot open a trade while another is open",
                trade_id=trade.trade_id,
                current_status=self.open_trades[0].status.value
            )

        log_trade_event(trade_logger, "trade_opened", trade)
        return replace(
            self,
            trades=self.trades + (trade,),
            daily_stats=self.daily_stats.with_trade_opened(),
        )

    def reconcile(self, price: float, timestamp: str) -> tuple["TradeLedger", list[ClosedTrade]]:
        """
        Close every open trade whose take-profit or stop-loss price has hit.

        Args:
            price: Current ask price
            timestamp: Exit time recorded on closed trades

        Returns:
            (new ledger, trades closed by this call in ledger order)
        """
        closed: list[ClosedTrade] = []
        trades = list(self.trades)
        daily_stats = self.daily_stats
        account = self.account

        for index, trade in enumerate(trades):
            if not isinstance(trade, OpenTrade) or not should_close(trade, price):
                continue

            closed_trade = close_trade(trade, price, timestamp)
            trades[index] = closed_trade
            daily_stats = daily_stats.with_trade_closed(closed_trade.pnl)
            account = account.with_pnl(closed_trade.pnl)
            closed.append(closed_trade)

            log_trade_event(
                trade_logger,
                "trade_closed",
                closed_trade,
                context={"balance": account.balance, "daily_pnl": daily_stats.cumulative_pnl}
            )

        if not closed:
            return self, closed

        ledger = TradeLedger(trades=tuple(trades), daily_stats=daily_stats, account=account)
        return ledger, closed

    def roll_day(self, date: str) -> "TradeLedger":
        """Start fresh daily statistics when date differs from the recorded day."""
        if self.daily_stats.date == date:
            return self

        logger.info(
            "Starting new trading day",
            previous_date=self.daily_stats.date,
            new_date=date,
            previous_pnl=self.daily_stats.cumulative_pnl
        )
        return replace(self, daily_stats=DailyStats(date=date))

    def snapshot(self) -> LedgerSnapshot:
        """Persistable view of the ledger."""
        return LedgerSnapshot(
            trades=self.trades,
            daily_stats=self.daily_stats,
            account=self.account,
        )

    def find_trade(self, trade_id: str) -> Optional[Trade]:
        for trade in self.trades:
            if trade.trade_id == trade_id:
                return trade
        return None
