"""Performance metrics over closed trades and the current trading day"""

from dataclasses import asdict, dataclass
from typing import Any

from ..ledger.trade_ledger import TradeLedger


@dataclass(frozen=True)
class PerformanceReport:
    """Running performance figures for the account"""
    total_trades: int          # Closed trades only
    win_rate: float            # Percent of closed trades with positive pnl
    total_pnl: float
    account_balance: float
    daily_pnl: float
    daily_win_rate: float      # Percent of today's opened trades that won

    def to_dict(self) -> dict[str, Any]:
        return {key: round(value, 2) if isinstance(value, float) else value
                for key, value in asdict(self).items()}


def calculate_performance(ledger: TradeLedger) -> PerformanceReport:
    """
    Summarize ledger performance

    Args:
        ledger: Current trade ledger

    Returns:
        PerformanceReport; rates are 0.0 when there is nothing to divide by
    """
    closed = ledger.closed_trades
    total_trades = len(closed)
    winning_trades = sum(1 for trade in closed if trade.is_win)
    stats = ledger.daily_stats

    return PerformanceReport(
        total_trades=total_trades,
        win_rate=(winning_trades / total_trades * 100) if total_trades else 0.0,
        total_pnl=sum((trade.pnl for trade in closed), 0.0),
        account_balance=ledger.account.balance,
        daily_pnl=stats.cumulative_pnl,
        daily_win_rate=(stats.wins / stats.trade_count * 100) if stats.trade_count else 0.0,
    )
