"""
Trade lifecycle data models.

A trade is either open or closed, and the two are separate immutable types:
an OpenTrade has no exit data and no pnl, a ClosedTrade always has both.
Closing is a pure transition (see state.transitions) that returns a new
ClosedTrade, so pnl is set exactly when the status is CLOSED.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional, Union


class Direction(str, Enum):
    """Trade direction."""
    BUY = "BUY"
    SELL = "SELL"


class Bias(str, Enum):
    """Last signaled direction, used to suppress repeated identical signals."""
    NONE = "NONE"
    BUY = "BUY"
    SELL = "SELL"


class TradeStatus(str, Enum):
    """Trade lifecycle status."""
    OPEN = "OPEN"
    CLOSED = "CLOSED"


@dataclass(frozen=True)
class OpenTrade:
    """A position that has been entered and not yet exited."""

    trade_id: str
    direction: Direction
    entry_price: float
    size: float
    stop_loss: float
    take_profit: float
    entry_time: str

    @property
    def status(self) -> TradeStatus:
        return TradeStatus.OPEN

    @property
    def pnl(self) -> None:
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the snapshot document field names."""
        return {
            "id": self.trade_id,
            "direction": self.direction.value,
            "entryPrice": self.entry_price,
            "size": self.size,
            "stopLoss": self.stop_loss,
            "takeProfit": self.take_profit,
            "entryTime": self.entry_time,
            "exitTime": None,
            "exitPrice": None,
            "pnl": None,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class ClosedTrade:
    """A position that has been exited with realized pnl."""

    trade_id: str
    direction: Direction
    entry_price: float
    size: float
    stop_loss: float
    take_profit: float
    entry_time: str
    exit_time: str
    exit_price: float
    pnl: float

    @property
    def status(self) -> TradeStatus:
        return TradeStatus.CLOSED

    @property
    def is_win(self) -> bool:
        return self.pnl > 0

    @property
    def is_loss(self) -> bool:
        return self.pnl < 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the snapshot document field names."""
        return {
            "id": self.trade_id,
            "direction": self.direction.value,
            "entryPrice": self.entry_price,
            "size": self.size,
            "stopLoss": self.stop_loss,
            "takeProfit": self.take_profit,
            "entryTime": self.entry_time,
            "exitTime": self.exit_time,
            "exitPrice": self.exit_price,
            "pnl": self.pnl,
            "status": self.status.value,
        }


Trade = Union[OpenTrade, ClosedTrade]


def trade_from_dict(data: dict[str, Any], index: int = 0) -> Trade:
    """
    Rebuild a trade from its snapshot form.

    Accepts the legacy field name "type" for the direction and synthesizes
    an id for records saved without one.
    """
    direction = Direction(data.get("direction") or data.get("type"))
    common = {
        "trade_id": str(data.get("id") or f"trade-{index + 1}"),
        "direction": direction,
        "entry_price": float(data["entryPrice"]),
        "size": float(data["size"]),
        "stop_loss": float(data["stopLoss"]),
        "take_profit": float(data["takeProfit"]),
        "entry_time": data.get("entryTime") or "",
    }

    if TradeStatus(data.get("status", TradeStatus.OPEN.value)) == TradeStatus.CLOSED:
        return ClosedTrade(
            exit_time=data.get("exitTime") or "",
            exit_price=float(data["exitPrice"]),
            pnl=float(data["pnl"]),
            **common
        )

    return OpenTrade(**common)


@dataclass(frozen=True)
class DailyStats:
    """Aggregated statistics for the current trading day."""

    date: str
    trade_count: int = 0
    wins: int = 0
    losses: int = 0
    cumulative_pnl: float = 0.0

    def with_trade_opened(self) -> "DailyStats":
        """Count a newly opened trade."""
        return replace(self, trade_count=self.trade_count + 1)

    def with_trade_closed(self, pnl: float) -> "DailyStats":
        """Accumulate realized pnl; zero pnl is neither a win nor a loss."""
        return replace(
            self,
            cumulative_pnl=self.cumulative_pnl + pnl,
            wins=self.wins + (1 if pnl > 0 else 0),
            losses=self.losses + (1 if pnl < 0 else 0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "tradeCount": self.trade_count,
            "wins": self.wins,
            "losses": self.losses,
            "cumulativePnL": self.cumulative_pnl,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DailyStats":
        """Rebuild from snapshot form, accepting legacy "trades"/"pnl" keys."""
        trade_count = data.get("tradeCount", data.get("trades", 0))
        cumulative_pnl = data.get("cumulativePnL", data.get("pnl", 0.0))
        return cls(
            date=str(data.get("date", "")),
            trade_count=int(trade_count),
            wins=int(data.get("wins", 0)),
            losses=int(data.get("losses", 0)),
            cumulative_pnl=float(cumulative_pnl),
        )


@dataclass(frozen=True)
class AccountState:
    """Account balance, moved by realized pnl on each close."""

    balance: float

    def with_pnl(self, pnl: float) -> "AccountState":
        return AccountState(balance=self.balance + pnl)

    def to_dict(self) -> dict[str, Any]:
        return {"balance": self.balance}


@dataclass(frozen=True)
class LedgerSnapshot:
    """The persisted unit: every trade plus the day and account aggregates."""

    trades: tuple[Trade, ...]
    daily_stats: DailyStats
    account: Optional[AccountState] = None

    def to_dict(self) -> dict[str, Any]:
        document = {
            "trades": [trade.to_dict() for trade in self.trades],
            "dailyStats": self.daily_stats.to_dict(),
        }
        if self.account is not None:
            document["account"] = self.account.to_dict()
        return document

    @classmethod
    def from_dict(cls, document: dict[str, Any]) -> "LedgerSnapshot":
        """Rebuild a snapshot; a missing account section stays None."""
        trades = tuple(
            trade_from_dict(item, index)
            for index, item in enumerate(document.get("trades") or [])
        )
        account_data = document.get("account")
        account = None
        if account_data and account_data.get("balance") is not None:
            account = AccountState(balance=float(account_data["balance"]))

        return cls(
            trades=trades,
            daily_stats=DailyStats.from_dict(document.get("dailyStats") or {}),
            account=account,
        )
