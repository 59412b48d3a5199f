"""Outbound order command model."""

from dataclasses import dataclass
from typing import Any

from ..state.models import Direction

TRANSACTION_COMMENT = "API_TRADE"


@dataclass(frozen=True)
class OrderCommand:
    """Bracket order handed to the execution transport."""
    direction: Direction
    symbol: str
    price: float
    stop_loss: float
    take_profit: float
    volume: float

    def to_dict(self) -> dict[str, Any]:
        """Transport-neutral command document."""
        return {
            "direction": self.direction.value,
            "symbol": self.symbol,
            "price": self.price,
            "stopLoss": self.stop_loss,
            "takeProfit": self.take_profit,
            "volume": self.volume,
        }

    def to_transaction(self) -> dict[str, Any]:
        """Trade transaction request as sent over the broker's command socket."""
        return {
            "command": "tradeTransaction",
            "arguments": {
                "tradeTransInfo": {
                    "cmd": 0 if self.direction == Direction.BUY else 1,
                    "customComment": TRANSACTION_COMMENT,
                    "expiration": 0,
                    "offset": 0,
                    "order": 0,
                    "price": self.price,
                    "sl": self.stop_loss,
                    "symbol": self.symbol,
                    "tp": self.take_profit,
                    "type": 0,
                    "volume": self.volume,
                }
            }
        }
