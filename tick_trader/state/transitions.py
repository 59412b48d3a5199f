"""
Pure trade lifecycle transitions.

Exit checks and the OPEN -> CLOSED transition. Nothing here mutates its
inputs; callers receive new records.
"""

from typing import Union

from ..errors import TradeStateError
from .models import ClosedTrade, Direction, OpenTrade


def calculate_pnl(direction: Direction, entry_price: float, exit_price: float, size: float) -> float:
    """
    Realized profit or loss of a position.

    BUY:  (exit - entry) * size
    SELL: (entry - exit) * size
    """
    if direction == Direction.BUY:
        price_change = exit_price - entry_price
    else:
        price_change = entry_price - exit_price
    return price_change * size


def should_close(trade: OpenTrade, price: float) -> bool:
    """
    Check whether price has reached the trade's take-profit or stop-loss.

    Both boundaries are inclusive.
    """
    if trade.direction == Direction.BUY:
        return price >= trade.take_profit or price <= trade.stop_loss
    return price <= trade.take_profit or price >= trade.stop_loss


def close_trade(
    trade: Union[OpenTrade, ClosedTrade],
    exit_price: float,
    exit_time: str
) -> ClosedTrade:
    """
    Transition an open trade to closed.

    Args:
        trade: Trade to close; must be open
        exit_price: Fill price used for pnl
        exit_time: ISO-8601 exit timestamp

    Returns:
        New ClosedTrade carrying the realized pnl

    Raises:
        TradeStateError: The trade is already closed
    """
    if not isinstance(trade, OpenTrade):
        raise TradeStateError(
            "Trade is already closed",
            trade_id=trade.trade_id,
            current_status=trade.status.value
        )

    return ClosedTrade(
        trade_id=trade.trade_id,
        direction=trade.direction,
        entry_price=trade.entry_price,
        size=trade.size,
        stop_loss=trade.stop_loss,
        take_profit=trade.take_profit,
        entry_time=trade.entry_time,
        exit_time=exit_time,
        exit_price=exit_price,
        pnl=calculate_pnl(trade.direction, trade.entry_price, exit_price, trade.size),
    )
