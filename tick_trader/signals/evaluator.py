"""
Entry signal evaluation for the RSI + stochastic momentum strategy.

evaluate_signal is a pure function of the indicator snapshot, whether a
trade is open, and the current bias. The bias acts as a latch: once a BUY
has been signaled, further oversold readings are ignored until a SELL fires,
and vice versa. Closing a trade does not reset it.
"""

from dataclasses import dataclass
from typing import Optional

from ..config.defaults import StrategyParams
from ..models.indicators import IndicatorSnapshot
from ..state.models import Bias, Direction


@dataclass(frozen=True)
class TradeSignal:
    """Entry signal handed to the risk manager."""
    action: Direction
    reason: str


@dataclass(frozen=True)
class SignalDecision:
    """Evaluation result: optional signal plus the bias to carry forward."""
    signal: Optional[TradeSignal]
    bias: Bias


def is_oversold(snapshot: IndicatorSnapshot, params: StrategyParams) -> bool:
    """RSI and both stochastic lines below their oversold thresholds."""
    return (snapshot.rsi < params.rsi_oversold and
            snapshot.stochastic.k < params.stoch_oversold and
            snapshot.stochastic.d < params.stoch_oversold)


def is_overbought(snapshot: IndicatorSnapshot, params: StrategyParams) -> bool:
    """RSI and both stochastic lines above their overbought thresholds."""
    return (snapshot.rsi > params.rsi_overbought and
            snapshot.stochastic.k > params.stoch_overbought and
            snapshot.stochastic.d > params.stoch_overbought)


def _describe(snapshot: IndicatorSnapshot, condition: str) -> str:
    stoch = snapshot.stochastic
    return (f"RSI({snapshot.rsi:.2f}) and Stochastic(K:{stoch.k:.2f}, D:{stoch.d:.2f}) "
            f"indicate {condition} conditions")


def evaluate_signal(
    snapshot: Optional[IndicatorSnapshot],
    has_open_trade: bool,
    bias: Bias,
    params: Optional[StrategyParams] = None
) -> SignalDecision:
    """
    Decide whether to enter a trade.

    Rules, in order:
    1. An open trade blocks any new signal.
    2. Oversold and bias != BUY -> BUY, bias becomes BUY.
    3. Otherwise overbought and bias != SELL -> SELL, bias becomes SELL.
    4. Otherwise no signal and the bias is unchanged.

    An oversold reading while already biased BUY does not fall through to
    the overbought check.

    Args:
        snapshot: Latest indicators, None when unavailable
        has_open_trade: Whether the ledger holds an OPEN trade
        bias: Last signaled direction
        params: Thresholds, defaults when omitted

    Returns:
        SignalDecision
    """
    params = params or StrategyParams()
    no_signal = SignalDecision(signal=None, bias=bias)

    if snapshot is None or not snapshot.is_complete():
        return no_signal

    if has_open_trade:
        return no_signal

    if is_oversold(snapshot, params):
        if bias != Bias.BUY:
            return SignalDecision(
                signal=TradeSignal(action=Direction.BUY, reason=_describe(snapshot, "oversold")),
                bias=Bias.BUY
            )
    elif is_overbought(snapshot, params):
        if bias != Bias.SELL:
            return SignalDecision(
                signal=TradeSignal(action=Direction.SELL, reason=_describe(snapshot, "overbought")),
                bias=Bias.SELL
            )

    return no_signal
