"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone
from typing import Callable, List, Optional

import pytest

from tick_trader.config.defaults import get_default_config
from tick_trader.data.models import Tick
from tick_trader.models.indicators import IndicatorSnapshot, StochasticValue
from tick_trader.state.models import ClosedTrade, Direction, OpenTrade

FIXED_NOW = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock that always returns 2024-03-01 12:00 UTC."""
    return lambda: FIXED_NOW


@pytest.fixture
def default_config():
    """Default trading configuration."""
    return get_default_config()


@pytest.fixture
def make_tick() -> Callable[..., Tick]:
    """Factory for ticks where high and low default to the ask."""
    def _make(ask: float, high: Optional[float] = None, low: Optional[float] = None, **kwargs) -> Tick:
        return Tick(
            ask=ask,
            high=ask if high is None else high,
            low=ask if low is None else low,
            **kwargs
        )
    return _make


@pytest.fixture
def falling_prices() -> List[float]:
    """Fourteen strictly falling prices: RSI 0, %K 0, %D 0 on the last one."""
    return [31000.0 - 10.0 * i for i in range(14)]


@pytest.fixture
def rising_prices() -> List[float]:
    """Fourteen strictly rising prices: RSI 100, %K 100, %D 100 on the last one."""
    return [29000.0 + 10.0 * i for i in range(14)]


@pytest.fixture
def oversold_snapshot() -> IndicatorSnapshot:
    return IndicatorSnapshot(sma=30100.0, rsi=25.0, stochastic=StochasticValue(k=10.0, d=15.0))


@pytest.fixture
def overbought_snapshot() -> IndicatorSnapshot:
    return IndicatorSnapshot(sma=29900.0, rsi=75.0, stochastic=StochasticValue(k=90.0, d=85.0))


@pytest.fixture
def neutral_snapshot() -> IndicatorSnapshot:
    return IndicatorSnapshot(sma=30000.0, rsi=50.0, stochastic=StochasticValue(k=50.0, d=50.0))


@pytest.fixture
def open_buy_trade() -> OpenTrade:
    """BUY at 30000 with the default 1.5% stop and 2:1 target."""
    return OpenTrade(
        trade_id="trade-buy-1",
        direction=Direction.BUY,
        entry_price=30000.0,
        size=0.5,
        stop_loss=29550.0,
        take_profit=30900.0,
        entry_time="2024-03-01T12:00:00+00:00",
    )


@pytest.fixture
def open_sell_trade() -> OpenTrade:
    """SELL at 30000 with the default 1.5% stop and 2:1 target."""
    return OpenTrade(
        trade_id="trade-sell-1",
        direction=Direction.SELL,
        entry_price=30000.0,
        size=0.5,
        stop_loss=30450.0,
        take_profit=29100.0,
        entry_time="2024-03-01T12:00:00+00:00",
    )


@pytest.fixture
def closed_winning_trade() -> ClosedTrade:
    return ClosedTrade(
        trade_id="trade-closed-1",
        direction=Direction.BUY,
        entry_price=30000.0,
        size=0.5,
        stop_loss=29550.0,
        take_profit=30900.0,
        entry_time="2024-03-01T10:00:00+00:00",
        exit_time="2024-03-01T11:00:00+00:00",
        exit_price=30900.0,
        pnl=450.0,
    )
