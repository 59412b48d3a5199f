"""Default configuration parameters for the momentum tick trading engine."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StrategyParams:
    """Entry thresholds for the RSI + stochastic momentum strategy."""
    rsi_overbought: float = 70.0        # Sell zone
    rsi_oversold: float = 30.0          # Buy zone
    stoch_overbought: float = 80.0      # %K and %D must both exceed
    stoch_oversold: float = 20.0        # %K and %D must both be below


@dataclass(frozen=True)
class RiskParams:
    """Position sizing and loss limits. Percent values are 0-100."""
    account_risk_percent: float = 2.0       # Risk per trade
    stop_loss_percent: float = 1.5          # Stop distance from entry
    take_profit_ratio: float = 2.0          # Reward multiple of the stop distance
    min_position_size: float = 0.001
    max_position_size: float = 1.0
    max_daily_loss_percent: float = 5.0     # Daily-loss breaker


@dataclass(frozen=True)
class WindowParams:
    """Rolling price window parameters."""
    capacity: int = 100


@dataclass(frozen=True)
class IndicatorParams:
    """Indicator periods."""
    period: int = 14                    # SMA, RSI and stochastic lookback
    signal_period: int = 3              # Stochastic %D smoothing


@dataclass(frozen=True)
class AccountParams:
    """Account and instrument settings."""
    symbol: str = "BITCOIN"
    initial_balance: float = 10000.0
    reset_daily_stats_on_new_day: bool = False


@dataclass(frozen=True)
class PersistenceParams:
    """Snapshot storage settings."""
    backend: str = "json"               # json, sqlite or memory
    path: str = "trading_log.json"


@dataclass(frozen=True)
class TradingConfig:
    """Complete engine configuration."""
    strategy: StrategyParams
    risk: RiskParams
    window: WindowParams
    indicators: IndicatorParams
    account: AccountParams
    persistence: PersistenceParams


def get_default_config() -> TradingConfig:
    """Get the default configuration instance."""
    return TradingConfig(
        strategy=StrategyParams(),
        risk=RiskParams(),
        window=WindowParams(),
        indicators=IndicatorParams(),
        account=AccountParams(),
        persistence=PersistenceParams(),
    )
