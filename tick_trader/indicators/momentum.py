"""SMA, RSI and stochastic oscillator calculations"""

from collections.abc import Sequence
from typing import Optional


def calculate_sma(values: Sequence[float], period: int = 14) -> Optional[float]:
    """
    Calculate Simple Moving Average of the last `period` values

    Args:
        values: Prices in chronological order
        period: SMA period (default 14)

    Returns:
        SMA value or None if insufficient data
    """
    if period <= 0 or len(values) < period:
        return None

    recent = values[-period:]
    return sum(recent) / period


def calculate_rsi(values: Sequence[float], period: int = 14) -> Optional[float]:
    """
    Calculate Relative Strength Index with Wilder smoothing

    The first average is seeded from up to `period` price changes; any
    further changes are smoothed in. A window of exactly `period` prices
    therefore uses its `period - 1` changes for the seed.

    RSI = 100 - 100 / (1 + avg_gain / avg_loss)

    Args:
        values: Prices in chronological order
        period: RSI period (default 14)

    Returns:
        RSI value (0-100) or None if fewer than two prices
    """
    if len(values) < 2:
        return None

    changes = [values[i] - values[i - 1] for i in range(1, len(values))]
    seed_len = min(period, len(changes))

    seed = changes[:seed_len]
    avg_gain = sum(c for c in seed if c > 0) / seed_len
    avg_loss = sum(-c for c in seed if c < 0) / seed_len

    for change in changes[seed_len:]:
        gain = change if change > 0 else 0.0
        loss = -change if change < 0 else 0.0
        avg_gain = (avg_gain * (period - 1) + gain) / period
        avg_loss = (avg_loss * (period - 1) + loss) / period

    if avg_loss == 0:
        # Flat series is neutral; only gains is maximally overbought
        return 50.0 if avg_gain == 0 else 100.0

    rs = avg_gain / avg_loss
    return 100.0 - 100.0 / (1.0 + rs)


def calculate_percent_k(
    close: Sequence[float],
    high: Sequence[float],
    low: Sequence[float],
    period: int = 14
) -> list[float]:
    """
    Calculate the stochastic %K series

    %K = 100 * (close - lowest_low) / (highest_high - lowest_low)

    Each point looks back over the trailing `period` highs and lows, or all
    earlier samples when fewer exist. A zero range yields 50.

    Returns:
        One %K value per input sample
    """
    k_values = []
    for i in range(len(close)):
        start = max(0, i - period + 1)
        highest = max(high[start:i + 1])
        lowest = min(low[start:i + 1])
        price_range = highest - lowest

        if price_range == 0:
            k_values.append(50.0)
        else:
            k_values.append(100.0 * (close[i] - lowest) / price_range)
    return k_values


def calculate_stochastic(
    close: Sequence[float],
    high: Sequence[float],
    low: Sequence[float],
    period: int = 14,
    signal_period: int = 3
) -> Optional[tuple[float, float]]:
    """
    Calculate the latest stochastic oscillator reading

    Args:
        close: Closing prices (chronological)
        high: High prices aligned with close
        low: Low prices aligned with close
        period: %K lookback (default 14)
        signal_period: %D moving average length (default 3)

    Only the last %K sees a full `period` lookback when the series holds
    exactly `period` samples; the earlier %K values averaged into %D use
    the shorter trailing windows available to them (12 and 13 samples for
    the defaults). %D therefore differs from the textbook value, which needs
    `period + signal_period - 1` samples.

    Returns:
        (%K, %D) or None if the series are misaligned or too short for %D
    """
    if not len(close) == len(high) == len(low):
        return None
    if len(close) < signal_period or signal_period <= 0:
        return None

    k_values = calculate_percent_k(close, high, low, period)
    k = k_values[-1]
    d = sum(k_values[-signal_period:]) / signal_period
    return k, d
