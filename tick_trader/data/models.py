"""
Canonical data models for inbound ticks and the rolling price window.

Both are immutable: appending to a window returns a new window, which lets
the engine step function treat its state as a plain value.
"""

from dataclasses import dataclass
from typing import Optional

DEFAULT_WINDOW_CAPACITY = 100


@dataclass(frozen=True)
class Tick:
    """One streamed price update for the traded instrument."""
    ask: float
    high: float
    low: float
    bid: Optional[float] = None
    timestamp: Optional[str] = None     # ISO-8601, market time when provided


@dataclass(frozen=True)
class WindowSlice:
    """The last n entries of each window series, oldest first."""
    close: tuple[float, ...]
    high: tuple[float, ...]
    low: tuple[float, ...]

    def __len__(self) -> int:
        return len(self.close)


@dataclass(frozen=True)
class PriceWindow:
    """Bounded FIFO of ask/high/low samples kept in lock-step."""

    asks: tuple[float, ...] = ()
    highs: tuple[float, ...] = ()
    lows: tuple[float, ...] = ()
    capacity: int = DEFAULT_WINDOW_CAPACITY

    def __post_init__(self):
        if self.capacity <= 0:
            raise ValueError(f"capacity must be positive, got {self.capacity}")
        if not len(self.asks) == len(self.highs) == len(self.lows):
            raise ValueError("window series must have equal length")

    def __len__(self) -> int:
        return len(self.asks)

    def append(self, tick: Tick) -> "PriceWindow":
        """Return a new window with the tick at the tail, evicting the oldest on overflow."""
        start = max(0, len(self.asks) + 1 - self.capacity)
        return PriceWindow(
            asks=(self.asks + (tick.ask,))[start:],
            highs=(self.highs + (tick.high,))[start:],
            lows=(self.lows + (tick.low,))[start:],
            capacity=self.capacity,
        )

    def last_n(self, n: int) -> Optional[WindowSlice]:
        """
        Get the last n samples of each series.

        Args:
            n: Number of samples requested

        Returns:
            WindowSlice, or None if fewer than n samples exist
        """
        if n <= 0:
            raise ValueError(f"n must be positive, got {n}")
        if len(self.asks) < n:
            return None

        return WindowSlice(
            close=self.asks[-n:],
            high=self.highs[-n:],
            low=self.lows[-n:],
        )
