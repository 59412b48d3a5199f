"""Data models for indicator snapshots"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class StochasticValue:
    """Latest stochastic oscillator reading"""
    k: Optional[float]
    d: Optional[float]


@dataclass(frozen=True)
class IndicatorSnapshot:
    """Latest indicator values computed over the most recent window slice"""
    sma: Optional[float]
    rsi: Optional[float]
    stochastic: Optional[StochasticValue]

    def is_complete(self) -> bool:
        """
        Check if RSI and both stochastic lines are available for signal evaluation

        Only None marks a missing value. RSI 0.0 means every change in the
        window was a loss and is a real reading, as are %K and %D of 0.0.
        """
        return (self.rsi is not None and
                self.stochastic is not None and
                self.stochastic.k is not None and
                self.stochastic.d is not None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "sma": self.sma,
            "rsi": self.rsi,
            "stochastic": {
                "k": self.stochastic.k if self.stochastic else None,
                "d": self.stochastic.d if self.stochastic else None,
            },
        }
