"""Indicator calculations for momentum entry signals"""

from .calculator import IndicatorCalculator, IndicatorFn
from .momentum import calculate_percent_k, calculate_rsi, calculate_sma, calculate_stochastic

__all__ = [
    "IndicatorCalculator",
    "IndicatorFn",
    "calculate_sma",
    "calculate_rsi",
    "calculate_percent_k",
    "calculate_stochastic",
]
