"""
Entry signal evaluation.
"""
from .evaluator import SignalDecision, TradeSignal, evaluate_signal

__all__ = ["SignalDecision", "TradeSignal", "evaluate_signal"]
