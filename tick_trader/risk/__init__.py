"""Position sizing, bracket placement and the daily-loss breaker."""

from .manager import BracketOrder, RiskDecision, RiskManager

__all__ = ["BracketOrder", "RiskDecision", "RiskManager"]
