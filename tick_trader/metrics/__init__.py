"""Performance reporting over the trade ledger"""

from .performance import PerformanceReport, calculate_performance

__all__ = ["PerformanceReport", "calculate_performance"]
