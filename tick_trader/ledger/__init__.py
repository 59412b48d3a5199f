"""Trade ledger: ownership of trade records and account/day aggregates."""

from .trade_ledger import TradeLedger

__all__ = ["TradeLedger"]
