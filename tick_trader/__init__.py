"""
Tick Trader - Momentum Tick Trading Engine

Consumes a live stream of price ticks for one instrument, derives RSI and
stochastic momentum readings over a rolling window, and opens risk-sized
bracket trades, tracking each one through to its close with the ledger
persisted across restarts.
"""

__version__ = "0.1.0"
__author__ = "Tick Trader Team"
