#!/usr/bin/env python3
"""
Basic Usage Example - Momentum Tick Trading Engine

This script runs the engine in dry-run mode over a synthetic price path:
a sell-off, a rebound and a second sell-off. It shows how the engine
opens a bracket trade when RSI and the stochastic agree, closes it on
take-profit or stop-loss, and keeps the ledger in a snapshot store.

Run: python examples/basic_usage.py
"""

import json
import time
from typing import Any, Dict, List

from tick_trader.engine import TickOutcome, TradingEngine
from tick_trader.execution.sinks import RecordingCommandSink
from tick_trader.logging import configure_logging
from tick_trader.persistence.memory_store import InMemorySnapshotStore


def create_tick_frame(timestamp_ms: int, price: float, spread: float = 5.0) -> Dict[str, Any]:
    """Create a streaming tickPrices frame."""
    return {
        "command": "tickPrices",
        "data": {
            "symbol": "BITCOIN",
            "ask": price,
            "bid": price - spread,
            "high": price + spread,
            "low": price - spread,
            "timestamp": timestamp_ms,
        },
    }


def build_price_path(start: float) -> List[float]:
    """Sell-off, sharp rebound, then a second leg down."""
    prices = [start - 15.0 * i for i in range(20)]
    bottom = prices[-1]
    prices += [bottom + 60.0 * i for i in range(1, 25)]
    top = prices[-1]
    prices += [top - 40.0 * i for i in range(1, 30)]
    return prices


def print_outcome(step: int, price: float, outcome: TickOutcome) -> None:
    """Print anything interesting that happened on a tick."""
    for trade in outcome.closed_trades:
        print(f"   [{step:3d}] CLOSED {trade.direction.value} {trade.trade_id} "
              f"at ${trade.exit_price:,.2f}  pnl={trade.pnl:+.2f}")

    if outcome.opened_trade:
        trade = outcome.opened_trade
        print(f"   [{step:3d}] OPENED {trade.direction.value} {trade.trade_id} "
              f"at ${price:,.2f}  size={trade.size:.4f}  "
              f"SL={trade.stop_loss:,.2f}  TP={trade.take_profit:,.2f}")
        print(f"         reason: {outcome.signal.reason}")

    if outcome.refusal_reason:
        print(f"   [{step:3d}] REFUSED {outcome.signal.action.value}: {outcome.refusal_reason}")


def main():
    """Main demonstration function."""
    configure_logging(level="WARNING")

    print("🚀 Momentum Tick Trading Engine - Basic Usage Demo")
    print("=" * 60)

    print("1. Initializing the engine (dry run, in-memory snapshot)...")
    store = InMemorySnapshotStore()
    sink = RecordingCommandSink(name="dry_run")
    engine = TradingEngine(store=store, command_sink=sink)
    engine.start()
    print(f"   Starting balance: ${engine.ledger.account.balance:,.2f}")
    print()

    print("2. Streaming synthetic ticks...")
    base_timestamp = int(time.time() * 1000)
    prices = build_price_path(30000.0)

    for step, price in enumerate(prices, 1):
        frame = create_tick_frame(base_timestamp + step * 1000, price)
        outcome = engine.process_frame(json.dumps(frame))
        if outcome is not None:
            print_outcome(step, price, outcome)
    print()

    print("3. Order commands sent:")
    if sink.commands:
        for command in sink.commands:
            print(f"   {json.dumps(command.to_dict())}")
    else:
        print("   No commands sent")
    print()

    print("4. Performance:")
    for key, value in engine.performance().to_dict().items():
        print(f"   {key}: {value}")
    print()

    snapshot = store.load()
    trade_count = len(snapshot.trades) if snapshot else 0
    print(f"5. Snapshot: {trade_count} trades saved in {store.save_count} writes")
    print("=" * 60)


if __name__ == "__main__":
    main()
