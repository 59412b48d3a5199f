"""
Error handling tests for the tick trading engine.

Covers the error hierarchy, bad inbound data, and how the engine keeps
running when a collaborator fails.
"""

from unittest.mock import Mock

import pytest

from tick_trader.data.normalizer import parse_tick
from tick_trader.engine import TradingEngine
from tick_trader.persistence.memory_store import InMemorySnapshotStore
from tick_trader.errors import (
    CommandDeliveryError,
    ConfigurationError,
    DataQualityError,
    IndicatorCalculationError,
    MalformedDataError,
    MissingDataError,
    PersistenceError,
    SystemFailureError,
    TradeStateError,
)


class TestErrorClassification:
    """Test error classification system."""

    def test_data_quality_error_hierarchy(self):
        """Test that data quality errors are recoverable."""
        base_error = DataQualityError("base error")
        assert base_error.recoverable is True
        assert base_error.context == {}

        missing_error = MissingDataError("missing data", data_type="tick")
        assert isinstance(missing_error, DataQualityError)
        assert missing_error.data_type == "tick"

        malformed_error = MalformedDataError("bad data", raw_data="{}", expected_format="number")
        assert isinstance(malformed_error, DataQualityError)
        assert malformed_error.raw_data == "{}"
        assert malformed_error.expected_format == "number"

    def test_system_failure_hierarchy(self):
        """Test system failure attributes and recoverability."""
        assert SystemFailureError("x").recoverable is False

        indicator_error = IndicatorCalculationError("nan", indicator_name="rsi", sample_count=14)
        assert isinstance(indicator_error, SystemFailureError)
        assert indicator_error.recoverable is False
        assert indicator_error.indicator_name == "rsi"
        assert indicator_error.sample_count == 14

        state_error = TradeStateError("closed", trade_id="t1", current_status="CLOSED")
        assert state_error.trade_id == "t1"
        assert state_error.recoverable is False

        persistence_error = PersistenceError("io", operation="save", target="log.json")
        assert persistence_error.recoverable is True
        assert persistence_error.operation == "save"

        delivery_error = CommandDeliveryError("down", sink_name="file", direction="BUY")
        assert delivery_error.recoverable is True
        assert delivery_error.sink_name == "file"

        config_error = ConfigurationError("bad", errors=["a"])
        assert config_error.errors == ["a"]
        assert ConfigurationError("bad").errors == []

    def test_context_is_kept(self):
        """Test that error context is carried through."""
        error = PersistenceError("io", operation="load", context={"attempt": 2})
        assert error.context == {"attempt": 2}


class TestBadTickData:
    """Test handling of malformed and missing tick fields."""

    @pytest.mark.parametrize("payload", [
        {"high": 1.0, "low": 1.0},
        {"ask": 1.0, "low": 1.0},
        {"ask": 1.0, "high": 1.0},
        {"ask": None, "high": 1.0, "low": 1.0},
    ])
    def test_missing_required_field(self, payload):
        with pytest.raises(MissingDataError):
            parse_tick(payload)

    @pytest.mark.parametrize("payload", [
        {"ask": "abc", "high": 1.0, "low": 1.0},
        {"ask": True, "high": 1.0, "low": 1.0},
        {"ask": float("nan"), "high": 1.0, "low": 1.0},
        {"ask": 1.0, "high": float("inf"), "low": 1.0},
        {"ask": 1.0, "high": 1.0, "low": 1.0, "bid": [1]},
    ])
    def test_malformed_field(self, payload):
        with pytest.raises(MalformedDataError):
            parse_tick(payload)

    def test_non_dict_payload(self):
        with pytest.raises(MalformedDataError):
            parse_tick([1, 2, 3])

    def test_numeric_strings_accepted(self):
        tick = parse_tick({"ask": "30000.5", "high": "30010", "low": "29990"})
        assert tick.ask == 30000.5


class TestEngineResilience:
    """Test that collaborator failures never stop the tick loop."""

    def test_indicator_failure_skips_decision(self, fixed_clock, make_tick):
        indicator_fn = Mock(side_effect=IndicatorCalculationError("bad window", indicator_name="rsi"))
        engine = TradingEngine(store=InMemorySnapshotStore(), indicator_fn=indicator_fn, clock=fixed_clock)

        outcomes = [engine.process_tick(make_tick(30000.0)) for _ in range(15)]

        assert indicator_fn.call_count == 2
        assert all(o.signal is None for o in outcomes)
        assert len(engine.state.window) == 15

    def test_store_and_sink_failures(self, fixed_clock, make_tick, oversold_snapshot):
        store = Mock()
        store.name = "mock"
        store.load.return_value = None
        store.save.side_effect = PersistenceError("disk full", operation="save", target="mock")
        sink = Mock()
        sink.send.side_effect = CommandDeliveryError("offline", sink_name="mock", direction="BUY")

        engine = TradingEngine(
            store=store,
            command_sink=sink,
            indicator_fn=Mock(return_value=oversold_snapshot),
            clock=fixed_clock,
        )
        for _ in range(14):
            engine.process_tick(make_tick(30000.0))

        assert engine.ledger.has_open_trade
        assert store.save.call_count == 1
        assert sink.send.call_count == 1
        assert engine.save_failures == 1
        assert engine.send_failures == 1

    def test_unexpected_store_error_propagates(self, fixed_clock, make_tick, oversold_snapshot):
        store = Mock()
        store.name = "mock"
        store.load.return_value = None
        store.save.side_effect = RuntimeError("bug")

        engine = TradingEngine(
            store=store,
            indicator_fn=Mock(return_value=oversold_snapshot),
            clock=fixed_clock,
        )
        for _ in range(13):
            engine.process_tick(make_tick(30000.0))

        with pytest.raises(RuntimeError):
            engine.process_tick(make_tick(30000.0))

    def test_unconvertible_timestamp_frame_is_dropped(self, fixed_clock):
        engine = TradingEngine(store=InMemorySnapshotStore(), clock=fixed_clock)

        outcome = engine.process_frame({"data": {"ask": 30000, "high": 30010, "low": 29990, "timestamp": 1e20}})

        assert outcome is None
        assert len(engine.state.window) == 0
        assert engine.process_frame({"data": {"ask": 30000, "high": 30010, "low": 29990}}) is not None
