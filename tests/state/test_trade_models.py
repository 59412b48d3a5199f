"""Tests for trade, daily stats and snapshot models."""

import pytest

from tick_trader.state.models import (
    AccountState,
    ClosedTrade,
    DailyStats,
    Direction,
    LedgerSnapshot,
    OpenTrade,
    TradeStatus,
    trade_from_dict,
)


class TestTradeRecords:
    """Test OpenTrade and ClosedTrade."""

    def test_open_trade_has_no_pnl(self, open_buy_trade):
        assert open_buy_trade.status == TradeStatus.OPEN
        assert open_buy_trade.pnl is None

    def test_open_trade_document(self, open_buy_trade):
        document = open_buy_trade.to_dict()

        assert document["id"] == "trade-buy-1"
        assert document["direction"] == "BUY"
        assert document["entryPrice"] == 30000.0
        assert document["stopLoss"] == 29550.0
        assert document["takeProfit"] == 30900.0
        assert document["status"] == "OPEN"
        assert document["exitTime"] is None
        assert document["exitPrice"] is None
        assert document["pnl"] is None

    def test_closed_trade_document(self, closed_winning_trade):
        document = closed_winning_trade.to_dict()

        assert document["status"] == "CLOSED"
        assert document["exitPrice"] == 30900.0
        assert document["exitTime"] == "2024-03-01T11:00:00+00:00"
        assert document["pnl"] == 450.0

    def test_win_and_loss_flags(self, closed_winning_trade):
        assert closed_winning_trade.is_win
        assert not closed_winning_trade.is_loss

    def test_records_are_immutable(self, open_buy_trade):
        with pytest.raises(AttributeError):
            open_buy_trade.stop_loss = 1.0


class TestTradeFromDict:
    """Test rebuilding trades from snapshot documents."""

    def test_roundtrip_open(self, open_sell_trade):
        assert trade_from_dict(open_sell_trade.to_dict()) == open_sell_trade

    def test_roundtrip_closed(self, closed_winning_trade):
        restored = trade_from_dict(closed_winning_trade.to_dict())
        assert isinstance(restored, ClosedTrade)
        assert restored == closed_winning_trade

    def test_legacy_type_field_and_missing_id(self):
        data = {
            "type": "SELL",
            "entryPrice": 100,
            "size": 1,
            "stopLoss": 101.5,
            "takeProfit": 97,
            "entryTime": "2024-01-01T00:00:00Z",
            "status": "OPEN",
        }
        trade = trade_from_dict(data, index=2)

        assert isinstance(trade, OpenTrade)
        assert trade.direction == Direction.SELL
        assert trade.trade_id == "trade-3"
        assert trade.entry_price == 100.0

    def test_missing_status_defaults_to_open(self, open_buy_trade):
        data = open_buy_trade.to_dict()
        del data["status"]
        assert isinstance(trade_from_dict(data), OpenTrade)


class TestDailyStats:
    """Test daily statistics accumulation."""

    def test_trade_opened_counts(self):
        stats = DailyStats(date="2024-03-01").with_trade_opened().with_trade_opened()
        assert stats.trade_count == 2

    def test_win_and_loss(self):
        stats = DailyStats(date="2024-03-01").with_trade_closed(450.0).with_trade_closed(-225.0)

        assert stats.wins == 1
        assert stats.losses == 1
        assert stats.cumulative_pnl == pytest.approx(225.0)

    def test_zero_pnl_is_neither_win_nor_loss(self):
        stats = DailyStats(date="2024-03-01").with_trade_closed(0.0)

        assert stats.wins == 0
        assert stats.losses == 0
        assert stats.cumulative_pnl == 0.0

    def test_document_keys(self):
        stats = DailyStats(date="2024-03-01", trade_count=3, wins=1, losses=1, cumulative_pnl=12.5)
        assert stats.to_dict() == {
            "date": "2024-03-01",
            "tradeCount": 3,
            "wins": 1,
            "losses": 1,
            "cumulativePnL": 12.5,
        }
        assert DailyStats.from_dict(stats.to_dict()) == stats

    def test_legacy_keys(self):
        stats = DailyStats.from_dict({"date": "2024-03-01", "trades": 4, "pnl": -30})
        assert stats.trade_count == 4
        assert stats.cumulative_pnl == -30.0
        assert stats.wins == 0


class TestLedgerSnapshot:
    """Test the persisted snapshot document."""

    def test_document_layout(self, open_buy_trade, closed_winning_trade):
        snapshot = LedgerSnapshot(
            trades=(closed_winning_trade, open_buy_trade),
            daily_stats=DailyStats(date="2024-03-01", trade_count=2, wins=1, cumulative_pnl=450.0),
            account=AccountState(balance=10450.0),
        )
        document = snapshot.to_dict()

        assert [t["id"] for t in document["trades"]] == ["trade-closed-1", "trade-buy-1"]
        assert document["dailyStats"]["cumulativePnL"] == 450.0
        assert document["account"] == {"balance": 10450.0}
        assert LedgerSnapshot.from_dict(document) == snapshot

    def test_account_omitted_when_absent(self):
        snapshot = LedgerSnapshot(trades=(), daily_stats=DailyStats(date="2024-03-01"))
        assert "account" not in snapshot.to_dict()

    def test_document_without_account(self):
        snapshot = LedgerSnapshot.from_dict({
            "trades": [],
            "dailyStats": {"date": "2024-03-01", "tradeCount": 0, "wins": 0, "losses": 0, "cumulativePnL": 0},
        })
        assert snapshot.account is None
        assert snapshot.trades == ()

    def test_empty_document(self):
        snapshot = LedgerSnapshot.from_dict({})
        assert snapshot.trades == ()
        assert snapshot.daily_stats.trade_count == 0
