"""
Tick-driven trading engine.

handle_tick() is the pure per-tick step: it takes the current engine state
and one tick and returns the next state plus the effects to perform
(snapshot saves and order commands), in order. TradingEngine owns the
collaborators (indicator function, snapshot store, command sink) and
executes those effects, one tick at a time.

Tick pipeline:
    window append -> day rollover (optional) -> reconcile open trades
    -> indicators -> signal -> risk -> open trade -> persist -> send order
"""

import uuid
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Callable, Optional, Union

import structlog

from .config.defaults import TradingConfig, get_default_config
from .config.loader import ConfigLoader
from .data.models import PriceWindow, Tick
from .data.normalizer import TickNormalizer
from .errors import (
    CommandDeliveryError,
    IndicatorCalculationError,
    PersistenceError,
)
from .execution.base import CommandSink
from .execution.models import OrderCommand
from .execution.sinks import RecordingCommandSink
from .indicators.calculator import IndicatorCalculator, IndicatorFn
from .ledger.trade_ledger import TradeLedger
from .logging.config import get_trade_logger
from .metrics.performance import PerformanceReport, calculate_performance
from .models.indicators import IndicatorSnapshot
from .persistence.base import SnapshotStore
from .persistence.factory import create_store
from .risk.manager import RiskManager
from .signals.evaluator import TradeSignal, evaluate_signal
from .state.models import Bias, ClosedTrade, LedgerSnapshot, OpenTrade
from .utils.time import Clock, resolve_event_time, trading_date, utc_now

logger = structlog.get_logger(__name__)
trade_logger = get_trade_logger(__name__)


@dataclass(frozen=True)
class EngineState:
    """Everything the step function reads and writes."""
    window: PriceWindow
    ledger: TradeLedger
    bias: Bias = Bias.NONE


@dataclass(frozen=True)
class PersistSnapshot:
    """Save the ledger snapshot taken right after a mutation."""
    snapshot: LedgerSnapshot
    reason: str


@dataclass(frozen=True)
class SendOrder:
    """Hand an order command to the execution transport."""
    command: OrderCommand


Effect = Union[PersistSnapshot, SendOrder]


@dataclass(frozen=True)
class StepContext:
    """Per-tick inputs that are not part of the state."""
    config: TradingConfig
    indicator_fn: IndicatorFn
    risk_manager: RiskManager
    event_time: str
    trade_id: str


@dataclass(frozen=True)
class TickOutcome:
    """Result of processing one tick."""
    state: EngineState
    effects: tuple[Effect, ...] = ()
    indicators: Optional[IndicatorSnapshot] = None
    signal: Optional[TradeSignal] = None
    closed_trades: tuple[ClosedTrade, ...] = ()
    opened_trade: Optional[OpenTrade] = None
    refusal_reason: Optional[str] = None


def compute_indicators(window: PriceWindow, context: StepContext) -> Optional[IndicatorSnapshot]:
    """
    Run the indicator function over the last period samples.

    Returns None (no decision this tick) when the window is short, the
    function fails, or it returns something that is not a snapshot.
    """
    window_slice = window.last_n(context.config.indicators.period)
    if window_slice is None:
        return None

    try:
        snapshot = context.indicator_fn(window_slice)
    except IndicatorCalculationError as e:
        logger.warning(
            "Indicator calculation failed",
            error=str(e),
            indicator_name=e.indicator_name,
            sample_count=e.sample_count
        )
        return None

    if not isinstance(snapshot, IndicatorSnapshot):
        return None
    return snapshot


def handle_tick(state: EngineState, tick: Tick, context: StepContext) -> TickOutcome:
    """
    Process one tick.

    Args:
        state: Current engine state
        tick: Inbound price update
        context: Configuration, collaborators and per-tick ids/timestamps

    Returns:
        TickOutcome with the next state and effects in execution order
    """
    effects: list[Effect] = []
    window = state.window.append(tick)
    ledger = state.ledger

    if context.config.account.reset_daily_stats_on_new_day:
        rolled = ledger.roll_day(trading_date(context.event_time))
        if rolled is not ledger:
            ledger = rolled
            effects.append(PersistSnapshot(snapshot=ledger.snapshot(), reason="day_rolled"))

    # Closes happen before signal evaluation, so a slot freed on this tick
    # can be refilled on the same tick.
    ledger, closed = ledger.reconcile(tick.ask, context.event_time)
    if closed:
        effects.append(PersistSnapshot(snapshot=ledger.snapshot(), reason="trade_closed"))

    indicators = compute_indicators(window, context)
    decision = evaluate_signal(
        indicators,
        has_open_trade=ledger.has_open_trade,
        bias=state.bias,
        params=context.config.strategy,
    )

    opened_trade = None
    refusal_reason = None

    if decision.signal is not None:
        risk = context.risk_manager.evaluate(
            decision.signal,
            price=tick.ask,
            balance=ledger.account.balance,
            daily_stats=ledger.daily_stats,
        )

        if risk.approved:
            opened_trade = risk.order.to_trade(context.trade_id, context.event_time)
            ledger = ledger.open(opened_trade)
            effects.append(PersistSnapshot(snapshot=ledger.snapshot(), reason="trade_opened"))
            effects.append(SendOrder(command=risk.order.to_command(context.config.account.symbol)))
        else:
            refusal_reason = risk.refusal_reason

    return TickOutcome(
        state=EngineState(window=window, ledger=ledger, bias=decision.bias),
        effects=tuple(effects),
        indicators=indicators,
        signal=decision.signal,
        closed_trades=tuple(closed),
        opened_trade=opened_trade,
        refusal_reason=refusal_reason,
    )


def _new_trade_id() -> str:
    return uuid.uuid4().hex[:12]


class TradingEngine:
    """
    Runs the tick pipeline against injected collaborators.

    Collaborators left out come from configuration: the snapshot store is
    built from the persistence section, and the configuration itself is
    loaded from config_dir when one is given.

    Persistence failures are logged and never roll back in-memory state;
    every later save is attempted independently.
    """

    def __init__(
        self,
        config: Optional[TradingConfig] = None,
        store: Optional[SnapshotStore] = None,
        command_sink: Optional[CommandSink] = None,
        indicator_fn: Optional[IndicatorFn] = None,
        clock: Optional[Clock] = None,
        id_factory: Optional[Callable[[], str]] = None,
        config_dir: Optional[Path] = None,
    ) -> None:
        if config is None:
            config = ConfigLoader.create(config_dir).load() if config_dir else get_default_config()
        self.config = config
        self.store = store or create_store(self.config.persistence)
        self.command_sink = command_sink or RecordingCommandSink(name="dry_run")
        self.indicator_fn = indicator_fn or IndicatorCalculator(self.config.indicators)
        self.clock = clock or utc_now
        self.id_factory = id_factory or _new_trade_id

        self.risk_manager = RiskManager(self.config.risk)
        self.normalizer = TickNormalizer()
        self.logger = logger

        self.state = EngineState(
            window=PriceWindow(capacity=self.config.window.capacity),
            ledger=self._fresh_ledger(),
        )
        self.started = False
        self.save_failures = 0
        self.send_failures = 0

    @property
    def ledger(self) -> TradeLedger:
        return self.state.ledger

    @property
    def bias(self) -> Bias:
        return self.state.bias

    def _fresh_ledger(self) -> TradeLedger:
        today = self.clock().date().isoformat()
        return TradeLedger.empty(self.config.account.initial_balance, today)

    def start(self) -> None:
        """Load the persisted ledger; a missing or unreadable snapshot starts fresh."""
        ledger = self._fresh_ledger()

        try:
            snapshot = self.store.load()
        except PersistenceError as e:
            self.logger.warning(
                "Failed to load trading history, starting fresh",
                error=str(e),
                store=self.store.name,
                target=e.target
            )
            snapshot = None

        if snapshot is None:
            self.logger.info("No trading history found, starting fresh", store=self.store.name)
        else:
            ledger = TradeLedger.from_snapshot(
                snapshot,
                initial_balance=self.config.account.initial_balance,
                date=ledger.daily_stats.date,
            )
            self.logger.info(
                "Loaded trading history",
                store=self.store.name,
                trade_count=len(ledger.trades),
                open_trades=len(ledger.open_trades),
                balance=ledger.account.balance,
                daily_pnl=ledger.daily_stats.cumulative_pnl
            )

        self.state = replace(self.state, ledger=ledger)
        self.started = True

    def process_tick(self, tick: Tick) -> TickOutcome:
        """Run one tick through the pipeline and perform its effects."""
        if not self.started:
            self.start()

        context = StepContext(
            config=self.config,
            indicator_fn=self.indicator_fn,
            risk_manager=self.risk_manager,
            event_time=resolve_event_time(tick.timestamp, self.clock),
            trade_id=self.id_factory(),
        )

        outcome = handle_tick(self.state, tick, context)
        self.state = outcome.state

        for effect in outcome.effects:
            self._perform(effect)

        self._log_tick(tick, outcome)
        return outcome

    def process_frame(self, frame: Union[str, bytes, dict[str, Any]]) -> Optional[TickOutcome]:
        """Normalize a raw transport frame and process it if it carries a tick."""
        result = self.normalizer.normalize(frame)

        if not result.success:
            self.logger.warning(
                "Dropping unusable frame",
                error=result.error_msg,
                skipped_reason=result.skipped_reason
            )
            return None

        if result.tick is None:
            self.logger.debug("Skipping non-price frame", skipped_reason=result.skipped_reason)
            return None

        return self.process_tick(result.tick)

    def performance(self) -> PerformanceReport:
        return calculate_performance(self.ledger)

    def _perform(self, effect: Effect) -> None:
        if isinstance(effect, PersistSnapshot):
            self._save(effect)
        elif isinstance(effect, SendOrder):
            self._send(effect.command)

    def _save(self, effect: PersistSnapshot) -> None:
        try:
            self.store.save(effect.snapshot)
        except PersistenceError as e:
            self.save_failures += 1
            trade_logger.warning(
                "Failed to save trading history",
                error=str(e),
                reason=effect.reason,
                store=self.store.name,
                target=e.target,
                save_failures=self.save_failures
            )

    def _send(self, command: OrderCommand) -> None:
        try:
            self.command_sink.send(command)
        except CommandDeliveryError as e:
            self.send_failures += 1
            trade_logger.error(
                "Failed to send order command",
                error=str(e),
                sink_name=e.sink_name,
                **command.to_dict()
            )

    def _log_tick(self, tick: Tick, outcome: TickOutcome) -> None:
        indicators = outcome.indicators
        self.logger.info(
            "Tick processed",
            price=tick.ask,
            indicators=indicators.to_dict() if indicators else None,
            signal=outcome.signal.action.value if outcome.signal else None,
            signal_reason=outcome.signal.reason if outcome.signal else None,
            refusal_reason=outcome.refusal_reason,
            closed_trades=len(outcome.closed_trades),
            performance=self.performance().to_dict()
        )
