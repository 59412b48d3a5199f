"""
Centralized logging configuration for the tick trading engine.

All components log through structlog so that trade opens, closes, risk
refusals and persistence failures come out as structured events with the
same keys regardless of which module emitted them.
"""
import logging
import sys
from typing import Any, Optional, TextIO

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None,
    stream: Optional[TextIO] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
        stream: Log destination, stdout when omitted
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=stream or sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_trade_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for trade lifecycle events (open, close, persistence).

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger bound with the trading subsystem context
    """
    return get_logger(name).bind(
        subsystem="trading",
        audit_trail=True
    )


def get_risk_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for risk decisions (sizing, daily-loss breaker).

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger bound with the risk subsystem context
    """
    return get_logger(name).bind(
        subsystem="risk",
        audit_trail=True
    )


def log_trade_event(
    logger: FilteringBoundLogger,
    event_name: str,
    trade: Any,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a trade lifecycle event with standardized fields.

    Args:
        logger: Structlog logger instance
        event_name: "trade_opened" or "trade_closed"
        trade: OpenTrade or ClosedTrade
        context: Additional context data
    """
    bound_logger = logger.bind(
        trade_id=trade.trade_id,
        direction=trade.direction.value,
        entry_price=trade.entry_price,
        size=trade.size,
        stop_loss=trade.stop_loss,
        take_profit=trade.take_profit,
        status=trade.status.value,
        trade_event=event_name
    )

    pnl = getattr(trade, "pnl", None)
    if pnl is not None:
        bound_logger = bound_logger.bind(
            exit_price=trade.exit_price,
            pnl=pnl
        )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if event_name == "trade_opened":
        bound_logger.info("Trade opened")
    else:
        bound_logger.info("Trade closed")


def log_risk_decision(
    logger: FilteringBoundLogger,
    approved: bool,
    reason: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a risk manager decision with standardized format.

    Args:
        logger: Structlog logger instance
        approved: Whether an order was produced
        reason: Why the order was approved or refused
        context: Additional context data
    """
    bound_logger = logger.bind(
        risk_result="APPROVED" if approved else "REFUSED",
        reason=reason
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if approved:
        bound_logger.info("Order approved")
    else:
        bound_logger.warning("Order refused")
