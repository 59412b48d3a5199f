"""
System failure error classifications.

These exceptions represent failures of a collaborator or a broken internal
invariant. The engine decides per type whether it can keep running.
"""

from typing import Any, Dict, Optional


class SystemFailureError(Exception):
    """Base class for system-level failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class IndicatorCalculationError(SystemFailureError):
    """Indicator collaborator could not produce a usable snapshot."""

    def __init__(self, message: str, indicator_name: Optional[str] = None,
                 sample_count: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.indicator_name = indicator_name
        self.sample_count = sample_count


class TradeStateError(SystemFailureError):
    """Invalid trade lifecycle transition."""

    def __init__(self, message: str, trade_id: Optional[str] = None,
                 current_status: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.trade_id = trade_id
        self.current_status = current_status


class PersistenceError(SystemFailureError):
    """Snapshot load or save failure."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.target = target
        self.recoverable = True


class CommandDeliveryError(SystemFailureError):
    """Outbound order command could not be handed to the transport."""

    def __init__(self, message: str, sink_name: Optional[str] = None,
                 direction: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.sink_name = sink_name
        self.direction = direction
        self.recoverable = True


class ConfigurationError(SystemFailureError):
    """Configuration failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
