"""
Error classification for the tick trading engine.

Data quality errors cause a tick to be skipped; system failures are
handled per type by the engine.
"""

from .data_quality import (
    DataQualityError,
    MissingDataError,
    MalformedDataError,
)
from .system_failures import (
    SystemFailureError,
    IndicatorCalculationError,
    TradeStateError,
    PersistenceError,
    CommandDeliveryError,
    ConfigurationError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MissingDataError",
    "MalformedDataError",
    # System Failures
    "SystemFailureError",
    "IndicatorCalculationError",
    "TradeStateError",
    "PersistenceError",
    "CommandDeliveryError",
    "ConfigurationError",
]
