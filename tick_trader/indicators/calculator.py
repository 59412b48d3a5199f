"""Indicator engine adapter between the price window and the decision layer"""

from typing import Callable, Optional

import structlog

from ..config.defaults import IndicatorParams
from ..data.models import WindowSlice
from ..errors import IndicatorCalculationError
from ..models.indicators import IndicatorSnapshot, StochasticValue
from .momentum import calculate_rsi, calculate_sma, calculate_stochastic

logger = structlog.get_logger(__name__)

IndicatorFn = Callable[[WindowSlice], Optional[IndicatorSnapshot]]


class IndicatorCalculator:
    """Computes SMA, RSI and stochastic over a fixed-length window slice"""

    def __init__(self, params: Optional[IndicatorParams] = None):
        self.params = params or IndicatorParams()

    @property
    def period(self) -> int:
        return self.params.period

    def calculate(self, window_slice: WindowSlice) -> Optional[IndicatorSnapshot]:
        """
        Calculate the latest indicator values

        Args:
            window_slice: Last `period` samples of the price window

        Returns:
            IndicatorSnapshot, or None if the slice is shorter than the period

        Raises:
            IndicatorCalculationError: Series lengths disagree
        """
        if len(window_slice) < self.period:
            return None

        if not len(window_slice.close) == len(window_slice.high) == len(window_slice.low):
            raise IndicatorCalculationError(
                "Window series lengths differ",
                indicator_name="stochastic",
                sample_count=len(window_slice)
            )

        stochastic = calculate_stochastic(
            window_slice.close,
            window_slice.high,
            window_slice.low,
            period=self.period,
            signal_period=self.params.signal_period,
        )

        snapshot = IndicatorSnapshot(
            sma=calculate_sma(window_slice.close, self.period),
            rsi=calculate_rsi(window_slice.close, self.period),
            stochastic=StochasticValue(k=stochastic[0], d=stochastic[1]) if stochastic else None,
        )

        logger.debug(
            "Calculated indicators",
            sample_count=len(window_slice),
            **snapshot.to_dict()
        )
        return snapshot

    __call__ = calculate
