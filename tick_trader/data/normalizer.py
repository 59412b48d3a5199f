"""
Normalization of raw transport frames into Tick objects.

The transport delivers decoded stream frames. Only price updates become
ticks; API error replies and session or command acknowledgements are
reported as skipped.
"""

import json
import math
from dataclasses import dataclass
from typing import Any, Optional, Union

import structlog

from ..errors import MalformedDataError, MissingDataError
from ..utils.time import parse_timestamp
from .models import Tick

logger = structlog.get_logger(__name__)

REQUIRED_FIELDS = ("ask", "high", "low")


@dataclass(frozen=True)
class NormalizationResult:
    """Result of normalizing a single transport frame."""

    tick: Optional[Tick] = None

    success: bool = True
    error_msg: Optional[str] = None
    skipped_reason: Optional[str] = None


def _coerce_price(payload: dict[str, Any], name: str, required: bool) -> Optional[float]:
    value = payload.get(name)

    if value is None:
        if required:
            raise MissingDataError(f"Tick missing required field: {name}", data_type="tick")
        return None

    if isinstance(value, bool):
        raise MalformedDataError(f"Tick field {name} must be numeric, got bool",
                                 raw_data=str(payload)[:100])
    try:
        price = float(value)
    except (TypeError, ValueError):
        raise MalformedDataError(f"Tick field {name} must be numeric, got {value!r}",
                                 raw_data=str(payload)[:100],
                                 expected_format="number")

    if not math.isfinite(price):
        raise MalformedDataError(f"Tick field {name} is not finite: {value!r}",
                                 raw_data=str(payload)[:100])
    return price


def _coerce_timestamp(payload: dict[str, Any]) -> Optional[str]:
    value = payload.get("timestamp")
    try:
        return parse_timestamp(value)
    except (OverflowError, OSError, ValueError):
        raise MalformedDataError(f"Tick timestamp out of range: {value!r}",
                                 raw_data=str(payload)[:100],
                                 expected_format="epoch milliseconds")


def parse_tick(payload: dict[str, Any]) -> Tick:
    """
    Build a Tick from a price payload.

    Args:
        payload: Mapping with ask/high/low and optional bid/timestamp

    Returns:
        Tick

    Raises:
        MissingDataError: A required price field is absent
        MalformedDataError: A price field is not a finite number, or the
            timestamp cannot be converted
    """
    if not isinstance(payload, dict):
        raise MalformedDataError(f"Tick payload must be dict, got {type(payload).__name__}",
                                 raw_data=str(payload)[:100])

    ask, high, low = (_coerce_price(payload, name, required=True) for name in REQUIRED_FIELDS)

    return Tick(
        ask=ask,
        high=high,
        low=low,
        bid=_coerce_price(payload, "bid", required=False),
        timestamp=_coerce_timestamp(payload),
    )


class TickNormalizer:
    """Turns transport frames into ticks."""

    def __init__(self):
        self.logger = logger
        self.frames_seen = 0
        self.ticks_emitted = 0

    def normalize(self, frame: Union[str, bytes, dict[str, Any]]) -> NormalizationResult:
        """
        Normalize a single frame.

        Args:
            frame: Decoded dict or raw JSON text from the transport

        Returns:
            NormalizationResult with a tick for price frames
        """
        self.frames_seen += 1

        try:
            if isinstance(frame, (str, bytes)):
                frame = json.loads(frame)
        except json.JSONDecodeError as e:
            return NormalizationResult(success=False, error_msg=f"Invalid JSON frame: {e}")

        if not isinstance(frame, dict):
            return NormalizationResult(
                success=False,
                error_msg=f"Frame must be an object, got {type(frame).__name__}"
            )

        if frame.get("status") is False:
            self.logger.error(
                "API error frame received",
                error_code=frame.get("errorCode"),
                error_description=frame.get("errorDescr")
            )
            return NormalizationResult(
                success=False,
                error_msg=f"API error {frame.get('errorCode')}: {frame.get('errorDescr')}",
                skipped_reason="api_error"
            )

        if "streamSessionId" in frame:
            return NormalizationResult(skipped_reason="session_frame")

        if "returnData" in frame and "data" not in frame:
            return NormalizationResult(skipped_reason="command_reply")

        payload = frame.get("data", frame)

        try:
            tick = parse_tick(payload)
        except (MissingDataError, MalformedDataError) as e:
            return NormalizationResult(success=False, error_msg=str(e))

        self.ticks_emitted += 1
        return NormalizationResult(tick=tick)
