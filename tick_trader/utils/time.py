"""
Time helpers for trade timestamps and trading-day bookkeeping.

Trade entry/exit times and the daily statistics date are ISO-8601 strings so
that snapshots stay plain JSON.
"""

from datetime import datetime, timezone
from typing import Callable, Optional, Union

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current wall-clock time in UTC."""
    return datetime.now(timezone.utc)


def format_timestamp(ts: datetime) -> str:
    """Format a datetime as ISO-8601, assuming UTC for naive values."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.isoformat()


def parse_timestamp(value: Union[str, int, float, None]) -> Optional[str]:
    """
    Normalize a feed timestamp to an ISO-8601 UTC string.

    Args:
        value: ISO string, epoch milliseconds, or None

    Returns:
        ISO-8601 string, or None when the feed sent no timestamp
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        return format_timestamp(datetime.fromtimestamp(value / 1000.0, tz=timezone.utc))

    return str(value)


def resolve_event_time(tick_timestamp: Optional[str], clock: Optional[Clock] = None) -> str:
    """
    Pick the timestamp recorded on trades opened or closed by a tick.

    The tick's own timestamp wins; otherwise the clock (wall time by default).
    """
    if tick_timestamp:
        return tick_timestamp

    now = clock() if clock is not None else utc_now()
    return format_timestamp(now)


def trading_date(timestamp: str) -> str:
    """Calendar date (YYYY-MM-DD, UTC) of an ISO-8601 timestamp."""
    try:
        parsed = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError:
        return timestamp[:10]

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date().isoformat()
