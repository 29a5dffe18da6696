"""Time helpers shared by the engine, tokens and store."""

from datetime import datetime

from pytz import UTC

EPOCH = datetime.fromtimestamp(0, tz=UTC)


def now() -> datetime:
    """Get the current UTC time, truncated to the second."""
    return datetime.now(tz=UTC).replace(microsecond=0)


def epoch(t: datetime) -> int:
    """Convert a :class:`.datetime` to UNIX time."""
    return int(round((t - EPOCH).total_seconds()))


def from_epoch(t: int) -> datetime:
    """Get a UTC :class:`datetime` from a UNIX timestamp."""
    return datetime.fromtimestamp(t, tz=UTC)
