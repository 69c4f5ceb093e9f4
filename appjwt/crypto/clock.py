"""Injectable time sources for claim timestamps."""

import math
from collections.abc import Callable
from datetime import UTC, datetime

from appjwt.crypto.errors import InvalidClaimsError

Clock = Callable[[], datetime | int | float]


def system_clock() -> datetime:
    """Read the wall clock in UTC."""
    return datetime.now(UTC)


def fixed_clock(value: datetime | int | float) -> Clock:
    """Return a clock that always reports ``value``."""

    def _clock() -> datetime | int | float:
        return value

    return _clock


def to_epoch_seconds(now: datetime | int | float) -> int:
    """Truncate an issuance time to whole seconds since the epoch."""
    if isinstance(now, bool):
        raise InvalidClaimsError(f"issuance time must be a timestamp, got {now!r}")
    if isinstance(now, datetime):
        if now.tzinfo is None or now.utcoffset() is None:
            raise InvalidClaimsError("issuance time must be timezone-aware")
        now = now.timestamp()
    if isinstance(now, float):
        if not math.isfinite(now):
            raise InvalidClaimsError(f"issuance time {now!r} is not a valid timestamp")
        now = math.floor(now)
    if not isinstance(now, int):
        raise InvalidClaimsError(
            f"issuance time must be a datetime or epoch seconds, "
            f"got {type(now).__name__}"
        )
    if now < 0:
        raise InvalidClaimsError(f"issuance time {now} precedes the epoch")
    return now
