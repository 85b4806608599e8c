"""Cycle arithmetic for drips-sdk.

Drips are accounted in fixed-length cycles counted from the UNIX epoch. Funds
dripped during a cycle become receivable once the cycle ends; funds of the
current cycle can only be squeezed.
"""

import math
from datetime import datetime, timezone

from ._exceptions import InvalidCycleLengthError
from .types import CycleInfo


def _check_cycle_secs(cycle_secs: int) -> None:
    if cycle_secs <= 0:
        raise InvalidCycleLengthError(cycle_secs)


def _to_timestamp(now: datetime) -> int:
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return math.floor(now.timestamp())


def get_cycle_start(timestamp: int, cycle_secs: int) -> int:
    """Timestamp at which the cycle containing `timestamp` started."""
    _check_cycle_secs(cycle_secs)
    return timestamp - timestamp % cycle_secs


def count_cycles(from_timestamp: int, to_timestamp: int, cycle_secs: int) -> int:
    """
    Number of cycle boundaries crossed between two timestamps.

    This is how many cycles finished, and so became receivable, in between.
    Returns 0 if to_timestamp is not after from_timestamp.
    """
    _check_cycle_secs(cycle_secs)
    if to_timestamp <= from_timestamp:
        return 0
    return to_timestamp // cycle_secs - from_timestamp // cycle_secs


def get_current_cycle_info(cycle_duration_secs: int, now: datetime | None = None) -> CycleInfo:
    """
    Compute where `now` falls within the network's cycles.

    Args:
        cycle_duration_secs: The network cycle length in seconds (e.g. 604800 for weekly cycles)
        now: Point in time, defaults to the current UTC time. Naive datetimes are UTC.

    Raises:
        InvalidCycleLengthError: If cycle_duration_secs is not positive

    Example:
        >>> info = get_current_cycle_info(604800, datetime(1970, 1, 8, tzinfo=timezone.utc))
        >>> info.current_cycle_secs
        0
    """
    _check_cycle_secs(cycle_duration_secs)

    timestamp = _to_timestamp(now or datetime.now(timezone.utc))
    current_cycle_secs = timestamp % cycle_duration_secs
    start = timestamp - current_cycle_secs

    return CycleInfo(
        cycle_duration_secs=cycle_duration_secs,
        current_cycle_secs=current_cycle_secs,
        current_cycle_start_date=datetime.fromtimestamp(start, timezone.utc),
        next_cycle_start_date=datetime.fromtimestamp(start + cycle_duration_secs, timezone.utc),
    )
