"""
Duration primitives shared by the fee calculator and the elapsed-time
formatter, so billing and display always agree on how long a stay was.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import NamedTuple, Union

SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60

Number = Union[int, float, Decimal]


class DurationParts(NamedTuple):
    hours: int
    minutes: int
    seconds: int


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC; convert aware ones to UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def elapsed_seconds(start: datetime, end: datetime) -> float:
    """Seconds from start to end. Negative when end precedes start."""
    return (as_utc(end) - as_utc(start)).total_seconds()


def to_hours(seconds: Number) -> Decimal:
    """Exact fractional hours, e.g. 7260 -> 2.0166..."""
    return Decimal(str(seconds)) / SECONDS_PER_HOUR


def split_duration(seconds: Number) -> DurationParts:
    """Floor a non-negative duration into whole hours, minutes and seconds."""
    total = int(seconds)
    hours, rest = divmod(total, SECONDS_PER_HOUR)
    minutes, secs = divmod(rest, SECONDS_PER_MINUTE)
    return DurationParts(hours, minutes, secs)
