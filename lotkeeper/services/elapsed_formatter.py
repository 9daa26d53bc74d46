# lotkeeper/services/elapsed_formatter.py
"""Display strings for the active list and the visit history."""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from lotkeeper.config import settings
from lotkeeper.schemas.vehicle import Vehicle
from lotkeeper.utils.durations import elapsed_seconds, split_duration


def format_elapsed(vehicle: Vehicle, now: datetime) -> str:
    """'2 hours 5 minutes', or '45 minutes' under an hour. Floors both parts."""
    seconds = max(elapsed_seconds(vehicle.entry_time, now), 0)
    parts = split_duration(seconds)
    if parts.hours > 0:
        return f"{parts.hours} hours {parts.minutes} minutes"
    return f"{parts.minutes} minutes"


def format_fee(fee: Decimal, symbol: Optional[str] = None) -> str:
    symbol = settings.CURRENCY_SYMBOL if symbol is None else symbol
    amount = Decimal(fee).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{symbol}{amount}"
