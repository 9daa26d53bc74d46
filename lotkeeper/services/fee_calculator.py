# lotkeeper/services/fee_calculator.py
"""
Two-tier parking fee.

  stay <= 1h  -> first_hour_rate (also the minimum charge, even for 0s)
  stay  > 1h  -> first_hour_rate + ceil(hours - 1) * extra_hour_rate

Every started extra hour is billed in full: 1h01m bills one extra hour,
exactly 2h00m also bills one, 2h01m bills two.
"""

from decimal import ROUND_CEILING, Decimal

from lotkeeper.exceptions import InvalidDurationError
from lotkeeper.schemas.rate_config import RateConfig
from lotkeeper.utils.durations import Number, to_hours


def billable_extra_hours(duration_seconds: Number) -> int:
    """Whole extra hours billed beyond the first one."""
    if duration_seconds < 0:
        raise InvalidDurationError(duration_seconds)
    hours = to_hours(duration_seconds)
    if hours <= 1:
        return 0
    return int((hours - 1).to_integral_value(rounding=ROUND_CEILING))


def compute_fee(duration_seconds: Number, rates: RateConfig) -> Decimal:
    extra_hours = billable_extra_hours(duration_seconds)
    return rates.first_hour_rate + extra_hours * rates.extra_hour_rate
