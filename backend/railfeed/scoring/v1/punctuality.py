from __future__ import annotations

from typing import Optional

from railfeed.jobs.consume.types import Location
from railfeed.jobs.consume.utils.time import parse_time_of_day, seconds_since_midnight

MINUTES_PER_DAY = 24 * 60
ROLLOVER_THRESHOLD_MINUTES = MINUTES_PER_DAY / 2


def scheduled_arrival(location: Location) -> Optional[str]:
    """Public arrival if published, otherwise the working arrival."""
    return location.pta or location.wta or None


def unwrap_day_rollover(minutes: float) -> float:
    """
    Times carry no date, so a gap of more than 12h is read as crossing
    midnight (scheduled 23:58, actual 00:02 -> +4).
    """
    if minutes > ROLLOVER_THRESHOLD_MINUTES:
        return minutes - MINUTES_PER_DAY
    if minutes < -ROLLOVER_THRESHOLD_MINUTES:
        return minutes + MINUTES_PER_DAY
    return minutes


def arrival_delay_minutes(location: Location) -> Optional[float]:
    """
    Signed arrival delay in minutes (negative = early).

    None means no delay is computable: no arrival event, no actual time,
    or no scheduled arrival. TimeFormatError propagates.
    """
    arrival = location.arrival
    if arrival is None or not arrival.actual:
        return None

    scheduled = scheduled_arrival(location)
    if scheduled is None:
        return None

    actual_t = parse_time_of_day(arrival.actual)
    scheduled_t = parse_time_of_day(scheduled)

    diff_s = seconds_since_midnight(actual_t) - seconds_since_midnight(scheduled_t)
    return unwrap_day_rollover(diff_s / 60.0)
