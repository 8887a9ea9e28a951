import re
from datetime import datetime, time

from railfeed.core.errors import TimeFormatError

HHMM_LAYOUT = "%H:%M"
HHMMSS_LAYOUT = "%H:%M:%S"

_HHMM_RE = re.compile(r"\d{2}:\d{2}")
_HHMMSS_RE = re.compile(r"\d{2}:\d{2}:\d{2}")


def parse_time_of_day(value: str) -> time:
    """
    Parse a Darwin time-of-day string.

    Five characters means "HH:MM"; anything else must be "HH:MM:SS".
    Callers check for blanks first: an empty string is a TimeFormatError here.
    """
    if len(value) == 5:
        layout, pattern = HHMM_LAYOUT, _HHMM_RE
    else:
        layout, pattern = HHMMSS_LAYOUT, _HHMMSS_RE

    if not pattern.fullmatch(value):
        raise TimeFormatError(f"Bad time-of-day value: {value!r}")

    try:
        return datetime.strptime(value, layout).time()
    except ValueError as e:
        raise TimeFormatError(f"Bad time-of-day value: {value!r}") from e


def seconds_since_midnight(t: time) -> int:
    return t.hour * 3600 + t.minute * 60 + t.second
