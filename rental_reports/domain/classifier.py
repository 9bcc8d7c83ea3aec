"""
Time-of-day classification for rental timestamps.

Every timestamp falls into exactly one bucket; only the clock time is
considered, the date is ignored. Bucket lower bounds are inclusive, so
12:00:00 is Afternoon and 17:00:00 is Evening.
"""

from __future__ import annotations

import enum
from datetime import datetime, time
from typing import Union

AFTERNOON_STARTS = time(12, 0)
EVENING_STARTS = time(17, 0)


class TimeOfDay(str, enum.Enum):
    """Summary bucket labels, in clock order."""

    MORNING = "Morning"
    AFTERNOON = "Afternoon"
    EVENING = "Evening"

    def __str__(self) -> str:
        return self.value


def classify_time_of_day(value: Union[datetime, time]) -> TimeOfDay:
    """
    Map a timestamp (or bare clock time) to its time-of-day bucket.
    """
    clock = value.time() if isinstance(value, datetime) else value
    if clock < AFTERNOON_STARTS:
        return TimeOfDay.MORNING
    if clock < EVENING_STARTS:
        return TimeOfDay.AFTERNOON
    return TimeOfDay.EVENING


__all__ = ["AFTERNOON_STARTS", "EVENING_STARTS", "TimeOfDay", "classify_time_of_day"]
