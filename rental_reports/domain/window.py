"""
Reporting windows: which rentals a refresh or extraction covers.

A day window matches rentals on the same calendar day as the supplied
instant and no later than that instant. Run at 23:59 (or the next morning
with the previous day's last instant) it covers the whole day; run mid-day
it covers the day so far. The clamp applies to any instant, not only "now",
so a window for 2005-05-30 14:00 reports the morning and early afternoon
of that day only.

A range window is the closed interval [start, end] and backs one-off
extractions outside the daily refresh.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional


def to_wall_clock(value: datetime) -> datetime:
    """
    Drop tzinfo, keeping the wall-clock time in the value's own zone.

    Upstream rental dates are `TIMESTAMP WITHOUT TIME ZONE`, so comparisons
    happen on naive datetimes.
    """
    if value.tzinfo is None:
        return value
    return value.replace(tzinfo=None)


@dataclass(frozen=True)
class ReportWindow:
    """
    Inclusive bounds on `rental_date`, plus the calendar day for day windows.
    """

    start: datetime
    end: datetime
    day: Optional[date] = None

    @classmethod
    def for_day(cls, instant: datetime) -> "ReportWindow":
        """Window for the calendar day of `instant`, capped at `instant`."""
        instant = to_wall_clock(instant)
        return cls(
            start=datetime.combine(instant.date(), time.min),
            end=instant,
            day=instant.date(),
        )

    @classmethod
    def between(cls, start: datetime, end: datetime) -> "ReportWindow":
        """Closed range window; `start` must not be after `end`."""
        start, end = to_wall_clock(start), to_wall_clock(end)
        if start > end:
            raise ValueError(f"window start {start} is after end {end}")
        return cls(start=start, end=end)

    @property
    def is_day(self) -> bool:
        return self.day is not None

    def contains(self, rental_date: datetime) -> bool:
        if self.day is not None and rental_date.date() != self.day:
            return False
        return self.start <= rental_date <= self.end

    def describe(self) -> str:
        if self.day is not None:
            return f"{self.day.isoformat()} up to {self.end.time().isoformat()}"
        return f"{self.start.isoformat()} .. {self.end.isoformat()}"


__all__ = ["ReportWindow", "to_wall_clock"]
