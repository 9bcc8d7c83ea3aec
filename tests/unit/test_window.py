from datetime import date, datetime, timedelta, timezone

import pytest

from rental_reports.domain.window import ReportWindow


def test_day_window_covers_whole_day_at_end_of_day():
    window = ReportWindow.for_day(datetime(2005, 5, 30, 23, 59, 59))

    assert window.day == date(2005, 5, 30)
    assert window.contains(datetime(2005, 5, 30, 0, 0, 0))
    assert window.contains(datetime(2005, 5, 30, 23, 59, 59))
    assert not window.contains(datetime(2005, 5, 29, 23, 59, 59))
    assert not window.contains(datetime(2005, 5, 31, 0, 0, 0))


def test_day_window_is_capped_at_the_instant():
    window = ReportWindow.for_day(datetime(2005, 5, 30, 14, 0))

    assert window.contains(datetime(2005, 5, 30, 14, 0))
    assert not window.contains(datetime(2005, 5, 30, 14, 0, 1))
    assert not window.contains(datetime(2005, 5, 30, 18, 0))


def test_day_window_drops_timezone_keeping_wall_clock():
    eastern = timezone(timedelta(hours=-5))
    window = ReportWindow.for_day(datetime(2005, 5, 30, 23, 59, tzinfo=eastern))

    assert window.end == datetime(2005, 5, 30, 23, 59)
    assert window.contains(datetime(2005, 5, 30, 23, 0))


def test_range_window_is_closed_on_both_ends():
    window = ReportWindow.between(datetime(2005, 5, 30), datetime(2005, 5, 31, 23, 59, 59))

    assert not window.is_day
    assert window.contains(datetime(2005, 5, 30))
    assert window.contains(datetime(2005, 5, 31, 23, 59, 59))
    assert not window.contains(datetime(2005, 6, 1))


def test_range_window_rejects_reversed_bounds():
    with pytest.raises(ValueError):
        ReportWindow.between(datetime(2005, 5, 31), datetime(2005, 5, 30))
