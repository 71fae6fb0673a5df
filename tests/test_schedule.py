from datetime import date, datetime

import pytest

from src.services.schedule import TIME_SLOTS, day_bounds, free_slots, is_weekend, month_bounds, parse_day


def test_is_weekend():
    assert is_weekend(date(2026, 10, 24))  # Saturday
    assert is_weekend(date(2026, 10, 25))  # Sunday
    assert not is_weekend(date(2026, 10, 19))  # Monday
    assert not is_weekend(date(2026, 10, 23))  # Friday


def test_day_bounds_cover_whole_day():
    start, end = day_bounds(date(2026, 10, 20))
    assert start == datetime(2026, 10, 20, 0, 0, 0)
    assert end.date() == date(2026, 10, 20)
    assert (end.hour, end.minute, end.second) == (23, 59, 59)


def test_month_bounds_handle_leap_years_and_december():
    assert month_bounds(2028, 2) == (datetime(2028, 2, 1), datetime(2028, 2, 29, 23, 59, 59))
    assert month_bounds(2026, 2)[1] == datetime(2026, 2, 28, 23, 59, 59)
    assert month_bounds(2026, 12)[1] == datetime(2026, 12, 31, 23, 59, 59)


@pytest.mark.parametrize("month", [0, 13])
def test_month_bounds_reject_bad_month(month):
    with pytest.raises(ValueError):
        month_bounds(2026, month)


def test_parse_day():
    assert parse_day("2026-10-20") == date(2026, 10, 20)
    assert parse_day("2026-10-20T08:00:00.000Z") == date(2026, 10, 20)
    with pytest.raises(ValueError):
        parse_day("20/10/2026")


def test_free_slots():
    day = date(2026, 10, 20)
    taken = [datetime(2026, 10, 20, 9, 0), datetime(2026, 10, 20, 14, 30), datetime(2026, 10, 21, 10, 0)]
    slots = free_slots(day, taken)
    assert "09:00" not in slots and "14:30" not in slots
    assert "10:00" in slots
    assert len(slots) == len(TIME_SLOTS) - 2
    assert free_slots(date(2026, 10, 24), []) == []
