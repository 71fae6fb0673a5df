import calendar
from datetime import date, datetime, time

import pytz


# Half-hour grid the front desk books into (morning and afternoon sessions).
TIME_SLOTS = [
    "09:00", "09:30", "10:00", "10:30", "11:00", "11:30",
    "14:00", "14:30", "15:00", "15:30", "16:00", "16:30",
]

UPCOMING_LIMIT = 10


def clinic_now(tz_name: str) -> datetime:
    """Current clinic-local wall time as a naive datetime (how dates are stored)."""
    try:
        tz = pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        tz = pytz.UTC
    return datetime.now(tz).replace(tzinfo=None)


def is_weekend(day: date) -> bool:
    # Saturday=5, Sunday=6 in Python's weekday()
    return day.weekday() >= 5


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """First and last instant of a calendar day, both inclusive."""
    return datetime.combine(day, time.min), datetime.combine(day, time.max)


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    """
    First day 00:00:00 through last day 23:59:59 of the month.
    Raises ValueError for a month outside 1..12.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")
    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1)
    end = datetime(year, month, last_day, 23, 59, 59)
    return start, end


def parse_day(raw: str) -> date:
    """Parse a YYYY-MM-DD query parameter (a full ISO datetime is cut to its day)."""
    raw = (raw or "").strip()
    try:
        return date.fromisoformat(raw[:10])
    except ValueError:
        raise ValueError(f"Invalid date: {raw!r}")


def free_slots(day: date, taken: list[datetime]) -> list[str]:
    """Slots of the grid still open on ``day``. Weekends have none."""
    if is_weekend(day):
        return []
    booked = {dt.strftime("%H:%M") for dt in taken if dt.date() == day}
    return [slot for slot in TIME_SLOTS if slot not in booked]

