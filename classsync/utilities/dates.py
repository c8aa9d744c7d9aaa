"""Calendar-day helpers shared by the domain entities and the schedule logic."""
import calendar
from datetime import date, datetime
from typing import Union

from classsync.utilities.constants import ISO_DATE_FORMAT

DateLike = Union[date, datetime, str]

__all__ = ["DateLike", "parse_iso_date", "to_iso", "weekday_of", "add_months"]


def parse_iso_date(value: DateLike) -> date:
    """Return a calendar date for an ISO string ('2024-01-08' or a full timestamp) or a date/datetime."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value).strip()[:10], ISO_DATE_FORMAT).date()


def to_iso(value: DateLike) -> str:
    return parse_iso_date(value).strftime(ISO_DATE_FORMAT)


def weekday_of(d: date) -> int:
    """Weekday number with Sunday=0 .. Saturday=6."""
    return d.isoweekday() % 7


def add_months(d: date, months: int) -> date:
    """Calendar-month addition; a day missing from the target month clamps to its last day."""
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(d.day, last_day))
