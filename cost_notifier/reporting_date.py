"""Reporting date and the period covered by a cost report.

A report run on the 1st of a month covers the whole previous month; any other
day covers the current month up to the reporting date.
"""
import datetime as dt
import re
from typing import Callable, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import ConfigError, InvalidDate
from .schemas import ReportedDateRange

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_reporting_date(text: str) -> dt.date:
    if not isinstance(text, str) or not _ISO_DATE.match(text):
        raise InvalidDate(f"reporting date must be YYYY-MM-DD, got {text!r}")
    try:
        return dt.date.fromisoformat(text)
    except ValueError as e:
        raise InvalidDate(f"invalid reporting date {text!r}: {e}") from e


def _as_date(reference: Union[dt.date, str]) -> dt.date:
    if isinstance(reference, dt.datetime):
        return reference.date()
    if isinstance(reference, dt.date):
        return reference
    if isinstance(reference, str):
        return parse_reporting_date(reference)
    raise InvalidDate(f"not a calendar date: {reference!r}")


def compute_report_range(reference_date: Union[dt.date, str]) -> ReportedDateRange:
    end = _as_date(reference_date)
    first_of_month = end.replace(day=1)
    if end == first_of_month:
        start = (first_of_month - dt.timedelta(days=1)).replace(day=1)
    else:
        start = first_of_month
    return ReportedDateRange(start_date=start, end_date=end)


def load_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"Invalid timezone {name!r}") from e


def date_in_timezone(moment: dt.datetime, tz_name: str) -> dt.date:
    """Calendar date of an aware ``moment`` as seen in ``tz_name``."""
    if moment.tzinfo is None:
        raise InvalidDate(f"naive datetime {moment.isoformat()} has no timezone")
    return moment.astimezone(load_timezone(tz_name)).date()


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class ReportingClock:
    """Source of "today" in the reporting timezone."""

    def __init__(self, timezone: str, now: Optional[Callable[[], dt.datetime]] = None):
        self.tz = load_timezone(timezone)
        self._now = now or _utcnow

    def today(self) -> dt.date:
        return self._now().astimezone(self.tz).date()
