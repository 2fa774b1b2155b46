"""
Date helpers shared by the exercise endpoints.

Dates in this service are calendar dates with no time of day.  Input
dates use the ``YYYY-MM-DD`` form (month and day may have one or two
digits).  Anything else, including impossible dates such as
``2019-02-30``, is treated as "not given": ``normalize_date`` replaces
it with today's date in UTC and range bounds fall back to their
defaults.

Log entries render dates as ``"Sat Dec 21 2019"`` using fixed English
names so the output does not depend on the process locale.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional

DATE_PATTERN = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")

WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def today() -> date:
    """Current calendar date in UTC."""
    return datetime.now(timezone.utc).date()


def parse_date(raw: Optional[str]) -> Optional[date]:
    """Parse ``raw`` as ``YYYY-MM-DD``; return ``None`` if it is not a valid date."""
    if raw is None:
        return None
    match = DATE_PATTERN.match(raw.strip())
    if not match:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def normalize_date(raw: Optional[str]) -> date:
    """Return the date in ``raw``, or today when it is absent or malformed."""
    parsed = parse_date(raw)
    return parsed if parsed is not None else today()


def format_date(value: date) -> str:
    """Render ``value`` as ``"<Weekday> <Month> <DD> <YYYY>"``."""
    return "%s %s %02d %04d" % (
        WEEKDAY_NAMES[value.weekday()],
        MONTH_NAMES[value.month - 1],
        value.day,
        value.year,
    )


@dataclass(frozen=True)
class DateRange:
    """Inclusive ``[start, end]`` range of calendar dates."""

    start: date
    end: date

    @classmethod
    def from_bounds(cls, start: Optional[str], end: Optional[str]) -> "DateRange":
        """Build a range from raw query values.

        A missing or invalid ``start`` means the beginning of time, a
        missing or invalid ``end`` means today.
        """
        return cls(
            start=parse_date(start) or date.min,
            end=parse_date(end) or today(),
        )
