"""Date utilities for cashio.

Pure functions for resolving loosely written dates and for calendar ranges.
The current date is always passed in by the caller.
"""

import calendar
import logging
import re
from datetime import MAXYEAR, MINYEAR, date, datetime

from cashio.errors import ParseError

logger = logging.getLogger(__name__)

ISO_FORMAT = "%Y-%m-%d"
US_FORMAT = "%m/%d/%Y"

# English names, independent of LC_TIME
MONTH_NAMES = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)
MONTH_ABBRS = tuple(name[:3] for name in MONTH_NAMES)

_DAY_OF_MONTH = re.compile(r"[0-9]+")
_DAY_MONTH_NAME = re.compile(r"([0-9]{1,2})-([A-Za-z]{3})-([0-9]{4})")
_YEAR_MONTH = re.compile(r"([0-9]{4})-([0-9]{1,2})")


def _parse_day_month_name(text: str) -> date:
    """Parse D-Mon-YYYY with English month abbreviations, e.g. 3-Jul-2011."""
    match = _DAY_MONTH_NAME.fullmatch(text)
    if not match or match.group(2).lower() not in MONTH_ABBRS:
        raise ValueError(f"{text!r} is not D-Mon-YYYY")
    month = MONTH_ABBRS.index(match.group(2).lower()) + 1
    return date(int(match.group(3)), month, int(match.group(1)))


def _try_formats(text: str) -> date | None:
    """Parse text as YYYY-MM-DD, then D-Mon-YYYY, then MM/DD/YYYY."""
    logger.debug("evaluating %r", text)
    try:
        return datetime.strptime(text, ISO_FORMAT).date()
    except ValueError:
        pass
    try:
        return _parse_day_month_name(text)
    except ValueError:
        pass
    try:
        return datetime.strptime(text, US_FORMAT).date()
    except ValueError:
        return None


def resolve_date(text: str, today: date) -> date:
    """Resolve a loosely formatted date string.

    Supported input:
    - YYYY-MM-DD, D-Mon-YYYY or MM/DD/YYYY
    - MM-DD or MM/DD, in today's year
    - DD, in today's year and month

    Args:
        text: Date text entered by the user.
        today: The current date, used to fill in a missing year or month.

    Returns:
        The resolved calendar date.

    Raises:
        ParseError: If no supported form matches.
    """
    text = text.strip()
    if not text:
        raise ParseError("Empty date", text)

    resolved = _try_formats(text)
    if resolved is not None:
        return resolved

    resolved = _try_formats(f"{today.year}-{text}")
    if resolved is not None:
        return resolved

    resolved = _try_formats(f"{text}/{today.year}")
    if resolved is not None:
        return resolved

    if not _DAY_OF_MONTH.fullmatch(text):
        raise ParseError("Unrecognized date", text)
    try:
        return date(today.year, today.month, int(text))
    except (ValueError, OverflowError) as e:
        raise ParseError("Date out of range", text) from e


def to_iso(value: date) -> str:
    """Format a date in the canonical stored form (YYYY-MM-DD)."""
    return value.strftime(ISO_FORMAT)


def month_range(year: int, month: int) -> tuple[date, date]:
    """Calculate the inclusive date range of a month.

    Args:
        year: Calendar year.
        month: Month number (1-12).

    Returns:
        Tuple of (first_day, last_day).

    Raises:
        ValueError: If month is not between 1 and 12.
    """
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def year_range(year: int) -> tuple[date, date]:
    """Calculate the inclusive date range of a year."""
    return date(year, 1, 1), date(year, 12, 31)


def parse_month(text: str, today: date) -> tuple[int, int]:
    """Parse a month option into (year, month).

    Accepts a month number ("7", "07"), an English month name or
    abbreviation ("July", "jul"), or YYYY-MM. Forms without a year use
    today's year.

    Raises:
        ParseError: If the text is not a month.
    """
    cleaned = text.strip()

    match = _YEAR_MONTH.fullmatch(cleaned)
    if match:
        year, month = int(match.group(1)), int(match.group(2))
    elif cleaned.isdigit():
        year, month = today.year, int(cleaned)
    else:
        key = cleaned.lower()
        if key in MONTH_NAMES:
            month = MONTH_NAMES.index(key) + 1
        elif key in MONTH_ABBRS:
            month = MONTH_ABBRS.index(key) + 1
        else:
            raise ParseError("Unrecognized month", text)
        year = today.year

    if not 1 <= month <= 12:
        raise ParseError("Month out of range", text)
    if not MINYEAR <= year <= MAXYEAR:
        raise ParseError("Year out of range", text)
    return year, month


def parse_year(text: str) -> int:
    """Parse a four digit year option.

    Raises:
        ParseError: If the text is not a four digit year.
    """
    cleaned = text.strip()
    if not re.fullmatch(r"[0-9]{4}", cleaned):
        raise ParseError("Unrecognized year", text)
    year = int(cleaned)
    if not MINYEAR <= year <= MAXYEAR:
        raise ParseError("Year out of range", text)
    return year
