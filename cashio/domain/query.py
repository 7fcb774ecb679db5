"""Read-time filters for listing records.

A QueryFilter is an immutable set of optional predicates. Every predicate
that is present must hold for a record to match.
"""

import datetime
from dataclasses import dataclass

from cashio.dates import month_range, parse_month, parse_year, resolve_date, year_range
from cashio.domain.models import CategoryName, Record
from cashio.errors import ValidationError


@dataclass(frozen=True)
class QueryFilter:
    """Immutable record filter.

    Attributes:
        id: Exact record identity.
        fuzzy: Substring matched against name or description.
        category: Exact category.
        date_from: Inclusive lower date bound.
        date_to: Inclusive upper date bound, only valid with date_from.
        case_sensitive: Whether fuzzy matching respects case.
    """

    id: int | None = None
    fuzzy: str | None = None
    category: CategoryName | None = None
    date_from: datetime.date | None = None
    date_to: datetime.date | None = None
    case_sensitive: bool = False

    def __post_init__(self) -> None:
        if self.date_to is not None and self.date_from is None:
            raise ValidationError("An end date requires a start date")
        if self.date_from is not None and self.date_to is not None and self.date_from > self.date_to:
            raise ValidationError(f"Start date {self.date_from} is after end date {self.date_to}")

    def is_empty(self) -> bool:
        return (
            self.id is None
            and self.fuzzy is None
            and self.category is None
            and self.date_from is None
            and self.date_to is None
        )

    def matches(self, record: Record) -> bool:
        """Check a record against every present predicate."""
        if self.id is not None and record.id != self.id:
            return False
        if self.category is not None and record.category != self.category:
            return False
        if self.date_from is not None and record.date < self.date_from:
            return False
        if self.date_to is not None and record.date > self.date_to:
            return False
        if self.fuzzy is not None:
            needle, haystacks = self.fuzzy, (record.name, record.description)
            if not self.case_sensitive:
                needle = needle.lower()
                haystacks = tuple(h.lower() for h in haystacks)
            if not any(needle in h for h in haystacks):
                return False
        return True


def build_list_filter(
    today: datetime.date,
    query: str | None = None,
    category: str | None = None,
    month: str | None = None,
    year: str | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
    all_dates: bool = False,
    case_sensitive: bool = False,
) -> QueryFilter:
    """Build a QueryFilter from the raw options of the list command.

    With no date option the filter covers today's month. ``all_dates``
    drops the date window entirely.

    Args:
        today: The current date.
        query: Fuzzy text matched against name and description.
        category: Exact category.
        month: Month option (number, name or YYYY-MM).
        year: Four digit year option.
        date_from: Start of a date range, in any form resolve_date accepts.
        date_to: End of a date range, requires date_from.
        all_dates: Whether to list every date.
        case_sensitive: Whether fuzzy matching respects case.

    Returns:
        The filter to pass to RecordStore.list.

    Raises:
        ValidationError: If options conflict or the range is inverted.
        ParseError: If a date, month or year cannot be parsed.
    """
    if date_to is not None and date_from is None:
        raise ValidationError("--to requires --from")
    if (month is not None or year is not None) and date_from is not None:
        raise ValidationError("--month/--year cannot be combined with --from/--to")
    if all_dates and (month is not None or year is not None or date_from is not None):
        raise ValidationError("--all cannot be combined with other date options")

    start: datetime.date | None = None
    end: datetime.date | None = None

    if date_from is not None:
        start = resolve_date(date_from, today)
        end = resolve_date(date_to, today) if date_to is not None else None
    elif month is not None:
        month_year, month_number = parse_month(month, today)
        if year is not None:
            month_year = parse_year(year)
        start, end = month_range(month_year, month_number)
    elif year is not None:
        start, end = year_range(parse_year(year))
    elif not all_dates:
        start, end = month_range(today.year, today.month)

    return QueryFilter(
        fuzzy=query or None,
        category=CategoryName(category) if category is not None else None,
        date_from=start,
        date_to=end,
        case_sensitive=case_sensitive,
    )
