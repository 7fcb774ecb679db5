"""Domain models and pure functions for cashio.

This package contains the functional core:
- Amount parsing and formatting
- Record and filter value types
- No database or console access
"""

from cashio.domain.amounts import format_cents, parse_amount
from cashio.domain.models import DEFAULT_CATEGORY, CategoryName, Cents, Record, RecordUpdate
from cashio.domain.query import QueryFilter

__all__ = [
    "Cents",
    "CategoryName",
    "DEFAULT_CATEGORY",
    "QueryFilter",
    "Record",
    "RecordUpdate",
    "format_cents",
    "parse_amount",
]
