"""Domain types for cashio.

- Cents: signed amount in cents (minor units)
- CategoryName: free-text category label
- Record: one stored transaction
- RecordUpdate: the fields to change on an existing record
"""

import datetime
from dataclasses import dataclass, fields
from typing import Any, NewType

from cashio.errors import ValidationError

# Amounts are stored as cents to avoid floating point errors
Cents = NewType("Cents", int)

CategoryName = NewType("CategoryName", str)

DEFAULT_CATEGORY = CategoryName("default")

# Range of the SQLite INTEGER column holding cents
CENTS_MIN = -(2**63)
CENTS_MAX = 2**63 - 1


@dataclass(frozen=True)
class Record:
    """Immutable transaction record.

    ``id`` is None until the record has been stored.
    """

    name: str
    cents: Cents
    date: datetime.date
    category: CategoryName = DEFAULT_CATEGORY
    description: str = ""
    id: int | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValidationError("Record name must not be empty")


@dataclass(frozen=True)
class RecordUpdate:
    """Partial update applied by RecordStore.modify.

    Fields left as None are not changed.
    """

    name: str | None = None
    cents: Cents | None = None
    date: datetime.date | None = None
    category: CategoryName | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        if self.name is not None and not self.name:
            raise ValidationError("Record name must not be empty")

    def changes(self) -> dict[str, Any]:
        """Return only the supplied fields."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}

    def is_empty(self) -> bool:
        return not self.changes()
