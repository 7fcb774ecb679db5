"""Database store layer - provides persistence for the application.

This module re-exports the public store API for easy importing.
"""

from cashio.store.records import RecordStore, StoreState
from cashio.store.schema import connect, create_schema, get_default_db_path, schema_exists

__all__ = [
    # Schema
    "connect",
    "create_schema",
    "get_default_db_path",
    "schema_exists",
    # Records
    "RecordStore",
    "StoreState",
]
