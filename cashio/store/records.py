"""Record persistence on top of a single SQLite connection."""

import logging
import sqlite3
import threading
from dataclasses import replace
from datetime import date
from enum import Enum
from pathlib import Path
from types import TracebackType
from typing import Any

from cashio.dates import to_iso
from cashio.domain.models import CategoryName, Cents, Record, RecordUpdate
from cashio.domain.query import QueryFilter
from cashio.errors import NotFoundError, NotInitializedError, StorageError
from cashio.store.schema import RECORDS_TABLE, connect, create_schema, schema_exists

logger = logging.getLogger(__name__)

_COLUMNS = "id, name, cents, date, category, description"
_ORDER_COLUMNS = {"id": "id", "date": "date, id"}


class StoreState(Enum):
    """Lifecycle of a RecordStore."""

    UNOPENED = "unopened"
    OPEN = "open"
    INITIALIZED = "initialized"


def _lower(value: str | None) -> str | None:
    return value.lower() if value is not None else None


def _row_to_record(row: sqlite3.Row) -> Record:
    return Record(
        id=row["id"],
        name=row["name"],
        cents=Cents(row["cents"]),
        date=date.fromisoformat(row["date"]),
        category=CategoryName(row["category"]),
        description=row["description"],
    )


def _to_column(value: Any) -> Any:
    return to_iso(value) if isinstance(value, date) else value


def _where_clause(query: QueryFilter) -> tuple[str, list[Any]]:
    """Translate a filter into a SQL WHERE clause and its parameters."""
    clauses: list[str] = []
    params: list[Any] = []

    if query.id is not None:
        clauses.append("id = ?")
        params.append(query.id)
    if query.fuzzy is not None:
        if query.case_sensitive:
            clauses.append("(instr(name, ?) > 0 OR instr(description, ?) > 0)")
        else:
            clauses.append(
                "(instr(py_lower(name), py_lower(?)) > 0 OR instr(py_lower(description), py_lower(?)) > 0)"
            )
        params.extend([query.fuzzy, query.fuzzy])
    if query.category is not None:
        clauses.append("category = ?")
        params.append(query.category)
    # ISO dates compare lexically in calendar order
    if query.date_from is not None:
        clauses.append("date >= ?")
        params.append(to_iso(query.date_from))
    if query.date_to is not None:
        clauses.append("date <= ?")
        params.append(to_iso(query.date_to))

    if not clauses:
        return "", params
    return " WHERE " + " AND ".join(clauses), params


class RecordStore:
    """Stores records in one SQLite database.

    The store owns the connection it is given and closes it on ``close()``.
    Operations are serialized with a lock, so a single instance may be
    shared between threads.

    Usage:
        with RecordStore.connect(db_path) as store:
            store.init()
            store.insert(record)
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn: sqlite3.Connection | None = conn
        self._lock = threading.RLock()
        self._state = StoreState.OPEN

        try:
            conn.row_factory = sqlite3.Row
            conn.create_function("py_lower", 1, _lower, deterministic=True)
            if schema_exists(conn):
                self._state = StoreState.INITIALIZED
        except sqlite3.Error as e:
            raise StorageError(f"Could not open database: {e}") from e

    @classmethod
    def connect(cls, db_path: Path | str) -> "RecordStore":
        """Open the database at db_path and wrap it in a store.

        Raises:
            StorageError: If the database cannot be opened.
        """
        try:
            conn = connect(db_path)
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"Could not open database {db_path}: {e}") from e

        try:
            return cls(conn)
        except StorageError:
            conn.close()
            raise

    @property
    def state(self) -> StoreState:
        return self._state

    def close(self) -> None:
        """Release the connection. Safe to call more than once."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
            self._state = StoreState.UNOPENED

    def __enter__(self) -> "RecordStore":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _require_open(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageError("Store is closed")
        return self._conn

    def _require_initialized(self) -> sqlite3.Connection:
        if self._conn is None:
            raise NotInitializedError("Store is closed")
        if self._state is not StoreState.INITIALIZED:
            raise NotInitializedError("Database schema is not initialized. Run 'cashio init' first.")
        return self._conn

    def init(self) -> None:
        """Create the schema if it does not exist yet.

        Raises:
            StorageError: If schema creation fails or the store is closed.
        """
        with self._lock:
            conn = self._require_open()
            try:
                create_schema(conn)
            except sqlite3.Error as e:
                raise StorageError(f"Could not initialize database: {e}") from e
            self._state = StoreState.INITIALIZED
            logger.debug("schema ready")

    def insert(self, record: Record) -> Record:
        """Store a record under a newly assigned identity.

        Any id already set on ``record`` is ignored.

        Returns:
            The stored record with its id set.

        Raises:
            NotInitializedError: If the schema is not set up.
            StorageError: If the insert fails.
        """
        with self._lock:
            conn = self._require_initialized()
            try:
                cursor = conn.execute(
                    f"INSERT INTO {RECORDS_TABLE} (name, cents, date, category, description) VALUES (?, ?, ?, ?, ?)",
                    (record.name, record.cents, to_iso(record.date), record.category, record.description),
                )
                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                raise StorageError(f"Could not insert record: {e}") from e

        stored = replace(record, id=cursor.lastrowid)
        logger.debug("inserted record %s", stored.id)
        return stored

    def list(
        self,
        query: QueryFilter | None = None,
        order_by: str = "id",
        descending: bool = False,
    ) -> list[Record]:
        """List records matching every predicate in ``query``.

        Args:
            query: Filter to apply. None or an empty filter returns all records.
            order_by: "id" (default) or "date"; date ties are ordered by id.
            descending: Whether to reverse the order.

        Returns:
            Matching records, possibly empty.

        Raises:
            ValueError: If order_by is not supported.
            NotInitializedError: If the schema is not set up.
            StorageError: If the query fails.
        """
        if order_by not in _ORDER_COLUMNS:
            raise ValueError(f"Cannot order records by {order_by!r}")

        where, params = _where_clause(query or QueryFilter())
        direction = " DESC" if descending else ""
        order = ", ".join(f"{column}{direction}" for column in _ORDER_COLUMNS[order_by].split(", "))
        sql = f"SELECT {_COLUMNS} FROM {RECORDS_TABLE}{where} ORDER BY {order}"

        with self._lock:
            conn = self._require_initialized()
            try:
                rows = conn.execute(sql, params).fetchall()
            except sqlite3.Error as e:
                raise StorageError(f"Could not list records: {e}") from e

        return [_row_to_record(row) for row in rows]

    def _fetch(self, conn: sqlite3.Connection, record_id: int) -> Record:
        try:
            row = conn.execute(f"SELECT {_COLUMNS} FROM {RECORDS_TABLE} WHERE id = ?", (record_id,)).fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Could not read record {record_id}: {e}") from e
        if row is None:
            raise NotFoundError(record_id)
        return _row_to_record(row)

    def get(self, record_id: int) -> Record:
        """Get a single record.

        Raises:
            NotFoundError: If no record has this id.
            NotInitializedError: If the schema is not set up.
            StorageError: If the query fails.
        """
        with self._lock:
            return self._fetch(self._require_initialized(), record_id)

    def count(self) -> int:
        """Count all stored records."""
        with self._lock:
            conn = self._require_initialized()
            try:
                return conn.execute(f"SELECT COUNT(*) FROM {RECORDS_TABLE}").fetchone()[0]
            except sqlite3.Error as e:
                raise StorageError(f"Could not count records: {e}") from e

    def modify(self, record_id: int, update: RecordUpdate) -> Record:
        """Apply the supplied fields of ``update`` to a record.

        All fields are written in one statement; on failure none are.

        Returns:
            The record as stored after the update.

        Raises:
            NotFoundError: If no record has this id.
            NotInitializedError: If the schema is not set up.
            StorageError: If the update fails.
        """
        changes = update.changes()

        with self._lock:
            conn = self._require_initialized()
            if changes:
                assignments = ", ".join(f"{column} = ?" for column in changes)
                params = [_to_column(value) for value in changes.values()]
                try:
                    cursor = conn.execute(
                        f"UPDATE {RECORDS_TABLE} SET {assignments} WHERE id = ?",
                        (*params, record_id),
                    )
                    if cursor.rowcount == 0:
                        conn.rollback()
                        raise NotFoundError(record_id)
                    conn.commit()
                except sqlite3.Error as e:
                    conn.rollback()
                    raise StorageError(f"Could not modify record {record_id}: {e}") from e
                logger.debug("modified record %s: %s", record_id, ", ".join(changes))

            return self._fetch(conn, record_id)

    def remove(self, record_id: int) -> Record:
        """Delete a record. Its id is never assigned again.

        Returns:
            The record that was removed.

        Raises:
            NotFoundError: If no record has this id.
            NotInitializedError: If the schema is not set up.
            StorageError: If the delete fails.
        """
        with self._lock:
            conn = self._require_initialized()
            record = self._fetch(conn, record_id)
            try:
                conn.execute(f"DELETE FROM {RECORDS_TABLE} WHERE id = ?", (record_id,))
                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                raise StorageError(f"Could not remove record {record_id}: {e}") from e

        logger.debug("removed record %s", record_id)
        return record
