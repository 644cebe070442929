"""SQLite storage for records: find, insert, update and delete by primary key."""

from __future__ import annotations

import sqlite3
import threading
from contextlib import contextmanager
from typing import Any, Iterator, TypeVar

from orgchart.department import Department
from orgchart.job import Job
from orgchart.record import Column, Record

R = TypeVar("R", bound=Record)

MODELS: tuple[type[Record], ...] = (Department, Job)


class NotFoundError(LookupError):
    """Raised when no row has the requested primary key."""


class DatabaseError(RuntimeError):
    """Raised when the database reports an error."""


def _column_ddl(column: Column) -> str:
    if column.type is int:
        sql_type = "INTEGER"
    elif column.type is str and column.length:
        sql_type = f"VARCHAR({column.length})"
    else:
        sql_type = "TEXT"
    parts = [column.name, sql_type]
    if column.primary_key:
        parts.append("PRIMARY KEY")
        if column.auto:
            parts.append("AUTOINCREMENT")
    elif column.not_null:
        parts.append("NOT NULL")
    return " ".join(parts)


def _primary_column(model: type[Record]) -> str:
    for column in model.columns:
        if column.primary_key:
            return column.name
    raise DatabaseError(f"{model.__name__} has no primary key")


class Repository:
    """Stores records in a SQLite database at ``path``."""

    def __init__(self, path: str = ":memory:") -> None:
        try:
            self._conn = sqlite3.connect(str(path), check_same_thread=False)
        except sqlite3.Error as exc:
            raise DatabaseError(str(exc)) from exc
        self._conn.row_factory = sqlite3.Row
        self._lock = threading.Lock()

    def __enter__(self) -> "Repository":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @contextmanager
    def _cursor(self) -> Iterator[sqlite3.Cursor]:
        with self._lock:
            try:
                with self._conn:
                    yield self._conn.cursor()
            except sqlite3.Error as exc:
                raise DatabaseError(str(exc)) from exc

    def create_schema(self) -> None:
        """Create the tables of all known models if they do not exist."""
        with self._cursor() as cursor:
            for model in MODELS:
                columns = ", ".join(_column_ddl(column) for column in model.columns)
                cursor.execute(f"create table if not exists {model.table_name} ({columns})")

    @staticmethod
    def _from_row(model: type[R], row: sqlite3.Row) -> R:
        names = {column.name for column in model.columns}
        return model(**{key: row[key] for key in row.keys() if key in names})

    def find_all(
        self,
        model: type[R],
        order_by: str | None = None,
        descending: bool = False,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[R]:
        """Return rows of ``model`` ordered, skipped and limited as asked."""
        order_by = order_by or _primary_column(model)
        if order_by not in {column.name for column in model.columns}:
            raise DatabaseError(f"column {order_by!r} does not exist")
        direction = "desc" if descending else "asc"
        sql = (
            f"select * from {model.table_name} order by {order_by} {direction} "
            "limit ? offset ?"
        )
        with self._cursor() as cursor:
            rows = cursor.execute(sql, (-1 if limit is None else limit, offset)).fetchall()
        return [self._from_row(model, row) for row in rows]

    def find_by_primary_key(self, model: type[R], key: Any) -> R:
        """Return the row of ``model`` whose primary key is ``key``."""
        sql = f"select * from {model.table_name} where {_primary_column(model)} = ?"
        with self._cursor() as cursor:
            row = cursor.execute(sql, (key,)).fetchone()
        if row is None:
            raise NotFoundError(f"no {model.table_name} row with key {key!r}")
        return self._from_row(model, row)

    def insert(self, record: R) -> R:
        """Insert ``record`` and return the stored row, generated key included."""
        model = type(record)
        names = [
            column.name
            for column, dirty in zip(record.columns, record._dirty)
            if dirty and not column.auto
        ]
        if names:
            placeholders = ", ".join("?" for _ in names)
            sql = f"insert into {model.table_name} ({', '.join(names)}) values ({placeholders})"
        else:
            sql = f"insert into {model.table_name} default values"
        with self._cursor() as cursor:
            cursor.execute(sql, record.insert_args())
            new_key = cursor.lastrowid
        return self.find_by_primary_key(model, new_key)

    def update(self, record: Record) -> int:
        """Write the changed columns of ``record``; return the number of rows hit."""
        names = record.update_columns()
        if not names:
            return 0
        model = type(record)
        assignments = ", ".join(f"{name} = ?" for name in names)
        sql = f"update {model.table_name} set {assignments} where {_primary_column(model)} = ?"
        with self._cursor() as cursor:
            cursor.execute(sql, [*record.update_args(), record.primary_key()])
            return cursor.rowcount

    def delete_by_primary_key(self, model: type[Record], key: Any) -> int:
        """Delete the row with primary key ``key``; return the number deleted."""
        sql = f"delete from {model.table_name} where {_primary_column(model)} = ?"
        with self._cursor() as cursor:
            cursor.execute(sql, (key,))
            return cursor.rowcount

    def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            self._conn.close()