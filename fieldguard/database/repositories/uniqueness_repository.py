from typing import Any

import psycopg
from psycopg import sql

from fieldguard.database.connection import get_connection
from fieldguard.validation.base import UniquenessChecker
from fieldguard.validation.exceptions import StorageError


def _table_identifier(table: str) -> sql.Identifier:
    """Quote ``table``, treating dots as schema separators."""
    parts = table.split(".")
    if not all(parts):
        raise StorageError(f"Invalid table name: {table!r}")
    return sql.Identifier(*parts)


class UniquenessRepository(UniquenessChecker):
    """Existence lookups for ``Validator.is_unique`` on the pooled connection."""

    def exists(self, table: str, column: str, value: Any) -> bool:
        """Check whether any row of ``table`` has ``column = value``.

        Table and column are quoted as identifiers; the value is bound.

        Raises:
            StorageError: if the pool or the query fails.
        """
        query = sql.SQL("SELECT EXISTS (SELECT 1 FROM {table} WHERE {column} = %s)").format(
            table=_table_identifier(table),
            column=sql.Identifier(column),
        )
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(query, (value,))
                    row = cur.fetchone()
        except (psycopg.Error, RuntimeError) as exc:
            raise StorageError(f"Database error: {exc}") from exc

        return bool(row and row[0])
