"""Statement execution against a per-operation connection."""

import logging
from typing import Any

from src.infrastructure.database.connection import (
    ConnectionFactory,
    scoped_connection,
    translate_error,
)
from src.services.crud.coercion import TypeCoercer
from src.services.crud.errors import IdentifierError
from src.services.crud.models import Record, RowSet, Statement, TableDescriptor
from src.services.crud.queries import QueryBuilder

logger = logging.getLogger(__name__)


class RecordRepository:
    """
    Executes one statement per call, each on its own connection.

    There is no retry and no concurrency check: an UPDATE or DELETE whose
    row has disappeared simply reports zero affected rows.
    """

    def __init__(
        self,
        connect: ConnectionFactory,
        coercer: TypeCoercer | None = None,
        query_builder: QueryBuilder | None = None,
    ) -> None:
        self.connect = connect
        self.coercer = coercer or TypeCoercer()
        self.query_builder = query_builder or QueryBuilder()

    def fetch_all(self, descriptor: TableDescriptor) -> RowSet:
        """Return every row ordered by primary key."""
        if descriptor.is_empty:
            logger.warning("fetch_all on %s skipped: no columns", descriptor.table_name)
            return RowSet()

        statement = self.query_builder.select_all(descriptor)
        with scoped_connection(self.connect) as conn:
            cursor = conn.cursor()
            try:
                cursor.execute(statement.sql)
                columns = tuple(column[0] for column in cursor.description)
                rows = tuple(tuple(row) for row in cursor.fetchall())
            except Exception as e:
                logger.error("Database query error on %s: %s", descriptor.table_name, e)
                raise translate_error(e) from e
            finally:
                cursor.close()

        logger.info("Fetched %s rows from %s", len(rows), descriptor.table_name)
        return RowSet(columns=columns, rows=rows)

    def insert(self, descriptor: TableDescriptor, record: Record) -> int:
        """Insert ``record``; columns absent from it are left to their defaults."""
        if descriptor.is_empty:
            logger.warning("insert into %s skipped: no columns", descriptor.table_name)
            return 0

        statement = self.query_builder.insert(descriptor, record.keys())
        params = self._bind(descriptor, statement, record)
        return self._execute_mutation(descriptor, statement, params)

    def update(self, descriptor: TableDescriptor, primary_key_value: str, record: Record) -> int:
        """Update the row whose key is ``primary_key_value`` with ``record``."""
        if descriptor.is_empty:
            logger.warning("update of %s skipped: no columns", descriptor.table_name)
            return 0

        pk = descriptor.primary_key_column
        values = {name: value for name, value in record.items() if name != pk}
        values[pk] = primary_key_value
        statement = self.query_builder.update(descriptor, values.keys())
        params = self._bind(descriptor, statement, values)
        return self._execute_mutation(descriptor, statement, params)

    def delete(self, descriptor: TableDescriptor, primary_key_value: str) -> int:
        """Delete the row whose key is ``primary_key_value``."""
        if descriptor.is_empty:
            logger.warning("delete from %s skipped: no columns", descriptor.table_name)
            return 0

        statement = self.query_builder.delete(descriptor)
        params = self._bind(
            descriptor, statement, {descriptor.primary_key_column: primary_key_value}
        )
        return self._execute_mutation(descriptor, statement, params)

    def _bind(
        self, descriptor: TableDescriptor, statement: Statement, values: Record
    ) -> tuple[Any, ...]:
        """Coerce values in placeholder order. Raises ParseError before any I/O."""
        params = []
        for name in statement.columns:
            column = descriptor.get_column(name)
            if column is None:
                raise IdentifierError(f"unknown column {name} for table '{descriptor.table_name}'")
            params.append(self.coercer.coerce(values.get(name), column.sql_type))
        return tuple(params)

    def _execute_mutation(
        self, descriptor: TableDescriptor, statement: Statement, params: tuple[Any, ...]
    ) -> int:
        logger.debug("Executing %s with %s parameter(s)", statement.sql, len(params))
        with scoped_connection(self.connect) as conn:
            cursor = conn.cursor()
            try:
                cursor.execute(statement.sql, params)
                rows_affected = cursor.rowcount
                conn.commit()
            except Exception as e:
                logger.error("Database insert/update error on %s: %s", descriptor.table_name, e)
                raise translate_error(e) from e
            finally:
                cursor.close()
        return rows_affected
