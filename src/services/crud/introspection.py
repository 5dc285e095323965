"""Schema loading: live catalog introspection and static descriptors."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from src.config.constants import SqlType
from src.infrastructure.database.connection import (
    ConnectionFactory,
    scoped_connection,
    translate_error,
)
from src.services.crud.errors import IdentifierError
from src.services.crud.models import ColumnDescriptor, TableDescriptor

logger = logging.getLogger(__name__)


def build_descriptor(
    table_name: str,
    primary_key_column: str,
    columns: Iterable[tuple[str, SqlType]],
    schema_name: str | None = None,
) -> TableDescriptor:
    """
    Build a TableDescriptor from ``(name, type)`` pairs in catalog order.

    The column named ``primary_key_column`` is tagged as the primary key and
    as auto-generated when its type is in the integer family.

    Raises:
        IdentifierError: If columns exist but none matches the primary key
    """
    descriptors = tuple(
        ColumnDescriptor(
            name=name,
            sql_type=sql_type,
            is_primary_key=name == primary_key_column,
            is_auto_generated=name == primary_key_column and sql_type.is_integer,
        )
        for name, sql_type in columns
    )
    if descriptors and not any(col.is_primary_key for col in descriptors):
        raise IdentifierError(
            f"primary key column '{primary_key_column}' not found in table '{table_name}'"
        )
    return TableDescriptor(
        table_name=table_name,
        primary_key_column=primary_key_column,
        columns=descriptors,
        schema_name=schema_name,
    )


class SchemaIntrospector:
    """Derives a TableDescriptor from the ODBC catalog (``SQLColumns``)."""

    def __init__(self, connect: ConnectionFactory, schema_name: str | None = None) -> None:
        """Initialize the introspector.

        Args:
            connect: Factory returning a fresh pyodbc connection
            schema_name: Restrict the catalog lookup to this schema
        """
        self.connect = connect
        self.schema_name = schema_name

    def describe(self, table_name: str, primary_key_column: str) -> TableDescriptor:
        """
        Read the columns of ``table_name`` in catalog order.

        Returns an empty descriptor when the table has no columns (or does
        not exist); callers treat that as a no-op.

        Raises:
            DatabaseConnectionError: If the database is unreachable
            QueryError: If the catalog call is rejected
            IdentifierError: If the primary key column is not in the table
        """
        with scoped_connection(self.connect) as conn:
            cursor = conn.cursor()
            try:
                rows = cursor.columns(table=table_name, schema=self.schema_name).fetchall()
            except Exception as e:
                logger.error("Catalog lookup failed for %s: %s", table_name, e)
                raise translate_error(e) from e
            finally:
                cursor.close()

        rows = self._single_schema(rows)
        if not rows:
            logger.warning("Table %s has no columns in the catalog", table_name)

        descriptor = build_descriptor(
            table_name,
            primary_key_column,
            ((row.column_name, SqlType.from_type_code(row.data_type)) for row in rows),
            schema_name=self.schema_name,
        )
        logger.debug(
            "Introspected %s: %s",
            table_name,
            ", ".join(f"{col.name}:{col.sql_type.value}" for col in descriptor.columns),
        )
        return descriptor

    @staticmethod
    def _single_schema(rows: list[Any]) -> list[Any]:
        """Keep rows of the first schema only, ordered by ordinal position.

        Without a schema filter, a table name present in several schemas
        would otherwise yield merged column lists.
        """
        if not rows:
            return []
        first_schema = rows[0].table_schem
        same_schema = [row for row in rows if row.table_schem == first_schema]
        return sorted(same_schema, key=lambda row: row.ordinal_position)


class StaticSchemaLoader:
    """Serves pre-declared TableDescriptors through the ``describe`` contract."""

    def __init__(self, descriptors: Mapping[str, TableDescriptor]) -> None:
        self._descriptors = dict(descriptors)

    def describe(self, table_name: str, primary_key_column: str) -> TableDescriptor:
        descriptor = self._descriptors.get(table_name)
        if descriptor is None:
            return TableDescriptor(table_name=table_name, primary_key_column=primary_key_column)
        if descriptor.primary_key_column != primary_key_column:
            raise IdentifierError(
                f"table '{table_name}' is declared with primary key "
                f"'{descriptor.primary_key_column}', not '{primary_key_column}'"
            )
        return descriptor
