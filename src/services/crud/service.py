"""Collaborator-facing CRUD service."""

import logging
import time
from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import Any, Protocol

from src.config.settings import Settings
from src.infrastructure.cache.schema_cache import SchemaCache
from src.infrastructure.database.connection import ConnectionFactory
from src.infrastructure.database.helpers import audit_log
from src.infrastructure.logging.logger import StructuredLogger
from src.services.crud.coercion import TypeCoercer
from src.services.crud.errors import CrudError, IdentifierError, ParseError
from src.services.crud.forms import FormBuilder
from src.services.crud.introspection import SchemaIntrospector
from src.services.crud.models import FieldSpec, OperationResult, RowSet, TableDescriptor, TableRef
from src.services.crud.queries import QueryBuilder
from src.services.crud.repository import RecordRepository

logger = logging.getLogger(__name__)


class SchemaLoader(Protocol):
    def describe(self, table_name: str, primary_key_column: str) -> TableDescriptor: ...


class CrudService:
    """
    Request/response CRUD operations over the configured tables.

    Reads raise CrudError subclasses to the caller. ``submit`` and ``remove``
    recover every CrudError into an unsuccessful OperationResult.
    """

    def __init__(
        self,
        settings: Settings,
        connect: ConnectionFactory,
        schema_loader: SchemaLoader | None = None,
        schema_cache: SchemaCache | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            settings: Application settings (table map, coercion and quoting options)
            connect: Factory returning a fresh DB-API connection per operation
            schema_loader: Source of table descriptors; live catalog by default
            schema_cache: Descriptor cache; built from settings by default
        """
        self.settings = settings
        self.tables = dict(settings.crud_tables)
        self.schema_loader = schema_loader or SchemaIntrospector(
            connect, schema_name=settings.db_schema
        )
        self.schema_cache = schema_cache or SchemaCache(
            max_size=settings.schema_cache_max_size,
            ttl_seconds=settings.schema_cache_ttl,
        )
        self.form_builder = FormBuilder()
        self.repository = RecordRepository(
            connect,
            coercer=TypeCoercer(strict_booleans=settings.strict_booleans),
            query_builder=QueryBuilder(identifier_quote=settings.identifier_quote),
        )
        self.structured_logger = StructuredLogger(__name__)

    def list_tables(self) -> list[TableRef]:
        """Configured tables, in declaration order."""
        return [TableRef(name, pk) for name, pk in self.tables.items()]

    def describe(self, table_name: str) -> TableDescriptor:
        """
        Get the descriptor of a configured table.

        Raises:
            IdentifierError: If the table is not configured
            DatabaseConnectionError: If the catalog cannot be reached
        """
        primary_key_column = self.tables.get(table_name)
        if primary_key_column is None:
            raise IdentifierError(f"unknown table '{table_name}'")

        cached = self.schema_cache.get(table_name, primary_key_column)
        if cached is not None:
            logger.debug("Using cached schema for %s", table_name)
            return cached

        descriptor = self.schema_loader.describe(table_name, primary_key_column)
        self.schema_cache.set(descriptor)
        return descriptor

    def get_rows(self, table_name: str) -> RowSet:
        start = time.perf_counter()
        try:
            rows = self.repository.fetch_all(self.describe(table_name))
        except CrudError as e:
            self.structured_logger.log_error("get_rows", e, {"table": table_name})
            raise
        self.structured_logger.log_step(
            "get_rows",
            {"table": table_name, "rows": len(rows)},
            duration_ms=(time.perf_counter() - start) * 1000,
        )
        return rows

    def get_editable_fields(
        self, table_name: str, existing_row: Sequence[Any] | None = None
    ) -> list[FieldSpec]:
        """Fields for an add form, or an edit form when ``existing_row`` is given."""
        return self.form_builder.build_fields(self.describe(table_name), existing_row)

    def find_row(self, table_name: str, primary_key_value: str) -> tuple[Any, ...] | None:
        """Locate a row by the text form of its primary key."""
        descriptor = self.describe(table_name)
        if descriptor.is_empty:
            return None
        rows = self.repository.fetch_all(descriptor)
        if descriptor.primary_key_column not in rows.columns:
            return None
        pk_index = rows.columns.index(descriptor.primary_key_column)
        for row in rows.rows:
            if row[pk_index] is not None and str(row[pk_index]) == primary_key_value:
                return row
        return None

    def fill_fields(
        self,
        table_name: str,
        values: Mapping[str, str | None],
        primary_key_value: str | None = None,
    ) -> list[FieldSpec]:
        """
        Apply submitted values onto the form for ``table_name``.

        Only the columns present in ``values`` are kept; in edit mode
        (``primary_key_value`` given) the locked primary key field is kept too.

        Raises:
            IdentifierError: If a value names an unknown or non-editable column
        """
        descriptor = self.describe(table_name)
        if primary_key_value is None:
            fields = self.form_builder.build_fields(descriptor)
        else:
            locked_row = [
                primary_key_value if col.is_primary_key else None for col in descriptor.columns
            ]
            fields = self.form_builder.build_fields(descriptor, locked_row)

        by_name = {f.name: f for f in fields}
        for name, value in values.items():
            spec = by_name.get(name)
            if spec is None:
                if descriptor.get_column(name) is None:
                    raise IdentifierError(f"unknown column '{name}' for table '{table_name}'")
                raise IdentifierError(f"column '{name}' is not editable")
            if not spec.editable and value != spec.value:
                raise IdentifierError(f"column '{name}' is not editable")

        filled = []
        for spec in fields:
            if spec.editable and spec.name in values:
                filled.append(replace(spec, value=values[spec.name]))
            elif not spec.editable:
                filled.append(spec)
        return filled

    def submit(
        self, table_name: str, fields: Sequence[FieldSpec], is_update: bool
    ) -> OperationResult:
        """Persist a filled form as an INSERT or an UPDATE."""
        operation = "UPDATE" if is_update else "INSERT"
        primary_key_value: str | None = None
        try:
            descriptor = self.describe(table_name)
            record = {spec.name: spec.value for spec in fields}
            if is_update:
                primary_key_value = record.get(descriptor.primary_key_column)
                if not primary_key_value:
                    raise ParseError(
                        f"missing value for primary key '{descriptor.primary_key_column}'"
                    )
                rows_affected = self.repository.update(descriptor, primary_key_value, record)
            else:
                rows_affected = self.repository.insert(descriptor, record)
        except CrudError as e:
            return self._failure(operation, table_name, e)

        audit_log(operation, table_name, primary_key_value or "new")
        self.structured_logger.log_step(
            operation.lower(), {"table": table_name, "rows_affected": rows_affected}
        )
        return OperationResult(success=True, rows_affected=rows_affected)

    def remove(self, table_name: str, primary_key_value: str) -> OperationResult:
        """Delete one row. Confirming the deletion is the caller's job."""
        try:
            descriptor = self.describe(table_name)
            rows_affected = self.repository.delete(descriptor, primary_key_value)
        except CrudError as e:
            return self._failure("DELETE", table_name, e)

        audit_log("DELETE", table_name, primary_key_value)
        self.structured_logger.log_step(
            "delete", {"table": table_name, "rows_affected": rows_affected}
        )
        return OperationResult(success=True, rows_affected=rows_affected)

    def clear_schema_cache(self) -> None:
        self.schema_cache.clear()

    def schema_cache_stats(self) -> dict[str, Any]:
        return self.schema_cache.get_stats()

    def _failure(self, operation: str, table_name: str, error: CrudError) -> OperationResult:
        self.structured_logger.log_error(operation.lower(), error, {"table": table_name})
        return OperationResult(
            success=False,
            error=str(error),
            error_type=type(error).__name__,
        )
