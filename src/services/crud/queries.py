"""Parameterized statement assembly from table descriptors."""

from collections.abc import Iterable

from src.config.constants import BIND_PLACEHOLDER
from src.services.crud.errors import IdentifierError, QueryError
from src.services.crud.models import Statement, TableDescriptor


class QueryBuilder:
    """
    Builds SELECT/INSERT/UPDATE/DELETE statements for one table.

    Identifiers come only from the descriptor's own vocabulary and are always
    quoted; values are always ``?`` placeholders.
    """

    def __init__(self, identifier_quote: str = '"') -> None:
        self.identifier_quote = identifier_quote

    def quote(self, identifier: str) -> str:
        q = self.identifier_quote
        return f"{q}{identifier.replace(q, q + q)}{q}"

    def table_ref(self, descriptor: TableDescriptor) -> str:
        if descriptor.schema_name:
            return f"{self.quote(descriptor.schema_name)}.{self.quote(descriptor.table_name)}"
        return self.quote(descriptor.table_name)

    def select_all(self, descriptor: TableDescriptor) -> Statement:
        pk = self._primary_key(descriptor)
        return Statement(
            sql=f"SELECT * FROM {self.table_ref(descriptor)} ORDER BY {self.quote(pk)}"
        )

    def insert(self, descriptor: TableDescriptor, columns: Iterable[str]) -> Statement:
        """INSERT over ``columns`` in descriptor order."""
        ordered = self._ordered_columns(descriptor, columns)
        table = self.table_ref(descriptor)
        if not ordered:
            return Statement(sql=f"INSERT INTO {table} DEFAULT VALUES")

        column_list = ", ".join(self.quote(name) for name in ordered)
        placeholders = ", ".join(BIND_PLACEHOLDER for _ in ordered)
        return Statement(
            sql=f"INSERT INTO {table} ({column_list}) VALUES ({placeholders})",
            columns=ordered,
        )

    def update(self, descriptor: TableDescriptor, columns: Iterable[str]) -> Statement:
        """UPDATE of the non-key ``columns``; the primary key binds last."""
        pk = self._primary_key(descriptor)
        ordered = tuple(
            name for name in self._ordered_columns(descriptor, columns) if name != pk
        )
        if not ordered:
            raise QueryError("no columns to update")

        assignments = ", ".join(f"{self.quote(name)} = {BIND_PLACEHOLDER}" for name in ordered)
        return Statement(
            sql=(
                f"UPDATE {self.table_ref(descriptor)} SET {assignments} "
                f"WHERE {self.quote(pk)} = {BIND_PLACEHOLDER}"
            ),
            columns=ordered + (pk,),
        )

    def delete(self, descriptor: TableDescriptor) -> Statement:
        pk = self._primary_key(descriptor)
        return Statement(
            sql=(
                f"DELETE FROM {self.table_ref(descriptor)} "
                f"WHERE {self.quote(pk)} = {BIND_PLACEHOLDER}"
            ),
            columns=(pk,),
        )

    @staticmethod
    def _primary_key(descriptor: TableDescriptor) -> str:
        pk = descriptor.primary_key
        if pk is None or pk.name != descriptor.primary_key_column:
            raise IdentifierError(
                f"primary key column '{descriptor.primary_key_column}' "
                f"not found in table '{descriptor.table_name}'"
            )
        return pk.name

    @staticmethod
    def _ordered_columns(descriptor: TableDescriptor, columns: Iterable[str]) -> tuple[str, ...]:
        requested = set(columns)
        unknown = requested.difference(descriptor.column_names)
        if unknown:
            raise IdentifierError(
                f"unknown column(s) {', '.join(sorted(unknown))} "
                f"for table '{descriptor.table_name}'"
            )
        return tuple(name for name in descriptor.column_names if name in requested)
