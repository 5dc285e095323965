"""CRUD domain models."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from src.config.constants import SqlType

# Column name -> raw user text (None or "" means SQL NULL)
Record = Mapping[str, str | None]


@dataclass(frozen=True)
class TableRef:
    """A table exposed for editing and its primary key column."""

    table_name: str
    primary_key_column: str


@dataclass(frozen=True)
class ColumnDescriptor:
    """Catalog information about one column."""

    name: str
    sql_type: SqlType
    is_primary_key: bool = False
    is_auto_generated: bool = False


@dataclass(frozen=True)
class TableDescriptor:
    """Introspected shape of a table. Column order is the binding order."""

    table_name: str
    primary_key_column: str
    columns: tuple[ColumnDescriptor, ...] = ()
    schema_name: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.columns

    @property
    def column_names(self) -> tuple[str, ...]:
        return tuple(col.name for col in self.columns)

    @property
    def primary_key(self) -> ColumnDescriptor | None:
        for col in self.columns:
            if col.is_primary_key:
                return col
        return None

    def get_column(self, name: str) -> ColumnDescriptor | None:
        for col in self.columns:
            if col.name == name:
                return col
        return None


@dataclass(frozen=True)
class FieldSpec:
    """One input slot of an add/edit form."""

    name: str
    sql_type: SqlType
    value: str | None = None
    editable: bool = True
    is_primary_key: bool = False


@dataclass(frozen=True)
class RowSet:
    """Immutable snapshot of a table's contents."""

    columns: tuple[str, ...] = ()
    rows: tuple[tuple[Any, ...], ...] = ()

    def __len__(self) -> int:
        return len(self.rows)

    def as_dicts(self) -> list[dict[str, Any]]:
        return [dict(zip(self.columns, row)) for row in self.rows]


@dataclass(frozen=True)
class Statement:
    """SQL text plus the column names in placeholder order."""

    sql: str
    columns: tuple[str, ...] = ()


@dataclass
class OperationResult:
    """Outcome of a mutation requested by the collaborator."""

    success: bool
    rows_affected: int = 0
    error: str | None = None
    error_type: str | None = None
