"""Request/Response models for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field

from src.config.constants import SqlType
from src.services.crud.models import FieldSpec, OperationResult, RowSet, TableRef


class HealthResponse(BaseModel):
    """Response model for health endpoint."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")


class TableResponse(BaseModel):
    """A table exposed for editing."""

    table_name: str
    primary_key_column: str

    @classmethod
    def from_ref(cls, ref: TableRef) -> "TableResponse":
        return cls(table_name=ref.table_name, primary_key_column=ref.primary_key_column)


class RowSetResponse(BaseModel):
    """Snapshot of a table's rows."""

    columns: list[str] = Field(..., description="Column names in result order")
    rows: list[list[Any]] = Field(..., description="Positional row values")
    total_rows: int

    @classmethod
    def from_row_set(cls, row_set: RowSet) -> "RowSetResponse":
        return cls(
            columns=list(row_set.columns),
            rows=[list(row) for row in row_set.rows],
            total_rows=len(row_set),
        )


class FieldSpecResponse(BaseModel):
    """One input of an add/edit form."""

    name: str
    sql_type: SqlType
    value: str | None = None
    editable: bool = True
    is_primary_key: bool = False

    @classmethod
    def from_spec(cls, spec: FieldSpec) -> "FieldSpecResponse":
        return cls(
            name=spec.name,
            sql_type=spec.sql_type,
            value=spec.value,
            editable=spec.editable,
            is_primary_key=spec.is_primary_key,
        )


class RecordRequest(BaseModel):
    """Values entered by the user, keyed by column name."""

    values: dict[str, str | None] = Field(
        ..., description="Raw text per column; empty string or null means NULL"
    )


class OperationResponse(BaseModel):
    """Outcome of an insert, update or delete."""

    status: str = "success"
    rows_affected: int = 0

    @classmethod
    def from_result(cls, result: OperationResult) -> "OperationResponse":
        return cls(rows_affected=result.rows_affected)
