"""Form field specification for add/edit requests."""

from collections.abc import Sequence
from typing import Any

from src.services.crud.models import FieldSpec, TableDescriptor


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


class FormBuilder:
    """Maps a table's columns to the fields presented for add or edit."""

    @staticmethod
    def build_fields(
        descriptor: TableDescriptor,
        existing_row: Sequence[Any] | None = None,
    ) -> list[FieldSpec]:
        """
        Build the ordered field set for a form.

        Add mode (``existing_row`` is None): every column except an
        auto-generated primary key, with no value.

        Edit mode: every column, pre-filled from ``existing_row`` by ordinal
        position; the primary key field is locked.

        Args:
            descriptor: Introspected table shape
            existing_row: Positional values of the row being edited

        Returns:
            FieldSpecs in descriptor column order
        """
        fields: list[FieldSpec] = []
        for index, column in enumerate(descriptor.columns):
            if existing_row is None:
                if column.is_primary_key and column.is_auto_generated:
                    continue
                fields.append(
                    FieldSpec(
                        name=column.name,
                        sql_type=column.sql_type,
                        is_primary_key=column.is_primary_key,
                    )
                )
                continue

            value = _as_text(existing_row[index]) if index < len(existing_row) else None
            fields.append(
                FieldSpec(
                    name=column.name,
                    sql_type=column.sql_type,
                    value=value,
                    editable=not column.is_primary_key,
                    is_primary_key=column.is_primary_key,
                )
            )
        return fields
