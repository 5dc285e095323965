"""Tests for form field building."""

from datetime import date

from src.config.constants import SqlType
from src.config.tables import DEFAULT_CRUD_TABLES
from src.services.crud.forms import FormBuilder
from src.services.crud.introspection import build_descriptor


def test_add_mode_omits_auto_generated_key(equipment_descriptor):
    fields = FormBuilder.build_fields(equipment_descriptor)
    assert [f.name for f in fields] == ["name", "status"]
    assert all(f.editable for f in fields)
    assert all(f.value is None for f in fields)


def test_add_mode_keeps_text_primary_key(skills_descriptor):
    fields = FormBuilder.build_fields(skills_descriptor)
    assert [f.name for f in fields] == ["codigo_habilidad", "descripcion"]
    assert fields[0].is_primary_key
    assert fields[0].editable


def test_edit_mode_includes_all_columns_with_locked_key(equipment_descriptor):
    fields = FormBuilder.build_fields(equipment_descriptor, (5, "Drill", "active"))
    assert [(f.name, f.value, f.editable) for f in fields] == [
        ("equipment_id", "5", False),
        ("name", "Drill", True),
        ("status", "active", True),
    ]


def test_edit_mode_renders_null_as_empty_text(equipment_descriptor):
    fields = FormBuilder.build_fields(equipment_descriptor, (5, "Drill", None))
    assert fields[2].value == ""


def test_edit_mode_short_row_leaves_values_absent(equipment_descriptor):
    fields = FormBuilder.build_fields(equipment_descriptor, (5,))
    assert len(fields) == 3
    assert fields[1].value is None
    assert fields[2].value is None


def test_edit_mode_renders_dates_as_iso_text():
    descriptor = build_descriptor(
        "schedules", "horarios_id", [("horarios_id", SqlType.INTEGER), ("dia", SqlType.DATE)]
    )
    fields = FormBuilder.build_fields(descriptor, (1, date(2024, 1, 15)))
    assert fields[1].value == "2024-01-15"


def test_field_order_follows_descriptor():
    descriptor = build_descriptor(
        "personnel",
        "id_persona",
        [("nombre", SqlType.TEXT), ("id_persona", SqlType.INTEGER), ("apellido", SqlType.TEXT)],
    )
    assert [f.name for f in FormBuilder.build_fields(descriptor)] == ["nombre", "apellido"]
    assert [f.name for f in FormBuilder.build_fields(descriptor, ("Ana", 1, "Ruiz"))] == [
        "nombre",
        "id_persona",
        "apellido",
    ]


def test_join_table_foreign_key_is_dropped_from_add_form():
    descriptor = build_descriptor(
        "personnel_skills",
        DEFAULT_CRUD_TABLES["personnel_skills"],
        [("id_persona", SqlType.INTEGER), ("codigo_habilidad", SqlType.TEXT)],
    )
    fields = FormBuilder.build_fields(descriptor)
    assert [f.name for f in fields] == ["codigo_habilidad"]
