"""Pytest configuration and fixtures."""

import sqlite3

import pytest

from src.config.constants import SqlType
from src.config.settings import Settings
from src.services.crud.introspection import StaticSchemaLoader, build_descriptor
from src.services.crud.service import CrudService

MAINTENANCE_DDL = """
CREATE TABLE equipment (
    equipment_id INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    status TEXT
);
CREATE TABLE skills (
    codigo_habilidad TEXT PRIMARY KEY,
    descripcion TEXT
);
INSERT INTO equipment (equipment_id, name, status) VALUES (5, 'Drill', 'active');
INSERT INTO equipment (equipment_id, name, status) VALUES (7, 'Lathe', 'active');
INSERT INTO skills (codigo_habilidad, descripcion) VALUES ('WLD', 'Welding');
"""


@pytest.fixture
def settings():
    """Provide settings fixture."""
    return Settings(
        crud_tables={"equipment": "equipment_id", "skills": "codigo_habilidad"},
        database_connection_string="",
        schema_cache_ttl=300,
    )


@pytest.fixture
def equipment_descriptor():
    return build_descriptor(
        "equipment",
        "equipment_id",
        [
            ("equipment_id", SqlType.INTEGER),
            ("name", SqlType.TEXT),
            ("status", SqlType.TEXT),
        ],
    )


@pytest.fixture
def skills_descriptor():
    return build_descriptor(
        "skills",
        "codigo_habilidad",
        [("codigo_habilidad", SqlType.TEXT), ("descripcion", SqlType.TEXT)],
    )


@pytest.fixture
def db_path(tmp_path):
    """SQLite file seeded with two maintenance tables."""
    path = tmp_path / "maintenance.db"
    conn = sqlite3.connect(path)
    conn.executescript(MAINTENANCE_DDL)
    conn.commit()
    conn.close()
    return path


@pytest.fixture
def connect(db_path):
    """Connection factory opening a fresh SQLite connection per call."""
    return lambda: sqlite3.connect(db_path)


@pytest.fixture
def schema_loader(equipment_descriptor, skills_descriptor):
    return StaticSchemaLoader({"equipment": equipment_descriptor, "skills": skills_descriptor})


@pytest.fixture
def crud_service(settings, connect, schema_loader):
    return CrudService(settings, connect, schema_loader=schema_loader)
