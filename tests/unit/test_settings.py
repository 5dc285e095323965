"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from src.config.settings import Settings
from src.config.tables import DEFAULT_CRUD_TABLES


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.crud_tables == DEFAULT_CRUD_TABLES
    assert list(settings.crud_tables)[0] == "equipment"
    assert settings.strict_booleans is True
    assert settings.identifier_quote == '"'


def test_log_level_normalized():
    assert Settings(log_level="debug").log_level == "DEBUG"


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        Settings(log_level="verbose")


def test_empty_table_map_rejected():
    with pytest.raises(ValidationError):
        Settings(crud_tables={})


def test_blank_primary_key_rejected():
    with pytest.raises(ValidationError):
        Settings(crud_tables={"equipment": " "})


def test_unsupported_quote_rejected():
    with pytest.raises(ValidationError):
        Settings(identifier_quote="[")


def test_crud_tables_from_environment(monkeypatch):
    monkeypatch.setenv("CRUD_TABLES", '{"machines": "machine_id", "parts": "part_no"}')
    settings = Settings(_env_file=None)
    assert settings.crud_tables == {"machines": "machine_id", "parts": "part_no"}
