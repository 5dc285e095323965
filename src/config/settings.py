"""Application settings using Pydantic BaseSettings."""

import logging
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.config.tables import DEFAULT_CRUD_TABLES

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_VALID_IDENTIFIER_QUOTES = {'"', "`"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Table CRUD Bridge"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in _VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_VALID_LOG_LEVELS}, got '{v}'")
        return upper

    @field_validator("identifier_quote")
    @classmethod
    def validate_identifier_quote(cls, v: str) -> str:
        if v not in _VALID_IDENTIFIER_QUOTES:
            raise ValueError(
                f"identifier_quote must be one of {sorted(_VALID_IDENTIFIER_QUOTES)}, got '{v}'"
            )
        return v

    @field_validator("crud_tables")
    @classmethod
    def validate_crud_tables(cls, v: dict[str, str]) -> dict[str, str]:
        if not v:
            raise ValueError("crud_tables must declare at least one table")
        for table_name, pk_column in v.items():
            if not table_name.strip():
                raise ValueError("crud_tables contains a blank table name")
            if not pk_column.strip():
                raise ValueError(f"primary key column for '{table_name}' must not be blank")
        return v

    @model_validator(mode="after")
    def validate_cache_config(self) -> "Settings":
        if self.schema_cache_max_size <= 0:
            raise ValueError(
                f"schema_cache_max_size must be positive, got {self.schema_cache_max_size}"
            )
        if self.schema_cache_ttl < 0:
            raise ValueError(f"schema_cache_ttl must not be negative, got {self.schema_cache_ttl}")
        return self

    @model_validator(mode="after")
    def warn_wildcard_origins(self) -> "Settings":
        if self.allowed_origins == ["*"]:
            logging.getLogger(__name__).warning(
                "allowed_origins is set to ['*'], consider restricting in production"
            )
        return self

    # Database (ODBC)
    database_connection_string: str = ""
    db_login_timeout: int = 15
    db_schema: str | None = None
    identifier_quote: str = '"'

    # Tables exposed for editing: table name -> primary key column
    crud_tables: dict[str, str] = dict(DEFAULT_CRUD_TABLES)

    # Input coercion
    strict_booleans: bool = True

    # Schema cache
    schema_cache_max_size: int = 100
    schema_cache_ttl: int = 300

    # CORS
    allowed_origins: list[str] = ["*"]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
