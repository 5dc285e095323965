"""Database connection utilities."""

from src.infrastructure.database.connection import (
    ConnectionFactory,
    odbc_connection_factory,
    scoped_connection,
    translate_error,
)
from src.infrastructure.database.helpers import audit_log

__all__ = [
    "ConnectionFactory",
    "audit_log",
    "odbc_connection_factory",
    "scoped_connection",
    "translate_error",
]
