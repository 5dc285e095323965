"""Direct database connection utilities using pyodbc."""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from src.config.settings import Settings
from src.infrastructure.database.sqlstate import is_connection_failure
from src.services.crud.errors import DatabaseConnectionError, QueryError

logger = logging.getLogger(__name__)

# Zero-argument callable returning a fresh DB-API connection
ConnectionFactory = Callable[[], Any]


def odbc_connection_factory(settings: Settings) -> ConnectionFactory:
    """
    Build a factory that opens a new pyodbc connection on every call.

    Args:
        settings: Application settings containing database_connection_string

    Returns:
        Zero-argument callable returning an open pyodbc connection

    Raises:
        ValueError: If the connection string is not configured
    """
    if not settings.database_connection_string:
        raise ValueError("database_connection_string is not configured in settings")

    def _connect() -> Any:
        # Deferred: importing pyodbc requires the unixODBC driver manager
        import pyodbc

        return pyodbc.connect(
            settings.database_connection_string,
            autocommit=False,
            timeout=settings.db_login_timeout,
        )

    return _connect


def translate_error(exc: Exception) -> Exception:
    """Map a driver exception onto the CRUD error taxonomy."""
    if is_connection_failure(exc):
        return DatabaseConnectionError(f"Database unavailable: {exc}")
    return QueryError(str(exc))


@contextmanager
def scoped_connection(connect: ConnectionFactory) -> Iterator[Any]:
    """
    Open a connection for a single operation and always close it.

    Mutations must commit inside the block; on error the transaction is
    rolled back before the connection is released.

    Raises:
        DatabaseConnectionError: If the connection cannot be opened
    """
    try:
        conn = connect()
    except Exception as e:
        logger.error("Database connection error: %s", e)
        raise DatabaseConnectionError(f"Database unavailable: {e}") from e

    try:
        yield conn
    except Exception:
        try:
            conn.rollback()
        except Exception as rollback_error:
            logger.warning("Rollback failed: %s", rollback_error)
        raise
    finally:
        conn.close()
