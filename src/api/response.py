"""Translation of CRUD failures into HTTP errors."""

import logging

from fastapi import HTTPException

from src.services.crud.errors import (
    CrudError,
    DatabaseConnectionError,
    IdentifierError,
    ParseError,
    QueryError,
)
from src.services.crud.models import OperationResult

logger = logging.getLogger(__name__)

# Most specific first: IdentifierError is a QueryError
_STATUS_BY_ERROR: tuple[tuple[type[CrudError], int], ...] = (
    (IdentifierError, 404),
    (ParseError, 422),
    (DatabaseConnectionError, 503),
    (QueryError, 400),
)
_STATUS_BY_NAME: dict[str, int] = {cls.__name__: status for cls, status in _STATUS_BY_ERROR}


def status_for_error(error: CrudError) -> int:
    for error_cls, status in _STATUS_BY_ERROR:
        if isinstance(error, error_cls):
            return status
    return 500


def http_error(error: CrudError) -> HTTPException:
    """Build the HTTPException for a CrudError raised by a read."""
    status = status_for_error(error)
    logger.warning("Request failed (%s): %s", type(error).__name__, error)
    return HTTPException(status_code=status, detail=str(error))


def check_operation_result(result: OperationResult, operation: str) -> None:
    """Raise HTTPException if a mutation failed."""
    if result.success:
        return
    status = _STATUS_BY_NAME.get(result.error_type or "", 500)
    logger.error("Failed to %s: %s", operation, result.error)
    raise HTTPException(status_code=status, detail=result.error or f"Failed to {operation}")
