"""FastAPI dependencies."""

import logging
from functools import lru_cache

from fastapi import HTTPException

from src.config.settings import get_settings
from src.infrastructure.database.connection import odbc_connection_factory
from src.services.crud.service import CrudService

logger = logging.getLogger(__name__)


@lru_cache
def _build_crud_service() -> CrudService:
    settings = get_settings()
    return CrudService(settings, odbc_connection_factory(settings))


def get_crud_service() -> CrudService:
    """Get the process-wide CrudService as a FastAPI dependency."""
    try:
        return _build_crud_service()
    except ValueError as e:
        logger.error("CRUD service unavailable: %s", e)
        raise HTTPException(status_code=503, detail=str(e)) from e
