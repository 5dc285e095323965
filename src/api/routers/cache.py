"""Schema cache management endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, Depends

from src.api.dependencies import get_crud_service
from src.services.crud.service import CrudService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/stats")
def get_cache_stats(svc: CrudService = Depends(get_crud_service)) -> dict[str, Any]:
    """Return schema cache hit/miss statistics."""
    return svc.schema_cache_stats()


@router.delete("")
def clear_cache(svc: CrudService = Depends(get_crud_service)) -> dict[str, str]:
    """Drop cached table descriptors so the next request re-reads the catalog."""
    logger.warning("Schema cache cleared via API request")
    svc.clear_schema_cache()
    return {"message": "Schema cache cleared successfully", "status": "success"}
