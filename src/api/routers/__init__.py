"""API sub-routers assembled into a single api_router."""

from fastapi import APIRouter

from src.api.routers.cache import router as cache_router
from src.api.routers.health import router as health_router
from src.api.routers.tables import router as tables_router

api_router = APIRouter()

api_router.include_router(health_router, tags=["health"])
api_router.include_router(tables_router, prefix="/tables", tags=["tables"])
api_router.include_router(cache_router, prefix="/cache", tags=["cache"])
