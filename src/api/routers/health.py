"""Health endpoint."""

from fastapi import APIRouter, Depends

from src.api.models import HealthResponse
from src.config.settings import Settings, get_settings

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """Service liveness check."""
    return HealthResponse(status="healthy", version=settings.app_version)
