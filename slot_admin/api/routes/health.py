from fastapi import APIRouter

from slot_admin.core.config import get_settings
from slot_admin.schemas.health import HealthResponse
from slot_admin.services.health_service import HealthService

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def healthcheck() -> HealthResponse:
    settings = get_settings()
    service = HealthService(settings)
    return service.get_status()
