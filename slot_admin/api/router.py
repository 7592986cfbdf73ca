from fastapi import APIRouter

from slot_admin.api.routes.health import router as health_router
from slot_admin.api.routes.owner import router as owner_router

api_router = APIRouter()
v1_router = APIRouter(prefix="/v1")

api_router.include_router(health_router)
api_router.include_router(owner_router)

v1_router.include_router(owner_router)
api_router.include_router(v1_router)
