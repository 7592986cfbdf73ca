import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from slot_admin.api.router import api_router
from slot_admin.api.routes.owner_page import router as owner_page_router
from slot_admin.core.config import get_settings
from slot_admin.services.owner_interface import clear_owner_interface_cache, get_owner_interface


logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    _mount_owner_interface()
    try:
        yield
    finally:
        _unmount_owner_interface()


def create_application() -> FastAPI:
    _configure_logging()
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        openapi_url=f"{settings.api_prefix}/openapi.json",
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        lifespan=_lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=settings.api_prefix)
    app.include_router(owner_page_router)

    return app


def _mount_owner_interface() -> None:
    settings = get_settings()
    if not settings.fetch_slots_on_startup:
        return
    logger.info("Mounting owner interface store_id_source=%s", settings.store_id_source)
    get_owner_interface().mount()


def _unmount_owner_interface() -> None:
    logger.info("Unmounting owner interface")
    clear_owner_interface_cache()


app = create_application()
