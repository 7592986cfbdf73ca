from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from slot_admin.core.config import get_settings
from slot_admin.services.owner_interface import OwnerInterface, get_owner_interface

TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["owner-page"])


@router.get("/owner", response_class=HTMLResponse, include_in_schema=False)
def render_owner_page(
    request: Request,
    owner: OwnerInterface = Depends(get_owner_interface),
) -> HTMLResponse:
    settings = get_settings()
    return templates.TemplateResponse(
        request,
        "owner.html",
        {
            "title": settings.app_name,
            "api_base": f"{settings.api_prefix}/owner",
            "state": owner.snapshot(),
            "store_editable": owner.store_identifier.is_editable,
        },
    )
