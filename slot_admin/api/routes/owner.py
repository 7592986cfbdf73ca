from fastapi import APIRouter, Depends, Query, status

from slot_admin.schemas.owner import (
    ClientLinkResponse,
    OwnerActionResponse,
    OwnerStateResponse,
    StatusBannerResponse,
    StoreIdentifierRequest,
    StoreIdentifierResponse,
)
from slot_admin.schemas.slot import SlotCreateRequest, SlotListResponse
from slot_admin.services.owner_interface import OwnerInterface, get_owner_interface

router = APIRouter(prefix="/owner", tags=["owner"])


@router.get("/state", response_model=OwnerStateResponse)
def get_owner_state(
    owner: OwnerInterface = Depends(get_owner_interface),
) -> OwnerStateResponse:
    return owner.snapshot()


@router.get("/slots", response_model=SlotListResponse)
def list_slots(
    owner: OwnerInterface = Depends(get_owner_interface),
) -> SlotListResponse:
    return SlotListResponse(items=owner.slot_views())


@router.post(
    "/slots",
    response_model=OwnerActionResponse,
    status_code=status.HTTP_200_OK,
)
def add_slot(
    payload: SlotCreateRequest,
    owner: OwnerInterface = Depends(get_owner_interface),
) -> OwnerActionResponse:
    return owner.submit_slot(payload)


@router.post("/slots/refresh", response_model=OwnerActionResponse)
def refresh_slots(
    owner: OwnerInterface = Depends(get_owner_interface),
) -> OwnerActionResponse:
    return owner.fetch_slots()


@router.delete("/slots/{slot_id}", response_model=OwnerActionResponse)
def delete_slot(
    slot_id: str,
    confirm: bool = Query(default=False),
    owner: OwnerInterface = Depends(get_owner_interface),
) -> OwnerActionResponse:
    return owner.delete_slot(slot_id, confirmed=confirm)


@router.get("/link", response_model=ClientLinkResponse)
def get_client_link(
    owner: OwnerInterface = Depends(get_owner_interface),
) -> ClientLinkResponse:
    return ClientLinkResponse(client_link=owner.link_panel.client_link)


@router.post("/link/copy", response_model=ClientLinkResponse)
def copy_client_link(
    owner: OwnerInterface = Depends(get_owner_interface),
) -> ClientLinkResponse:
    return ClientLinkResponse(client_link=owner.copy_client_link())


@router.get("/store", response_model=StoreIdentifierResponse)
def get_store_identifier(
    owner: OwnerInterface = Depends(get_owner_interface),
) -> StoreIdentifierResponse:
    return owner.store_identifier_response()


@router.put("/store", response_model=StoreIdentifierResponse)
def set_store_identifier(
    payload: StoreIdentifierRequest,
    owner: OwnerInterface = Depends(get_owner_interface),
) -> StoreIdentifierResponse:
    return owner.set_store_id(payload.store_id)


@router.post("/store/refresh", response_model=StoreIdentifierResponse)
def refresh_store_identifier(
    owner: OwnerInterface = Depends(get_owner_interface),
) -> StoreIdentifierResponse:
    return owner.refresh_store_id()


@router.get("/status", response_model=StatusBannerResponse)
def get_status_banner(
    owner: OwnerInterface = Depends(get_owner_interface),
) -> StatusBannerResponse:
    return owner.banner()
