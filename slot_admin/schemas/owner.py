from pydantic import BaseModel, Field

from slot_admin.schemas.slot import SlotView


class StatusBannerResponse(BaseModel):
    error: str = ""
    success: str = ""


class OperationStateResponse(BaseModel):
    status: str
    reason: str | None = None


class ClientLinkResponse(BaseModel):
    client_link: str


class StoreIdentifierRequest(BaseModel):
    store_id: str


class StoreIdentifierResponse(BaseModel):
    store_id: str
    source: str
    configured: bool


class OwnerStateResponse(BaseModel):
    store_id: str
    store_configured: bool
    client_link: str
    slots: list[SlotView] = Field(default_factory=list)
    banner: StatusBannerResponse
    operations: dict[str, OperationStateResponse] = Field(default_factory=dict)
    busy: bool = False


class OwnerActionResponse(BaseModel):
    performed: bool
    reset_form: bool = False
    state: OwnerStateResponse
