from datetime import datetime

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "ok"
    service: str
    store_id_source: str
    slot_store_flavor: str
    timestamp: datetime
