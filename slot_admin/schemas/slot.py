from datetime import date as calendar_date
from datetime import time as time_of_day
from enum import StrEnum
from typing import Any

from pydantic import BaseModel


class SlotStatus(StrEnum):
    AVAILABLE = "Available"
    BOOKED = "Booked"


class Slot(BaseModel):
    id: str
    date: str
    time: str
    # Rows without a status column come from a backend that only returns open
    # slots. A blank status cell is not Available.
    status: str = SlotStatus.AVAILABLE.value
    client_name: str = ""
    client_email: str = ""
    booking_date: str = ""
    zoom_option: str = ""

    @property
    def is_available(self) -> bool:
        return self.status.strip().lower() == SlotStatus.AVAILABLE.value.lower()

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "time": self.time,
            "status": self.status,
            "client_name": self.client_name,
            "client_email": self.client_email,
            "booking_date": self.booking_date,
            "zoom_option": self.zoom_option,
        }


class SlotCreateRequest(BaseModel):
    date: calendar_date
    time: time_of_day


class SlotView(BaseModel):
    id: str
    date: str
    time: str
    display_date: str
    display_time: str


class SlotListResponse(BaseModel):
    items: list[SlotView]
