from pydantic import BaseModel

from app.models.common import UtcDatetime


class SlotInfo(BaseModel):
    start_time: UtcDatetime
    end_time: UtcDatetime


class SlotServiceInfo(BaseModel):
    id: int
    name: str
    duration_mins: int


class AvailableSlots(BaseModel):
    date: str  # YYYY-MM-DD
    service: SlotServiceInfo | None = None
    slots: list[SlotInfo]


class AvailableSlotsResponse(BaseModel):
    data: AvailableSlots
