from datetime import datetime
from enum import Enum

from sqlmodel import Field, SQLModel

from app.models.common import UtcDatetime, utc_naive_now


class AppointmentStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    completed = "completed"
    cancelled = "cancelled"


# Only these statuses occupy time on the calendar
OCCUPYING_STATUSES = (AppointmentStatus.pending, AppointmentStatus.confirmed)


class LocationType(str, Enum):
    mobile = "mobile"
    virtual = "virtual"


class Appointment(SQLModel, table=True):
    __tablename__ = "appointments"
    id: int | None = Field(default=None, primary_key=True)
    client_id: int = Field(foreign_key="clients.id", index=True)
    service_id: int = Field(foreign_key="services.id", index=True)
    scheduled_at: datetime = Field(index=True)
    duration_mins: int
    status: AppointmentStatus = Field(default=AppointmentStatus.pending, index=True)
    location_type: LocationType
    location_address: str | None = None
    notes: str | None = None
    created_at: datetime = Field(default_factory=utc_naive_now)
    updated_at: datetime = Field(default_factory=utc_naive_now)


class AppointmentCreate(SQLModel):
    client_id: int
    service_id: int
    scheduled_at: datetime
    location_type: LocationType
    location_address: str | None = None
    notes: str | None = None


class AppointmentUpdate(SQLModel):
    scheduled_at: datetime | None = None
    status: AppointmentStatus | None = None
    location_type: LocationType | None = None
    location_address: str | None = None
    notes: str | None = None


class AppointmentPublic(SQLModel):
    id: int
    client_id: int
    service_id: int
    scheduled_at: UtcDatetime
    duration_mins: int
    status: AppointmentStatus
    location_type: LocationType
    location_address: str | None = None
    notes: str | None = None
    created_at: UtcDatetime
    updated_at: UtcDatetime
