from app.models.client import Client, ClientCreate, ClientPublic, ClientUpdate
from app.models.service import Service, ServiceCreate, ServicePublic, ServiceUpdate
from app.models.package import Package, PackageCreate, PackagePublic, PackageUpdate
from app.models.availability import Availability, AvailabilityPublic
from app.models.blocked_time import BlockedTime, BlockedTimePublic
from app.models.appointment import (
    OCCUPYING_STATUSES,
    Appointment,
    AppointmentCreate,
    AppointmentPublic,
    AppointmentStatus,
    AppointmentUpdate,
    LocationType,
)

__all__ = [
    "Client",
    "ClientCreate",
    "ClientPublic",
    "ClientUpdate",
    "Service",
    "ServiceCreate",
    "ServicePublic",
    "ServiceUpdate",
    "Package",
    "PackageCreate",
    "PackagePublic",
    "PackageUpdate",
    "Availability",
    "AvailabilityPublic",
    "BlockedTime",
    "BlockedTimePublic",
    "OCCUPYING_STATUSES",
    "Appointment",
    "AppointmentCreate",
    "AppointmentPublic",
    "AppointmentStatus",
    "AppointmentUpdate",
    "LocationType",
]
