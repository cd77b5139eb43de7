import logging
from datetime import date, datetime

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import appointment_or_404, get_now, get_session
from app.models.appointment import (
    Appointment,
    AppointmentCreate,
    AppointmentPublic,
    AppointmentStatus,
    AppointmentUpdate,
)
from app.services.appointment_service import (
    AppointmentStateError,
    SlotUnavailableError,
    cancel_appointment,
    create_appointment,
    list_appointments,
    update_appointment,
)
from app.services.catalog_service import get_active_service, get_client
from app.services.email_service import send_appointment_confirmation_email
from app.models.common import to_naive_utc

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/bookings", tags=["bookings"])

SLOT_TAKEN_DETAIL = "This time slot is not available"


def _to_public(a: Appointment) -> AppointmentPublic:
    return AppointmentPublic.model_validate(a, from_attributes=True)


@router.post("", response_model=AppointmentPublic, status_code=status.HTTP_201_CREATED)
async def book_appointment(
    body: AppointmentCreate,
    background_tasks: BackgroundTasks,
    session: AsyncSession = Depends(get_session),
    now: datetime = Depends(get_now),
) -> AppointmentPublic:
    client = await get_client(session, body.client_id)
    if not client:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")
    service = await get_active_service(session, body.service_id)
    if not service:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service not found or inactive")
    if to_naive_utc(body.scheduled_at) <= now:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot book appointments in the past",
        )
    try:
        appointment = await create_appointment(session, body, service)
    except SlotUnavailableError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=SLOT_TAKEN_DETAIL)
    # Send confirmation email in background (uses sync SMTP)
    background_tasks.add_task(
        send_appointment_confirmation_email,
        to_email=client.email,
        recipient_name=client.name,
        service_name=service.name,
        scheduled_at=appointment.scheduled_at,
        duration_minutes=appointment.duration_mins,
        location=appointment.location_address,
    )
    return _to_public(appointment)


@router.get("", response_model=list[AppointmentPublic])
async def list_bookings(
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    status_filter: AppointmentStatus | None = Query(None, alias="status"),
    client_id: int | None = Query(None),
    session: AsyncSession = Depends(get_session),
) -> list[AppointmentPublic]:
    appointments = await list_appointments(
        session,
        start_date=start_date,
        end_date=end_date,
        status=status_filter,
        client_id=client_id,
    )
    return [_to_public(a) for a in appointments]


@router.get("/{appointment_id}", response_model=AppointmentPublic)
async def get_booking(appointment: Appointment = Depends(appointment_or_404)) -> AppointmentPublic:
    return _to_public(appointment)


@router.patch("/{appointment_id}", response_model=AppointmentPublic)
async def update_booking(
    body: AppointmentUpdate,
    appointment: Appointment = Depends(appointment_or_404),
    session: AsyncSession = Depends(get_session),
    now: datetime = Depends(get_now),
) -> AppointmentPublic:
    """Reschedule or change status/location/notes. A new time must be in the future and free."""
    if body.scheduled_at is not None and to_naive_utc(body.scheduled_at) <= now:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot schedule appointments in the past",
        )
    try:
        appointment = await update_appointment(session, appointment, body)
    except SlotUnavailableError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=SLOT_TAKEN_DETAIL)
    return _to_public(appointment)


@router.delete("/{appointment_id}", response_model=AppointmentPublic)
async def cancel_booking(
    appointment: Appointment = Depends(appointment_or_404),
    session: AsyncSession = Depends(get_session),
) -> AppointmentPublic:
    try:
        appointment = await cancel_appointment(session, appointment)
    except AppointmentStateError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    logger.info("Appointment %s cancelled", appointment.id)
    return _to_public(appointment)
