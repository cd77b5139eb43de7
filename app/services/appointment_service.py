import logging
from datetime import date, datetime, timedelta

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.appointment import (
    OCCUPYING_STATUSES,
    Appointment,
    AppointmentCreate,
    AppointmentStatus,
    AppointmentUpdate,
)
from app.models.common import to_naive_utc, utc_naive_now
from app.models.service import Service
from app.services.slot_service import get_occupying_appointments_between

logger = logging.getLogger(__name__)

# Key for the transaction-scoped Postgres advisory lock around booking writes
BOOKING_LOCK_KEY = 7_301_004


class SlotUnavailableError(Exception):
    """Requested time overlaps an existing pending/confirmed appointment."""

    def __init__(self, conflicting: Appointment):
        super().__init__("This time slot is not available")
        self.conflicting = conflicting


class AppointmentStateError(Exception):
    pass


async def _serialize_bookings(session: AsyncSession) -> None:
    """Hold the booking lock until the surrounding transaction ends, so concurrent
    check-then-insert sequences cannot both succeed. No-op outside Postgres."""
    bind = session.bind
    if bind is None or bind.dialect.name != "postgresql":
        return
    await session.execute(text("SELECT pg_advisory_xact_lock(:key)"), {"key": BOOKING_LOCK_KEY})


async def find_conflicting_appointment(
    session: AsyncSession,
    start: datetime,
    duration_minutes: int,
    exclude_id: int | None = None,
) -> Appointment | None:
    end = start + timedelta(minutes=duration_minutes)
    conflicts = await get_occupying_appointments_between(session, start, end, exclude_id=exclude_id)
    return conflicts[0] if conflicts else None


async def create_appointment(
    session: AsyncSession, data: AppointmentCreate, service: Service
) -> Appointment:
    """Insert a pending appointment for service. Raises SlotUnavailableError when the
    interval overlaps an occupying appointment; the re-check runs under the booking lock."""
    scheduled_at = to_naive_utc(data.scheduled_at)
    await _serialize_bookings(session)
    conflict = await find_conflicting_appointment(session, scheduled_at, service.duration_mins)
    if conflict:
        logger.info(
            "Booking rejected: %s overlaps appointment %s", scheduled_at.isoformat(), conflict.id
        )
        raise SlotUnavailableError(conflict)
    appointment = Appointment(
        client_id=data.client_id,
        service_id=service.id,
        scheduled_at=scheduled_at,
        duration_mins=service.duration_mins,
        status=AppointmentStatus.pending,
        location_type=data.location_type,
        location_address=data.location_address or None,
        notes=data.notes or None,
    )
    session.add(appointment)
    await session.flush()
    await session.refresh(appointment)
    logger.info("Appointment %s booked at %s", appointment.id, scheduled_at.isoformat())
    return appointment


async def get_appointment(session: AsyncSession, appointment_id: int) -> Appointment | None:
    result = await session.execute(select(Appointment).where(Appointment.id == appointment_id))
    return result.scalar_one_or_none()


async def list_appointments(
    session: AsyncSession,
    start_date: date | None = None,
    end_date: date | None = None,
    status: AppointmentStatus | None = None,
    client_id: int | None = None,
) -> list[Appointment]:
    q = select(Appointment).order_by(Appointment.scheduled_at.desc())
    if client_id is not None:
        q = q.where(Appointment.client_id == client_id)
    if start_date:
        q = q.where(Appointment.scheduled_at >= datetime(start_date.year, start_date.month, start_date.day))
    if end_date:
        end = datetime(end_date.year, end_date.month, end_date.day) + timedelta(days=1)
        q = q.where(Appointment.scheduled_at < end)
    if status:
        q = q.where(Appointment.status == status)
    result = await session.execute(q)
    return list(result.scalars().all())


async def update_appointment(
    session: AsyncSession, appointment: Appointment, data: AppointmentUpdate
) -> Appointment:
    """Apply a partial update. A new time is re-checked for overlap against every other
    occupying appointment before it is written."""
    changes = data.model_dump(exclude_unset=True)
    if changes.get("scheduled_at") is not None:
        changes["scheduled_at"] = to_naive_utc(changes["scheduled_at"])
    new_start = changes.get("scheduled_at") or appointment.scheduled_at
    new_status = changes.get("status") or appointment.status
    # Moving the time, or reviving a cancelled/completed booking, claims the interval again
    claims_time = changes.get("scheduled_at") is not None or appointment.status not in OCCUPYING_STATUSES
    if new_status in OCCUPYING_STATUSES and claims_time:
        await _serialize_bookings(session)
        conflict = await find_conflicting_appointment(
            session, new_start, appointment.duration_mins, exclude_id=appointment.id
        )
        if conflict:
            raise SlotUnavailableError(conflict)
    for key, value in changes.items():
        if key in ("scheduled_at", "status", "location_type") and value is None:
            continue
        setattr(appointment, key, value)
    appointment.updated_at = utc_naive_now()
    session.add(appointment)
    await session.flush()
    await session.refresh(appointment)
    return appointment


async def cancel_appointment(session: AsyncSession, appointment: Appointment) -> Appointment:
    """Soft cancel. Completed or already-cancelled appointments cannot be cancelled."""
    if appointment.status == AppointmentStatus.completed:
        raise AppointmentStateError("Cannot cancel a completed appointment")
    if appointment.status == AppointmentStatus.cancelled:
        raise AppointmentStateError("Appointment is already cancelled")
    appointment.status = AppointmentStatus.cancelled
    appointment.updated_at = utc_naive_now()
    session.add(appointment)
    await session.flush()
    await session.refresh(appointment)
    return appointment
