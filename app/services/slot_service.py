from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta, tzinfo
from typing import NamedTuple
from zoneinfo import ZoneInfo

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.models.appointment import OCCUPYING_STATUSES, Appointment
from app.models.availability import Availability
from app.models.blocked_time import BlockedTime
from app.models.common import to_naive_utc, utc_naive_now
from app.models.service import MAX_DURATION_MINS, Service
from app.services.overlap import intervals_overlap

# Appointments starting this long before a window can still run into it
_APPOINTMENT_LOOKBACK = timedelta(minutes=MAX_DURATION_MINS)


class InvalidServiceDuration(ValueError):
    pass


class Slot(NamedTuple):
    start: datetime
    end: datetime


def weekday_index(d: date) -> int:
    """0 = Sunday .. 6 = Saturday, matching Availability.day_of_week."""
    return d.isoweekday() % 7


def business_tz() -> tzinfo:
    return ZoneInfo(settings.business_timezone)


def window_bounds(d: date, window: Availability, tz: tzinfo | None = None) -> tuple[datetime, datetime]:
    """Wall-clock window on date d, as naive UTC (start, end)."""
    tz = tz or business_tz()
    start = datetime.combine(d, window.start_time, tzinfo=tz)
    end = datetime.combine(d, window.end_time, tzinfo=tz)
    return to_naive_utc(start), to_naive_utc(end)


def compute_available_slots(
    d: date,
    duration_minutes: int,
    windows: Iterable[Availability],
    blocked: Sequence[BlockedTime],
    booked: Sequence[Appointment],
    now: datetime,
    *,
    tz: tzinfo | None = None,
    max_step_minutes: int | None = None,
) -> list[Slot]:
    """Bookable slots of `duration_minutes` on date d.

    Candidates start at each window's opening and advance by
    min(max_step_minutes, duration_minutes). A candidate is dropped if it starts at or
    before `now`, or strictly overlaps a blocked interval or a pending/confirmed
    appointment. Windows are walked in the order given and the results concatenated;
    callers pass non-overlapping windows for one day, ordered by start time.

    All instants (`now`, blocked, booked, returned slots) are naive UTC.
    """
    if duration_minutes <= 0:
        raise InvalidServiceDuration(f"Service duration must be positive, got {duration_minutes}")
    if max_step_minutes is None:
        max_step_minutes = settings.slot_step_minutes
    duration = timedelta(minutes=duration_minutes)
    step = timedelta(minutes=min(max_step_minutes, duration_minutes))
    now = to_naive_utc(now)

    busy = [
        (a.scheduled_at, a.scheduled_at + timedelta(minutes=a.duration_mins))
        for a in booked
        if a.status in OCCUPYING_STATUSES
    ]

    slots: list[Slot] = []
    for window in windows:
        if not window.is_active:
            continue
        window_start, window_end = window_bounds(d, window, tz)
        current = window_start
        while current + duration <= window_end:
            current_end = current + duration
            if current <= now:
                current += step
                continue
            if any(intervals_overlap(current, current_end, b.start_datetime, b.end_datetime) for b in blocked):
                current += step
                continue
            if any(intervals_overlap(current, current_end, start, end) for start, end in busy):
                current += step
                continue
            slots.append(Slot(current, current_end))
            current += step
    return slots


async def get_windows_for_day(session: AsyncSession, d: date) -> list[Availability]:
    result = await session.execute(
        select(Availability)
        .where(
            Availability.day_of_week == weekday_index(d),
            Availability.is_active == True,  # noqa: E712
        )
        .order_by(Availability.start_time)
    )
    return list(result.scalars().all())


async def get_blocked_times_between(
    session: AsyncSession, start: datetime, end: datetime
) -> list[BlockedTime]:
    result = await session.execute(
        select(BlockedTime)
        .where(BlockedTime.start_datetime < end, BlockedTime.end_datetime > start)
        .order_by(BlockedTime.start_datetime)
    )
    return list(result.scalars().all())


async def get_occupying_appointments_between(
    session: AsyncSession, start: datetime, end: datetime, exclude_id: int | None = None
) -> list[Appointment]:
    """Pending/confirmed appointments whose [scheduled_at, scheduled_at + duration)
    overlaps [start, end)."""
    q = select(Appointment).where(
        Appointment.status.in_(OCCUPYING_STATUSES),
        Appointment.scheduled_at < end,
        Appointment.scheduled_at >= start - _APPOINTMENT_LOOKBACK,
    )
    if exclude_id is not None:
        q = q.where(Appointment.id != exclude_id)
    result = await session.execute(q.order_by(Appointment.scheduled_at))
    return [
        a
        for a in result.scalars().all()
        if intervals_overlap(start, end, a.scheduled_at, a.scheduled_at + timedelta(minutes=a.duration_mins))
    ]


async def get_available_slots_for_date(
    session: AsyncSession, d: date, service: Service, now: datetime | None = None
) -> list[Slot]:
    """Load the day's windows, blocks and bookings, then resolve free slots for service."""
    windows = await get_windows_for_day(session, d)
    if not windows:
        return []
    tz = business_tz()
    bounds = [window_bounds(d, w, tz) for w in windows]
    span_start = min(s for s, _ in bounds)
    span_end = max(e for _, e in bounds)
    blocked = await get_blocked_times_between(session, span_start, span_end)
    booked = await get_occupying_appointments_between(session, span_start, span_end)
    if now is None:
        now = utc_naive_now()
    return compute_available_slots(d, service.duration_mins, windows, blocked, booked, now, tz=tz)
