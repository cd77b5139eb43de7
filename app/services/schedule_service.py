from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.availability import Availability, AvailabilityWindowIn
from app.models.blocked_time import BlockedTime, BlockedTimeCreate
from app.services.slot_service import get_blocked_times_between


async def list_active_windows(session: AsyncSession) -> list[Availability]:
    result = await session.execute(
        select(Availability)
        .where(Availability.is_active == True)  # noqa: E712
        .order_by(Availability.day_of_week, Availability.start_time)
    )
    return list(result.scalars().all())


def _existing_id(window: AvailabilityWindowIn) -> int | None:
    """Numeric ids refer to stored rows; missing or "new-*" ids are inserts."""
    if isinstance(window.id, int):
        return window.id
    if window.id is None or window.id.startswith("new-"):
        return None
    try:
        return int(window.id)
    except ValueError:
        return None


async def replace_weekly_availability(
    session: AsyncSession, windows: list[AvailabilityWindowIn]
) -> list[Availability]:
    """Deactivate the whole schedule, then reactivate/insert the submitted windows."""
    await session.execute(update(Availability).values(is_active=False))
    for w in windows:
        row = None
        window_id = _existing_id(w)
        if window_id is not None:
            row = await session.get(Availability, window_id)
        if row is None:
            row = Availability(day_of_week=w.day_of_week, start_time=w.start_time, end_time=w.end_time)
        row.day_of_week = w.day_of_week
        row.start_time = w.start_time
        row.end_time = w.end_time
        row.is_active = True
        session.add(row)
    await session.flush()
    return await list_active_windows(session)


async def list_blocked_times(
    session: AsyncSession, start: datetime | None = None, end: datetime | None = None
) -> list[BlockedTime]:
    if start is not None and end is not None:
        return await get_blocked_times_between(session, start, end)
    q = select(BlockedTime).order_by(BlockedTime.start_datetime)
    if start is not None:
        q = q.where(BlockedTime.end_datetime > start)
    if end is not None:
        q = q.where(BlockedTime.start_datetime < end)
    result = await session.execute(q)
    return list(result.scalars().all())


async def create_blocked_time(session: AsyncSession, data: BlockedTimeCreate) -> BlockedTime:
    blocked = BlockedTime(
        start_datetime=data.start_datetime,
        end_datetime=data.end_datetime,
        reason=data.reason,
    )
    session.add(blocked)
    await session.flush()
    await session.refresh(blocked)
    return blocked


async def delete_blocked_time(session: AsyncSession, blocked_id: int) -> bool:
    blocked = await session.get(BlockedTime, blocked_id)
    if not blocked:
        return False
    await session.delete(blocked)
    await session.flush()
    return True
