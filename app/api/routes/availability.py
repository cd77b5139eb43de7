import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_session
from app.models.availability import Availability, AvailabilityPublic, WeeklyAvailabilityUpdate
from app.services.schedule_service import list_active_windows, replace_weekly_availability

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/availability", tags=["availability"])


@router.get("", response_model=list[AvailabilityPublic])
async def get_weekly_availability(session: AsyncSession = Depends(get_session)) -> list[Availability]:
    return await list_active_windows(session)


@router.put("", response_model=list[AvailabilityPublic])
async def put_weekly_availability(
    body: WeeklyAvailabilityUpdate,
    session: AsyncSession = Depends(get_session),
) -> list[Availability]:
    """Replace the weekly schedule with the submitted windows."""
    windows = await replace_weekly_availability(session, body.availability)
    logger.info("Weekly availability replaced: %d active window(s)", len(windows))
    return windows
