from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_now, get_session
from app.api.schemas.slots import (
    AvailableSlots,
    AvailableSlotsResponse,
    SlotInfo,
    SlotServiceInfo,
)
from app.services.catalog_service import get_active_service
from app.services.slot_service import get_available_slots_for_date

router = APIRouter(prefix="/bookings", tags=["slots"])


@router.get("/availability", response_model=AvailableSlotsResponse)
async def available_slots(
    date_param: date = Query(..., alias="date"),
    service_id: int = Query(..., alias="serviceId"),
    session: AsyncSession = Depends(get_session),
    now: datetime = Depends(get_now),
) -> AvailableSlotsResponse:
    """Free slots for the service on the given date. Slot times are UTC; an empty list
    means nothing is bookable that day."""
    service = await get_active_service(session, service_id)
    if not service:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Service not found or inactive",
        )
    slots = await get_available_slots_for_date(session, date_param, service, now=now)
    return AvailableSlotsResponse(
        data=AvailableSlots(
            date=date_param.isoformat(),
            service=SlotServiceInfo(id=service.id, name=service.name, duration_mins=service.duration_mins),
            slots=[SlotInfo(start_time=s.start, end_time=s.end) for s in slots],
        )
    )
