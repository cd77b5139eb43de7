from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_session
from app.models.blocked_time import BlockedTime, BlockedTimeCreate, BlockedTimePublic
from app.services.schedule_service import create_blocked_time, delete_blocked_time, list_blocked_times
from app.models.common import to_naive_utc

router = APIRouter(prefix="/blocked-times", tags=["blocked-times"])


@router.get("", response_model=list[BlockedTimePublic])
async def get_blocked_times(
    from_: datetime | None = Query(None, alias="from"),
    to: datetime | None = Query(None),
    session: AsyncSession = Depends(get_session),
) -> list[BlockedTime]:
    """Blocked intervals intersecting [from, to); either bound may be omitted."""
    return await list_blocked_times(
        session,
        start=to_naive_utc(from_) if from_ else None,
        end=to_naive_utc(to) if to else None,
    )


@router.post("", response_model=BlockedTimePublic, status_code=status.HTTP_201_CREATED)
async def add_blocked_time(
    body: BlockedTimeCreate,
    session: AsyncSession = Depends(get_session),
) -> BlockedTime:
    return await create_blocked_time(session, body)


@router.delete("/{blocked_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_blocked_time(
    blocked_id: int,
    session: AsyncSession = Depends(get_session),
) -> None:
    ok = await delete_blocked_time(session, blocked_id)
    if not ok:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Blocked time not found",
        )
