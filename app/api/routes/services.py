from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_session, service_or_404
from app.models.service import Service, ServiceCreate, ServicePublic, ServiceUpdate
from app.services.catalog_service import (
    create_service,
    deactivate_service,
    list_active_services,
    update_service,
)

router = APIRouter(prefix="/services", tags=["services"])


@router.get("", response_model=list[ServicePublic])
async def list_services(session: AsyncSession = Depends(get_session)) -> list[Service]:
    return await list_active_services(session)


@router.get("/{service_id}", response_model=ServicePublic)
async def get_service_detail(service: Service = Depends(service_or_404)) -> Service:
    return service


@router.post("", response_model=ServicePublic, status_code=status.HTTP_201_CREATED)
async def add_service(
    body: ServiceCreate,
    session: AsyncSession = Depends(get_session),
) -> Service:
    return await create_service(session, body)


@router.patch("/{service_id}", response_model=ServicePublic)
async def edit_service(
    body: ServiceUpdate,
    service: Service = Depends(service_or_404),
    session: AsyncSession = Depends(get_session),
) -> Service:
    return await update_service(session, service, body)


@router.delete("/{service_id}", response_model=ServicePublic)
async def remove_service(
    service: Service = Depends(service_or_404),
    session: AsyncSession = Depends(get_session),
) -> Service:
    """Soft delete: existing appointments keep referencing the service."""
    return await deactivate_service(session, service)
