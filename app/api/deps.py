from datetime import datetime

from fastapi import Depends, HTTPException, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_session
from app.models.appointment import Appointment
from app.models.client import Client
from app.models.common import utc_naive_now
from app.models.package import Package
from app.models.service import Service
from app.services.appointment_service import get_appointment
from app.services.catalog_service import get_client, get_package, get_service

__all__ = [
    "get_session",
    "get_now",
    "service_or_404",
    "package_or_404",
    "client_or_404",
    "appointment_or_404",
]


def get_now() -> datetime:
    """Current instant as naive UTC. Overridden in tests to pin the clock."""
    return utc_naive_now()


async def service_or_404(
    service_id: int = Path(...),
    session: AsyncSession = Depends(get_session),
) -> Service:
    service = await get_service(session, service_id)
    if not service:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service not found")
    return service


async def package_or_404(
    package_id: int = Path(...),
    session: AsyncSession = Depends(get_session),
) -> Package:
    package = await get_package(session, package_id)
    if not package:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Package not found")
    return package


async def client_or_404(
    client_id: int = Path(...),
    session: AsyncSession = Depends(get_session),
) -> Client:
    client = await get_client(session, client_id)
    if not client:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")
    return client


async def appointment_or_404(
    appointment_id: int = Path(...),
    session: AsyncSession = Depends(get_session),
) -> Appointment:
    appointment = await get_appointment(session, appointment_id)
    if not appointment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Appointment not found")
    return appointment
