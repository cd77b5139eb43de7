from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_session, package_or_404
from app.models.package import Package, PackageCreate, PackagePublic, PackageUpdate
from app.services.catalog_service import (
    create_package,
    deactivate_package,
    list_packages,
    update_package,
)

router = APIRouter(prefix="/packages", tags=["packages"])


@router.get("", response_model=list[PackagePublic])
async def get_packages(
    include_inactive: bool = Query(False),
    session: AsyncSession = Depends(get_session),
) -> list[Package]:
    return await list_packages(session, include_inactive=include_inactive)


@router.get("/{package_id}", response_model=PackagePublic)
async def get_package_detail(package: Package = Depends(package_or_404)) -> Package:
    return package


@router.post("", response_model=PackagePublic, status_code=status.HTTP_201_CREATED)
async def add_package(
    body: PackageCreate,
    session: AsyncSession = Depends(get_session),
) -> Package:
    return await create_package(session, body)


@router.patch("/{package_id}", response_model=PackagePublic)
async def edit_package(
    body: PackageUpdate,
    package: Package = Depends(package_or_404),
    session: AsyncSession = Depends(get_session),
) -> Package:
    return await update_package(session, package, body)


@router.delete("/{package_id}", response_model=PackagePublic)
async def remove_package(
    package: Package = Depends(package_or_404),
    session: AsyncSession = Depends(get_session),
) -> Package:
    """Soft delete: clients keep packages they already bought."""
    return await deactivate_package(session, package)
