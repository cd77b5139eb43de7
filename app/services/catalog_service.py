from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.client import Client, ClientCreate, ClientUpdate
from app.models.package import Package, PackageCreate, PackageUpdate
from app.models.service import Service, ServiceCreate, ServiceUpdate


async def list_active_services(session: AsyncSession) -> list[Service]:
    result = await session.execute(
        select(Service).where(Service.is_active == True).order_by(Service.name)  # noqa: E712
    )
    return list(result.scalars().all())


async def get_service(session: AsyncSession, service_id: int) -> Service | None:
    result = await session.execute(select(Service).where(Service.id == service_id))
    return result.scalar_one_or_none()


async def get_active_service(session: AsyncSession, service_id: int) -> Service | None:
    result = await session.execute(
        select(Service).where(Service.id == service_id, Service.is_active == True)  # noqa: E712
    )
    return result.scalar_one_or_none()


async def create_service(session: AsyncSession, data: ServiceCreate) -> Service:
    service = Service.model_validate(data)
    session.add(service)
    await session.flush()
    await session.refresh(service)
    return service


async def update_service(session: AsyncSession, service: Service, data: ServiceUpdate) -> Service:
    service.sqlmodel_update(data.model_dump(exclude_unset=True))
    session.add(service)
    await session.flush()
    await session.refresh(service)
    return service


async def deactivate_service(session: AsyncSession, service: Service) -> Service:
    service.is_active = False
    session.add(service)
    await session.flush()
    return service


async def get_client(session: AsyncSession, client_id: int) -> Client | None:
    result = await session.execute(select(Client).where(Client.id == client_id))
    return result.scalar_one_or_none()


async def get_client_by_email(session: AsyncSession, email: str) -> Client | None:
    result = await session.execute(select(Client).where(Client.email == email))
    return result.scalar_one_or_none()


async def create_client(session: AsyncSession, data: ClientCreate) -> Client | None:
    """Returns None when a client with this email already exists."""
    if await get_client_by_email(session, data.email):
        return None
    client = Client.model_validate(data)
    session.add(client)
    await session.flush()
    await session.refresh(client)
    return client


async def list_clients(session: AsyncSession, search: str | None = None) -> list[Client]:
    """Newest first. search matches a substring of name or email, case-insensitively."""
    stmt = select(Client)
    if search:
        pattern = f"%{search}%"
        stmt = stmt.where(or_(Client.name.ilike(pattern), Client.email.ilike(pattern)))
    result = await session.execute(stmt.order_by(Client.id.desc()))
    return list(result.scalars().all())


async def update_client(session: AsyncSession, client: Client, data: ClientUpdate) -> Client:
    client.sqlmodel_update(data.model_dump(exclude_unset=True))
    session.add(client)
    await session.flush()
    await session.refresh(client)
    return client


async def list_packages(session: AsyncSession, include_inactive: bool = False) -> list[Package]:
    stmt = select(Package)
    if not include_inactive:
        stmt = stmt.where(Package.is_active == True)  # noqa: E712
    result = await session.execute(stmt.order_by(Package.name))
    return list(result.scalars().all())


async def get_package(session: AsyncSession, package_id: int) -> Package | None:
    result = await session.execute(select(Package).where(Package.id == package_id))
    return result.scalar_one_or_none()


async def create_package(session: AsyncSession, data: PackageCreate) -> Package:
    package = Package.model_validate(data)
    session.add(package)
    await session.flush()
    await session.refresh(package)
    return package


async def update_package(session: AsyncSession, package: Package, data: PackageUpdate) -> Package:
    package.sqlmodel_update(data.model_dump(exclude_unset=True))
    session.add(package)
    await session.flush()
    await session.refresh(package)
    return package


async def deactivate_package(session: AsyncSession, package: Package) -> Package:
    package.is_active = False
    session.add(package)
    await session.flush()
    return package
