from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import client_or_404, get_session
from app.models.client import Client, ClientCreate, ClientPublic, ClientUpdate
from app.services.catalog_service import create_client, list_clients, update_client

router = APIRouter(prefix="/clients", tags=["clients"])


@router.get("", response_model=list[ClientPublic])
async def get_clients(
    search: str | None = Query(None, max_length=255),
    session: AsyncSession = Depends(get_session),
) -> list[Client]:
    return await list_clients(session, search)


@router.post("", response_model=ClientPublic, status_code=status.HTTP_201_CREATED)
async def add_client(
    body: ClientCreate,
    session: AsyncSession = Depends(get_session),
) -> Client:
    client = await create_client(session, body)
    if not client:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A client with this email already exists",
        )
    return client


@router.get("/{client_id}", response_model=ClientPublic)
async def get_client_detail(client: Client = Depends(client_or_404)) -> Client:
    return client


@router.patch("/{client_id}", response_model=ClientPublic)
async def edit_client(
    body: ClientUpdate,
    client: Client = Depends(client_or_404),
    session: AsyncSession = Depends(get_session),
) -> Client:
    return await update_client(session, client, body)
