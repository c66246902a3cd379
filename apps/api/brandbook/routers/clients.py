from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from brandbook.db.models import Client
from brandbook.dependencies import get_client_or_404, get_db
from brandbook.schemas import (
    ClientCreate,
    ClientDataReplace,
    ClientPatch,
    ClientResponse,
    ClientSort,
    ClientSummaryResponse,
)
from brandbook.serializers import client_to_response, client_to_summary
from brandbook.services.clients import client_service

router = APIRouter(prefix="/clients", tags=["clients"])


@router.get("", response_model=list[ClientSummaryResponse])
async def list_clients(
    sort: ClientSort = Query("name"),
    db: AsyncSession = Depends(get_db),
):
    clients = await client_service.list_all(db, sort)
    return [client_to_summary(c) for c in clients]


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    body: ClientCreate,
    db: AsyncSession = Depends(get_db),
):
    client = await client_service.create(db, body)
    return client_to_response(client)


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client: Client = Depends(get_client_or_404),
):
    return client_to_response(client)


@router.put("/{client_id}/data", response_model=ClientResponse)
async def replace_client_data(
    body: ClientDataReplace,
    client: Client = Depends(get_client_or_404),
    db: AsyncSession = Depends(get_db),
):
    """Whole-document replace; the document must validate against the brand guidelines schema."""
    try:
        client = await client_service.replace_data(db, client, body.data, body.updated_by)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.errors(include_url=False, include_context=False),
        )
    return client_to_response(client)


@router.patch("/{client_id}", response_model=ClientResponse)
async def patch_client(
    body: ClientPatch,
    client: Client = Depends(get_client_or_404),
    db: AsyncSession = Depends(get_db),
):
    client = await client_service.patch(db, client, body)
    return client_to_response(client)


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(
    client: Client = Depends(get_client_or_404),
    db: AsyncSession = Depends(get_db),
):
    await client_service.delete(db, client)
