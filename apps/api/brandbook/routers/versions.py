from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from brandbook.db.models import Client, ClientVersion
from brandbook.dependencies import get_client_or_404, get_db, get_version_or_404
from brandbook.schemas import ClientResponse, VersionCreate, VersionResponse
from brandbook.serializers import client_to_response, version_to_response
from brandbook.services.versions import version_service

router = APIRouter(tags=["versions"])


@router.get("/clients/{client_id}/versions", response_model=list[VersionResponse])
async def list_versions(
    client: Client = Depends(get_client_or_404),
    db: AsyncSession = Depends(get_db),
):
    versions = await version_service.list_for_client(db, client.id)
    return [version_to_response(v) for v in versions]


@router.post(
    "/clients/{client_id}/versions",
    response_model=VersionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_version(
    body: VersionCreate,
    client: Client = Depends(get_client_or_404),
    db: AsyncSession = Depends(get_db),
):
    """Snapshot the client's current data; also sets the client's current_version."""
    version = await version_service.create(db, client, body)
    return version_to_response(version)


@router.get("/versions/{version_id}", response_model=VersionResponse)
async def get_version(
    version: ClientVersion = Depends(get_version_or_404),
):
    return version_to_response(version)


@router.post("/versions/{version_id}/restore", response_model=ClientResponse)
async def restore_version(
    version: ClientVersion = Depends(get_version_or_404),
    db: AsyncSession = Depends(get_db),
):
    client = await version_service.restore(db, version)
    if not client:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")
    return client_to_response(client)


@router.delete("/versions/{version_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_version(
    version: ClientVersion = Depends(get_version_or_404),
    db: AsyncSession = Depends(get_db),
):
    await version_service.delete(db, version)
