"""Client records: CRUD and whole-document data replacement."""

import logging
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from brandbook.core.constants import INITIAL_CLIENT_VERSION
from brandbook.db.models import Client, ClientVersion, DocumentImport, utcnow
from brandbook.domain import empty_client_data, validate_client_data
from brandbook.schemas import ClientCreate, ClientPatch
from brandbook.services.storage import delete_blob

logger = logging.getLogger(__name__)


async def create_client(db: AsyncSession, body: ClientCreate) -> Client:
    """Create a client with the empty template record (business name filled in)."""
    now = utcnow()
    client = Client(
        client_name=body.client_name.strip(),
        industry=body.industry,
        current_version=INITIAL_CLIENT_VERSION,
        data=empty_client_data(body.client_name.strip()),
        created_at=now,
        updated_at=now,
        created_by=body.created_by,
        updated_by=body.created_by,
    )
    db.add(client)
    await db.flush()
    logger.info("Client %s created (%s)", client.id, client.client_name)
    return client


async def get_client(db: AsyncSession, client_id: str) -> Client | None:
    result = await db.execute(select(Client).where(Client.id == client_id))
    return result.scalar_one_or_none()


async def list_clients(db: AsyncSession, sort: str = "name") -> list[Client]:
    """All clients, by name A-Z or by last update (newest first)."""
    q = select(Client)
    if sort == "updated":
        q = q.order_by(Client.updated_at.desc())
    else:
        q = q.order_by(Client.client_name.asc())
    result = await db.execute(q)
    return list(result.scalars().all())


async def replace_client_data(
    db: AsyncSession,
    client: Client,
    data: Any,
    updated_by: str | None = None,
) -> Client:
    """Whole-document replace of client.data. Raises pydantic ValidationError for an invalid record."""
    client.data = validate_client_data(data)
    client.updated_at = utcnow()
    if updated_by is not None:
        client.updated_by = updated_by
    await db.flush()
    return client


def apply_client_patch(client: Client, body: ClientPatch) -> None:
    """Apply metadata patch to client (in place)."""
    if body.client_name is not None:
        client.client_name = body.client_name.strip()
    if body.industry is not None:
        client.industry = body.industry
    if body.updated_by is not None:
        client.updated_by = body.updated_by
    client.updated_at = utcnow()


async def delete_client(db: AsyncSession, client: Client) -> None:
    """Delete a client with its versions, imports, and the imports' stored files."""
    result = await db.execute(
        select(DocumentImport.file_id).where(
            DocumentImport.client_id == client.id,
            DocumentImport.file_id.is_not(None),
        )
    )
    file_ids = [row[0] for row in result.all()]
    await db.execute(delete(ClientVersion).where(ClientVersion.client_id == client.id))
    await db.execute(delete(DocumentImport).where(DocumentImport.client_id == client.id))
    for file_id in file_ids:
        await delete_blob(db, file_id)
    await db.execute(delete(Client).where(Client.id == client.id))
    logger.info("Client %s deleted (%d stored files removed)", client.id, len(file_ids))


class ClientService:
    """Facade for client operations."""

    @staticmethod
    async def create(db: AsyncSession, body: ClientCreate) -> Client:
        return await create_client(db, body)

    @staticmethod
    async def get(db: AsyncSession, client_id: str) -> Client | None:
        return await get_client(db, client_id)

    @staticmethod
    async def list_all(db: AsyncSession, sort: str = "name") -> list[Client]:
        return await list_clients(db, sort)

    @staticmethod
    async def replace_data(db: AsyncSession, client: Client, data: Any, updated_by: str | None = None) -> Client:
        return await replace_client_data(db, client, data, updated_by)

    @staticmethod
    async def patch(db: AsyncSession, client: Client, body: ClientPatch) -> Client:
        apply_client_patch(client, body)
        await db.flush()
        return client

    @staticmethod
    async def delete(db: AsyncSession, client: Client) -> None:
        await delete_client(db, client)


client_service = ClientService()
