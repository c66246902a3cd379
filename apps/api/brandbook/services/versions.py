"""Version snapshots of a client's data."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from brandbook.db.models import Client, ClientVersion, utcnow
from brandbook.schemas import VersionCreate
from brandbook.utils import deep_copy_json

logger = logging.getLogger(__name__)


async def create_version(db: AsyncSession, client: Client, body: VersionCreate) -> ClientVersion:
    """Snapshot client.data and make version_number the client's current version."""
    now = utcnow()
    version = ClientVersion(
        client_id=client.id,
        version_number=body.version_number,
        version_name=body.version_name,
        description=body.description,
        data=deep_copy_json(client.data or {}),
        created_at=now,
        created_by=body.created_by,
    )
    db.add(version)
    client.current_version = body.version_number
    client.updated_at = now
    await db.flush()
    logger.info("Client %s: version %s saved", client.id, body.version_number)
    return version


async def list_versions(db: AsyncSession, client_id: str) -> list[ClientVersion]:
    """Versions for a client, newest first."""
    result = await db.execute(
        select(ClientVersion)
        .where(ClientVersion.client_id == client_id)
        .order_by(ClientVersion.created_at.desc())
    )
    return list(result.scalars().all())


async def get_version(db: AsyncSession, version_id: str) -> ClientVersion | None:
    result = await db.execute(select(ClientVersion).where(ClientVersion.id == version_id))
    return result.scalar_one_or_none()


async def restore_version(db: AsyncSession, version: ClientVersion) -> Client | None:
    """Copy the snapshot back onto its client. Returns the client, or None if it no longer exists."""
    result = await db.execute(select(Client).where(Client.id == version.client_id))
    client = result.scalar_one_or_none()
    if not client:
        return None
    client.data = deep_copy_json(version.data or {})
    client.updated_at = utcnow()
    await db.flush()
    logger.info("Client %s: restored version %s", client.id, version.version_number)
    return client


async def delete_version(db: AsyncSession, version: ClientVersion) -> None:
    await db.delete(version)
    await db.flush()


class VersionService:
    """Facade for version operations."""

    create = staticmethod(create_version)
    list_for_client = staticmethod(list_versions)
    get = staticmethod(get_version)
    restore = staticmethod(restore_version)
    delete = staticmethod(delete_version)


version_service = VersionService()
