import uuid
from typing import Annotated, AsyncGenerator

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from brandbook.db.models import Client, ClientVersion, DocumentImport
from brandbook.db.session import async_session
from brandbook.providers import ChatConfigError, ChatProvider, get_chat_provider
from brandbook.services.clients import client_service
from brandbook.services.imports.records import get_import
from brandbook.services.versions import version_service


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def _is_uuid(value: str) -> bool:
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


def _not_found(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


async def get_client_or_404(
    client_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Client:
    """Load client by id or raise 404. Requires route path param client_id."""
    client = await client_service.get(db, client_id) if _is_uuid(client_id) else None
    if not client:
        raise _not_found("Client not found")
    return client


async def get_version_or_404(
    version_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ClientVersion:
    """Load version by id or raise 404. Requires route path param version_id."""
    version = await version_service.get(db, version_id) if _is_uuid(version_id) else None
    if not version:
        raise _not_found("Version not found")
    return version


async def get_import_or_404(
    import_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DocumentImport:
    """Load document import by id or raise 404. Requires route path param import_id."""
    record = await get_import(db, import_id) if _is_uuid(import_id) else None
    if not record:
        raise _not_found("Import not found")
    return record


def get_chat() -> ChatProvider | None:
    """Chat provider for extraction. None defers the configuration error to the import record."""
    try:
        return get_chat_provider()
    except ChatConfigError:
        return None
