"""Blob storage in the database, with signed write-once upload slots."""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from brandbook.core import create_upload_token, decode_upload_token, get_settings
from brandbook.db.models import StoredBlob, UploadSlot, utcnow
from brandbook.services.imports.errors import StorageFailed

logger = logging.getLogger(__name__)

_DEFAULT_MEDIA_TYPE = "application/octet-stream"


@dataclass
class IssuedUpload:
    slot_id: str
    token: str
    expires_at: datetime


def _aware(dt: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


def _is_blob_id(value: str | None) -> bool:
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


async def issue_upload_url(db: AsyncSession) -> IssuedUpload:
    """Create an upload slot and a signed token for it. The router turns the token into a URL."""
    minutes = get_settings().upload_url_expire_minutes
    slot = UploadSlot(expires_at=utcnow() + timedelta(minutes=minutes))
    db.add(slot)
    await db.flush()
    token = create_upload_token(slot.id, expire_minutes=minutes)
    return IssuedUpload(slot_id=slot.id, token=token, expires_at=slot.expires_at)


async def store_upload(
    db: AsyncSession,
    token: str,
    content: bytes,
    media_type: str | None,
) -> str:
    """Consume the slot behind token and store content. Returns the blob id. Raises StorageFailed."""
    slot_id = decode_upload_token(token)
    if not slot_id:
        raise StorageFailed("Upload URL is invalid or expired")
    result = await db.execute(select(UploadSlot).where(UploadSlot.id == slot_id))
    slot = result.scalar_one_or_none()
    if not slot:
        raise StorageFailed("Upload URL is invalid or expired")
    if slot.consumed_at is not None:
        raise StorageFailed("Upload URL has already been used")
    if _aware(slot.expires_at) <= utcnow():
        raise StorageFailed("Upload URL is invalid or expired")
    if not content:
        raise StorageFailed("Upload is empty")
    max_bytes = get_settings().max_upload_bytes
    if len(content) > max_bytes:
        raise StorageFailed(
            f"File must be under {max_bytes // (1024 * 1024)}MB",
            too_large=True,
        )
    blob_id = await save_blob(db, content, media_type)
    slot.blob_id = blob_id
    slot.consumed_at = utcnow()
    await db.flush()
    logger.info("Stored upload %s (%d bytes)", blob_id, len(content))
    return blob_id


async def save_blob(db: AsyncSession, content: bytes, media_type: str | None) -> str:
    """Store bytes directly (no upload slot). Used for fetched URL documents."""
    blob = StoredBlob(
        content=content,
        media_type=(media_type or "").strip() or _DEFAULT_MEDIA_TYPE,
        size=len(content),
    )
    db.add(blob)
    await db.flush()
    return blob.id


async def read_blob(db: AsyncSession, blob_id: str) -> tuple[bytes, str] | None:
    """Return (content, media_type) for a stored blob, else None."""
    if not _is_blob_id(blob_id):
        return None
    result = await db.execute(
        select(StoredBlob.content, StoredBlob.media_type).where(StoredBlob.id == blob_id)
    )
    row = result.one_or_none()
    if not row or row[0] is None:
        return None
    return (bytes(row[0]), row[1] or _DEFAULT_MEDIA_TYPE)


async def blob_exists(db: AsyncSession, blob_id: str) -> bool:
    if not _is_blob_id(blob_id):
        return False
    result = await db.execute(select(StoredBlob.id).where(StoredBlob.id == blob_id))
    return result.scalar_one_or_none() is not None


async def delete_blob(db: AsyncSession, blob_id: str | None) -> None:
    """Remove a blob. A missing blob is not an error."""
    if not blob_id or not _is_blob_id(blob_id):
        return
    await db.execute(delete(StoredBlob).where(StoredBlob.id == blob_id))


class StorageService:
    """Facade for blob storage operations."""

    issue_upload_url = staticmethod(issue_upload_url)
    store_upload = staticmethod(store_upload)
    save_blob = staticmethod(save_blob)
    read_blob = staticmethod(read_blob)
    blob_exists = staticmethod(blob_exists)
    delete_blob = staticmethod(delete_blob)


storage_service = StorageService()
