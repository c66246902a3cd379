"""
ImportRecord persistence and its status state machine.

pending -> processing -> ready_for_review -> applied
any non-terminal state -> failed
applied and failed are terminal; a failed import is retried as a new record.
"""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from brandbook.core.constants import TERMINAL_IMPORT_STATUSES, DocumentFormat, ImportStatus
from brandbook.db.models import DocumentImport, utcnow

from .errors import InvalidTransition

logger = logging.getLogger(__name__)


ALLOWED_TRANSITIONS: dict[ImportStatus, frozenset[ImportStatus]] = {
    ImportStatus.PENDING: frozenset({ImportStatus.PROCESSING, ImportStatus.FAILED}),
    ImportStatus.PROCESSING: frozenset({ImportStatus.READY_FOR_REVIEW, ImportStatus.FAILED}),
    ImportStatus.READY_FOR_REVIEW: frozenset({ImportStatus.APPLIED, ImportStatus.FAILED}),
    ImportStatus.APPLIED: frozenset(),
    ImportStatus.FAILED: frozenset(),
}


def status_of(record: DocumentImport) -> ImportStatus:
    return ImportStatus(record.status)


def can_transition(current: ImportStatus, target: ImportStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def transition(record: DocumentImport, target: ImportStatus) -> None:
    """Move record to target status (in place). Raises InvalidTransition."""
    current = status_of(record)
    if not can_transition(current, target):
        raise InvalidTransition(
            f"Cannot move import from '{current.value}' to '{target.value}'"
        )
    record.status = target.value
    logger.info("Import %s: %s -> %s", record.id, current.value, target.value)


def is_terminal(record: DocumentImport) -> bool:
    return status_of(record) in TERMINAL_IMPORT_STATUSES


# -----------------------------------------------------------------------------
# CRUD
# -----------------------------------------------------------------------------

async def create_import(
    db: AsyncSession,
    client_id: str,
    filename: str,
    file_type: DocumentFormat,
    file_id: str | None = None,
    source_url: str | None = None,
    target_sections: list[str] | None = None,
    created_by: str | None = None,
) -> DocumentImport:
    """Insert a pending ImportRecord."""
    record = DocumentImport(
        client_id=client_id,
        filename=filename,
        file_id=file_id,
        file_type=DocumentFormat(file_type).value,
        source_url=source_url,
        target_sections=list(target_sections) if target_sections else None,
        status=ImportStatus.PENDING.value,
        created_by=created_by,
    )
    db.add(record)
    await db.flush()
    logger.info("Import %s created for client %s (%s, %s)", record.id, client_id, record.file_type, filename)
    return record


async def get_import(db: AsyncSession, import_id: str) -> DocumentImport | None:
    result = await db.execute(select(DocumentImport).where(DocumentImport.id == import_id))
    return result.scalar_one_or_none()


async def require_import(db: AsyncSession, import_id: str) -> DocumentImport:
    """get_import, raising LookupError when the record does not exist."""
    record = await get_import(db, import_id)
    if record is None:
        raise LookupError(f"Import {import_id} not found")
    return record


async def list_imports_for_client(db: AsyncSession, client_id: str) -> list[DocumentImport]:
    """All imports for a client, newest first."""
    result = await db.execute(
        select(DocumentImport)
        .where(DocumentImport.client_id == client_id)
        .order_by(DocumentImport.created_at.desc())
    )
    return list(result.scalars().all())


async def delete_import(db: AsyncSession, record: DocumentImport) -> None:
    await db.delete(record)
    await db.flush()


# -----------------------------------------------------------------------------
# Stage writes
# -----------------------------------------------------------------------------

async def mark_text_extracted(db: AsyncSession, record: DocumentImport, text: str) -> DocumentImport:
    transition(record, ImportStatus.PROCESSING)
    record.extracted_text = text
    record.error_message = None
    await db.flush()
    return record


async def mark_fields_extracted(db: AsyncSession, record: DocumentImport, fields: dict[str, Any]) -> DocumentImport:
    transition(record, ImportStatus.READY_FOR_REVIEW)
    record.extracted_fields = fields
    await db.flush()
    return record


async def mark_applied(db: AsyncSession, record: DocumentImport, applied_by: str | None = None) -> DocumentImport:
    transition(record, ImportStatus.APPLIED)
    record.applied_at = utcnow()
    record.applied_by = applied_by
    await db.flush()
    return record


async def mark_failed(db: AsyncSession, record: DocumentImport, error_message: str) -> DocumentImport:
    """Move to failed with a human-readable message. Raises InvalidTransition from a terminal state."""
    transition(record, ImportStatus.FAILED)
    record.error_message = error_message or "Import failed"
    await db.flush()
    logger.warning("Import %s failed: %s", record.id, record.error_message)
    return record
