"""
Document Import Pipeline

Orchestrates: acquire → normalize → extract → review → apply.

SECTIONS (in order):
  1. Acquisition   - register_upload, import_from_url, import_pasted_text.
  2. Normalization - extract_text (idempotent once text exists).
  3. Extraction    - extract_fields (one model call, CandidateFieldTree on the record).
  4. Orchestration - process_import (remaining stages in order, stops at first failure).
  5. Review        - review_fields (FlatFields grouped by section).
  6. Apply         - apply_fields (merge accepted pairs, whole-document replace, applied).

Acquisition validation errors (InvalidUrl, FetchFailed, UnsupportedFormat, StorageFailed)
are raised before any record exists. After that, stage errors never leave this module:
they are written to error_message and the record moves to failed. InvalidTransition is
raised when a stage is requested from a status that does not allow it.
"""

from __future__ import annotations

__all__ = [
    "register_upload",
    "import_from_url",
    "import_pasted_text",
    "extract_text",
    "extract_fields",
    "process_import",
    "review_fields",
    "apply_fields",
    "ReviewSection",
    "ApplyOutcome",
]

import logging
from dataclasses import dataclass
from typing import Iterable

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from brandbook.core.constants import BINARY_FORMATS, DocumentFormat, ImportStatus
from brandbook.db.models import DocumentImport, utcnow
from brandbook.providers import ChatProvider, ChatServiceError, get_chat_provider
from brandbook.services.clients import get_client
from brandbook.services.storage import blob_exists, delete_blob, read_blob, save_blob

from .acquisition import acquire_pasted_text, acquire_url, detect_upload_format
from .errors import DocumentImportError, InvalidTransition, NoTextFound, StorageFailed, UnsupportedFormat
from .extractor import extract_candidate_fields
from .flattener import FlatField, flatten_fields, group_by_section, section_label
from .merge import AcceptedField, MergeResult, merge_accepted_fields
from .normalizer import normalize_text_async
from .records import (
    create_import,
    mark_applied,
    mark_failed,
    mark_fields_extracted,
    mark_text_extracted,
    require_import,
    status_of,
)

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# 1. Acquisition
# -----------------------------------------------------------------------------

async def register_upload(
    db: AsyncSession,
    client_id: str,
    filename: str,
    content_type: str | None,
    file_id: str,
    target_sections: list[str] | None = None,
    created_by: str | None = None,
) -> DocumentImport:
    """
    Create a pending import for an uploaded blob. Format: MIME type, then extension.
    A blob in an unsupported format is deleted before UnsupportedFormat is raised.
    """
    try:
        fmt = detect_upload_format(content_type, filename)
    except UnsupportedFormat:
        await delete_blob(db, file_id)
        raise
    if not await blob_exists(db, file_id):
        raise StorageFailed("Uploaded file not found in storage")
    return await create_import(
        db,
        client_id=client_id,
        filename=filename,
        file_type=fmt,
        file_id=file_id,
        target_sections=target_sections,
        created_by=created_by,
    )


async def import_from_url(
    db: AsyncSession,
    client_id: str,
    url: str,
    target_sections: list[str] | None = None,
    created_by: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> DocumentImport:
    """
    Fetch url and create an import. PDF/DOCX bytes go to the blob store and wait for
    extract_text; text-like payloads are normalized right away.
    """
    acquired = await acquire_url(url, transport=transport)
    file_id = None
    if acquired.format in BINARY_FORMATS:
        file_id = await save_blob(db, acquired.payload, acquired.media_type)
    record = await create_import(
        db,
        client_id=client_id,
        filename=acquired.filename,
        file_type=acquired.format,
        file_id=file_id,
        source_url=acquired.source_url,
        target_sections=target_sections,
        created_by=created_by,
    )
    if file_id is None:
        await _normalize_into(db, record, acquired.payload)
    return record


async def import_pasted_text(
    db: AsyncSession,
    client_id: str,
    text: str,
    title: str | None = None,
    target_sections: list[str] | None = None,
    created_by: str | None = None,
) -> DocumentImport:
    """Pasted text skips parsing: the record goes straight to processing."""
    acquired = acquire_pasted_text(text, title)
    record = await create_import(
        db,
        client_id=client_id,
        filename=acquired.filename,
        file_type=acquired.format,
        target_sections=target_sections,
        created_by=created_by,
    )
    await _normalize_into(db, record, acquired.payload)
    return record


# -----------------------------------------------------------------------------
# 2. Normalization
# -----------------------------------------------------------------------------

async def _normalize_into(db: AsyncSession, record: DocumentImport, payload: bytes | str) -> None:
    """Normalize payload onto record (processing) or move it to failed."""
    try:
        text = (await normalize_text_async(payload, DocumentFormat(record.file_type))).strip()
        if not text:
            raise NoTextFound("No text content found in file")
    except DocumentImportError as e:
        await mark_failed(db, record, e.message)
        return
    except Exception as e:
        logger.exception("Text extraction failed for import %s", record.id)
        await mark_failed(db, record, str(e) or "Unknown error during text extraction")
        return
    await mark_text_extracted(db, record, text)
    logger.info("Import %s: extracted %d characters", record.id, len(text))


async def extract_text(db: AsyncSession, import_id: str) -> DocumentImport:
    """Normalize the stored file into extracted_text. No-op if text already exists."""
    record = await require_import(db, import_id)
    if record.extracted_text:
        return record
    current = status_of(record)
    if current != ImportStatus.PENDING:
        raise InvalidTransition(f"Cannot extract text from an import in '{current.value}'")
    if not record.file_id:
        await mark_failed(db, record, "No file associated with this import")
        return record
    blob = await read_blob(db, record.file_id)
    if blob is None:
        await mark_failed(db, record, "Could not read the uploaded file from storage")
        return record
    content, _media_type = blob
    await _normalize_into(db, record, content)
    return record


# -----------------------------------------------------------------------------
# 3. Extraction
# -----------------------------------------------------------------------------

async def extract_fields(
    db: AsyncSession,
    import_id: str,
    chat: ChatProvider | None = None,
) -> DocumentImport:
    """Send extracted_text to the model; store the parsed tree (ready_for_review) or fail."""
    record = await require_import(db, import_id)
    current = status_of(record)
    if current not in (ImportStatus.PENDING, ImportStatus.PROCESSING):
        raise InvalidTransition(f"Cannot extract fields from an import in '{current.value}'")
    if not record.extracted_text:
        await mark_failed(db, record, "No extracted text available for processing")
        return record
    try:
        provider = chat or get_chat_provider()
        tree = await extract_candidate_fields(record.extracted_text, provider, record.target_sections)
    except (DocumentImportError, ChatServiceError) as e:
        message = e.message if isinstance(e, DocumentImportError) else str(e)
        await mark_failed(db, record, message)
        return record
    except Exception as e:
        logger.exception("Field extraction failed for import %s", record.id)
        await mark_failed(db, record, str(e) or "Unknown error during field extraction")
        return record
    await mark_fields_extracted(db, record, tree)
    return record


# -----------------------------------------------------------------------------
# 4. Orchestration
# -----------------------------------------------------------------------------

async def process_import(
    db: AsyncSession,
    import_id: str,
    chat: ChatProvider | None = None,
) -> DocumentImport:
    """Run the remaining stages (text, then fields). Stops at the first failure."""
    record = await require_import(db, import_id)
    if status_of(record) == ImportStatus.PENDING:
        record = await extract_text(db, import_id)
    if status_of(record) == ImportStatus.PROCESSING:
        record = await extract_fields(db, import_id, chat)
    return record


# -----------------------------------------------------------------------------
# 5. Review
# -----------------------------------------------------------------------------

@dataclass
class ReviewSection:
    section: str
    label: str
    fields: list[FlatField]


async def review_fields(db: AsyncSession, import_id: str) -> tuple[DocumentImport, list[ReviewSection]]:
    """Candidate fields of an import, flattened and grouped by top-level section."""
    record = await require_import(db, import_id)
    fields = flatten_fields(record.extracted_fields or {})
    sections = [
        ReviewSection(section=name, label=section_label(name), fields=items)
        for name, items in group_by_section(fields).items()
    ]
    return record, sections


# -----------------------------------------------------------------------------
# 6. Apply
# -----------------------------------------------------------------------------

@dataclass
class ApplyOutcome:
    record: DocumentImport
    merge: MergeResult


async def apply_fields(
    db: AsyncSession,
    import_id: str,
    accepted: Iterable[AcceptedField],
    applied_by: str | None = None,
) -> ApplyOutcome:
    """
    Merge accepted pairs into the import's client record and mark the import applied.
    Only allowed from ready_for_review. Last writer wins against concurrent edits.
    """
    record = await require_import(db, import_id)
    current = status_of(record)
    if current != ImportStatus.READY_FOR_REVIEW:
        raise InvalidTransition(f"Cannot apply fields to an import in '{current.value}'")
    client = await get_client(db, record.client_id)
    if client is None:
        raise LookupError(f"Client {record.client_id} not found")
    merge = merge_accepted_fields(client.data, accepted)
    client.data = merge.data
    client.updated_at = utcnow()
    if applied_by is not None:
        client.updated_by = applied_by
    await mark_applied(db, record, applied_by)
    logger.info(
        "Import %s applied to client %s: %d of %d fields written",
        record.id, client.id, merge.applied_count, len(merge.results),
    )
    return ApplyOutcome(record=record, merge=merge)
