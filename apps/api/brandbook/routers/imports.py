import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from brandbook.core import get_settings, limiter
from brandbook.db.models import Client, DocumentImport
from brandbook.dependencies import get_chat, get_client_or_404, get_db, get_import_or_404
from brandbook.providers import ChatProvider
from brandbook.schemas import (
    ApplyFieldsRequest,
    ApplyFieldsResponse,
    ImportResponse,
    RegisterUploadRequest,
    ReviewFieldsResponse,
    TextImportRequest,
    UrlImportRequest,
)
from brandbook.serializers import apply_outcome_to_response, import_to_response, review_to_response
from brandbook.services.imports import pipeline
from brandbook.services.imports.errors import (
    DocumentImportError,
    FetchFailed,
    InvalidTransition,
    InvalidUrl,
    StorageFailed,
    UnsupportedFormat,
)
from brandbook.services.imports.merge import AcceptedField
from brandbook.services.imports.records import delete_import, list_imports_for_client
from brandbook.services.storage import storage_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["imports"])


def _to_http(e: DocumentImportError) -> HTTPException:
    """Map errors that reach the caller (before or outside a record's lifecycle) to HTTP."""
    if isinstance(e, (UnsupportedFormat, InvalidUrl)):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    if isinstance(e, FetchFailed):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
    if isinstance(e, StorageFailed):
        code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE if e.too_large else status.HTTP_400_BAD_REQUEST
        return HTTPException(status_code=code, detail=e.message)
    if isinstance(e, InvalidTransition):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


# -----------------------------------------------------------------------------
# Create
# -----------------------------------------------------------------------------

@router.post(
    "/clients/{client_id}/imports",
    response_model=ImportResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_upload(
    body: RegisterUploadRequest,
    client: Client = Depends(get_client_or_404),
    db: AsyncSession = Depends(get_db),
):
    """Register an uploaded file (storage_id from POST /uploads/{token}) as a pending import."""
    try:
        record = await pipeline.register_upload(
            db,
            client_id=client.id,
            filename=body.filename,
            content_type=body.content_type,
            file_id=body.storage_id,
            target_sections=body.target_sections,
            created_by=body.created_by,
        )
    except UnsupportedFormat as e:
        # The rejected blob is already deleted; get_db rolls back on the error response
        await db.commit()
        raise _to_http(e)
    except DocumentImportError as e:
        raise _to_http(e)
    return import_to_response(record)


@router.post(
    "/clients/{client_id}/imports/url",
    response_model=ImportResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(get_settings().url_import_rate_limit)
async def import_from_url(
    request: Request,
    body: UrlImportRequest,
    client: Client = Depends(get_client_or_404),
    db: AsyncSession = Depends(get_db),
):
    """Fetch a URL. Web pages and text files come back in processing (or failed); PDF/DOCX in pending."""
    try:
        record = await pipeline.import_from_url(
            db,
            client_id=client.id,
            url=body.url,
            target_sections=body.target_sections,
            created_by=body.created_by,
        )
    except DocumentImportError as e:
        raise _to_http(e)
    return import_to_response(record)


@router.post(
    "/clients/{client_id}/imports/text",
    response_model=ImportResponse,
    status_code=status.HTTP_201_CREATED,
)
async def import_pasted_text(
    body: TextImportRequest,
    client: Client = Depends(get_client_or_404),
    db: AsyncSession = Depends(get_db),
):
    record = await pipeline.import_pasted_text(
        db,
        client_id=client.id,
        text=body.text,
        title=body.title,
        target_sections=body.target_sections,
        created_by=body.created_by,
    )
    return import_to_response(record)


# -----------------------------------------------------------------------------
# Read
# -----------------------------------------------------------------------------

@router.get("/clients/{client_id}/imports", response_model=list[ImportResponse])
async def list_imports(
    client: Client = Depends(get_client_or_404),
    db: AsyncSession = Depends(get_db),
):
    records = await list_imports_for_client(db, client.id)
    return [import_to_response(r) for r in records]


@router.get("/imports/{import_id}", response_model=ImportResponse)
async def get_import(
    record: DocumentImport = Depends(get_import_or_404),
):
    return import_to_response(record)


@router.get("/imports/{import_id}/fields", response_model=ReviewFieldsResponse)
async def review_fields(
    record: DocumentImport = Depends(get_import_or_404),
    db: AsyncSession = Depends(get_db),
):
    """Extracted candidate fields, flattened and grouped by section for accept/reject."""
    record, sections = await pipeline.review_fields(db, record.id)
    return review_to_response(record, sections)


# -----------------------------------------------------------------------------
# Stages
# -----------------------------------------------------------------------------

@router.post("/imports/{import_id}/extract-text", response_model=ImportResponse)
async def extract_text(
    record: DocumentImport = Depends(get_import_or_404),
    db: AsyncSession = Depends(get_db),
):
    try:
        record = await pipeline.extract_text(db, record.id)
    except DocumentImportError as e:
        raise _to_http(e)
    return import_to_response(record)


@router.post("/imports/{import_id}/extract-fields", response_model=ImportResponse)
@limiter.limit(get_settings().extraction_rate_limit)
async def extract_fields(
    request: Request,
    record: DocumentImport = Depends(get_import_or_404),
    chat: ChatProvider | None = Depends(get_chat),
    db: AsyncSession = Depends(get_db),
):
    try:
        record = await pipeline.extract_fields(db, record.id, chat)
    except DocumentImportError as e:
        raise _to_http(e)
    return import_to_response(record)


@router.post("/imports/{import_id}/process", response_model=ImportResponse)
@limiter.limit(get_settings().extraction_rate_limit)
async def process_import(
    request: Request,
    record: DocumentImport = Depends(get_import_or_404),
    chat: ChatProvider | None = Depends(get_chat),
    db: AsyncSession = Depends(get_db),
):
    """Run text extraction and field extraction in one call. Check status for the outcome."""
    try:
        record = await pipeline.process_import(db, record.id, chat)
    except DocumentImportError as e:
        raise _to_http(e)
    return import_to_response(record)


@router.post("/imports/{import_id}/apply", response_model=ApplyFieldsResponse)
async def apply_fields(
    body: ApplyFieldsRequest,
    record: DocumentImport = Depends(get_import_or_404),
    db: AsyncSession = Depends(get_db),
):
    """Merge accepted fields into the client record. Per-field outcomes are in results."""
    accepted = [AcceptedField(path=f.path, value=f.value) for f in body.accepted_fields]
    try:
        outcome = await pipeline.apply_fields(db, record.id, accepted, applied_by=body.applied_by)
    except DocumentImportError as e:
        raise _to_http(e)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return apply_outcome_to_response(outcome)


@router.delete("/imports/{import_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_import_route(
    record: DocumentImport = Depends(get_import_or_404),
    db: AsyncSession = Depends(get_db),
):
    """Delete an import and its stored file."""
    import_id, file_id = record.id, record.file_id
    await delete_import(db, record)
    await storage_service.delete_blob(db, file_id)
    logger.info("Import %s deleted", import_id)
