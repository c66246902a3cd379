import os

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from brandbook.core.config import get_settings
from brandbook.dependencies import get_db
from brandbook.schemas import UploadStoredResponse, UploadUrlRequest, UploadUrlResponse
from brandbook.services.imports.acquisition import detect_upload_format
from brandbook.services.imports.errors import StorageFailed, UnsupportedFormat
from brandbook.services.storage import storage_service

router = APIRouter(tags=["uploads"])


def _public_base(request: Request) -> str:
    settings = get_settings()
    return (
        settings.api_public_url
        or os.environ.get("RENDER_EXTERNAL_URL")
        or str(request.base_url)
    ).rstrip("/")


@router.post("/uploads", response_model=UploadUrlResponse)
async def create_upload_url(
    body: UploadUrlRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """
    Issue a write-once upload URL for one file. Unsupported formats are rejected here,
    before any bytes are sent. POST the raw file body to the URL to get a storage_id.
    """
    try:
        file_type = detect_upload_format(body.content_type, body.filename)
    except UnsupportedFormat as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    issued = await storage_service.issue_upload_url(db)
    return UploadUrlResponse(
        upload_url=f"{_public_base(request)}/uploads/{issued.token}",
        expires_at=issued.expires_at,
        file_type=file_type,
    )


@router.post("/uploads/{token}", response_model=UploadStoredResponse)
async def upload_file(
    token: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    content = await request.body()
    try:
        blob_id = await storage_service.store_upload(
            db, token, content, request.headers.get("content-type")
        )
    except StorageFailed as e:
        code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE if e.too_large else status.HTTP_400_BAD_REQUEST
        raise HTTPException(status_code=code, detail=e.message)
    return UploadStoredResponse(storage_id=blob_id)


@router.get("/blobs/{blob_id}")
async def get_blob(
    blob_id: str,
    db: AsyncSession = Depends(get_db),
):
    blob = await storage_service.read_blob(db, blob_id)
    if not blob:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")
    content, media_type = blob
    return Response(content=content, media_type=media_type)
