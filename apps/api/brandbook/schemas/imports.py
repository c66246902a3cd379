from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from brandbook.core.constants import DocumentFormat, ImportStatus


class UploadUrlRequest(BaseModel):
    """The file about to be uploaded; its format is checked before a URL is issued."""

    filename: str = Field(min_length=1)
    content_type: Optional[str] = None


class UploadUrlResponse(BaseModel):
    """Result of POST /uploads: write-once URL for one file body."""

    upload_url: str
    expires_at: datetime
    file_type: DocumentFormat


class UploadStoredResponse(BaseModel):
    storage_id: str


class RegisterUploadRequest(BaseModel):
    """Register an already-uploaded blob as a new import."""

    storage_id: str
    filename: str = Field(min_length=1)
    content_type: Optional[str] = None
    target_sections: Optional[list[str]] = None
    created_by: Optional[str] = None


class UrlImportRequest(BaseModel):
    url: str = Field(min_length=1)
    target_sections: Optional[list[str]] = None
    created_by: Optional[str] = None


class TextImportRequest(BaseModel):
    text: str = Field(min_length=1)
    title: Optional[str] = None
    target_sections: Optional[list[str]] = None
    created_by: Optional[str] = None


class ImportResponse(BaseModel):
    id: str
    client_id: str
    filename: str
    file_id: Optional[str] = None
    file_type: DocumentFormat
    source_url: Optional[str] = None
    extracted_text: Optional[str] = None
    target_sections: Optional[list[str]] = None
    extracted_fields: Optional[dict[str, Any]] = None
    status: ImportStatus
    error_message: Optional[str] = None
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None
    applied_at: Optional[datetime] = None
    applied_by: Optional[str] = None


class FlatFieldResponse(BaseModel):
    path: str
    label: str
    value: Any
    section: str
    display: str  # formatted value for the review list


class FieldSectionResponse(BaseModel):
    section: str
    label: str
    fields: list[FlatFieldResponse]


class ReviewFieldsResponse(BaseModel):
    """Result of GET /imports/{id}/fields: candidate fields grouped by section."""

    import_id: str
    status: ImportStatus
    total: int = 0
    sections: list[FieldSectionResponse] = []


class AcceptedFieldItem(BaseModel):
    path: str = Field(min_length=1)
    value: Any = None


class ApplyFieldsRequest(BaseModel):
    accepted_fields: list[AcceptedFieldItem]
    applied_by: Optional[str] = None


class FieldResultResponse(BaseModel):
    path: str
    applied: bool
    reason: Optional[str] = None
    warnings: list[str] = []


class ApplyFieldsResponse(BaseModel):
    import_id: str
    status: ImportStatus
    applied_count: int
    results: list[FieldResultResponse]
