"""Pydantic request/response schemas."""

from brandbook.schemas.clients import (
    ClientCreate,
    ClientPatch,
    ClientDataReplace,
    ClientSummaryResponse,
    ClientResponse,
    ClientSort,
)
from brandbook.schemas.versions import VersionCreate, VersionResponse
from brandbook.schemas.imports import (
    UploadUrlRequest,
    UploadUrlResponse,
    UploadStoredResponse,
    RegisterUploadRequest,
    UrlImportRequest,
    TextImportRequest,
    ImportResponse,
    FlatFieldResponse,
    FieldSectionResponse,
    ReviewFieldsResponse,
    AcceptedFieldItem,
    ApplyFieldsRequest,
    FieldResultResponse,
    ApplyFieldsResponse,
)

__all__ = [
    "ClientCreate",
    "ClientPatch",
    "ClientDataReplace",
    "ClientSummaryResponse",
    "ClientResponse",
    "ClientSort",
    "VersionCreate",
    "VersionResponse",
    "UploadUrlRequest",
    "UploadUrlResponse",
    "UploadStoredResponse",
    "RegisterUploadRequest",
    "UrlImportRequest",
    "TextImportRequest",
    "ImportResponse",
    "FlatFieldResponse",
    "FieldSectionResponse",
    "ReviewFieldsResponse",
    "AcceptedFieldItem",
    "ApplyFieldsRequest",
    "FieldResultResponse",
    "ApplyFieldsResponse",
]
