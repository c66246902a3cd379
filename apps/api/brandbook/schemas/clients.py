from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


class ClientCreate(BaseModel):
    client_name: str = Field(min_length=1, max_length=255)
    industry: Optional[str] = None
    created_by: Optional[str] = None


class ClientPatch(BaseModel):
    """Metadata only; data is replaced through PUT /clients/{id}/data."""

    client_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    industry: Optional[str] = None
    updated_by: Optional[str] = None


class ClientDataReplace(BaseModel):
    data: dict[str, Any]
    updated_by: Optional[str] = None


class ClientSummaryResponse(BaseModel):
    id: str
    client_name: str
    industry: Optional[str] = None
    current_version: Optional[str] = None
    updated_at: Optional[datetime] = None


class ClientResponse(ClientSummaryResponse):
    data: dict[str, Any] = {}
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None
    updated_by: Optional[str] = None


ClientSort = Literal["name", "updated"]
