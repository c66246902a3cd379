from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class VersionCreate(BaseModel):
    version_number: str = Field(min_length=1, max_length=50)
    version_name: Optional[str] = None
    description: Optional[str] = None
    created_by: Optional[str] = None


class VersionResponse(BaseModel):
    id: str
    client_id: str
    version_number: str
    version_name: Optional[str] = None
    description: Optional[str] = None
    data: dict[str, Any] = {}
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None
