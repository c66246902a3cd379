"""Core configuration, upload tokens, and shared infrastructure."""

from brandbook.core.config import Settings, get_settings
from brandbook.core.constants import (
    DocumentFormat,
    ImportStatus,
    TERMINAL_IMPORT_STATUSES,
)
from brandbook.core.tokens import create_upload_token, decode_upload_token
from brandbook.core.limiter import limiter

__all__ = [
    "Settings",
    "get_settings",
    "DocumentFormat",
    "ImportStatus",
    "TERMINAL_IMPORT_STATUSES",
    "create_upload_token",
    "decode_upload_token",
    "limiter",
]
