"""Shared API constants."""

from enum import Enum


class DocumentFormat(str, Enum):
    """Wire contract for ImportRecord.file_type."""
    PDF = "pdf"
    DOCX = "docx"
    TXT = "txt"
    MD = "md"
    JSON = "json"
    HTML = "html"


class ImportStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    READY_FOR_REVIEW = "ready_for_review"
    APPLIED = "applied"
    FAILED = "failed"


TERMINAL_IMPORT_STATUSES = frozenset({ImportStatus.APPLIED, ImportStatus.FAILED})

# Formats whose payload is already text (no binary parser involved)
TEXT_FORMATS = frozenset({DocumentFormat.TXT, DocumentFormat.MD, DocumentFormat.JSON, DocumentFormat.HTML})

# Formats that must go through the blob store before text extraction
BINARY_FORMATS = frozenset({DocumentFormat.PDF, DocumentFormat.DOCX})

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

# HTML pages yielding less text than this are treated as empty
MIN_HTML_TEXT_CHARS = 10

INITIAL_CLIENT_VERSION = "1.0"

PASTED_TEXT_FILENAME = "pasted-text.txt"
