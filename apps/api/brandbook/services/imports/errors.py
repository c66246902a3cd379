"""Import pipeline stages and the error taxonomy raised inside them."""

from enum import Enum
from typing import Optional


class ImportStage(str, Enum):
    """Pipeline stage identifiers for error reporting."""
    ACQUIRE = "acquire"
    NORMALIZE = "normalize"
    EXTRACT = "extract"
    APPLY = "apply"


class DocumentImportError(Exception):
    """Import error with stage context. `message` is what ends up in ImportRecord.error_message."""
    stage: ImportStage = ImportStage.ACQUIRE

    def __init__(self, message: str, cause: Optional[Exception] = None, stage: Optional[ImportStage] = None):
        if stage is not None:
            self.stage = stage
        self.message = message
        self.cause = cause
        super().__init__(f"[{self.stage.value}] {message}")


# Acquisition (raised to the caller before any ImportRecord exists, except StorageFailed on URL blobs)

class UnsupportedFormat(DocumentImportError):
    stage = ImportStage.ACQUIRE


class InvalidUrl(DocumentImportError):
    stage = ImportStage.ACQUIRE


class FetchFailed(DocumentImportError):
    stage = ImportStage.ACQUIRE


class StorageFailed(DocumentImportError):
    stage = ImportStage.ACQUIRE

    def __init__(self, message: str, cause: Optional[Exception] = None, too_large: bool = False):
        super().__init__(message, cause)
        self.too_large = too_large


# Normalization

class EmptyExtraction(DocumentImportError):
    stage = ImportStage.NORMALIZE


class NoTextFound(DocumentImportError):
    stage = ImportStage.NORMALIZE


class UnreadableDocument(DocumentImportError):
    stage = ImportStage.NORMALIZE


# Extraction

class JsonParseError(DocumentImportError):
    stage = ImportStage.EXTRACT


# State machine

class InvalidTransition(DocumentImportError):
    """Requested status change is not allowed from the record's current status."""
    stage = ImportStage.APPLY
