"""Document import: acquisition, normalization, extraction, records, flattening, merge.

Orchestration lives in brandbook.services.imports.pipeline (it depends on the client
and storage services, which themselves import the error taxonomy from here).
"""

from .errors import (
    ImportStage,
    DocumentImportError,
    UnsupportedFormat,
    InvalidUrl,
    FetchFailed,
    StorageFailed,
    EmptyExtraction,
    NoTextFound,
    UnreadableDocument,
    JsonParseError,
    InvalidTransition,
)
from .flattener import FlatField, FIELD_LABELS, flatten_fields, group_by_section, format_value
from .merge import AcceptedField, FieldResult, MergeResult, clean_value, merge_accepted_fields

__all__ = [
    "ImportStage",
    "DocumentImportError",
    "UnsupportedFormat",
    "InvalidUrl",
    "FetchFailed",
    "StorageFailed",
    "EmptyExtraction",
    "NoTextFound",
    "UnreadableDocument",
    "JsonParseError",
    "InvalidTransition",
    "FlatField",
    "FIELD_LABELS",
    "flatten_fields",
    "group_by_section",
    "format_value",
    "AcceptedField",
    "FieldResult",
    "MergeResult",
    "clean_value",
    "merge_accepted_fields",
]
