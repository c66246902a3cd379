"""
Merge accepted (path, value) pairs into a ClientRecord.

Each value is cleaned first: nulls and empty strings are dropped, list elements that
clean to nothing are removed, and swatch/gradient elements missing required keys are
removed. Lists inside the schema use their declared element kind; values outside it
fall back to sniffing the element's keys. The merge works on a deep copy and reports
one FieldResult per pair; a failing pair never aborts the rest.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from brandbook.domain import (
    REQUIRED_FIELDS_BY_KIND,
    SCHEMA_PATHS,
    ElementKind,
    declared_element_kind,
    get_field_spec,
)
from brandbook.utils import deep_copy_json

logger = logging.getLogger(__name__)


class _Drop:
    """Marker for a value that cleans away to nothing."""

    def __repr__(self) -> str:
        return "DROP"

    def __bool__(self) -> bool:
        return False


DROP = _Drop()

# Any colour value key marks a swatch, so a bare {"rgb": ...} is caught and dropped for lacking name/hex
_SWATCH_MARKERS = ("hex", "rgb", "cmyk", "pantone")
_GRADIENT_TYPES = ("linear", "radial")


# -----------------------------------------------------------------------------
# Cleaning
# -----------------------------------------------------------------------------

def detect_element_kind(obj: dict) -> ElementKind:
    """Key-sniffing fallback for objects outside the schema."""
    if any(k in obj for k in _SWATCH_MARKERS):
        return ElementKind.SWATCH
    if obj.get("type") in _GRADIENT_TYPES:
        return ElementKind.GRADIENT
    return ElementKind.GENERIC


def has_required_fields(obj: dict, kind: ElementKind) -> bool:
    return all(obj.get(key) is not None for key in REQUIRED_FIELDS_BY_KIND.get(kind, ()))


def _is_empty(value: Any) -> bool:
    return value is DROP or value == [] or value == {}


def _known(path: str | None) -> bool:
    return path is not None and path in SCHEMA_PATHS


def _child(path: str | None, key: str) -> str | None:
    return f"{path}.{key}" if _known(path) else None


def _element_kind(list_path: str | None, item: dict) -> ElementKind:
    if _known(list_path):
        return declared_element_kind(list_path) or ElementKind.GENERIC
    return detect_element_kind(item)


def _clean_list(items: list, path: str | None, warnings: list[str] | None) -> list:
    item_path = f"{path}[]" if _known(path) else None
    cleaned: list = []
    for item in items:
        value = clean_value(item, item_path, warnings)
        if _is_empty(value):
            continue
        if isinstance(value, dict):
            kind = _element_kind(path, value)
            if not has_required_fields(value, kind):
                continue
            if kind is ElementKind.GRADIENT and not value.get("colors") and warnings is not None:
                warnings.append(f"Gradient '{value.get('name')}' has no colors")
        cleaned.append(value)
    return cleaned


def clean_value(value: Any, path: str | None = None, warnings: list[str] | None = None) -> Any:
    """
    Recursively strip nulls and empties. Returns DROP when nothing is left of an object
    or scalar; a list may come back empty. Idempotent.

    path is the schema path of value ("a.b", list items as "a.b[]"); None means unknown.
    """
    if value is None or value == "":
        return DROP
    if isinstance(value, list):
        return _clean_list(value, path, warnings)
    if isinstance(value, dict):
        cleaned = {}
        for key, val in value.items():
            c = clean_value(val, _child(path, key), warnings)
            if not _is_empty(c):
                cleaned[key] = c
        return cleaned if cleaned else DROP
    return value


# -----------------------------------------------------------------------------
# Untyped path access (any dotted path)
# -----------------------------------------------------------------------------

def get_path(data: dict, path: str, default: Any = None) -> Any:
    current: Any = data
    for key in path.split("."):
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current


def set_path(data: dict, path: str, value: Any) -> dict:
    """Copy of data with value at path; missing or null intermediates become {}."""
    out = deep_copy_json(data or {})
    keys = path.split(".")
    current = out
    for key in keys[:-1]:
        if current.get(key) is None:
            current[key] = {}
        current = current[key]
        if not isinstance(current, dict):
            raise TypeError(f"cannot descend into non-object at '{key}' while setting {path}")
    current[keys[-1]] = value
    return out


# -----------------------------------------------------------------------------
# Merge
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class AcceptedField:
    path: str
    value: Any


@dataclass
class FieldResult:
    path: str
    applied: bool
    reason: str | None = None
    warnings: list[str] = field(default_factory=list)


@dataclass
class MergeResult:
    data: dict
    results: list[FieldResult]

    @property
    def applied_count(self) -> int:
        return sum(1 for r in self.results if r.applied)

    @property
    def skipped(self) -> list[FieldResult]:
        return [r for r in self.results if not r.applied]


def _apply_one(data: dict, path: str, value: Any) -> FieldResult:
    spec = get_field_spec(path)
    if spec is None:
        return FieldResult(path, False, reason=f"Unknown field path '{path}'")
    warnings: list[str] = []
    cleaned = clean_value(value, path, warnings)
    if _is_empty(cleaned):
        return FieldResult(path, False, reason="Value is empty after cleaning")
    try:
        value = spec.validate(cleaned)
    except ValueError as e:
        return FieldResult(path, False, reason=f"Invalid value: {e}")
    spec.set(data, value)
    for w in warnings:
        logger.warning("%s: %s", path, w)
    return FieldResult(path, True, warnings=warnings)


def merge_accepted_fields(current: dict | None, accepted: Iterable[AcceptedField]) -> MergeResult:
    """
    Apply accepted pairs in order to a deep copy of current. Later pairs overwrite
    earlier ones on the same path. The input record is never mutated.
    """
    data = deep_copy_json(current or {})
    results: list[FieldResult] = []
    for pair in accepted:
        try:
            result = _apply_one(data, pair.path, pair.value)
        except Exception as e:
            logger.warning("Failed to set field %s: %s", pair.path, e)
            result = FieldResult(pair.path, False, reason=str(e))
        if not result.applied:
            logger.info("Skipped field %s: %s", pair.path, result.reason)
        results.append(result)
    return MergeResult(data=data, results=results)
