"""Shared utilities."""

import copy
from typing import Any


def strip_json_from_response(raw: str) -> str:
    """Strip a leading ```json / ``` fence and a trailing ``` fence from an LLM response."""
    s = (raw or "").strip()
    if s.startswith("```json"):
        s = s[7:]
    if s.startswith("```"):
        s = s[3:]
    if s.endswith("```"):
        s = s[:-3]
    return s.strip()


def deep_copy_json(value: Any) -> Any:
    """Independent copy of a JSON-shaped value (dicts, lists, scalars)."""
    return copy.deepcopy(value)
