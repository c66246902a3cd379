"""
LLM prompt templates for brand guidelines extraction.

Placeholders (double-brace, replace before sending to LLM) are documented per module.
"""

from .brand_guidelines import (
    PROMPT_VERSION,
    BRAND_GUIDELINES_SCHEMA,
    PROMPT_EXTRACT_BRAND_GUIDELINES,
    SECTION_LABELS,
    fill_prompt,
)

__all__ = [
    "PROMPT_VERSION",
    "BRAND_GUIDELINES_SCHEMA",
    "PROMPT_EXTRACT_BRAND_GUIDELINES",
    "SECTION_LABELS",
    "fill_prompt",
]
