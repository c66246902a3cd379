"""
Flatten a CandidateFieldTree into reviewable FlatFields, grouped by top-level section.

Lists are reviewed as one unit (one FlatField for the whole list); objects are walked.
"""

import json
from dataclasses import dataclass
from typing import Any

from brandbook.prompts import SECTION_LABELS


@dataclass(frozen=True)
class FlatField:
    path: str
    label: str
    value: Any
    section: str


# Path -> human label for the fields reviewers see most; others are title-cased from the last segment
FIELD_LABELS: dict[str, str] = {
    "foundations.general_business_information.business_name": "Business Name",
    "foundations.general_business_information.tagline": "Tagline",
    "foundations.general_business_information.website_url": "Website URL",
    "foundations.brand_identity.mission_statement": "Mission Statement",
    "foundations.brand_identity.vision_statement": "Vision Statement",
    "foundations.brand_identity.core_values": "Core Values",
    "foundations.brand_identity.brand_story": "Brand Story",
    "foundations.brand_identity.unique_value_proposition": "Unique Value Proposition",
    "foundations.brand_identity.differentiators": "Differentiators",
    "personality_and_tone.brand_personality_traits": "Brand Personality Traits",
    "personality_and_tone.brand_archetype.primary": "Primary Brand Archetype",
    "personality_and_tone.brand_archetype.secondary": "Secondary Brand Archetype",
    "personality_and_tone.voice_characteristics": "Voice Characteristics",
    "personality_and_tone.inclusive_language_standards": "Inclusive Language Standards",
    "target_audiences.primary_audience.demographics": "Primary Audience Demographics",
    "target_audiences.primary_audience.psychographics": "Primary Audience Psychographics",
    "target_audiences.primary_audience.pain_points": "Primary Audience Pain Points",
    "target_audiences.primary_audience.goals_and_motivations": "Primary Audience Goals",
}


def _title_words(key: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in key.split("_"))


def format_label(path: str) -> str:
    """'brand_identity.mission_statement' -> 'Mission Statement'."""
    return _title_words(path.split(".")[-1])


def label_for(path: str) -> str:
    return FIELD_LABELS.get(path) or format_label(path)


def flatten_fields(tree: Any, prefix: str = "") -> list[FlatField]:
    """Walk the tree depth-first in key order. Nulls and empty strings are skipped."""
    fields: list[FlatField] = []
    if not isinstance(tree, dict):
        return fields
    for key, value in tree.items():
        path = f"{prefix}.{key}" if prefix else key
        section = path.split(".")[0]
        if value is None or value == "":
            continue
        if isinstance(value, list):
            if value:
                fields.append(FlatField(path, label_for(path), value, section))
        elif isinstance(value, dict):
            fields.extend(flatten_fields(value, path))
        elif isinstance(value, (str, int, float, bool)):
            fields.append(FlatField(path, label_for(path), value, section))
    return fields


def group_by_section(fields: list[FlatField]) -> dict[str, list[FlatField]]:
    """Section -> fields, sections in first-seen order."""
    grouped: dict[str, list[FlatField]] = {}
    for f in fields:
        grouped.setdefault(f.section, []).append(f)
    return grouped


def section_label(section: str) -> str:
    return SECTION_LABELS.get(section, _title_words(section))


# -----------------------------------------------------------------------------
# Display
# -----------------------------------------------------------------------------

def _scalar_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _format_object(obj: dict, index: int | None = None) -> str:
    lines: list[str] = []
    if index is not None:
        lines.append(f"#{index}")
    for key, val in obj.items():
        if val is None or val == "":
            continue
        label = _title_words(key)
        if isinstance(val, list):
            if not val:
                continue
            if isinstance(val[0], (dict, list)):
                lines.append(f"{label}: {json.dumps(val, ensure_ascii=False)}")
            else:
                lines.append(f"{label}: {', '.join(_scalar_text(v) for v in val)}")
        elif isinstance(val, dict):
            lines.append(f"{label}: {json.dumps(val, ensure_ascii=False)}")
        else:
            lines.append(f"{label}: {_scalar_text(val)}")
    return "\n".join(lines)


def format_value(value: Any) -> str:
    """Reviewer-facing text for a FlatField value."""
    if isinstance(value, list):
        if value and isinstance(value[0], dict):
            return "\n\n".join(
                _format_object(item, i + 1) if isinstance(item, dict) else _scalar_text(item)
                for i, item in enumerate(value)
            )
        return ", ".join(_scalar_text(v) for v in value if v is not None)
    if isinstance(value, dict):
        return _format_object(value)
    return _scalar_text(value)
