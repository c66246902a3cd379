"""
Field extraction: normalized text + schema prompt -> CandidateFieldTree via the chat provider.
"""

import json
import logging
from typing import Any

from brandbook.core import get_settings
from brandbook.prompts import PROMPT_EXTRACT_BRAND_GUIDELINES, fill_prompt
from brandbook.providers import ChatProvider
from brandbook.utils import strip_json_from_response

from .errors import JsonParseError

logger = logging.getLogger(__name__)


def build_extraction_prompt(text: str, target_sections: list[str] | None = None) -> str:
    return fill_prompt(
        PROMPT_EXTRACT_BRAND_GUIDELINES,
        document_text=text,
        target_sections=target_sections,
    )


def parse_candidate_tree(raw: str) -> dict[str, Any]:
    """Parse the model reply (fences tolerated) into a JSON object. Raises JsonParseError."""
    cleaned = strip_json_from_response(raw)
    try:
        tree = json.loads(cleaned)
    except ValueError as e:
        raise JsonParseError(f"Failed to parse model response as JSON: {e}", e) from e
    if not isinstance(tree, dict):
        raise JsonParseError(
            f"Failed to parse model response as JSON: expected an object, got {type(tree).__name__}"
        )
    return tree


async def extract_candidate_fields(
    text: str,
    chat: ChatProvider,
    target_sections: list[str] | None = None,
) -> dict[str, Any]:
    """
    One model call with the schema prompt and document text. Returns the parsed tree.
    ChatServiceError (transport, auth, rate limit) propagates; JsonParseError on bad output.
    """
    prompt = build_extraction_prompt(text, target_sections)
    raw = await chat.chat(prompt, max_tokens=get_settings().extraction_max_tokens)
    tree = parse_candidate_tree(raw)
    logger.info("Extracted candidate tree with sections: %s", ", ".join(tree) or "(none)")
    return tree
