"""Tests for field extraction: prompt building, reply parsing, provider call."""

import pytest

from brandbook.core import get_settings
from brandbook.prompts import SECTION_LABELS
from brandbook.providers import ChatServiceError
from brandbook.services.imports.errors import JsonParseError
from brandbook.services.imports.extractor import (
    build_extraction_prompt,
    extract_candidate_fields,
    parse_candidate_tree,
)
from brandbook.utils import strip_json_from_response

from conftest import FakeChat


class TestStripJsonFromResponse:

    def test_json_fence(self):
        assert strip_json_from_response('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_plain_fence(self):
        assert strip_json_from_response('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_no_fence(self):
        assert strip_json_from_response('  {"a": 1}  ') == '{"a": 1}'

    def test_none(self):
        assert strip_json_from_response(None) == ""


class TestBuildExtractionPrompt:

    def test_embeds_document_text(self):
        prompt = build_extraction_prompt("Our mission is to help people smile confidently.")
        assert "Our mission is to help people smile confidently." in prompt
        assert "{{DOCUMENT_TEXT}}" not in prompt
        assert "{{SECTION_FOCUS}}" not in prompt
        assert '"mission_statement"' in prompt

    def test_target_sections_named(self):
        prompt = build_extraction_prompt("text", ["visual_identity"])
        assert SECTION_LABELS["visual_identity"] in prompt


class TestParseCandidateTree:

    def test_fenced_object(self):
        tree = parse_candidate_tree('```json\n{"foundations": {"brand_identity": {"mission_statement": null}}}\n```')
        assert tree == {"foundations": {"brand_identity": {"mission_statement": None}}}

    def test_invalid_json(self):
        with pytest.raises(JsonParseError) as exc:
            parse_candidate_tree("Sure! Here is the JSON you asked for.")
        assert exc.value.message.startswith("Failed to parse model response as JSON")

    def test_non_object_rejected(self):
        with pytest.raises(JsonParseError):
            parse_candidate_tree("[1, 2, 3]")


class TestExtractCandidateFields:

    @pytest.mark.asyncio
    async def test_single_call_with_max_tokens(self):
        chat = FakeChat(reply='{"personality_and_tone": {"voice_characteristics": ["warm"]}}')
        tree = await extract_candidate_fields("Voice: warm.", chat)
        assert tree == {"personality_and_tone": {"voice_characteristics": ["warm"]}}
        assert len(chat.prompts) == 1
        assert "Voice: warm." in chat.prompts[0]
        assert chat.max_tokens == [get_settings().extraction_max_tokens]

    @pytest.mark.asyncio
    async def test_provider_errors_propagate(self):
        chat = FakeChat(error=ChatServiceError("Anthropic API returned 500. Please try again later."))
        with pytest.raises(ChatServiceError):
            await extract_candidate_fields("text", chat)
