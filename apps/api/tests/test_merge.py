"""Tests for value cleaning and merging accepted fields into a client record."""

import copy
import json

import pytest

from brandbook.domain import ElementKind, empty_client_data, validate_client_data
from brandbook.services.imports.merge import (
    DROP,
    AcceptedField,
    clean_value,
    detect_element_kind,
    get_path,
    merge_accepted_fields,
    set_path,
)


@pytest.fixture
def record():
    data = empty_client_data("Bright Smiles")
    data["foundations"]["brand_identity"]["core_values"] = ["Care", "Honesty"]
    data["visual_identity"] = {"color": {"palette": {"secondary": [{"name": "Mint", "hex": "#98FF98"}]}}}
    return data


# =============================================================================
# Cleaning
# =============================================================================


class TestCleanValue:

    def test_null_and_empty_string_drop(self):
        assert clean_value(None) is DROP
        assert clean_value("") is DROP

    def test_scalars_pass_through(self):
        assert clean_value("x") == "x"
        assert clean_value(0) == 0
        assert clean_value(False) is False

    def test_object_keeps_non_empty_properties(self):
        assert clean_value({"a": None, "b": "", "c": [], "d": {"e": None}, "f": "kept"}) == {"f": "kept"}

    def test_empty_object_drops(self):
        assert clean_value({"a": None}) is DROP

    def test_list_drops_empty_elements(self):
        assert clean_value(["a", None, "", {}, {"x": None}, "b"]) == ["a", "b"]

    def test_list_may_come_back_empty(self):
        assert clean_value([None, ""]) == []

    def test_example_colour_array(self):
        value = [{"name": "Blue", "hex": "#0000FF"}, {"rgb": "0,0,0"}]
        assert clean_value(value, "visual_identity.color.palette.primary") == [{"name": "Blue", "hex": "#0000FF"}]
        assert clean_value(value) == [{"name": "Blue", "hex": "#0000FF"}]

    def test_swatch_drop_preserves_order(self):
        value = [
            {"name": "A", "hex": "#000001"},
            {"hex": "#000002"},
            {"name": "B", "hex": "#000003"},
            {"pantone": "286 C"},
            {"name": "C", "hex": "#000004", "cmyk": None},
        ]
        assert clean_value(value) == [
            {"name": "A", "hex": "#000001"},
            {"name": "B", "hex": "#000003"},
            {"name": "C", "hex": "#000004"},
        ]

    def test_swatch_missing_hex_dropped(self):
        assert clean_value([{"name": "Teal", "rgb": "0,128,128"}]) == []

    def test_gradient_requires_name_and_type(self):
        value = [
            {"name": "Sunrise", "type": "linear", "colors": ["#f00", "#ff0"]},
            {"type": "radial", "colors": ["#000"]},
        ]
        assert clean_value(value, "visual_identity.color.gradients") == [
            {"name": "Sunrise", "type": "linear", "colors": ["#f00", "#ff0"]}
        ]

    def test_gradient_without_colors_warns(self):
        warnings: list[str] = []
        cleaned = clean_value([{"name": "Flat", "type": "linear"}], "visual_identity.color.gradients", warnings)
        assert cleaned == [{"name": "Flat", "type": "linear"}]
        assert warnings == ["Gradient 'Flat' has no colors"]

    def test_generic_objects_only_null_stripped(self):
        value = [{"name": "Dr. Lee", "bio": None}, {"credentials": "DDS"}]
        assert clean_value(value, "foundations.services_and_providers.providers") == [
            {"name": "Dr. Lee"},
            {"credentials": "DDS"},
        ]

    def test_declared_kind_beats_sniffing(self):
        # Sniffing would call this a gradient and drop it for lacking a name
        value = [{"type": "linear", "name": None, "url": "https://acme.com"}]
        assert clean_value(value) == []
        assert clean_value(value, "foundations.general_business_information.other_media") == [
            {"type": "linear", "url": "https://acme.com"}
        ]
        # Inside a swatch list a gradient-shaped object is held to swatch requirements
        gradient_like = [{"name": "G", "type": "linear"}]
        assert clean_value(gradient_like) == gradient_like
        assert clean_value(gradient_like, "visual_identity.color.palette.primary") == []

    @pytest.mark.parametrize(
        "value",
        [
            None,
            "",
            "text",
            [None, {"name": "Blue", "hex": "#00F"}, {"rgb": "1,2,3"}],
            {"a": {"b": {"c": None}}, "d": [{"type": "linear", "name": "G"}, {"type": "radial"}]},
            {"palette": {"primary": [{"name": "X", "hex": "#111", "pantone": ""}]}},
        ],
    )
    def test_idempotent(self, value):
        once = clean_value(value)
        assert clean_value(once) == once


class TestDetectElementKind:

    @pytest.mark.parametrize(
        "obj,kind",
        [
            ({"hex": "#fff"}, ElementKind.SWATCH),
            ({"name": "Blue", "rgb": "0,0,255"}, ElementKind.SWATCH),
            ({"cmyk": "0,0,0,0"}, ElementKind.SWATCH),
            ({"type": "linear"}, ElementKind.GRADIENT),
            ({"type": "radial", "name": "R"}, ElementKind.GRADIENT),
            ({"type": "conic"}, ElementKind.GENERIC),
            ({"name": "Plain"}, ElementKind.GENERIC),
        ],
    )
    def test_sniffing(self, obj, kind):
        assert detect_element_kind(obj) == kind


# =============================================================================
# Path access
# =============================================================================


class TestPaths:

    def test_set_then_get(self, record):
        path = "personality_and_tone.brand_archetype.primary"
        result = set_path(record, path, "Caregiver")
        assert get_path(result, path) == "Caregiver"
        # every other path unchanged
        result["personality_and_tone"]["brand_archetype"].pop("primary")
        if not result["personality_and_tone"]["brand_archetype"]:
            result["personality_and_tone"].pop("brand_archetype")
        assert result == record

    def test_set_does_not_mutate_input(self, record):
        before = copy.deepcopy(record)
        set_path(record, "target_audiences.primary_audience.pain_points", ["cost"])
        assert record == before

    def test_null_intermediate_becomes_object(self):
        result = set_path({"a": None}, "a.b.c", 1)
        assert result == {"a": {"b": {"c": 1}}}

    def test_get_missing(self, record):
        assert get_path(record, "visual_identity.logo.clear_space_requirements") is None
        assert get_path(record, "foundations.brand_identity.core_values.0", "dflt") == "dflt"

    def test_cannot_descend_into_scalar(self):
        with pytest.raises(TypeError):
            set_path({"a": "scalar"}, "a.b", 1)


# =============================================================================
# Merge
# =============================================================================


class TestMergeAcceptedFields:

    def test_writes_value_and_leaves_rest(self, record):
        result = merge_accepted_fields(
            record,
            [AcceptedField("foundations.brand_identity.mission_statement", "Help people smile.")],
        )
        assert result.applied_count == 1
        assert result.data["foundations"]["brand_identity"]["mission_statement"] == "Help people smile."
        assert result.data["foundations"]["brand_identity"]["core_values"] == ["Care", "Honesty"]
        assert result.data["visual_identity"] == record["visual_identity"]
        assert "mission_statement" not in record["foundations"]["brand_identity"]

    def test_creates_intermediate_containers(self, record):
        result = merge_accepted_fields(
            record,
            [AcceptedField("visual_identity.typography.primary_typeface.name", "Inter")],
        )
        assert result.data["visual_identity"]["typography"] == {"primary_typeface": {"name": "Inter"}}
        assert result.data["visual_identity"]["color"] == record["visual_identity"]["color"]

    def test_overwrites_existing_list(self, record):
        result = merge_accepted_fields(
            record,
            [AcceptedField("foundations.brand_identity.core_values", ["Trust", None, ""])],
        )
        assert result.data["foundations"]["brand_identity"]["core_values"] == ["Trust"]

    @pytest.mark.parametrize("value", [None, "", [], {}, [None, ""], {"a": None}, [{"rgb": "0,0,0"}]])
    def test_empty_after_cleaning_is_a_no_op(self, record, value):
        path = "visual_identity.color.palette.secondary"
        before = json.dumps(record, sort_keys=True)
        result = merge_accepted_fields(record, [AcceptedField(path, value)])
        assert json.dumps(result.data, sort_keys=True) == before
        assert result.applied_count == 0
        assert result.results[0].reason == "Value is empty after cleaning"

    def test_later_pairs_overwrite_earlier(self, record):
        path = "foundations.general_business_information.tagline"
        result = merge_accepted_fields(record, [AcceptedField(path, "First"), AcceptedField(path, "Second")])
        assert get_path(result.data, path) == "Second"
        assert result.applied_count == 2

    def test_unknown_path_skipped_with_reason(self, record):
        result = merge_accepted_fields(
            record,
            [
                AcceptedField("foundations.brand_identity.favourite_colour", "Blue"),
                AcceptedField("foundations.brand_identity.vision_statement", "A smile for everyone."),
            ],
        )
        skipped, applied = result.results
        assert not skipped.applied
        assert skipped.reason == "Unknown field path 'foundations.brand_identity.favourite_colour'"
        assert applied.applied
        assert "favourite_colour" not in result.data["foundations"]["brand_identity"]

    def test_wrong_shape_skipped(self, record):
        result = merge_accepted_fields(
            record,
            [AcceptedField("foundations.brand_identity.core_values", "not a list")],
        )
        assert result.applied_count == 0
        assert result.results[0].reason.startswith("Invalid value:")
        assert result.data == record

    def test_coercible_value_is_stored_in_declared_type(self, record):
        path = "foundations.services_and_providers.providers"
        result = merge_accepted_fields(
            record,
            [AcceptedField(path, [{"name": "Dr A", "headshot": {"uploaded_at": "12.5"}}])],
        )
        assert result.results[0].applied
        (provider,) = get_path(result.data, path)
        assert provider == {"name": "Dr A", "headshot": {"uploaded_at": 12.5}}
        assert isinstance(provider["headshot"]["uploaded_at"], float)
        assert validate_client_data(result.data) == result.data

    def test_unexpected_error_does_not_abort_batch(self, record):
        broken = copy.deepcopy(record)
        broken["personality_and_tone"] = {"brand_archetype": "not an object"}
        result = merge_accepted_fields(
            broken,
            [
                AcceptedField("personality_and_tone.brand_archetype.primary", "Sage"),
                AcceptedField("foundations.general_business_information.tagline", "Smile more"),
            ],
        )
        first, second = result.results
        assert not first.applied
        assert "brand_archetype" in first.reason
        assert second.applied
        assert get_path(result.data, "foundations.general_business_information.tagline") == "Smile more"

    def test_gradient_warning_on_result(self, record):
        result = merge_accepted_fields(
            record,
            [AcceptedField("visual_identity.color.gradients", [{"name": "Flat", "type": "radial"}])],
        )
        assert result.results[0].applied
        assert result.results[0].warnings == ["Gradient 'Flat' has no colors"]

    def test_merged_record_still_validates(self, record):
        result = merge_accepted_fields(
            record,
            [
                AcceptedField(
                    "visual_identity.color.palette.primary",
                    [{"name": "Blue", "hex": "#0000FF"}, {"rgb": "0,0,0"}],
                ),
                AcceptedField("target_audiences.customer_personas", [{"name": "Pat", "goals": ["whiter teeth"]}]),
                AcceptedField("visual_identity.logo.logo_lockups", [{"name": "Main", "type": "primary"}]),
            ],
        )
        assert result.applied_count == 3
        assert validate_client_data(result.data) == result.data
        assert get_path(result.data, "visual_identity.color.palette.primary") == [{"name": "Blue", "hex": "#0000FF"}]

    def test_merge_is_idempotent(self, record):
        pairs = [
            AcceptedField("foundations.brand_identity.core_values", ["Care"]),
            AcceptedField("visual_identity.color.gradients", [{"name": "G", "type": "linear", "colors": ["#000"]}]),
        ]
        once = merge_accepted_fields(record, pairs).data
        twice = merge_accepted_fields(once, pairs).data
        assert once == twice

    def test_none_record(self):
        result = merge_accepted_fields(None, [AcceptedField("foundations.brand_identity.brand_story", "Since 1999")])
        assert result.data == {"foundations": {"brand_identity": {"brand_story": "Since 1999"}}}
