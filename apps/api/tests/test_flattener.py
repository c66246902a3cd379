"""Tests for flattening a candidate tree into reviewable fields."""

from brandbook.services.imports.flattener import (
    FlatField,
    flatten_fields,
    format_label,
    format_value,
    group_by_section,
    label_for,
    section_label,
)


TREE = {
    "foundations": {
        "general_business_information": {
            "business_name": "Bright Smiles",
            "tagline": "",
            "phone_numbers": ["555-0100"],
            "social_media_handles": {"instagram": None, "facebook": None},
        },
        "brand_identity": {
            "mission_statement": "Help people smile.",
            "core_values": [],
        },
    },
    "personality_and_tone": {
        "brand_archetype": {"primary": "Caregiver", "secondary": None},
    },
    "target_audiences": None,
    "visual_identity": {
        "color": {
            "palette": {
                "primary": [{"name": "Blue", "hex": "#0000FF"}],
            },
        },
    },
}


class TestFlattenFields:

    def test_paths_in_depth_first_order(self):
        paths = [f.path for f in flatten_fields(TREE)]
        assert paths == [
            "foundations.general_business_information.business_name",
            "foundations.general_business_information.phone_numbers",
            "foundations.brand_identity.mission_statement",
            "personality_and_tone.brand_archetype.primary",
            "visual_identity.color.palette.primary",
        ]

    def test_lists_are_one_unit(self):
        fields = {f.path: f for f in flatten_fields(TREE)}
        swatches = fields["visual_identity.color.palette.primary"]
        assert swatches.value == [{"name": "Blue", "hex": "#0000FF"}]
        assert swatches.section == "visual_identity"

    def test_section_is_first_segment(self):
        assert {f.section for f in flatten_fields(TREE)} == {
            "foundations",
            "personality_and_tone",
            "visual_identity",
        }

    def test_scalars_other_than_strings(self):
        fields = flatten_fields({"x": {"count": 0, "flag": False}})
        assert [(f.path, f.value) for f in fields] == [("x.count", 0), ("x.flag", False)]

    def test_non_object_tree(self):
        assert flatten_fields(None) == []
        assert flatten_fields(["a"]) == []

    def test_mission_statement_scenario(self):
        tree = {"foundations": {"brand_identity": {"mission_statement": "Our mission is to help people smile confidently."}}}
        assert flatten_fields(tree) == [
            FlatField(
                path="foundations.brand_identity.mission_statement",
                label="Mission Statement",
                value="Our mission is to help people smile confidently.",
                section="foundations",
            )
        ]


class TestLabels:

    def test_table_lookup(self):
        assert label_for("personality_and_tone.brand_archetype.primary") == "Primary Brand Archetype"
        assert label_for("foundations.general_business_information.website_url") == "Website URL"

    def test_title_case_fallback(self):
        assert label_for("visual_identity.typography.hierarchy.body") == "Body"
        assert format_label("visual_identity.logo.clear_space_requirements") == "Clear Space Requirements"

    def test_section_labels(self):
        assert section_label("personality_and_tone") == "Personality & Tone"
        assert section_label("something_else") == "Something Else"


def test_group_by_section_keeps_first_seen_order():
    grouped = group_by_section(flatten_fields(TREE))
    assert list(grouped) == ["foundations", "personality_and_tone", "visual_identity"]
    assert len(grouped["foundations"]) == 3


class TestFormatValue:

    def test_scalar_list(self):
        assert format_value(["warm", "direct", None]) == "warm, direct"

    def test_object_list(self):
        text = format_value([{"name": "Blue", "hex": "#0000FF"}, {"name": "Gray", "hex": "#888888", "rgb": None}])
        assert text == "#1\nName: Blue\nHex: #0000FF\n\n#2\nName: Gray\nHex: #888888"

    def test_object(self):
        assert format_value({"age_range": "25-45", "other": ["parents"]}) == "Age Range: 25-45\nOther: parents"

    def test_bool(self):
        assert format_value(True) == "true"
