"""
Brand guidelines extraction prompt.

One user turn: schema description + document text. The model must answer with a
single JSON object mirroring (a subset of) the ClientRecord, using null for every
field the document does not state. Bump PROMPT_VERSION whenever the schema block
changes so stored candidate trees can be traced to the prompt that produced them.

Placeholders (double-brace, replace before sending to LLM):
  - {{DOCUMENT_TEXT}}: normalized plain text of the imported document
  - {{SECTION_FOCUS}}: optional line naming the sections the operator cares about
"""

PROMPT_VERSION = "2025-01"

BRAND_GUIDELINES_SCHEMA = """
Extract brand guidelines information from the document into this JSON structure.
Only include fields that have clear information in the document. Use null for missing fields.

{
  "foundations": {
    "general_business_information": {
      "business_name": "string or null",
      "tagline": "string or null",
      "website_url": "string or null",
      "contact_page_url": "string or null",
      "phone_numbers": ["array of strings"] or null,
      "physical_addresses": [{"street": "string", "city": "string", "state": "string", "zip": "string"}] or null,
      "hours_of_operation": "string or null",
      "social_media_handles": {
        "instagram": "string or null",
        "facebook": "string or null",
        "linkedin": "string or null",
        "tiktok": "string or null",
        "youtube": "string or null",
        "twitter": "string or null"
      } or null,
      "other_media": [{"type": "string", "name": "string", "url": "string"}] or null
    },
    "brand_identity": {
      "mission_statement": "string or null",
      "vision_statement": "string or null",
      "core_values": ["array of value strings"] or null,
      "brand_story": "string or null",
      "unique_value_proposition": "string or null",
      "differentiators": ["array of strings"] or null
    },
    "services_and_providers": {
      "services": [{"name": "string", "page_url": "string or null"}] or null,
      "key_services_to_promote": [{"service_name": "string", "key_messaging_points": ["array of strings"]}] or null,
      "providers": [{"name": "string", "credentials": "string or null", "bio": "string or null", "services_offered": ["array of strings"]}] or null
    }
  },
  "personality_and_tone": {
    "brand_personality_traits": ["array of trait strings"] or null,
    "brand_archetype": {
      "primary": "string or null",
      "secondary": "string or null"
    } or null,
    "voice_characteristics": ["array of characteristic strings"] or null,
    "tone_variations_by_context": {
      "website_copy": "string or null",
      "social_media": "string or null",
      "advertising": "string or null",
      "email_marketing": "string or null",
      "client_to_patient_communication": "string or null",
      "agency_to_client_communications": "string or null"
    } or null,
    "language_guidelines": {
      "preferred_terminology": [{"use": "string", "instead_of": "string"}] or null,
      "words_to_avoid": ["array of strings"] or null,
      "industry_specific_language": ["array of strings"] or null
    } or null,
    "inclusive_language_standards": ["array of strings"] or null
  },
  "target_audiences": {
    "primary_audience": {
      "demographics": {
        "age_range": "string or null",
        "gender": "string or null",
        "income": "string or null",
        "location": "string or null",
        "other": ["array of other demographic details"] or null
      } or null,
      "psychographics": ["array of psychographic traits/behaviors"] or null,
      "pain_points": ["array of pain points/concerns"] or null,
      "goals_and_motivations": ["array of goals/motivations"] or null
    } or null,
    "secondary_audiences": [
      {
        "name": "string - name/label for this audience segment",
        "demographics": {
          "age_range": "string or null",
          "gender": "string or null",
          "income": "string or null",
          "location": "string or null",
          "other": ["array of strings"] or null
        } or null,
        "psychographics": ["array of strings"] or null,
        "pain_points": ["array of strings"] or null,
        "goals_and_motivations": ["array of strings"] or null
      }
    ] or null,
    "customer_personas": [
      {
        "name": "string - persona name (e.g., 'Executive Emily')",
        "age": "string - age or age range",
        "occupation": "string - job title or profession",
        "background": "string - brief background description",
        "goals": ["array of persona goals"] or null,
        "pain_points": ["array of persona pain points/hesitations"] or null,
        "how_we_reach_them": "string - how to reach/market to this persona"
      }
    ] or null,
    "patient_client_journey": {
      "awareness": {
        "touchpoints": ["array of touchpoints/channels"] or null,
        "thoughts_feelings": "string - what they think/feel at this stage"
      } or null,
      "consideration": {
        "touchpoints": ["array of touchpoints"] or null,
        "thoughts_feelings": "string"
      } or null,
      "decision": {
        "touchpoints": ["array of touchpoints"] or null,
        "thoughts_feelings": "string"
      } or null,
      "experience": {
        "touchpoints": ["array of touchpoints"] or null,
        "thoughts_feelings": "string"
      } or null,
      "loyalty": {
        "touchpoints": ["array of touchpoints"] or null,
        "thoughts_feelings": "string"
      } or null
    } or null
  },
  "visual_identity": {
    "logo": {
      "minimum_size_requirements": {
        "print": "string or null",
        "digital": "string or null"
      } or null,
      "clear_space_requirements": "string or null",
      "unacceptable_usage": ["array of logo usage rules to avoid"] or null
    } or null,
    "color": {
      "palette": {
        "primary": [{"name": "string", "hex": "#XXXXXX", "rgb": "string or null", "cmyk": "string or null", "pantone": "string or null"}] or null,
        "secondary": [{"name": "string", "hex": "#XXXXXX", "rgb": "string or null", "cmyk": "string or null", "pantone": "string or null"}] or null,
        "tertiary": [{"name": "string", "hex": "#XXXXXX"}] or null,
        "gray": [{"name": "string", "hex": "#XXXXXX"}] or null
      } or null,
      "gradients": [{"name": "string", "type": "linear or radial", "colors": ["array of hex colors"], "css": "string or null"}] or null,
      "color_schemes": ["array of scheme descriptions"] or null,
      "accessibility": {
        "body_text_contrast_ratio": "string or null",
        "large_text_contrast_ratio": "string or null",
        "notes": "string or null"
      } or null
    } or null,
    "typography": {
      "primary_typeface": {
        "name": "string or null",
        "weights": ["array of weight names like 'Regular', 'Bold'"] or null,
        "usage": "string or null",
        "source_url": "string or null"
      } or null,
      "secondary_typeface": {
        "name": "string or null",
        "weights": ["array of weight names"] or null,
        "usage": "string or null",
        "source_url": "string or null"
      } or null,
      "web_safe_fallbacks": {
        "serif": "string or null",
        "sans_serif": "string or null"
      } or null,
      "hierarchy": {
        "h1": "string or null",
        "h2": "string or null",
        "h3": "string or null",
        "h4": "string or null",
        "body": "string or null",
        "caption": "string or null"
      } or null,
      "accessibility": {
        "minimum_body_size": "string or null",
        "line_height": "string or null",
        "notes": "string or null"
      } or null
    } or null,
    "photography_and_imagery": {
      "style_guidelines": ["array of photography style guidelines"] or null,
      "subject_matter": ["array of preferred subject matter"] or null,
      "image_treatment_and_filters": ["array of filter/treatment guidelines"] or null,
      "stock_photography_guidelines": ["array of stock photo rules"] or null,
      "alt_text_guidelines": ["array of alt text best practices"] or null
    } or null,
    "graphic_elements": {
      "icons": {"style": "string or null", "usage": "string or null"} or null,
      "patterns": {"description": "string or null", "usage": "string or null"} or null,
      "textures": {"description": "string or null", "usage": "string or null"} or null,
      "illustrations": {"style": "string or null", "usage": "string or null"} or null
    } or null,
    "digital_applications": {
      "website_elements": {
        "page_layout_and_grid": "string or null",
        "styles_and_effects": {
          "corner_radius": "string or null",
          "drop_shadows": "string or null",
          "other": ["array of other style notes"] or null
        } or null
      } or null,
      "email_signature": {"format": "string or null"} or null
    } or null
  }
}

Important:
- Extract ONLY information explicitly stated in the document
- Never guess: if the document does not state a field, set it to null
- For colors, extract hex codes if provided (format: #XXXXXX)
- For gradients, "type" must be exactly "linear" or "radial"
- For arrays, include all relevant items found
- For target audiences, extract demographics, psychographics, pain points, goals, and personas
- For customer journey, extract touchpoints and emotional states at each stage
- Return valid JSON only, no markdown or explanations
"""

PROMPT_EXTRACT_BRAND_GUIDELINES = BRAND_GUIDELINES_SCHEMA + """{{SECTION_FOCUS}}
Here is the document text to extract from:

---
{{DOCUMENT_TEXT}}
---

Return ONLY the JSON object with extracted fields. No explanations or markdown."""

SECTION_LABELS: dict[str, str] = {
    "foundations": "Foundations",
    "personality_and_tone": "Personality & Tone",
    "target_audiences": "Target Audiences",
    "visual_identity": "Visual Identity",
}


def fill_prompt(
    template: str,
    *,
    document_text: str | None = None,
    target_sections: list[str] | None = None,
) -> str:
    """Replace placeholders in a prompt template. Keys match {{PLACEHOLDER}} names (lowercase with underscores)."""
    out = template
    focus = ""
    if target_sections:
        names = ", ".join(SECTION_LABELS.get(s, s) for s in target_sections)
        focus = f"\nThe operator is most interested in these sections: {names}. Still use null for anything not stated.\n"
    out = out.replace("{{SECTION_FOCUS}}", focus)
    if document_text is not None:
        out = out.replace("{{DOCUMENT_TEXT}}", document_text)
    return out
