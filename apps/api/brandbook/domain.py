"""
Brand guidelines ClientRecord schema.

Every leaf is optional: absence is the default state. Models forbid unknown keys so
a record that validates here has the declared type at every known path.

List-of-object fields declare their element kind statically through the element
model's `element_kind` class variable (swatch, gradient, generic). FIELD_SPECS is
generated once from these models and is the typed accessor table used by the merge
engine: one FieldSpec (segments, kind, element kind, shape validator) per path.
"""

from __future__ import annotations

import types
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Literal, Optional, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError


class ElementKind(str, Enum):
    """Declared kind of the objects inside a list field."""
    SWATCH = "swatch"
    GRADIENT = "gradient"
    GENERIC = "generic"


class FieldKind(str, Enum):
    SCALAR = "scalar"
    LIST = "list"
    OBJECT = "object"


# Required keys per element kind; elements missing any are dropped when cleaned.
REQUIRED_FIELDS_BY_KIND: dict[ElementKind, tuple[str, ...]] = {
    ElementKind.SWATCH: ("name", "hex"),
    ElementKind.GRADIENT: ("name", "type"),
}


class _Strict(BaseModel):
    model_config = ConfigDict(extra="forbid")

    element_kind: ClassVar[ElementKind] = ElementKind.GENERIC


# =============================================================================
# Shared value objects
# =============================================================================

class Asset(_Strict):
    type: Optional[Literal["upload", "url"]] = None
    file_id: Optional[str] = None
    url: Optional[str] = None
    filename: Optional[str] = None
    alt_text: Optional[str] = None
    uploaded_at: Optional[float] = None


class ColorSwatch(_Strict):
    element_kind: ClassVar[ElementKind] = ElementKind.SWATCH

    name: Optional[str] = None
    hex: Optional[str] = None
    rgb: Optional[str] = None
    cmyk: Optional[str] = None
    pantone: Optional[str] = None


class Gradient(_Strict):
    element_kind: ClassVar[ElementKind] = ElementKind.GRADIENT

    name: Optional[str] = None
    type: Optional[Literal["linear", "radial"]] = None
    colors: Optional[list[str]] = None
    css: Optional[str] = None


class Demographics(_Strict):
    age_range: Optional[str] = None
    gender: Optional[str] = None
    income: Optional[str] = None
    location: Optional[str] = None
    other: Optional[list[str]] = None


class JourneyStage(_Strict):
    touchpoints: Optional[list[str]] = None
    thoughts_feelings: Optional[str] = None


# =============================================================================
# Foundations
# =============================================================================

class PhysicalAddress(_Strict):
    label: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None


class SocialMediaHandles(_Strict):
    instagram: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    tiktok: Optional[str] = None
    youtube: Optional[str] = None
    twitter: Optional[str] = None


class OtherMedia(_Strict):
    type: Optional[str] = None
    name: Optional[str] = None
    url: Optional[str] = None


class GeneralBusinessInformation(_Strict):
    business_name: Optional[str] = None
    tagline: Optional[str] = None
    website_url: Optional[str] = None
    contact_page_url: Optional[str] = None
    phone_numbers: Optional[list[str]] = None
    physical_addresses: Optional[list[PhysicalAddress]] = None
    hours_of_operation: Optional[str] = None
    social_media_handles: Optional[SocialMediaHandles] = None
    other_media: Optional[list[OtherMedia]] = None


class BrandIdentity(_Strict):
    mission_statement: Optional[str] = None
    vision_statement: Optional[str] = None
    core_values: Optional[list[str]] = None
    brand_story: Optional[str] = None
    unique_value_proposition: Optional[str] = None
    differentiators: Optional[list[str]] = None


class Service(_Strict):
    name: Optional[str] = None
    page_url: Optional[str] = None


class KeyServiceToPromote(_Strict):
    service_name: Optional[str] = None
    key_messaging_points: Optional[list[str]] = None


class Provider(_Strict):
    name: Optional[str] = None
    credentials: Optional[str] = None
    bio: Optional[str] = None
    services_offered: Optional[list[str]] = None
    headshot: Optional[Asset] = None


class ServicesAndProviders(_Strict):
    services: Optional[list[Service]] = None
    key_services_to_promote: Optional[list[KeyServiceToPromote]] = None
    providers: Optional[list[Provider]] = None


class Foundations(_Strict):
    general_business_information: GeneralBusinessInformation = Field(default_factory=GeneralBusinessInformation)
    brand_identity: BrandIdentity = Field(default_factory=BrandIdentity)
    services_and_providers: ServicesAndProviders = Field(default_factory=ServicesAndProviders)


# =============================================================================
# Personality & tone
# =============================================================================

class BrandArchetype(_Strict):
    primary: Optional[str] = None
    secondary: Optional[str] = None


class ToneVariationsByContext(_Strict):
    website_copy: Optional[str] = None
    social_media: Optional[str] = None
    advertising: Optional[str] = None
    email_marketing: Optional[str] = None
    client_to_patient_communication: Optional[str] = None
    agency_to_client_communications: Optional[str] = None


class PreferredTerminology(_Strict):
    use: Optional[str] = None
    instead_of: Optional[str] = None


class LanguageGuidelines(_Strict):
    preferred_terminology: Optional[list[PreferredTerminology]] = None
    words_to_avoid: Optional[list[str]] = None
    industry_specific_language: Optional[list[str]] = None


class PersonalityAndTone(_Strict):
    brand_personality_traits: Optional[list[str]] = None
    brand_archetype: Optional[BrandArchetype] = None
    voice_characteristics: Optional[list[str]] = None
    tone_variations_by_context: Optional[ToneVariationsByContext] = None
    language_guidelines: Optional[LanguageGuidelines] = None
    inclusive_language_standards: Optional[list[str]] = None


# =============================================================================
# Target audiences
# =============================================================================

class PrimaryAudience(_Strict):
    demographics: Optional[Demographics] = None
    psychographics: Optional[list[str]] = None
    pain_points: Optional[list[str]] = None
    goals_and_motivations: Optional[list[str]] = None


class SecondaryAudience(_Strict):
    name: Optional[str] = None
    demographics: Optional[Demographics] = None
    psychographics: Optional[list[str]] = None
    pain_points: Optional[list[str]] = None
    goals_and_motivations: Optional[list[str]] = None


class CustomerPersona(_Strict):
    name: Optional[str] = None
    age: Optional[str] = None
    occupation: Optional[str] = None
    background: Optional[str] = None
    goals: Optional[list[str]] = None
    pain_points: Optional[list[str]] = None
    how_we_reach_them: Optional[str] = None
    image: Optional[Asset] = None


class PatientClientJourney(_Strict):
    awareness: Optional[JourneyStage] = None
    consideration: Optional[JourneyStage] = None
    decision: Optional[JourneyStage] = None
    experience: Optional[JourneyStage] = None
    loyalty: Optional[JourneyStage] = None


class TargetAudiences(_Strict):
    primary_audience: Optional[PrimaryAudience] = None
    secondary_audiences: Optional[list[SecondaryAudience]] = None
    customer_personas: Optional[list[CustomerPersona]] = None
    patient_client_journey: Optional[PatientClientJourney] = None


# =============================================================================
# Visual identity
# =============================================================================

class LogoLockup(_Strict):
    name: Optional[str] = None
    type: Optional[Literal["primary", "alternate"]] = None
    description: Optional[str] = None
    asset: Optional[Asset] = None


class LogoPart(_Strict):
    description: Optional[str] = None
    asset: Optional[Asset] = None


class LogoParts(_Strict):
    logomark: Optional[LogoPart] = None
    wordmark: Optional[LogoPart] = None


class MinimumSizeRequirements(_Strict):
    print: Optional[str] = None
    digital: Optional[str] = None


class Logo(_Strict):
    logo_lockups: Optional[list[LogoLockup]] = None
    logo_parts: Optional[LogoParts] = None
    minimum_size_requirements: Optional[MinimumSizeRequirements] = None
    clear_space_requirements: Optional[str] = None
    unacceptable_usage: Optional[list[str]] = None


class ColorPalette(_Strict):
    primary: Optional[list[ColorSwatch]] = None
    secondary: Optional[list[ColorSwatch]] = None
    tertiary: Optional[list[ColorSwatch]] = None
    gray: Optional[list[ColorSwatch]] = None


class ColorAccessibility(_Strict):
    body_text_contrast_ratio: Optional[str] = None
    large_text_contrast_ratio: Optional[str] = None
    notes: Optional[str] = None


class Color(_Strict):
    palette: Optional[ColorPalette] = None
    gradients: Optional[list[Gradient]] = None
    color_schemes: Optional[list[str]] = None
    accessibility: Optional[ColorAccessibility] = None


class Typeface(_Strict):
    name: Optional[str] = None
    weights: Optional[list[str]] = None
    usage: Optional[str] = None
    source_url: Optional[str] = None


class WebSafeFallbacks(_Strict):
    serif: Optional[str] = None
    sans_serif: Optional[str] = None


class TypographyHierarchy(_Strict):
    h1: Optional[str] = None
    h2: Optional[str] = None
    h3: Optional[str] = None
    h4: Optional[str] = None
    body: Optional[str] = None
    caption: Optional[str] = None


class TypographyAccessibility(_Strict):
    minimum_body_size: Optional[str] = None
    line_height: Optional[str] = None
    notes: Optional[str] = None


class Typography(_Strict):
    primary_typeface: Optional[Typeface] = None
    secondary_typeface: Optional[Typeface] = None
    web_safe_fallbacks: Optional[WebSafeFallbacks] = None
    hierarchy: Optional[TypographyHierarchy] = None
    accessibility: Optional[TypographyAccessibility] = None


class PhotographyAndImagery(_Strict):
    style_guidelines: Optional[list[str]] = None
    subject_matter: Optional[list[str]] = None
    image_treatment_and_filters: Optional[list[str]] = None
    stock_photography_guidelines: Optional[list[str]] = None
    alt_text_guidelines: Optional[list[str]] = None
    sample_images: Optional[list[Asset]] = None


class IconStyle(_Strict):
    style: Optional[str] = None
    usage: Optional[str] = None
    samples: Optional[list[Asset]] = None


class PatternOrTexture(_Strict):
    description: Optional[str] = None
    usage: Optional[str] = None
    samples: Optional[list[Asset]] = None


class IllustrationStyle(_Strict):
    style: Optional[str] = None
    usage: Optional[str] = None
    samples: Optional[list[Asset]] = None


class GraphicElements(_Strict):
    icons: Optional[IconStyle] = None
    patterns: Optional[PatternOrTexture] = None
    textures: Optional[PatternOrTexture] = None
    illustrations: Optional[IllustrationStyle] = None


class StylesAndEffects(_Strict):
    corner_radius: Optional[str] = None
    drop_shadows: Optional[str] = None
    other: Optional[list[str]] = None


class WebsiteElements(_Strict):
    page_layout_and_grid: Optional[str] = None
    styles_and_effects: Optional[StylesAndEffects] = None


class SocialMediaTemplate(_Strict):
    specs: Optional[str] = None
    template: Optional[Asset] = None


class NamedSocialMediaTemplate(_Strict):
    name: Optional[str] = None
    specs: Optional[str] = None
    template: Optional[Asset] = None


class SocialMediaTemplates(_Strict):
    instagram_post: Optional[SocialMediaTemplate] = None
    instagram_story: Optional[SocialMediaTemplate] = None
    facebook_cover: Optional[SocialMediaTemplate] = None
    linkedin_banner: Optional[SocialMediaTemplate] = None
    other: Optional[list[NamedSocialMediaTemplate]] = None


class EmailSignature(_Strict):
    format: Optional[str] = None
    template: Optional[Asset] = None


class DigitalAdvertisingSpecs(_Strict):
    google_display: Optional[list[str]] = None
    meta: Optional[list[str]] = None
    other: Optional[list[str]] = None


class DigitalApplications(_Strict):
    website_elements: Optional[WebsiteElements] = None
    social_media_templates: Optional[SocialMediaTemplates] = None
    email_signature: Optional[EmailSignature] = None
    digital_advertising_specs: Optional[DigitalAdvertisingSpecs] = None


class BusinessCards(_Strict):
    size: Optional[str] = None
    orientation: Optional[str] = None
    notes: Optional[str] = None
    template: Optional[Asset] = None


class Letterhead(_Strict):
    size: Optional[str] = None
    layout: Optional[str] = None
    notes: Optional[str] = None
    template: Optional[Asset] = None


class Envelopes(_Strict):
    type: Optional[str] = None
    notes: Optional[str] = None
    template: Optional[Asset] = None


class BrochuresAndCollateral(_Strict):
    formats: Optional[list[str]] = None
    notes: Optional[str] = None
    samples: Optional[list[Asset]] = None


class PrintAdvertising(_Strict):
    common_sizes: Optional[list[str]] = None
    notes: Optional[str] = None
    samples: Optional[list[Asset]] = None


class PrintApplications(_Strict):
    business_cards: Optional[BusinessCards] = None
    letterhead: Optional[Letterhead] = None
    envelopes: Optional[Envelopes] = None
    brochures_and_collateral: Optional[BrochuresAndCollateral] = None
    print_advertising: Optional[PrintAdvertising] = None


class VisualIdentity(_Strict):
    logo: Optional[Logo] = None
    color: Optional[Color] = None
    typography: Optional[Typography] = None
    photography_and_imagery: Optional[PhotographyAndImagery] = None
    graphic_elements: Optional[GraphicElements] = None
    digital_applications: Optional[DigitalApplications] = None
    print_applications: Optional[PrintApplications] = None


class ClientData(_Strict):
    """The full ClientRecord document."""
    foundations: Foundations = Field(default_factory=Foundations)
    personality_and_tone: PersonalityAndTone = Field(default_factory=PersonalityAndTone)
    target_audiences: TargetAudiences = Field(default_factory=TargetAudiences)
    visual_identity: VisualIdentity = Field(default_factory=VisualIdentity)


SECTIONS = tuple(ClientData.model_fields)


def empty_client_data(client_name: str | None = None) -> dict:
    """Initial record for a new client: the four sections, foundations subsections, business name."""
    data = ClientData()
    if client_name:
        data.foundations.general_business_information.business_name = client_name
    return data.model_dump(exclude_none=True)


def validate_client_data(data: Any) -> dict:
    """Validate a whole ClientRecord and return it without unset leaves. Raises ValidationError."""
    return ClientData.model_validate(data).model_dump(exclude_none=True)


# =============================================================================
# Typed field accessors
# =============================================================================

@dataclass(frozen=True)
class FieldSpec:
    """Accessor for one schema path, generated from the models above."""
    path: str
    kind: FieldKind
    annotation: Any
    element_kind: ElementKind | None = None
    segments: tuple[str, ...] = field(default=(), compare=False)

    @property
    def section(self) -> str:
        return self.segments[0]

    def get(self, data: dict, default: Any = None) -> Any:
        current: Any = data
        for key in self.segments:
            if not isinstance(current, dict) or key not in current:
                return default
            current = current[key]
        return current

    def set(self, data: dict, value: Any) -> None:
        """Assign value at this path, creating missing or null intermediate objects."""
        current = data
        for key in self.segments[:-1]:
            if current.get(key) is None:
                current[key] = {}
            current = current[key]
            if not isinstance(current, dict):
                raise TypeError(f"cannot descend into non-object at '{key}' while setting {self.path}")
        current[self.segments[-1]] = value

    def validate(self, value: Any) -> Any:
        """
        Value converted to the declared shape for this path (e.g. "12.5" -> 12.5 for a float).
        Raises ValueError if it cannot be. Only keys present in value are kept.
        """
        adapter = _adapter(self.annotation)
        try:
            validated = adapter.validate_python(value)
        except ValidationError as e:
            first = e.errors()[0] if e.errors() else {}
            loc = ".".join(str(p) for p in first.get("loc", ()))
            detail = first.get("msg", str(e))
            raise ValueError(f"{detail} at {loc}" if loc else detail) from e
        return adapter.dump_python(validated, mode="json", exclude_unset=True, exclude_none=True)


_ADAPTERS: dict[Any, TypeAdapter] = {}


def _adapter(annotation: Any) -> TypeAdapter:
    adapter = _ADAPTERS.get(annotation)
    if adapter is None:
        adapter = TypeAdapter(annotation)
        _ADAPTERS[annotation] = adapter
    return adapter


def _unwrap_optional(annotation: Any) -> Any:
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _is_model(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, BaseModel)


def _build_field_specs(model: type[BaseModel], prefix: tuple[str, ...] = ()) -> dict[str, FieldSpec]:
    specs: dict[str, FieldSpec] = {}
    for name, info in model.model_fields.items():
        segments = prefix + (name,)
        path = ".".join(segments)
        tp = _unwrap_optional(info.annotation)
        if _is_model(tp):
            specs[path] = FieldSpec(path, FieldKind.OBJECT, tp, segments=segments)
            specs.update(_build_field_specs(tp, segments))
        elif get_origin(tp) is list:
            (item_tp,) = get_args(tp) or (Any,)
            element_kind = item_tp.element_kind if _is_model(item_tp) else None
            specs[path] = FieldSpec(path, FieldKind.LIST, tp, element_kind=element_kind, segments=segments)
        else:
            specs[path] = FieldSpec(path, FieldKind.SCALAR, tp, segments=segments)
    return specs


FIELD_SPECS: dict[str, FieldSpec] = _build_field_specs(ClientData)


def get_field_spec(path: str) -> FieldSpec | None:
    return FIELD_SPECS.get(path)


# Schema paths including the inside of list elements, written "a.b[].c". Values are the
# declared element kind for list fields (None for scalar lists and non-list paths).
def _walk_schema(model: type[BaseModel], prefix: str = "") -> dict[str, ElementKind | None]:
    paths: dict[str, ElementKind | None] = {}
    for name, info in model.model_fields.items():
        path = f"{prefix}.{name}" if prefix else name
        tp = _unwrap_optional(info.annotation)
        if _is_model(tp):
            paths[path] = None
            paths.update(_walk_schema(tp, path))
        elif get_origin(tp) is list:
            (item_tp,) = get_args(tp) or (Any,)
            if _is_model(item_tp):
                paths[path] = item_tp.element_kind
                paths[f"{path}[]"] = None
                paths.update(_walk_schema(item_tp, f"{path}[]"))
            else:
                paths[path] = None
        else:
            paths[path] = None
    return paths


SCHEMA_PATHS: dict[str, ElementKind | None] = _walk_schema(ClientData)


def declared_element_kind(path: str | None) -> ElementKind | None:
    """Element kind of the list at path, or None if path is not an object-list in the schema."""
    if path is None:
        return None
    return SCHEMA_PATHS.get(path)
