"""Data models for the brand kit document and the pipeline records feeding it."""
from typing import List, Optional, Literal, Dict
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


# Serialized brand kit keys are camelCase (kitName, buttonText, ...)
CAMEL_CONFIG = {"alias_generator": to_camel, "populate_by_name": True}

COLOR_KEYS = ("background", "container", "accent", "buttonText", "foreground")


# ============================================================================
# RAW EXTRACTION MODELS
# ============================================================================

class SocialLink(BaseModel):
    """Link to a brand profile on a known social platform."""
    platform: Literal["LinkedIn", "Twitter", "Facebook"]
    url: str


class RawMetadata(BaseModel):
    """Heuristic metadata read from the rendered DOM. Immutable once built."""
    title: str = Field(default="", description="Page title or title meta")
    website: str = Field(default="", description="Origin of the page URL")
    description: str = Field(default="", description="Description meta chain")
    primary_logo_url: str = Field(default="", description="icon / shortcut icon / image meta")
    icon_logo_url: str = Field(default="", description="apple-touch-icon / image meta")
    background_color: str = Field(default="", description="Body computed background-color")
    foreground_color: str = Field(default="", description="Body computed color")
    socials: List[SocialLink] = Field(default_factory=list, description="Unique by url, first occurrence wins")
    footer_text: str = Field(default="", description="First non-empty footer line")
    inferred_copyright: str = Field(default="")
    inferred_disclaimers: str = Field(default="")

    model_config = {"frozen": True}


class RenderedPage(BaseModel):
    """Everything the renderer hands to the extractors."""
    url: str = Field(description="Requested URL")
    final_url: str = Field(description="URL after redirects")
    html: str = Field(default="")
    computed_styles: Dict[str, str] = Field(default_factory=dict, description="Body backgroundColor and color")
    screenshot: bytes = Field(default=b"", description="PNG bytes")


class Article(BaseModel):
    """Readable article found on the page."""
    title: str = Field(default="")
    text_content: str = Field(default="")


# ============================================================================
# BRAND KIT MODELS
# ============================================================================

class ColorRecord(BaseModel):
    """Brand colors; each a hex or gradient string, or empty."""
    background: str = Field(default="", description="Main page background")
    container: str = Field(default="", description="Content box background")
    accent: str = Field(default="", description="Buttons, links and highlights")
    button_text: str = Field(default="", description="Text on buttons")
    foreground: str = Field(default="", description="Body text")

    model_config = CAMEL_CONFIG


class Logos(BaseModel):
    primary: str = Field(default="")
    icon: str = Field(default="")


class Content(BaseModel):
    footer: str = Field(default="")
    copyright: str = Field(default="")
    disclaimers: str = Field(default="")


class BrandKit(BaseModel):
    """Canonical brand kit document. Every key is always present."""
    kit_name: str = Field(default="")
    website: str = Field(default="")
    brand_summary: str = Field(default="")
    tone_of_voice: str = Field(default="Neutral")
    address: str = Field(default="")
    socials: List[SocialLink] = Field(default_factory=list)
    logos: Logos = Field(default_factory=lambda: Logos())
    colors: ColorRecord = Field(default_factory=lambda: ColorRecord())
    content: Content = Field(default_factory=lambda: Content())

    model_config = CAMEL_CONFIG


class BrandKitRun(BaseModel):
    """In-memory outcome of one pipeline run."""
    brand_kit: BrandKit
    output_path: Optional[str] = Field(default=None, description="Where the document was written")
    warnings: List[str] = Field(default_factory=list, description="Contained failures, one line each")


# ============================================================================
# API REQUEST/RESPONSE MODELS
# ============================================================================

class ExtractRequest(BaseModel):
    """Request model for brand kit extraction."""
    url: str = Field(description="Website URL to extract the brand kit from")
    color_strategy: Optional[str] = Field(default=None, description="Override the configured color strategy")


class ExtractResponse(BaseModel):
    """Response model for brand kit extraction."""
    brand_kit: BrandKit
    output_path: Optional[str] = Field(default=None)
    warnings: List[str] = Field(default_factory=list)
