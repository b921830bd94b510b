"""Combine raw metadata, strategy colors and the summary into one BrandKit."""
from typing import Dict, List, Mapping

from brandkit.agents.colors import is_valid_color
from brandkit.app.errors import Result
from brandkit.app.logger import logger
from brandkit.app.models import COLOR_KEYS, BrandKit, ColorRecord, Content, Logos, RawMetadata


def rejected_colors(partial: Mapping[str, str]) -> List[str]:
    """Keys whose non-empty value fails the color-format predicate."""
    return [
        key for key in COLOR_KEYS
        if (partial.get(key) or '').strip() and not is_valid_color(partial[key])
    ]


def overlay_colors(base: Mapping[str, str], partial: Mapping[str, str]) -> Dict[str, str]:
    """New color mapping with the valid, non-empty values of ``partial`` on top of ``base``."""
    merged = {key: base.get(key, '') for key in COLOR_KEYS}
    for key in COLOR_KEYS:
        value = (partial.get(key) or '').strip()
        if not value:
            continue
        if is_valid_color(value):
            merged[key] = value
        else:
            logger.debug(f"Discarding invalid {key} color {value!r}, keeping {merged[key]!r}")
    return merged


def merge_brand_kit(raw: RawMetadata, colors: Result[Dict[str, str]], summary: Result[str]) -> BrandKit:
    """Build the canonical kit. Deterministic: same inputs, same kit.

    Colors layer template defaults, then the body background/foreground, then
    the strategy's non-empty keys. The summary replaces the description only
    when the summary step succeeded with text.
    """
    template = BrandKit()

    color_values = template.colors.model_dump(by_alias=True)
    color_values = overlay_colors(color_values, {
        'background': raw.background_color,
        'foreground': raw.foreground_color,
    })
    color_values = overlay_colors(color_values, colors.value_or({}))

    brand_summary = raw.description
    if summary.ok and summary.value and summary.value.strip():
        brand_summary = summary.value.strip()

    return BrandKit(
        kit_name=raw.title,
        website=raw.website,
        brand_summary=brand_summary,
        tone_of_voice=template.tone_of_voice,
        address=template.address,
        socials=[link.model_copy() for link in raw.socials],
        logos=Logos(primary=raw.primary_logo_url, icon=raw.icon_logo_url),
        colors=ColorRecord(**color_values),
        content=Content(
            footer=raw.footer_text,
            copyright=raw.inferred_copyright,
            disclaimers=raw.inferred_disclaimers,
        ),
    )
