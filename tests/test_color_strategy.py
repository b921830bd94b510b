"""Tests for the vision, palette and fallback color strategies."""
import pytest

from brandkit.agents.color_strategy import (
    FallbackColorStrategy,
    PaletteColorStrategy,
    VisionColorStrategy,
    build_color_strategy,
    extract_json_object,
    normalize_color_keys,
)
from brandkit.app.errors import ConfigurationError, EnrichmentFailure, ResponseParseFailure

from conftest import StubEnrichment, StubPaletteExtractor

SCREENSHOT = b"\x89PNG\r\n\x1a\nfake"


def test_extract_json_object_from_fenced_reply():
    reply = 'Sure!\n```json\n{"accent": "#112233", "note": "braces {inside} strings"}\n```\nMore {text}'
    assert extract_json_object(reply) == {"accent": "#112233", "note": "braces {inside} strings"}


def test_extract_json_object_takes_first_balanced_region():
    reply = '{"accent": "#111111", "nested": {"a": 1}} and later {"accent": "#222222"}'
    assert extract_json_object(reply)["accent"] == "#111111"


@pytest.mark.parametrize("reply", [
    "",
    "I could not determine the colors.",
    "{accent: #fff}",
    '{"accent": "#fff"',
])
def test_extract_json_object_failures(reply):
    with pytest.raises(ResponseParseFailure):
        extract_json_object(reply)


def test_normalize_color_keys():
    data = {
        "Background": "#ffffff",
        "button_text": " #000000 ",
        "accent": {"hex": "#ff6600", "name": "orange"},
        "primary": "#123456",
        "foreground": 12,
    }
    assert normalize_color_keys(data) == {
        "background": "#ffffff",
        "buttonText": "#000000",
        "accent": "#ff6600",
    }


def test_vision_sends_screenshot_and_parses_reply():
    enrichment = StubEnrichment(image_reply='Here you go: {"accent":"#112233"}')
    colors = VisionColorStrategy(enrichment).derive(SCREENSHOT)

    assert colors == {"accent": "#112233"}
    instruction, image = enrichment.image_calls[0]
    assert image == SCREENSHOT
    for key in ("background", "container", "accent", "buttonText", "foreground"):
        assert key in instruction


def test_vision_without_json_contributes_nothing():
    enrichment = StubEnrichment(image_reply="The page is mostly blue.")
    assert VisionColorStrategy(enrichment).derive(SCREENSHOT) == {}


def test_vision_enrichment_failure_propagates():
    enrichment = StubEnrichment(image_reply=EnrichmentFailure("timeout"))
    with pytest.raises(EnrichmentFailure):
        VisionColorStrategy(enrichment).derive(SCREENSHOT)


def test_palette_maps_vibrant_swatches():
    palette = StubPaletteExtractor({"vibrant": "#e61e1e", "lightVibrant": None, "darkVibrant": "#780a0a", "muted": "#808080"})
    assert PaletteColorStrategy(palette).derive(SCREENSHOT) == {
        "accent": "#e61e1e",
        "container": "",
        "buttonText": "#780a0a",
    }


def test_fallback_uses_next_strategy_when_first_is_empty():
    vision = VisionColorStrategy(StubEnrichment(image_reply="no json"))
    palette = PaletteColorStrategy(StubPaletteExtractor({"vibrant": "#e61e1e"}))
    assert FallbackColorStrategy([vision, palette]).derive(SCREENSHOT)["accent"] == "#e61e1e"


def test_fallback_uses_next_strategy_when_first_fails():
    vision = VisionColorStrategy(StubEnrichment(image_reply=EnrichmentFailure("quota")))
    palette = PaletteColorStrategy(StubPaletteExtractor({"darkVibrant": "#780a0a"}))
    assert FallbackColorStrategy([vision, palette]).derive(SCREENSHOT)["buttonText"] == "#780a0a"


def test_fallback_returns_empty_when_all_fail():
    vision = VisionColorStrategy(StubEnrichment(image_reply=EnrichmentFailure("quota")))
    palette = PaletteColorStrategy(StubPaletteExtractor(error=EnrichmentFailure("bad image")))
    assert FallbackColorStrategy([vision, palette]).derive(SCREENSHOT) == {}


def test_build_color_strategy_selection():
    enrichment = StubEnrichment()
    palette = StubPaletteExtractor()

    assert isinstance(build_color_strategy("vision", enrichment, palette), VisionColorStrategy)
    assert isinstance(build_color_strategy(" Palette ", enrichment, palette), PaletteColorStrategy)
    chained = build_color_strategy("vision,palette", enrichment, palette)
    assert isinstance(chained, FallbackColorStrategy)
    assert [s.name for s in chained.strategies] == ["vision", "palette"]


@pytest.mark.parametrize("names", ["", "kmeans", "vision,kmeans"])
def test_build_color_strategy_rejects_unknown(names):
    with pytest.raises(ConfigurationError):
        build_color_strategy(names, StubEnrichment(), StubPaletteExtractor())
