"""Tests for swatch classification and the ColorThief wrapper."""
import pytest

from brandkit.agents.palette import ColorThiefPaletteExtractor, classify_swatches
from brandkit.app.errors import EnrichmentFailure


def test_classify_vibrant_family():
    palette = [
        (230, 30, 30),    # saturated mid red
        (250, 170, 170),  # light saturated pink
        (120, 10, 10),    # dark saturated red
        (128, 128, 128),  # neutral grey
    ]
    swatches = classify_swatches(palette)

    assert swatches["vibrant"] == "#e61e1e"
    assert swatches["lightVibrant"] == "#faaaaa"
    assert swatches["darkVibrant"] == "#780a0a"
    assert swatches["muted"] == "#808080"


def test_missing_swatches_are_none():
    swatches = classify_swatches([(128, 128, 128)])

    assert swatches["vibrant"] is None
    assert swatches["lightVibrant"] is None
    assert swatches["darkVibrant"] is None
    assert swatches["muted"] == "#808080"


def test_a_color_fills_only_one_swatch():
    swatches = classify_swatches([(230, 30, 30)])
    filled = [name for name, value in swatches.items() if value]
    assert filled == ["vibrant"]


def test_dominant_color_wins_a_tie():
    swatches = classify_swatches([(30, 30, 230), (230, 30, 30)])
    assert swatches["vibrant"] == "#1e1ee6"


def test_unreadable_image_is_an_enrichment_failure():
    with pytest.raises(EnrichmentFailure):
        ColorThiefPaletteExtractor().swatches(b"not an image")
