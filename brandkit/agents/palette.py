"""Swatch extraction from a screenshot using ColorThief quantization."""
import colorsys
import io
from typing import Dict, List, Optional, Sequence, Tuple

from colorthief import ColorThief

from brandkit.agents.colors import rgb_to_hex
from brandkit.app.errors import EnrichmentFailure
from brandkit.app.logger import logger

# (min, target, max) for HSL lightness and saturation, in generation order
SWATCH_TARGETS = {
    'vibrant':      {'luma': (0.30, 0.50, 0.70), 'saturation': (0.35, 1.00, 1.00)},
    'lightVibrant': {'luma': (0.55, 0.74, 1.00), 'saturation': (0.35, 1.00, 1.00)},
    'darkVibrant':  {'luma': (0.00, 0.26, 0.45), 'saturation': (0.35, 1.00, 1.00)},
    'muted':        {'luma': (0.30, 0.50, 0.70), 'saturation': (0.00, 0.30, 0.40)},
    'lightMuted':   {'luma': (0.55, 0.74, 1.00), 'saturation': (0.00, 0.30, 0.40)},
    'darkMuted':    {'luma': (0.00, 0.26, 0.45), 'saturation': (0.00, 0.30, 0.40)},
}

WEIGHT_SATURATION = 3.0
WEIGHT_LUMA = 6.5
WEIGHT_POPULATION = 0.5


def _score(saturation: float, luma: float, population: float, target: Dict[str, Tuple[float, float, float]]) -> float:
    sat_target = target['saturation'][1]
    luma_target = target['luma'][1]
    total = (
        WEIGHT_SATURATION * (1 - abs(saturation - sat_target))
        + WEIGHT_LUMA * (1 - abs(luma - luma_target))
        + WEIGHT_POPULATION * population
    )
    return total / (WEIGHT_SATURATION + WEIGHT_LUMA + WEIGHT_POPULATION)


def classify_swatches(palette: Sequence[Sequence[int]]) -> Dict[str, Optional[str]]:
    """Assign palette colors to the six vibrant/muted swatches.

    ``palette`` is ordered most to least dominant; rank stands in for
    population. Each color fills at most one swatch; swatches with no color in
    range are None.
    """
    count = len(palette)
    candidates = []
    for index, rgb in enumerate(palette):
        _, luma, saturation = colorsys.rgb_to_hls(*(c / 255 for c in rgb[:3]))
        candidates.append((tuple(rgb[:3]), luma, saturation, (count - index) / count))

    used = set()
    swatches: Dict[str, Optional[str]] = {}
    for name, target in SWATCH_TARGETS.items():
        best = None
        best_score = -1.0
        for rgb, luma, saturation, population in candidates:
            if rgb in used:
                continue
            if not (target['luma'][0] <= luma <= target['luma'][2]):
                continue
            if not (target['saturation'][0] <= saturation <= target['saturation'][2]):
                continue
            score = _score(saturation, luma, population, target)
            if score > best_score:
                best, best_score = rgb, score
        if best is not None:
            used.add(best)
        swatches[name] = rgb_to_hex(best) if best is not None else None
    return swatches


class ColorThiefPaletteExtractor:
    """Quantize an image and classify the palette into named swatches."""

    def __init__(self, color_count: int = 16, quality: int = 5):
        self.color_count = color_count
        self.quality = quality

    def palette(self, image_bytes: bytes) -> List[Tuple[int, int, int]]:
        try:
            color_thief = ColorThief(io.BytesIO(image_bytes))
            return color_thief.get_palette(color_count=self.color_count, quality=self.quality)
        except Exception as e:
            # ColorThief raises bare Exception for all-white images
            raise EnrichmentFailure(f"Palette extraction failed: {e}") from e

    def swatches(self, image_bytes: bytes) -> Dict[str, Optional[str]]:
        palette = self.palette(image_bytes)
        swatches = classify_swatches(palette)
        logger.info(f"✓ Palette swatches: {', '.join(f'{k}={v}' for k, v in swatches.items() if v)}")
        return swatches
