"""Color strategies: derive a partial color record from a page screenshot."""
import json
from typing import Dict, List, Optional, Sequence, Union

from brandkit.agents.enrichment import EnrichmentService
from brandkit.agents.palette import ColorThiefPaletteExtractor
from brandkit.app.errors import ConfigurationError, RecoverableError, ResponseParseFailure
from brandkit.app.logger import logger
from brandkit.app.models import COLOR_KEYS


VISION_COLOR_INSTRUCTION = (
    "From this screenshot, extract brand colors as HEX and label them as:\n"
    "- background\n- container\n- accent\n- buttonText\n- foreground\n"
    "Give only a JSON object with keys and hex values."
)

# Lowercased key without separators -> canonical color key
_KEY_LOOKUP = {key.lower(): key for key in COLOR_KEYS}


def extract_json_object(text: str) -> dict:
    """Parse the first balanced ``{...}`` region of ``text``.

    Braces inside JSON string literals are ignored while balancing. Raises
    ResponseParseFailure when there is no such region or it is not valid JSON.
    """
    start = text.find('{') if text else -1
    if start == -1:
        raise ResponseParseFailure("No JSON object in enrichment reply")

    depth = 0
    in_string = False
    escaped = False
    end = -1
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == '\\':
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == '{':
            depth += 1
        elif char == '}':
            depth -= 1
            if depth == 0:
                end = index
                break

    if end == -1:
        raise ResponseParseFailure("Unbalanced JSON object in enrichment reply")
    try:
        data = json.loads(text[start:end + 1])
    except json.JSONDecodeError as e:
        raise ResponseParseFailure(f"Malformed JSON object in enrichment reply: {e}") from e
    if not isinstance(data, dict):
        raise ResponseParseFailure("Enrichment reply JSON is not an object")
    return data


def normalize_color_keys(data: dict) -> Dict[str, str]:
    """Keep only the five color keys (any casing/separators) with string values."""
    colors: Dict[str, str] = {}
    for raw_key, value in data.items():
        key = _KEY_LOOKUP.get(str(raw_key).replace('_', '').replace('-', '').replace(' ', '').lower())
        if key is None:
            continue
        if isinstance(value, dict):
            value = value.get('hex', '')
        if isinstance(value, str) and key not in colors:
            colors[key] = value.strip()
    return colors


class ColorStrategy:
    """derive(screenshot) -> partial color record. May raise a RecoverableError."""
    name = "base"

    def derive(self, screenshot: bytes) -> Dict[str, str]:
        raise NotImplementedError


class VisionColorStrategy(ColorStrategy):
    """Ask a vision model to label the five brand colors."""
    name = "vision"

    def __init__(self, enrichment: EnrichmentService):
        self.enrichment = enrichment

    def derive(self, screenshot: bytes) -> Dict[str, str]:
        reply = self.enrichment.complete_from_image(VISION_COLOR_INSTRUCTION, screenshot)
        try:
            colors = normalize_color_keys(extract_json_object(reply))
        except ResponseParseFailure as e:
            logger.warning(f"⚠ Vision color reply unusable, no colors contributed: {e}")
            return {}
        logger.info(f"✓ Vision colors: {colors}")
        return colors


class PaletteColorStrategy(ColorStrategy):
    """Map quantized vibrant swatches onto accent, container and buttonText."""
    name = "palette"

    def __init__(self, palette_extractor: Optional[ColorThiefPaletteExtractor] = None):
        self.palette_extractor = palette_extractor or ColorThiefPaletteExtractor()

    def derive(self, screenshot: bytes) -> Dict[str, str]:
        swatches = self.palette_extractor.swatches(screenshot)
        return {
            'accent': swatches.get('vibrant') or '',
            'container': swatches.get('lightVibrant') or '',
            'buttonText': swatches.get('darkVibrant') or '',
        }


class FallbackColorStrategy(ColorStrategy):
    """Try strategies in order; the first non-empty contribution wins."""
    name = "fallback"

    def __init__(self, strategies: Sequence[ColorStrategy]):
        self.strategies = list(strategies)

    def derive(self, screenshot: bytes) -> Dict[str, str]:
        for strategy in self.strategies:
            try:
                colors = strategy.derive(screenshot)
            except RecoverableError as e:
                logger.warning(f"⚠ {strategy.name} color strategy failed, trying next: {e}")
                continue
            if any(colors.values()):
                return colors
            logger.info(f"{strategy.name} color strategy contributed nothing, trying next")
        return {}


def build_color_strategy(
    names: Union[str, List[str]],
    enrichment: EnrichmentService,
    palette_extractor: Optional[ColorThiefPaletteExtractor] = None,
) -> ColorStrategy:
    """Build the strategy selected by configuration ("vision", "palette", "vision,palette")."""
    if isinstance(names, str):
        names = [n.strip().lower() for n in names.split(',') if n.strip()]
    if not names:
        raise ConfigurationError("No color strategy configured")

    strategies: List[ColorStrategy] = []
    for name in names:
        if name == 'vision':
            strategies.append(VisionColorStrategy(enrichment))
        elif name == 'palette':
            strategies.append(PaletteColorStrategy(palette_extractor))
        else:
            raise ConfigurationError(f"Unknown color strategy: {name!r} (expected 'vision' or 'palette')")

    if len(strategies) == 1:
        return strategies[0]
    return FallbackColorStrategy(strategies)
