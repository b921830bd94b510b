"""CSS color helpers shared by the extractors, strategies and merge."""
import re
from typing import Sequence

HEX_PATTERN = re.compile(r'^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$')
GRADIENT_PATTERN = re.compile(r'^(?:repeating-)?(?:linear|radial|conic)-gradient\(.+\)$', re.IGNORECASE | re.DOTALL)
RGB_PATTERN = re.compile(
    r'^rgba?\(\s*(\d{1,3})\s*[,\s]\s*(\d{1,3})\s*[,\s]\s*(\d{1,3})\s*(?:[,/]\s*([\d.]+%?)\s*)?\)$',
    re.IGNORECASE
)


def is_valid_color(value: str) -> bool:
    """True for a hex color or a gradient function string."""
    if not isinstance(value, str):
        return False
    value = value.strip()
    return bool(HEX_PATTERN.match(value) or GRADIENT_PATTERN.match(value))


def rgb_to_hex(rgb: Sequence[int]) -> str:
    r, g, b = (max(0, min(255, int(c))) for c in rgb[:3])
    return f"#{r:02x}{g:02x}{b:02x}"


def _alpha(raw: str) -> float:
    if raw.endswith('%'):
        return float(raw[:-1]) / 100
    return float(raw)


def normalize_css_color(value: str) -> str:
    """Turn a computed style color into hex where possible.

    ``rgb()``/``rgba()`` become ``#rrggbb``; fully transparent values become an
    empty string. Hex and gradients pass through unchanged, anything else is
    returned stripped and left for the merge to reject.
    """
    if not value:
        return ""
    value = value.strip()
    if value.lower() == "transparent":
        return ""
    match = RGB_PATTERN.match(value)
    if match:
        if match.group(4) is not None and _alpha(match.group(4)) == 0:
            return ""
        return rgb_to_hex([int(match.group(i)) for i in (1, 2, 3)])
    return value
