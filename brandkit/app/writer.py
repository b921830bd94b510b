"""Serialize the brand kit document to disk."""
import json
from pathlib import Path
from typing import Union

from brandkit.app.errors import PersistFailure
from brandkit.app.logger import logger
from brandkit.app.models import BrandKit


def brand_kit_json(kit: BrandKit) -> str:
    """Pretty-printed JSON text for a kit, camelCase keys, stable field order."""
    return json.dumps(kit.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False) + "\n"


def write_brand_kit(kit: BrandKit, path: Union[str, Path]) -> Path:
    """Write the kit as UTF-8 JSON. Raises PersistFailure on any I/O error."""
    output_path = Path(path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(brand_kit_json(kit), encoding="utf-8")
    except OSError as e:
        raise PersistFailure(f"Could not write brand kit to {output_path}: {e}") from e
    logger.info(f"✓ Saved brand kit to {output_path.absolute()}")
    return output_path
