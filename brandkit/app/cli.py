"""Command line entry point: brandkit URL [--output PATH] [--strategy NAME]."""
import argparse
import logging
import sys
from typing import List, Optional

from brandkit.agents.brand_extractor import BrandKitAgent
from brandkit.app.config import Settings
from brandkit.app.errors import ConfigurationError, PersistFailure, RenderFailure
from brandkit.app.logger import logger, set_console_level
from brandkit.app.writer import brand_kit_json


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="brandkit",
        description="Derive a brand kit (colors, logos, socials, legal text, summary) from a web page",
    )
    parser.add_argument("url", help="Page to extract the brand kit from")
    parser.add_argument("-o", "--output", default=None, help="Output JSON path (default: BRANDKIT_OUTPUT_PATH or brandkit.json)")
    parser.add_argument("-s", "--strategy", default=None,
                        help="Color strategy: vision, palette, or a comma list tried in order")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and do not print the kit")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None, agent: Optional[BrandKitAgent] = None) -> int:
    args = parse_args(argv)
    if args.quiet:
        set_console_level(logging.WARNING)

    agent = agent or BrandKitAgent(Settings.from_env())
    try:
        run = agent.extract(args.url, output_path=args.output, color_strategy=args.strategy)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2
    except (RenderFailure, PersistFailure) as e:
        logger.error(f"✗ {e}")
        return 1

    for warning in run.warnings:
        logger.warning(f"⚠ {warning}")
    if not args.quiet:
        sys.stdout.write(brand_kit_json(run.brand_kit))
    return 0


if __name__ == "__main__":
    sys.exit(main())
