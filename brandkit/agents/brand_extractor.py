"""Brand kit extraction agent: render, extract, enrich, merge, persist."""
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, Optional, Union

from brandkit.agents.color_strategy import ColorStrategy, build_color_strategy
from brandkit.agents.content import ReadabilityExtractor
from brandkit.agents.enrichment import EnrichmentService, LangChainEnrichmentService
from brandkit.agents.merge import merge_brand_kit, rejected_colors
from brandkit.agents.metadata import extract_metadata
from brandkit.agents.palette import ColorThiefPaletteExtractor
from brandkit.agents.renderer import PlaywrightRenderer
from brandkit.agents.summary import SummaryStrategy, select_summary_input
from brandkit.app.config import Settings
from brandkit.app.errors import ExtractionFailure, Result, ValidationFailure, attempt
from brandkit.app.logger import logger
from brandkit.app.models import Article, BrandKitRun, RenderedPage
from brandkit.app.writer import write_brand_kit


class BrandKitAgent:
    """Derives a brand kit from one live page.

    Collaborators are injectable so tests can substitute the browser, the
    article extractor, the LLM and the palette quantizer.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        renderer=None,
        content_extractor=None,
        enrichment: Optional[EnrichmentService] = None,
        palette_extractor=None,
    ):
        self.settings = settings or Settings.from_env()
        self.renderer = renderer or PlaywrightRenderer(self.settings)
        self.content_extractor = content_extractor or ReadabilityExtractor()
        self.enrichment = enrichment or LangChainEnrichmentService(self.settings)
        self.palette_extractor = palette_extractor or ColorThiefPaletteExtractor()
        self.summary_strategy = SummaryStrategy(self.enrichment, max_chars=self.settings.summary_max_chars)

    def color_strategy(self, names: Optional[str] = None) -> ColorStrategy:
        return build_color_strategy(names or self.settings.color_strategy, self.enrichment, self.palette_extractor)

    def extract(
        self,
        url: str,
        output_path: Optional[Union[str, Path]] = None,
        color_strategy: Optional[str] = None,
        persist: bool = True,
    ) -> BrandKitRun:
        """Run the whole pipeline for ``url``.

        RenderFailure and PersistFailure propagate; every other failure is
        contained and reported in ``BrandKitRun.warnings``.
        """
        # Resolve configuration before touching the network
        strategy = self.color_strategy(color_strategy)

        page = self.renderer.render(url)

        logger.info("=" * 60)
        logger.info("🔍 EXTRACTING METADATA")
        logger.info("=" * 60)
        raw = extract_metadata(page.html, page.final_url or page.url, page.computed_styles)
        logger.info(f"Title: {raw.title!r}, socials: {len(raw.socials)}, footer: {raw.footer_text[:60]!r}")

        article_result = attempt(lambda: self._extract_article(page), "Content extraction")
        summary_input = select_summary_input(article_result.value, raw)

        logger.info("=" * 60)
        logger.info(f"🎨 ENRICHING (color strategy: {strategy.name})")
        logger.info("=" * 60)
        # Color and summary calls read disjoint inputs, so run them side by side
        with ThreadPoolExecutor(max_workers=2) as executor:
            colors_future = executor.submit(attempt, lambda: strategy.derive(page.screenshot), "Color strategy")
            summary_future = None
            if summary_input:
                summary_future = executor.submit(
                    attempt, lambda: self.summary_strategy.summarize(summary_input), "Summary"
                )
            else:
                logger.info("No article or description text, skipping summary")
            colors_result: Result[Dict[str, str]] = colors_future.result()
            summary_result: Result[str] = summary_future.result() if summary_future else Result.success("")

        warnings = [
            line for line in (
                article_result.describe("Content extraction"),
                colors_result.describe("Color strategy"),
                summary_result.describe("Summary"),
            ) if line
        ]
        for key in rejected_colors(colors_result.value_or({})):
            invalid = ValidationFailure(f"discarded invalid {key} value {colors_result.value[key]!r}")
            warnings.append(Result.failure(invalid).describe("Color validation"))

        kit = merge_brand_kit(raw, colors_result, summary_result)

        written = None
        if persist:
            written = str(write_brand_kit(kit, output_path or self.settings.output_path))

        logger.info("=" * 60)
        logger.info("📊 FINAL BRAND KIT")
        logger.info("=" * 60)
        logger.info(f"Kit name: {kit.kit_name}")
        logger.info(f"Colors: {kit.colors.model_dump(by_alias=True)}")
        if warnings:
            logger.info(f"Degraded fields: {len(warnings)}")

        return BrandKitRun(brand_kit=kit, output_path=written, warnings=warnings)

    def _extract_article(self, page: RenderedPage) -> Article:
        article = self.content_extractor.extract(page.html, page.final_url or page.url)
        if article is None:
            raise ExtractionFailure("No readable article, summary input falls back to the description")
        return article
