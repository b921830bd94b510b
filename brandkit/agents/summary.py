"""Brand narrative generation from the best available page text."""
from typing import Optional

from brandkit.agents.enrichment import EnrichmentService
from brandkit.app.errors import EnrichmentFailure
from brandkit.app.logger import logger
from brandkit.app.models import Article, RawMetadata


SUMMARY_INSTRUCTION = """Read the following content and summarize the brand in 2-3 sentences as if writing a brand profile for a design system. Begin with the brand name, then add key specifics. Keep the original wording as close as possible and avoid generic fluff:

{text}"""


def select_summary_input(article: Optional[Article], raw: RawMetadata) -> str:
    """Article body when there is one, else the page description, else empty."""
    if article is not None and article.text_content.strip():
        return article.text_content.strip()
    return raw.description.strip()


class SummaryStrategy:
    """Turn page text into a short brand profile with the enrichment service."""

    def __init__(self, enrichment: EnrichmentService, max_chars: int = 6000):
        self.enrichment = enrichment
        self.max_chars = max_chars

    def summarize(self, text: str) -> str:
        """Trimmed 2-3 sentence profile. Raises EnrichmentFailure on any failure."""
        prompt = SUMMARY_INSTRUCTION.format(text=text[:self.max_chars])
        summary = self.enrichment.complete_from_text(prompt).strip()
        if not summary:
            raise EnrichmentFailure("Summary reply was empty")
        logger.info(f"✓ Brand summary generated ({len(summary)} chars)")
        return summary
