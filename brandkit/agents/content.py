"""Readable-article extraction with readability-lxml."""
from typing import Optional

from bs4 import BeautifulSoup
from readability import Document
from readability.readability import Unparseable

from brandkit.app.logger import logger
from brandkit.app.models import Article


class ReadabilityExtractor:
    """Best-effort article extraction; returns None for pages that are not article-like."""

    def __init__(self, min_text_length: int = 1):
        self.min_text_length = min_text_length

    def extract(self, html: str, url: str) -> Optional[Article]:
        if not html or not html.strip():
            return None
        try:
            document = Document(html, url=url)
            summary_html = document.summary(html_partial=True)
            title = document.short_title()
        except Unparseable as e:
            logger.warning(f"Readability could not parse {url}: {e}")
            return None

        text = BeautifulSoup(summary_html or '', 'html.parser').get_text(separator='\n')
        lines = (' '.join(line.split()) for line in text.splitlines())
        text_content = '\n'.join(line for line in lines if line)

        if len(text_content) < self.min_text_length:
            logger.info(f"No readable article found on {url}")
            return None

        logger.debug(f"Readable article: {len(text_content)} chars, title={title!r}")
        return Article(title=title or '', text_content=text_content)
