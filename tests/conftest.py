"""Shared fixtures: stub collaborators so no browser or LLM is needed."""
import pytest

from brandkit.agents.brand_extractor import BrandKitAgent
from brandkit.agents.enrichment import EnrichmentService
from brandkit.app.config import Settings
from brandkit.app.errors import EnrichmentFailure, RenderFailure
from brandkit.app.models import Article, RenderedPage


PAGE_URL = "https://acme.test/products?ref=home"

SAMPLE_HTML = """<!DOCTYPE html>
<html>
<head>
  <title> Acme Tools </title>
  <meta name="description" content="Acme — tools for makers">
  <meta property="og:image" content="/og.png">
  <link rel="stylesheet" href="/site.css">
  <link rel="icon" href="/favicon.ico">
  <link rel="apple-touch-icon" href="https://cdn.acme.test/touch.png">
  <script>var ignored = "© not visible";</script>
</head>
<body>
  <nav>
    <a href="https://www.linkedin.com/company/acme">LinkedIn</a>
    <a href="https://twitter.com/acme">Twitter</a>
    <a href="https://www.facebook.com/acme">Facebook</a>
    <a href="https://www.linkedin.com/company/acme">LinkedIn again</a>
    <a href="/about">About</a>
  </nav>
  <main>
    <h1>Tools for makers</h1>
    <p>Acme builds hand tools for makers and small workshops.</p>
  </main>
  <footer>
    <p>© 2024 Acme Inc. All rights reserved.</p>
    <p>Privacy</p>
  </footer>
</body>
</html>
"""

SAMPLE_STYLES = {"backgroundColor": "rgb(255, 255, 255)", "color": "rgb(17, 17, 17)"}


class StubRenderer:
    def __init__(self, page=None, error=None):
        self.page = page
        self.error = error
        self.calls = []

    def render(self, url):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.page


class StubContentExtractor:
    def __init__(self, article=None):
        self.article = article

    def extract(self, html, url):
        return self.article


class StubEnrichment(EnrichmentService):
    """Replies are strings or exceptions; every call is recorded."""

    def __init__(self, text_reply="", image_reply=""):
        self.text_reply = text_reply
        self.image_reply = image_reply
        self.text_calls = []
        self.image_calls = []

    def complete_from_text(self, instruction):
        self.text_calls.append(instruction)
        if isinstance(self.text_reply, Exception):
            raise self.text_reply
        return self.text_reply

    def complete_from_image(self, instruction, image_bytes):
        self.image_calls.append((instruction, image_bytes))
        if isinstance(self.image_reply, Exception):
            raise self.image_reply
        return self.image_reply


class StubPaletteExtractor:
    def __init__(self, swatches=None, error=None):
        self._swatches = swatches or {}
        self.error = error

    def swatches(self, image_bytes):
        if self.error is not None:
            raise self.error
        return self._swatches


@pytest.fixture
def rendered_page():
    return RenderedPage(
        url=PAGE_URL,
        final_url=PAGE_URL,
        html=SAMPLE_HTML,
        computed_styles=SAMPLE_STYLES,
        screenshot=b"\x89PNG\r\n\x1a\nfake",
    )


@pytest.fixture
def settings(tmp_path):
    return Settings(color_strategy="vision", output_path=str(tmp_path / "brandkit.json"))


@pytest.fixture
def make_agent(settings, rendered_page):
    """Build an agent around stubs; keyword arguments override each collaborator."""
    def factory(renderer=None, article=None, enrichment=None, palette=None, **overrides):
        return BrandKitAgent(
            settings=overrides.get("settings", settings),
            renderer=renderer or StubRenderer(page=rendered_page),
            content_extractor=StubContentExtractor(article),
            enrichment=enrichment or StubEnrichment(),
            palette_extractor=palette or StubPaletteExtractor(),
        )
    return factory


@pytest.fixture
def failing_renderer():
    return StubRenderer(error=RenderFailure("Could not render https://down.test: net::ERR_NAME_NOT_RESOLVED"))


@pytest.fixture
def broken_enrichment():
    return StubEnrichment(
        text_reply=EnrichmentFailure("LLM call failed: timeout"),
        image_reply=EnrichmentFailure("LLM call failed: timeout"),
    )


@pytest.fixture
def article():
    return Article(title="Acme", text_content="Acme builds hand tools for makers and small workshops.")
