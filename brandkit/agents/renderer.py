"""Page rendering with Playwright: final DOM, body computed styles, screenshot."""
from typing import Optional

from playwright.sync_api import sync_playwright, Error as PlaywrightError

from brandkit.app.config import Settings
from brandkit.app.errors import RenderFailure
from brandkit.app.logger import logger
from brandkit.app.models import RenderedPage

USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
)

BODY_STYLES_SCRIPT = """
() => {
    const body = document.body;
    if (!body) return {};
    const style = window.getComputedStyle(body);
    return {
        backgroundColor: style.backgroundColor || '',
        color: style.color || ''
    };
}
"""


def normalize_url(url: str) -> str:
    url = url.strip()
    if not url.startswith(('http://', 'https://')):
        url = f"https://{url}"
    return url


class PlaywrightRenderer:
    """Loads one URL per call in a fresh, isolated browser context."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()

    def render(self, url: str) -> RenderedPage:
        """Render ``url``. Any navigation or capture problem raises RenderFailure."""
        url = normalize_url(url)
        logger.info(f"Rendering page with Playwright: {url}")
        try:
            with sync_playwright() as playwright:
                browser = playwright.chromium.launch(headless=True)
                try:
                    return self._render_in_browser(browser, url)
                finally:
                    browser.close()
        except RenderFailure:
            raise
        except (PlaywrightError, OSError) as e:
            raise RenderFailure(f"Could not render {url}: {e}") from e

    def _render_in_browser(self, browser, url: str) -> RenderedPage:
        context = browser.new_context(
            viewport={"width": self.settings.viewport_width, "height": self.settings.viewport_height},
            user_agent=USER_AGENT,
            extra_http_headers={'Accept-Language': 'en-US,en;q=0.9'},
        )
        try:
            page = context.new_page()

            # networkidle never settles on long-polling pages; retry on load
            try:
                response = page.goto(url, wait_until='networkidle', timeout=self.settings.render_timeout_ms)
            except PlaywrightError as e:
                logger.warning(f"  Networkidle wait failed, retrying with 'load': {e}")
                response = page.goto(url, wait_until='load', timeout=self.settings.render_timeout_ms)

            if response is not None and response.status >= 400:
                raise RenderFailure(f"Navigation to {url} returned HTTP {response.status}")

            page.wait_for_timeout(self.settings.settle_ms)

            computed_styles = page.evaluate(BODY_STYLES_SCRIPT) or {}
            html = page.content()
            screenshot = page.screenshot(full_page=self.settings.full_page_screenshot, type='png')
            logger.info(f"✓ Rendered {page.url} ({len(html)} chars of HTML, {len(screenshot)} bytes screenshot)")

            return RenderedPage(
                url=url,
                final_url=page.url,
                html=html,
                computed_styles={k: str(v) for k, v in computed_styles.items()},
                screenshot=screenshot,
            )
        finally:
            context.close()
