"""Heuristic metadata extraction from a rendered DOM."""
import re
from typing import Dict, List, Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import Comment, Declaration, Doctype, ProcessingInstruction

from brandkit.agents.colors import normalize_css_color
from brandkit.app.models import RawMetadata, SocialLink

SOCIAL_DOMAINS = ("linkedin.com", "twitter.com", "facebook.com")

COPYRIGHT_FOOTER_PATTERN = re.compile(r'\b(?:inc|llc|ltd)\b|rights reserved', re.IGNORECASE)
COPYRIGHT_SYMBOL_PATTERN = re.compile(r'©[^\n]+')
DISCLAIMER_FOOTER_PATTERN = re.compile(
    r'\bdisclaimer\b|data policy|not responsible|informational', re.IGNORECASE
)

# Elements whose boundaries start a new line in rendered text
BLOCK_TAGS = {
    'address', 'article', 'aside', 'blockquote', 'dd', 'details', 'dialog', 'div', 'dl', 'dt',
    'fieldset', 'figcaption', 'figure', 'footer', 'form', 'h1', 'h2', 'h3', 'h4', 'h5', 'h6',
    'header', 'hr', 'li', 'main', 'nav', 'ol', 'p', 'pre', 'section', 'summary', 'table',
    'tr', 'ul',
}
HIDDEN_TAGS = {'script', 'style', 'noscript', 'template', 'head', 'svg', 'iframe'}
NON_TEXT_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)


def visible_text(element: Optional[Tag]) -> str:
    """Approximate ``innerText``: non-empty lines, whitespace collapsed."""
    if element is None:
        return ""
    parts: List[str] = []

    def walk(node: Tag) -> None:
        for child in node.children:
            if isinstance(child, NavigableString):
                if not isinstance(child, NON_TEXT_STRINGS):
                    parts.append(str(child).replace('\n', ' '))
            elif isinstance(child, Tag):
                name = (child.name or '').lower()
                if name in HIDDEN_TAGS:
                    continue
                if name == 'br':
                    parts.append('\n')
                    continue
                is_block = name in BLOCK_TAGS
                if is_block:
                    parts.append('\n')
                walk(child)
                if is_block:
                    parts.append('\n')

    walk(element)
    lines = (re.sub(r'\s+', ' ', line).strip() for line in ''.join(parts).split('\n'))
    return '\n'.join(line for line in lines if line)


def _meta(soup: BeautifulSoup, name: str) -> str:
    """meta[name=n], then og:n, then twitter:n; first non-empty content wins."""
    candidates = (
        {'name': name},
        {'property': f'og:{name}'},
        {'name': f'twitter:{name}'},
    )
    for attrs in candidates:
        tag = soup.find('meta', attrs=attrs)
        if tag and tag.get('content', '').strip():
            return tag['content'].strip()
    return ""


def document_title(soup: BeautifulSoup) -> str:
    """Text of the document <title>, ignoring <title> elements inside inline SVG."""
    for tag in soup.find_all('title'):
        if tag.find_parent('svg') is None:
            return tag.get_text()
    return ""


def _resolve(base_url: str, href: str) -> str:
    """Absolute form of ``href``; empty when it is blank or not a parseable URL."""
    href = href.strip()
    if not href:
        return ""
    try:
        return urljoin(base_url, href)
    except ValueError:
        return ""


def _link_href(soup: BeautifulSoup, rel: str, base_url: str) -> str:
    """Resolved href of the first <link> whose rel attribute is exactly ``rel``."""
    for link in soup.find_all('link'):
        rel_value = link.get('rel') or []
        if isinstance(rel_value, list):
            rel_value = ' '.join(rel_value)
        if rel_value.strip().lower() != rel:
            continue
        href = _resolve(base_url, link.get('href') or '')
        if href:
            return href
    return ""


def _origin(url: str) -> str:
    try:
        parsed = urlparse(url)
    except ValueError:
        return ""
    if not parsed.scheme or not parsed.netloc:
        return ""
    return f"{parsed.scheme}://{parsed.netloc}"


def classify_platform(url: str) -> str:
    lowered = url.lower()
    if 'linkedin' in lowered:
        return 'LinkedIn'
    if 'twitter' in lowered:
        return 'Twitter'
    return 'Facebook'


def dedupe_socials(links: List[SocialLink]) -> List[SocialLink]:
    """Drop repeated urls, keeping the first occurrence and the original order."""
    seen = set()
    unique = []
    for link in links:
        if link.url in seen:
            continue
        seen.add(link.url)
        unique.append(link)
    return unique


def extract_socials(soup: BeautifulSoup, base_url: str) -> List[SocialLink]:
    links = []
    for anchor in soup.find_all('a', href=True):
        href = _resolve(base_url, anchor['href'])
        if href and any(domain in href.lower() for domain in SOCIAL_DOMAINS):
            links.append(SocialLink(platform=classify_platform(href), url=href))
    return dedupe_socials(links)


def infer_copyright(footer_text: str, body_text: str) -> str:
    if footer_text and COPYRIGHT_FOOTER_PATTERN.search(footer_text):
        return footer_text
    match = COPYRIGHT_SYMBOL_PATTERN.search(body_text)
    return match.group(0).strip() if match else ""


def infer_disclaimers(footer_text: str, soup: BeautifulSoup) -> str:
    if footer_text and DISCLAIMER_FOOTER_PATTERN.search(footer_text):
        return footer_text
    texts: List[str] = []
    for element in soup.find_all(['p', 'div']):
        text = visible_text(element)
        if 'disclaimer' in text.lower() and text not in texts:
            texts.append(text)
    return '\n'.join(texts)


def extract_metadata(html: str, url: str, computed_styles: Optional[Dict[str, str]] = None) -> RawMetadata:
    """Build RawMetadata from rendered HTML and the body's computed styles.

    Selectors that find nothing yield empty values; this never raises for a
    document BeautifulSoup can parse (which is any string).
    """
    soup = BeautifulSoup(html or '', 'html.parser')
    styles = computed_styles or {}

    title = ' '.join(document_title(soup).split()) or _meta(soup, 'title')

    image_url = _resolve(url, _meta(soup, 'image'))
    primary_logo = _link_href(soup, 'icon', url) or _link_href(soup, 'shortcut icon', url) or image_url
    icon_logo = _link_href(soup, 'apple-touch-icon', url) or image_url

    footer_lines = visible_text(soup.find('footer')).split('\n')
    footer_text = footer_lines[0] if footer_lines else ""
    body_text = visible_text(soup.body or soup)

    return RawMetadata(
        title=title,
        website=_origin(url),
        description=_meta(soup, 'description'),
        primary_logo_url=primary_logo,
        icon_logo_url=icon_logo,
        background_color=normalize_css_color(styles.get('backgroundColor', '')),
        foreground_color=normalize_css_color(styles.get('color', '')),
        socials=extract_socials(soup, url),
        footer_text=footer_text,
        inferred_copyright=infer_copyright(footer_text, body_text),
        inferred_disclaimers=infer_disclaimers(footer_text, soup),
    )
