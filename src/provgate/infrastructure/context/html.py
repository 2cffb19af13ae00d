"""CSS-selector HTML query helpers handed to providers.

Every extraction function accepts a primary selector and optional
*fallback_selectors*; the first selector that yields at least one match
wins, which keeps provider scrapers working across minor layout changes.
"""

from __future__ import annotations

from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag


def parse_html(html: str) -> BeautifulSoup:
    """Parse an HTML string into a BeautifulSoup tree (lxml parser)."""
    return BeautifulSoup(html, "lxml")


def select_items(
    root: BeautifulSoup | Tag,
    selector: str,
    *fallback_selectors: str,
) -> list[Tag]:
    """Select elements via CSS with a fallback chain."""
    for sel in (selector, *fallback_selectors):
        items = root.select(sel)
        if items:
            return items
    return []


def extract_text(
    element: Tag,
    selector: str,
    *fallback_selectors: str,
    default: str = "",
    strip: bool = True,
) -> str:
    """Text of the first matching child; ``selector=""`` reads *element* itself."""
    if selector == "":
        text = element.get_text(strip=strip)
        return text if text else default

    for sel in (selector, *fallback_selectors):
        match = element.select_one(sel)
        if match:
            text = match.get_text(strip=strip)
            if text:
                return text
    return default


def extract_attr(
    element: Tag,
    selector: str,
    attr: str,
    *fallback_selectors: str,
    default: str = "",
    base_url: str = "",
) -> str:
    """Attribute of the first matching child, optionally joined onto *base_url*."""
    value = ""
    if selector == "":
        raw = element.get(attr)
        value = str(raw) if raw else ""
    else:
        for sel in (selector, *fallback_selectors):
            match = element.select_one(sel)
            if match and match.get(attr):
                value = str(match.get(attr))
                break

    if not value:
        return default
    return urljoin(base_url, value) if base_url else value


class HtmlQuery:
    """Namespace object exposed to providers as ``provider_context.html``."""

    parse = staticmethod(parse_html)
    select = staticmethod(select_items)
    text = staticmethod(extract_text)
    attr = staticmethod(extract_attr)

    def load(self, html: str) -> BeautifulSoup:
        """Alias of ``parse``."""
        return parse_html(html)
