"""CSS-selector-based HTML extraction with fallback chains.

Index result pages change layout every few months (tables become card
lists, classes get renamed).  Each helper takes a primary selector plus
optional *fallback_selectors*; the first selector that yields a match
wins.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag


def parse_html(html: str) -> BeautifulSoup:
    """Parse an HTML string into a BeautifulSoup tree (lxml parser)."""
    return BeautifulSoup(html, "lxml")


def select_items(
    root: BeautifulSoup | Tag,
    selector: str,
    *fallback_selectors: str,
) -> list[Tag]:
    """Select elements via CSS, returning hits of the first matching selector."""
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
) -> str:
    """Stripped text of the first matching child that has any text."""
    for sel in (selector, *fallback_selectors):
        for match in element.select(sel):
            text = match.get_text(strip=True)
            if text:
                return text
    return default


def extract_attr(
    element: Tag,
    selector: str,
    attr: str,
    *fallback_selectors: str,
    default: str = "",
) -> str:
    """Attribute value of the first matching child element."""
    for sel in (selector, *fallback_selectors):
        match = element.select_one(sel)
        if match is None:
            continue
        val = match.get(attr)
        if val:
            return str(val)
    return default
