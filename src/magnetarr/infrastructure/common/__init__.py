"""Common infrastructure utilities."""

from __future__ import annotations

from .html_selectors import extract_attr, extract_text, parse_html, select_items

__all__ = [
    "extract_attr",
    "extract_text",
    "parse_html",
    "select_items",
]
