"""Bitsearch torrent index adapter (httpx + BeautifulSoup).

Fetches the HTML result listing sorted by seeders and extracts
(title, magnet) pairs.  Implements ``TorrentIndexPort``.
"""

from __future__ import annotations

from urllib.parse import quote

import httpx
import structlog

from magnetarr.domain.entities.stremio import Candidate
from magnetarr.infrastructure.common.html_selectors import (
    extract_attr,
    extract_text,
    parse_html,
    select_items,
)

log = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://bitsearch.to"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/131.0.0.0 Safari/537.36"
)

# Result rows: classic table layout first, card layout as fallback.
_ROW_SELECTORS = ("table.table tbody tr", "li.search-result", "div.search-result")
_TITLE_SELECTORS = ("td a", "h5.title a", "h5 a")
_MAGNET_SELECTOR = 'a[href^="magnet:"]'


def build_search_url(base_url: str, query: str) -> str:
    """Search URL requesting descending-seeders order."""
    return f"{base_url}/search?q={quote(query, safe='')}&sort=seeders"


def parse_candidates(html: str) -> list[Candidate]:
    """Extract candidates from a result page, preserving page order.

    Rows without a magnet link (ads, placeholders) are skipped.
    """
    soup = parse_html(html)
    candidates: list[Candidate] = []
    for row in select_items(soup, *_ROW_SELECTORS):
        magnet = extract_attr(row, _MAGNET_SELECTOR, "href")
        if not magnet:
            continue
        title = extract_text(row, *_TITLE_SELECTORS)
        candidates.append(Candidate(title=title, magnet_uri=magnet))
    return candidates


class BitsearchIndex:
    """Bitsearch result-page scraper using a shared ``httpx.AsyncClient``."""

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._http = http_client
        self.base_url = base_url.rstrip("/")
        self._user_agent = user_agent

    async def _safe_fetch(self, url: str) -> httpx.Response | None:
        """GET *url*; returns ``None`` on failure instead of raising."""
        try:
            resp = await self._http.get(url, headers={"User-Agent": self._user_agent})
            resp.raise_for_status()
            return resp
        except httpx.TimeoutException:
            log.warning("bitsearch_timeout", url=url)
        except httpx.HTTPStatusError as exc:
            log.warning(
                "bitsearch_http_error",
                url=url,
                status=exc.response.status_code,
            )
        except httpx.HTTPError:
            log.warning("bitsearch_fetch_error", url=url, exc_info=True)
        return None

    async def search(self, query: str) -> list[Candidate]:
        """Search the index; empty list on any fetch or parse failure."""
        url = build_search_url(self.base_url, query)
        log.info("bitsearch_search", query=query)

        resp = await self._safe_fetch(url)
        if resp is None:
            return []

        try:
            candidates = parse_candidates(resp.text)
        except Exception:  # noqa: BLE001
            log.warning("bitsearch_parse_error", url=url, exc_info=True)
            return []

        log.info("bitsearch_search_done", query=query, result_count=len(candidates))
        return candidates
