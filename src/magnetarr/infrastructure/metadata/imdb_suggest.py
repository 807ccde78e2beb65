"""IMDb Suggest title resolver: works without any API key."""

from __future__ import annotations

import httpx
import structlog

log = structlog.get_logger(__name__)

_SUGGEST_URL = "https://v2.sg.media-imdb.com/suggestion/t/{imdb_id}.json"


class ImdbSuggestClient:
    """Title resolver using the free IMDb Suggest API.

    The Suggest endpoint answers a prefix search; for a full ``tt`` id
    the matching entry carries the English title in ``l``.
    """

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        url_template: str = _SUGGEST_URL,
    ) -> None:
        self._http = http_client
        self._url_template = url_template

    async def get_title(self, imdb_id: str, content_type: str = "movie") -> str:
        if not imdb_id:
            return ""

        url = self._url_template.format(imdb_id=imdb_id)
        try:
            resp = await self._http.get(url)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError):
            log.warning("imdb_suggest_failed", imdb_id=imdb_id, exc_info=True)
            return ""

        raw_entries = data.get("d") if isinstance(data, dict) else None
        if not isinstance(raw_entries, list):
            return ""
        entries = [e for e in raw_entries if isinstance(e, dict)]
        if not entries:
            return ""

        # Prefer the entry for the exact id; fall back to the first hit.
        entry = next((e for e in entries if e.get("id") == imdb_id), entries[0])
        title = entry.get("l", "")
        return title.strip() if isinstance(title, str) else ""
