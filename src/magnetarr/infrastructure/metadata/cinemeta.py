"""Cinemeta metadata client: async httpx title lookup."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

log = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://v3-cinemeta.strem.io"


class CinemetaClient:
    """Title resolver backed by Stremio's public Cinemeta addon.

    Implements ``TitleResolverPort`` from domain.ports.metadata.
    """

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")

    async def _get(self, path: str) -> dict[str, Any] | None:
        """GET request with error handling. Returns parsed JSON or None."""
        url = f"{self._base_url}{path}"
        try:
            resp = await self._http.get(url)
            if resp.status_code == 404:
                log.debug("cinemeta_not_found", path=path)
                return None
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError:
            log.warning("cinemeta_network_error", path=path, exc_info=True)
            return None
        except ValueError:
            log.warning("cinemeta_invalid_json", path=path)
            return None
        return data if isinstance(data, dict) else None

    async def get_title(self, imdb_id: str, content_type: str = "movie") -> str:
        """Return ``meta.name`` for *imdb_id*, or ``""`` if unresolvable."""
        if not imdb_id:
            return ""

        data = await self._get(f"/meta/{content_type}/{imdb_id}.json")
        if data is None:
            return ""

        meta = data.get("meta")
        if not isinstance(meta, dict):
            return ""
        name = meta.get("name")
        return name.strip() if isinstance(name, str) else ""
