"""Real-Debrid REST client: async httpx implementation.

Every call is authenticated with the caller's API token; the client
holds no per-user state and is safe to share across requests.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

log = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://api.real-debrid.com/rest/1.0"


class RealDebridClient:
    """Async Real-Debrid client using a shared ``httpx.AsyncClient``.

    Implements ``DebridServicePort`` from domain.ports.debrid.  Public
    methods never raise on HTTP or decode errors; they log and return a
    neutral value instead.
    """

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _headers(api_key: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {api_key}"}

    async def _request(
        self,
        method: str,
        path: str,
        api_key: str,
        *,
        data: dict[str, str] | None = None,
    ) -> httpx.Response | None:
        """Send an authenticated request. Returns the response or None."""
        url = f"{self._base_url}{path}"
        try:
            resp = await self._http.request(
                method, url, headers=self._headers(api_key), data=data
            )
            if resp.status_code == 401:
                log.error("realdebrid_token_invalid", path=path, status=401)
                return None
            resp.raise_for_status()
            return resp
        except httpx.HTTPStatusError as exc:
            log.warning(
                "realdebrid_http_error",
                path=path,
                status=exc.response.status_code,
            )
            return None
        except httpx.HTTPError:
            log.warning("realdebrid_network_error", path=path, exc_info=True)
            return None

    @staticmethod
    def _json(resp: httpx.Response, path: str) -> Any:
        try:
            return resp.json()
        except ValueError:
            log.warning("realdebrid_invalid_json", path=path)
            return None

    # ------------------------------------------------------------------
    # Public API (DebridServicePort)
    # ------------------------------------------------------------------

    async def instant_availability(
        self, hashes: list[str], api_key: str
    ) -> dict[str, Any] | None:
        """Batch cache check for *hashes* (one request)."""
        if not hashes:
            return {}
        path = "/torrents/instantAvailability/" + "/".join(hashes)
        resp = await self._request("GET", path, api_key)
        if resp is None:
            return None
        data = self._json(resp, "/torrents/instantAvailability")
        if not isinstance(data, dict):
            # The API answers [] when none of the hashes are known.
            return {}
        return data

    async def unrestrict_link(self, link: str, api_key: str) -> str | None:
        """Resolve a hoster link token into a direct download URL."""
        path = "/unrestrict/link"
        resp = await self._request("POST", path, api_key, data={"link": link})
        if resp is None:
            return None
        data = self._json(resp, path)
        if not isinstance(data, dict):
            return None
        return data.get("download") or None

    async def add_magnet(self, magnet_uri: str, api_key: str) -> str | None:
        """Submit *magnet_uri* for download. Returns the torrent id."""
        path = "/torrents/addMagnet"
        resp = await self._request("POST", path, api_key, data={"magnet": magnet_uri})
        if resp is None:
            return None
        data = self._json(resp, path)
        if not isinstance(data, dict):
            return None
        torrent_id = data.get("id")
        return str(torrent_id) if torrent_id else None

    async def select_files(
        self, torrent_id: str, api_key: str, files: str = "all"
    ) -> bool:
        """Select *files* (comma-separated ids or ``"all"``) for download."""
        resp = await self._request(
            "POST",
            f"/torrents/selectFiles/{torrent_id}",
            api_key,
            data={"files": files},
        )
        return resp is not None
