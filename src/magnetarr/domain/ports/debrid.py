"""Port for debrid service operations."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DebridServicePort(Protocol):
    """Async interface for a debrid service (Real-Debrid API shape).

    Every method takes the user's API token explicitly; implementations
    keep no per-user state between calls.
    """

    async def instant_availability(
        self, hashes: list[str], api_key: str
    ) -> dict[str, Any] | None:
        """Batch cache check. Maps hash -> cache entry, None on failure."""
        ...

    async def unrestrict_link(self, link: str, api_key: str) -> str | None:
        """Turn a service-internal link token into a direct download URL."""
        ...

    async def add_magnet(self, magnet_uri: str, api_key: str) -> str | None:
        """Submit a magnet for background download. Returns the job id."""
        ...

    async def select_files(
        self, torrent_id: str, api_key: str, files: str = "all"
    ) -> bool:
        """Mark files of a submitted job for retrieval."""
        ...
