"""Port for torrent index searches."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from magnetarr.domain.entities.stremio import Candidate


@runtime_checkable
class TorrentIndexPort(Protocol):
    """Async interface for a torrent index sorted by popularity."""

    async def search(self, query: str) -> list[Candidate]:
        """Return candidates in the order the index ranks them.

        Returns an empty list on fetch or parse failure.
        """
        ...
