"""Port for title lookups by external catalog id."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TitleResolverPort(Protocol):
    """Async interface for resolving a display title."""

    async def get_title(self, imdb_id: str, content_type: str = "movie") -> str:
        """Return the best-known title for *imdb_id*.

        Returns an empty string when the title cannot be resolved.
        Implementations never raise on network or parse failures.
        """
        ...
