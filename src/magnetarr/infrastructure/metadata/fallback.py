"""Chain several title resolvers, first non-empty title wins."""

from __future__ import annotations

import structlog

from magnetarr.domain.ports.metadata import TitleResolverPort

log = structlog.get_logger(__name__)


class FallbackTitleResolver:
    """Try each resolver in order until one returns a title."""

    def __init__(self, resolvers: list[TitleResolverPort]) -> None:
        self._resolvers = resolvers

    async def get_title(self, imdb_id: str, content_type: str = "movie") -> str:
        for resolver in self._resolvers:
            title = await resolver.get_title(imdb_id, content_type)
            if title:
                return title
            log.debug(
                "title_resolver_miss",
                resolver=type(resolver).__name__,
                imdb_id=imdb_id,
            )
        return ""
