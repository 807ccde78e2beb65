"""Stremio stream resolution use case.

IMDb ID -> title -> torrent index search -> preference filter
-> debrid cache check -> (fallback acquisition) -> StreamResult list.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from magnetarr.domain.entities.stremio import (
    Candidate,
    PreferencePolicy,
    StreamResolution,
    StreamResult,
    StremioStreamRequest,
    UserSettings,
)
from magnetarr.domain.ports.debrid import DebridServicePort
from magnetarr.domain.ports.metadata import TitleResolverPort
from magnetarr.domain.ports.torrent_index import TorrentIndexPort

from .cache_availability import check_cache_availability
from .fallback_acquisition import acquire_best_candidate

log = structlog.get_logger(__name__)

MISSING_API_KEY = "Real-Debrid API key not provided in settings."
MISSING_STREAM_ID = "Stream ID not provided."
INTERNAL_FAULT = "Internal Server Error"

# Type alias for the injected preference filter.
_FilterFn = Callable[[list[Candidate], PreferencePolicy], list[Candidate]]


def build_search_query(
    title: str,
    season: int | None = None,
    episode: int | None = None,
) -> str:
    """Build the index query: plain title, or ``"<title> SxxEyy"`` for episodes."""
    base = " ".join(title.split())
    if season is not None and episode is not None:
        return f"{base} S{season:02d}E{episode:02d}"
    return base


class StremioStreamUseCase:
    """Resolve Stremio stream requests into debrid-backed stream links.

    Flow:
        1. Resolve the IMDb ID to a display title.
        2. Search the torrent index (seeders descending).
        3. Narrow candidates by the user's preference policy.
        4. Check which candidates are instantly available on the debrid
           service and resolve direct URLs for the hits.
        5. With fallback enabled and no hits, start a background
           download of the best candidate and return a placeholder.

    Each stage is a single sequential await; nothing is shared between
    requests.
    """

    def __init__(
        self,
        *,
        title_resolver: TitleResolverPort,
        index: TorrentIndexPort,
        debrid: DebridServicePort,
        filter_fn: _FilterFn,
    ) -> None:
        self._titles = title_resolver
        self._index = index
        self._debrid = debrid
        self._filter_fn = filter_fn

    async def execute(
        self,
        request: StremioStreamRequest,
        settings: UserSettings,
    ) -> StreamResolution:
        """Resolve streams for a Stremio request.

        Never raises.  Missing input is reported through
        ``StreamResolution.error`` before any network call; an unexpected
        exception is logged and reported as an internal fault.
        """
        if not settings.api_key:
            log.warning("stremio_missing_api_key", imdb_id=request.imdb_id)
            return StreamResolution(error=MISSING_API_KEY)
        if not request.imdb_id:
            log.warning("stremio_missing_stream_id")
            return StreamResolution(error=MISSING_STREAM_ID)

        try:
            streams = await self._resolve(request, settings)
        except Exception:
            log.exception(
                "stremio_stream_pipeline_failed",
                imdb_id=request.imdb_id,
                content_type=request.content_type,
            )
            return StreamResolution(error=INTERNAL_FAULT, fault=True)
        return StreamResolution(streams=streams)

    async def _resolve_query(self, request: StremioStreamRequest) -> str:
        """Title-based query, or ``""`` when the request cannot be searched."""
        if request.content_type == "series" and (
            request.season is None or request.episode is None
        ):
            log.info("stremio_series_without_episode", imdb_id=request.imdb_id)
            return ""
        if request.content_type not in ("movie", "series"):
            return ""

        title = await self._titles.get_title(request.imdb_id, request.content_type)
        if not title:
            log.warning("stremio_title_not_found", imdb_id=request.imdb_id)
            return ""

        if request.content_type == "series":
            return build_search_query(title, request.season, request.episode)
        return build_search_query(title)

    async def _resolve(
        self,
        request: StremioStreamRequest,
        settings: UserSettings,
    ) -> list[StreamResult]:
        query = await self._resolve_query(request)
        if not query:
            return []

        log.info(
            "stremio_search_start",
            imdb_id=request.imdb_id,
            content_type=request.content_type,
            query=query,
        )

        candidates = await self._index.search(query)
        if not candidates:
            log.info("stremio_search_no_results", imdb_id=request.imdb_id, query=query)
            return []

        filtered = self._filter_fn(candidates, settings.policy)
        if not filtered:
            log.info(
                "stremio_all_filtered",
                imdb_id=request.imdb_id,
                query=query,
                total=len(candidates),
            )
            return []

        streams = await check_cache_availability(
            filtered, debrid=self._debrid, api_key=settings.api_key
        )
        if streams:
            log.info(
                "stremio_cached_streams_found",
                imdb_id=request.imdb_id,
                stream_count=len(streams),
            )
            return streams

        if settings.fallback:
            placeholder = await acquire_best_candidate(
                filtered, debrid=self._debrid, api_key=settings.api_key
            )
            if placeholder is not None:
                return [placeholder]

        log.info("stremio_no_streams_available", imdb_id=request.imdb_id, query=query)
        return []
