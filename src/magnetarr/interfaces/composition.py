"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from magnetarr.application.use_cases.stremio_stream import StremioStreamUseCase
from magnetarr.domain.entities.stremio import AddonManifest
from magnetarr.domain.ports import TitleResolverPort
from magnetarr.infrastructure.config.schema import AppConfig
from magnetarr.infrastructure.debrid.realdebrid import RealDebridClient
from magnetarr.infrastructure.metadata.cinemeta import CinemetaClient
from magnetarr.infrastructure.metadata.fallback import FallbackTitleResolver
from magnetarr.infrastructure.metadata.imdb_suggest import ImdbSuggestClient
from magnetarr.infrastructure.stremio.preference_filter import filter_candidates
from magnetarr.infrastructure.torrent_index.bitsearch import BitsearchIndex
from magnetarr.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


def build_manifest(config: AppConfig) -> AddonManifest:
    """Build the process-wide addon manifest from configuration."""
    return AddonManifest(
        id=config.stremio.addon_id,
        version=config.stremio.addon_version,
        name=config.stremio.addon_name,
        description=config.stremio.addon_description,
    )


def _build_title_resolver(
    config: AppConfig, http_client: httpx.AsyncClient
) -> TitleResolverPort:
    cinemeta = CinemetaClient(
        http_client=http_client,
        base_url=config.stremio.cinemeta_base_url,
    )
    if not config.stremio.imdb_suggest_fallback:
        return cinemeta
    return FallbackTitleResolver([cinemeta, ImdbSuggestClient(http_client=http_client)])


def wire_stream_use_case(state: AppState) -> None:
    """Create adapters and the stream use case on top of ``state.http_client``."""
    config = state.config

    state.title_resolver = _build_title_resolver(config, state.http_client)
    state.torrent_index = BitsearchIndex(
        http_client=state.http_client,
        base_url=config.stremio.index_base_url,
        user_agent=config.http_user_agent,
    )
    state.debrid = RealDebridClient(
        http_client=state.http_client,
        base_url=config.stremio.realdebrid_base_url,
    )
    state.stremio_stream_uc = StremioStreamUseCase(
        title_resolver=state.title_resolver,
        index=state.torrent_index,
        debrid=state.debrid,
        filter_fn=filter_candidates,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan Hook: Initialize and cleanup all resources (DI Composition Root).

    Order matters:
        1. HTTP client (shared by every adapter)
        2. Title resolver, torrent index, debrid client
        3. Stream use case
    """
    state = cast(AppState, app.state)
    config = state.config

    # 1) One pooled HTTP client for the whole process (no retry, no rate limit)
    state.http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        follow_redirects=True,
    )
    log.info("http_client_initialized", timeout=config.http_timeout_seconds)

    # 2) + 3) Adapters and use case
    wire_stream_use_case(state)
    log.info(
        "app_startup_complete",
        index=config.stremio.index_base_url,
        imdb_suggest_fallback=config.stremio.imdb_suggest_fallback,
    )

    try:
        yield
    finally:
        await state.http_client.aclose()
        log.info("http_client_closed")
        log.info("app_shutdown_complete")
