"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from magnetarr.domain.entities.stremio import AddonManifest
from magnetarr.infrastructure.config import AppConfig

if TYPE_CHECKING:
    from magnetarr.application.use_cases.stremio_stream import StremioStreamUseCase
    from magnetarr.domain.ports import (
        DebridServicePort,
        TitleResolverPort,
        TorrentIndexPort,
    )


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig
    manifest: AddonManifest

    # Infrastructure
    http_client: httpx.AsyncClient

    # Domain Ports
    title_resolver: TitleResolverPort
    torrent_index: TorrentIndexPort
    debrid: DebridServicePort

    # Application Services
    stremio_stream_uc: StremioStreamUseCase
