"""Stremio addon API endpoints (manifest, stream)."""

from __future__ import annotations

from typing import Any, cast

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from magnetarr.application.use_cases.stremio_stream import MISSING_API_KEY
from magnetarr.domain.entities.stremio import (
    StremioContentType,
    StremioStreamRequest,
)
from magnetarr.domain.exceptions import AddonSettingsError
from magnetarr.interfaces.api.stremio.addon_settings import decode_addon_settings
from magnetarr.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(prefix="/stremio", tags=["stremio"])

_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "*",
}

CONFIG_MISSING = "Configuration not provided."
CONFIG_INVALID = "Invalid configuration."


def _parse_stream_id(content_type: str, raw_id: str) -> StremioStreamRequest | None:
    """Parse Stremio stream ID into a StremioStreamRequest.

    Movies: "tt1234567"
    Series: "tt1234567:1:5" (season 1, episode 5)
    """
    if content_type not in ("movie", "series"):
        return None

    ct: StremioContentType = cast(StremioContentType, content_type)

    if not raw_id.startswith("tt"):
        return None

    parts = raw_id.split(":")
    imdb_id = parts[0]

    if ct == "series" and len(parts) == 3:
        try:
            season = int(parts[1])
            episode = int(parts[2])
        except ValueError:
            return None
        if season < 0 or episode < 0:
            return None
        return StremioStreamRequest(
            imdb_id=imdb_id,
            content_type=ct,
            season=season,
            episode=episode,
        )

    return StremioStreamRequest(imdb_id=imdb_id, content_type=ct)


def _streams_response(
    streams: list[dict[str, str]],
    *,
    error: str | None = None,
    status_code: int = 200,
) -> JSONResponse:
    content: dict[str, Any] = {"streams": streams}
    if error:
        content["error"] = error
    return JSONResponse(content=content, status_code=status_code, headers=_CORS_HEADERS)


@router.get("/manifest.json")
async def stremio_manifest(request: Request) -> JSONResponse:
    """Serve the manifest for a fresh (unconfigured) install."""
    state = cast(AppState, request.app.state)
    return JSONResponse(content=state.manifest.to_dict(), headers=_CORS_HEADERS)


@router.get("/{settings}/manifest.json")
async def stremio_configured_manifest(request: Request, settings: str) -> JSONResponse:
    """Serve the manifest for an install whose settings are in the URL."""
    state = cast(AppState, request.app.state)
    return JSONResponse(
        content=state.manifest.to_dict(configured=True),
        headers=_CORS_HEADERS,
    )


@router.get("/stream/{content_type}/{stream_id}.json")
async def stremio_stream_unconfigured(
    content_type: str,
    stream_id: str,
) -> JSONResponse:
    """Stream request without settings: nothing can be resolved."""
    log.info("stremio_stream_unconfigured", content_type=content_type)
    return _streams_response([], error=CONFIG_MISSING)


@router.get("/{settings}/stream/{content_type}/{stream_id}.json")
async def stremio_stream(
    request: Request,
    settings: str,
    content_type: str,
    stream_id: str,
) -> JSONResponse:
    """Resolve streams for a movie or episode.

    1. Decode the per-install settings from the URL and require an API key.
    2. Parse the Stremio stream ID (IMDb ID + optional season/episode).
    3. Run the stream use case and format its result for Stremio.
    """
    state = cast(AppState, request.app.state)

    try:
        addon_settings = decode_addon_settings(settings)
    except AddonSettingsError:
        log.warning("stremio_invalid_settings", exc_info=True)
        return _streams_response([], error=CONFIG_INVALID)

    user_settings = addon_settings.to_user_settings()
    if not user_settings.api_key:
        log.warning("stremio_missing_api_key", content_type=content_type)
        return _streams_response([], error=MISSING_API_KEY)

    parsed = _parse_stream_id(content_type, stream_id)
    if parsed is None:
        log.info(
            "stremio_unsupported_id", content_type=content_type, stream_id=stream_id
        )
        return _streams_response([])

    log.info(
        "stremio_stream_request",
        imdb_id=parsed.imdb_id,
        content_type=parsed.content_type,
        season=parsed.season,
        episode=parsed.episode,
    )

    resolution = await state.stremio_stream_uc.execute(parsed, user_settings)
    if resolution.fault:
        return JSONResponse(
            content={"error": resolution.error},
            status_code=500,
            headers=_CORS_HEADERS,
        )

    streams = [s.to_dict() for s in resolution.streams]
    log.info(
        "stremio_stream_response",
        imdb_id=parsed.imdb_id,
        streams_returned=len(streams),
    )
    return _streams_response(streams, error=resolution.error)
