"""Fallback acquisition: start a background download of the best candidate."""

from __future__ import annotations

import structlog

from magnetarr.domain.entities.stremio import (
    DOWNLOADING_PREFIX,
    Candidate,
    StreamResult,
)
from magnetarr.domain.ports.debrid import DebridServicePort

log = structlog.get_logger(__name__)


async def acquire_best_candidate(
    candidates: list[Candidate],
    *,
    debrid: DebridServicePort,
    api_key: str,
) -> StreamResult | None:
    """Submit ``candidates[0]`` to the debrid service.

    Returns a placeholder whose URL is a synthetic magnet embedding the
    service's job id.  It is not playable; it only signals that the
    download is in progress.  Returns ``None`` when there is nothing to
    submit or any call fails.
    """
    if not candidates:
        return None

    best = candidates[0]
    log.info("fallback_add_magnet", title=best.title)

    try:
        torrent_id = await debrid.add_magnet(best.magnet_uri, api_key)
        if not torrent_id:
            log.error("fallback_no_torrent_id", title=best.title)
            return None

        if not await debrid.select_files(torrent_id, api_key, files="all"):
            log.error("fallback_select_files_failed", torrent_id=torrent_id)
            return None
    except Exception:  # noqa: BLE001
        log.warning("fallback_acquisition_failed", title=best.title, exc_info=True)
        return None

    log.info("fallback_acquisition_started", torrent_id=torrent_id, title=best.title)
    return StreamResult(
        title=f"{DOWNLOADING_PREFIX}{best.title}",
        url=f"magnet:?xt=urn:btih:{torrent_id}",
    )
