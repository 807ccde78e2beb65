"""Cache availability check against the debrid service.

Candidates -> info-hashes -> one batch availability query
-> one unrestrict call per cache hit -> StreamResult list.
"""

from __future__ import annotations

from typing import Any

import structlog

from magnetarr.domain.entities.stremio import CACHED_PREFIX, Candidate, StreamResult
from magnetarr.domain.magnet import index_by_hash
from magnetarr.domain.ports.debrid import DebridServicePort

log = structlog.get_logger(__name__)


def _hit_link(entry: Any) -> str | None:
    """Return the link token of a cache entry, or None if not cached.

    A cached hash looks like ``{"rd": [{"link": ...}, ...]}``; an
    uncached one has an empty ``rd`` list or no entry at all.
    """
    if not isinstance(entry, dict):
        return None
    variants = entry.get("rd")
    if not isinstance(variants, list) or not variants:
        return None
    first = variants[0]
    if not isinstance(first, dict):
        return None
    link = first.get("link")
    return link if isinstance(link, str) and link else None


async def check_cache_availability(
    candidates: list[Candidate],
    *,
    debrid: DebridServicePort,
    api_key: str,
) -> list[StreamResult]:
    """Return a StreamResult for every candidate cached on the service.

    Results follow the order in which the service reports hashes.
    Never raises: a failed batch query yields ``[]`` and a failed
    resolve only drops that one hit.
    """
    by_hash = index_by_hash(candidates)
    if not by_hash:
        log.info("cache_check_no_hashes", candidates=len(candidates))
        return []

    try:
        availability = await debrid.instant_availability(list(by_hash), api_key)
    except Exception:  # noqa: BLE001
        log.warning("cache_check_batch_failed", hashes=len(by_hash), exc_info=True)
        return []
    if not availability:
        log.info("cache_check_no_availability", hashes=len(by_hash))
        return []

    streams: list[StreamResult] = []
    for reported_hash, entry in availability.items():
        candidate = by_hash.get(str(reported_hash).lower())
        if candidate is None:
            continue
        link = _hit_link(entry)
        if link is None:
            continue

        try:
            url = await debrid.unrestrict_link(link, api_key)
        except Exception:  # noqa: BLE001
            log.warning(
                "cache_check_resolve_failed", info_hash=reported_hash, exc_info=True
            )
            continue
        if not url:
            log.warning("cache_check_resolve_empty", info_hash=reported_hash)
            continue

        streams.append(StreamResult(title=f"{CACHED_PREFIX}{candidate.title}", url=url))

    log.info(
        "cache_check_complete",
        hashes=len(by_hash),
        reported=len(availability),
        hits=len(streams),
    )
    return streams
