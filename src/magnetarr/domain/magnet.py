"""Magnet URI parsing (content addressing for cache lookups).

Pure transformation logic: no I/O, no framework dependencies.
"""

from __future__ import annotations

import re

from magnetarr.domain.entities.stremio import Candidate

# Regex: BitTorrent info-hash inside a magnet URI (hex or base32 form)
_BTIH_RE = re.compile(r"xt=urn:btih:([a-zA-Z0-9]+)")


def extract_info_hash(magnet_uri: str) -> str | None:
    """Return the ``xt=urn:btih:`` hash of *magnet_uri*, or ``None``.

    The hash is returned as it appears in the URI (case preserved).
    """
    m = _BTIH_RE.search(magnet_uri)
    if m is None:
        return None
    return m.group(1)


def index_by_hash(candidates: list[Candidate]) -> dict[str, Candidate]:
    """Map lower-cased info-hash -> candidate, preserving candidate order.

    Candidates without an extractable hash are dropped.  When two
    candidates share a hash, the first (better-ranked) one wins.
    """
    indexed: dict[str, Candidate] = {}
    for c in candidates:
        info_hash = extract_info_hash(c.magnet_uri)
        if info_hash is None:
            continue
        indexed.setdefault(info_hash.lower(), c)
    return indexed
