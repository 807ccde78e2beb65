"""Preference filtering for torrent candidates.

Pure transformation logic: no I/O, no framework dependencies.
Matches include/exclude terms as case-insensitive substrings of the
full candidate title (no tokenisation).
"""

from __future__ import annotations

import structlog

from magnetarr.domain.entities.stremio import Candidate, PreferencePolicy

log = structlog.get_logger(__name__)


def _matches_any(title: str, terms: frozenset[str]) -> bool:
    return any(term in title for term in terms)


def matches_policy(title: str, policy: PreferencePolicy) -> bool:
    """Check a single title against *policy*."""
    lowered = title.lower()
    if policy.include_quality and not _matches_any(lowered, policy.include_quality):
        return False
    if policy.include_codec and not _matches_any(lowered, policy.include_codec):
        return False
    if policy.include_audio and not _matches_any(lowered, policy.include_audio):
        return False
    return not _matches_any(lowered, policy.exclude)


def filter_candidates(
    candidates: list[Candidate],
    policy: PreferencePolicy,
) -> list[Candidate]:
    """Keep candidates whose title satisfies *policy*, in input order.

    Strict: when no candidate matches, the result is empty.  There is
    no fallback to the unfiltered list.
    """
    if policy.is_empty:
        return list(candidates)

    kept = [c for c in candidates if matches_policy(c.title, policy)]

    log.info(
        "preference_filter_summary",
        total=len(candidates),
        kept=len(kept),
        dropped=len(candidates) - len(kept),
    )
    return kept
