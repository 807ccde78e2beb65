"""Shared test fixtures for Magnetarr test suite."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from magnetarr.domain.entities import (
    Candidate,
    PreferencePolicy,
    StremioStreamRequest,
    UserSettings,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_HASH_A = "AAAA1111BBBB2222CCCC3333DDDD4444EEEE5555"
_HASH_B = "bbbb1111cccc2222dddd3333eeee4444ffff5555"
_HASH_C = "CCCC9999DDDD8888EEEE7777FFFF6666AAAA0000"


def _magnet(info_hash: str, name: str = "release") -> str:
    """Build a realistic magnet URI around *info_hash*."""
    return (
        f"magnet:?xt=urn:btih:{info_hash}&dn={name}"
        "&tr=udp%3A%2F%2Ftracker.opentrackr.org%3A1337"
    )


# ---------------------------------------------------------------------------
# Domain entity fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def candidates() -> list[Candidate]:
    """Three candidates in seeders-descending order."""
    return [
        Candidate(
            title="Inception.2010.1080p.BluRay.x264-SPARKS",
            magnet_uri=_magnet(_HASH_A, "Inception.2010.1080p"),
        ),
        Candidate(
            title="Inception.2010.2160p.UHD.BluRay.x265.HDR.DTS-HD",
            magnet_uri=_magnet(_HASH_B, "Inception.2010.2160p"),
        ),
        Candidate(
            title="Inception.2010.720p.CAM.x264",
            magnet_uri=_magnet(_HASH_C, "Inception.2010.720p"),
        ),
    ]


@pytest.fixture()
def movie_request() -> StremioStreamRequest:
    return StremioStreamRequest(imdb_id="tt1375666", content_type="movie")


@pytest.fixture()
def episode_request() -> StremioStreamRequest:
    return StremioStreamRequest(
        imdb_id="tt0903747", content_type="series", season=1, episode=3
    )


@pytest.fixture()
def user_settings() -> UserSettings:
    """Settings with a key and no preferences."""
    return UserSettings(api_key="rd-test-key", policy=PreferencePolicy())


# ---------------------------------------------------------------------------
# Mock port fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_title_resolver() -> AsyncMock:
    """Mock TitleResolverPort."""
    resolver = AsyncMock()
    resolver.get_title = AsyncMock(return_value="Inception")
    return resolver


@pytest.fixture()
def mock_index(candidates: list[Candidate]) -> AsyncMock:
    """Mock TorrentIndexPort."""
    index = AsyncMock()
    index.search = AsyncMock(return_value=candidates)
    return index


@pytest.fixture()
def mock_debrid() -> AsyncMock:
    """Mock DebridServicePort: nothing cached by default."""
    debrid = AsyncMock()
    debrid.instant_availability = AsyncMock(return_value={})
    debrid.unrestrict_link = AsyncMock(return_value=None)
    debrid.add_magnet = AsyncMock(return_value=None)
    debrid.select_files = AsyncMock(return_value=True)
    return debrid
