"""Tests for StremioStreamUseCase."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from magnetarr.application.use_cases.stremio_stream import (
    INTERNAL_FAULT,
    MISSING_API_KEY,
    MISSING_STREAM_ID,
    StremioStreamUseCase,
    build_search_query,
)
from magnetarr.domain.entities.stremio import (
    Candidate,
    PreferencePolicy,
    StreamResult,
    StremioStreamRequest,
    UserSettings,
)
from magnetarr.domain.magnet import extract_info_hash
from magnetarr.infrastructure.stremio.preference_filter import filter_candidates

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_use_case(
    title_resolver: AsyncMock,
    index: AsyncMock,
    debrid: AsyncMock,
    filter_fn: object = filter_candidates,
) -> StremioStreamUseCase:
    return StremioStreamUseCase(
        title_resolver=title_resolver,
        index=index,
        debrid=debrid,
        filter_fn=filter_fn,  # type: ignore[arg-type]
    )


def _cache_all(debrid: AsyncMock, candidates: list[Candidate]) -> None:
    debrid.instant_availability.return_value = {
        extract_info_hash(c.magnet_uri).lower(): {"rd": [{"link": f"tok-{i}"}]}  # type: ignore[union-attr]
        for i, c in enumerate(candidates)
    }
    debrid.unrestrict_link.side_effect = lambda link, key: f"https://dl/{link}"


# ---------------------------------------------------------------------------
# build_search_query
# ---------------------------------------------------------------------------


class TestBuildSearchQuery:
    def test_movie(self) -> None:
        assert build_search_query("Inception") == "Inception"

    def test_episode_zero_padded(self) -> None:
        assert build_search_query("Breaking Bad", 1, 3) == "Breaking Bad S01E03"

    def test_two_digit_numbers(self) -> None:
        assert build_search_query("Lost", 12, 104) == "Lost S12E104"

    def test_collapses_whitespace(self) -> None:
        assert build_search_query("  The   Office ") == "The Office"

    def test_season_without_episode(self) -> None:
        assert build_search_query("Lost", 1, None) == "Lost"


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------


class TestInputValidation:
    @pytest.mark.asyncio()
    async def test_missing_api_key(
        self,
        movie_request: StremioStreamRequest,
        mock_title_resolver: AsyncMock,
        mock_index: AsyncMock,
        mock_debrid: AsyncMock,
    ) -> None:
        uc = _make_use_case(mock_title_resolver, mock_index, mock_debrid)

        result = await uc.execute(movie_request, UserSettings(api_key=""))

        assert result.streams == []
        assert result.error == MISSING_API_KEY
        assert result.fault is False
        mock_title_resolver.get_title.assert_not_awaited()
        mock_index.search.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_missing_stream_id(
        self,
        user_settings: UserSettings,
        mock_title_resolver: AsyncMock,
        mock_index: AsyncMock,
        mock_debrid: AsyncMock,
    ) -> None:
        uc = _make_use_case(mock_title_resolver, mock_index, mock_debrid)
        request = StremioStreamRequest(imdb_id="", content_type="movie")

        result = await uc.execute(request, user_settings)

        assert result.error == MISSING_STREAM_ID
        mock_title_resolver.get_title.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_api_key_checked_before_stream_id(
        self,
        mock_title_resolver: AsyncMock,
        mock_index: AsyncMock,
        mock_debrid: AsyncMock,
    ) -> None:
        uc = _make_use_case(mock_title_resolver, mock_index, mock_debrid)
        request = StremioStreamRequest(imdb_id="", content_type="movie")

        result = await uc.execute(request, UserSettings())

        assert result.error == MISSING_API_KEY


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class TestResolve:
    @pytest.mark.asyncio()
    async def test_movie_query_is_title(
        self,
        movie_request: StremioStreamRequest,
        user_settings: UserSettings,
        mock_title_resolver: AsyncMock,
        mock_index: AsyncMock,
        mock_debrid: AsyncMock,
    ) -> None:
        uc = _make_use_case(mock_title_resolver, mock_index, mock_debrid)

        await uc.execute(movie_request, user_settings)

        mock_title_resolver.get_title.assert_awaited_once_with("tt1375666", "movie")
        mock_index.search.assert_awaited_once_with("Inception")

    @pytest.mark.asyncio()
    async def test_episode_query_has_marker(
        self,
        episode_request: StremioStreamRequest,
        user_settings: UserSettings,
        mock_title_resolver: AsyncMock,
        mock_index: AsyncMock,
        mock_debrid: AsyncMock,
    ) -> None:
        mock_title_resolver.get_title.return_value = "Breaking Bad"
        uc = _make_use_case(mock_title_resolver, mock_index, mock_debrid)

        await uc.execute(episode_request, user_settings)

        mock_title_resolver.get_title.assert_awaited_once_with("tt0903747", "series")
        mock_index.search.assert_awaited_once_with("Breaking Bad S01E03")

    @pytest.mark.asyncio()
    async def test_series_without_episode_returns_empty(
        self,
        user_settings: UserSettings,
        mock_title_resolver: AsyncMock,
        mock_index: AsyncMock,
        mock_debrid: AsyncMock,
    ) -> None:
        uc = _make_use_case(mock_title_resolver, mock_index, mock_debrid)
        request = StremioStreamRequest(imdb_id="tt0903747", content_type="series")

        result = await uc.execute(request, user_settings)

        assert result.streams == []
        assert result.error is None
        mock_index.search.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_unknown_title_returns_empty(
        self,
        movie_request: StremioStreamRequest,
        user_settings: UserSettings,
        mock_title_resolver: AsyncMock,
        mock_index: AsyncMock,
        mock_debrid: AsyncMock,
    ) -> None:
        mock_title_resolver.get_title.return_value = ""
        uc = _make_use_case(mock_title_resolver, mock_index, mock_debrid)

        result = await uc.execute(movie_request, user_settings)

        assert result.streams == []
        assert result.error is None
        mock_index.search.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_no_search_results(
        self,
        movie_request: StremioStreamRequest,
        user_settings: UserSettings,
        mock_title_resolver: AsyncMock,
        mock_index: AsyncMock,
        mock_debrid: AsyncMock,
    ) -> None:
        mock_index.search.return_value = []
        uc = _make_use_case(mock_title_resolver, mock_index, mock_debrid)

        result = await uc.execute(movie_request, user_settings)

        assert result.streams == []
        mock_debrid.instant_availability.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_cached_streams_returned(
        self,
        movie_request: StremioStreamRequest,
        user_settings: UserSettings,
        candidates: list[Candidate],
        mock_title_resolver: AsyncMock,
        mock_index: AsyncMock,
        mock_debrid: AsyncMock,
    ) -> None:
        _cache_all(mock_debrid, candidates)
        uc = _make_use_case(mock_title_resolver, mock_index, mock_debrid)

        result = await uc.execute(movie_request, user_settings)

        assert result.error is None
        assert [s.url for s in result.streams] == [
            "https://dl/tok-0",
            "https://dl/tok-1",
            "https://dl/tok-2",
        ]
        assert all(s.title.startswith("RD Cached: ") for s in result.streams)

    @pytest.mark.asyncio()
    async def test_filter_applied_before_cache_check(
        self,
        movie_request: StremioStreamRequest,
        candidates: list[Candidate],
        mock_title_resolver: AsyncMock,
        mock_index: AsyncMock,
        mock_debrid: AsyncMock,
    ) -> None:
        _cache_all(mock_debrid, candidates)
        settings = UserSettings(
            api_key="rd-test-key",
            policy=PreferencePolicy.from_csv(quality="2160p", exclude="cam"),
        )
        uc = _make_use_case(mock_title_resolver, mock_index, mock_debrid)

        result = await uc.execute(movie_request, settings)

        sent_hashes = mock_debrid.instant_availability.call_args.args[0]
        assert sent_hashes == [extract_info_hash(candidates[1].magnet_uri).lower()]  # type: ignore[union-attr]
        assert [s.title for s in result.streams] == [
            f"RD Cached: {candidates[1].title}"
        ]

    @pytest.mark.asyncio()
    async def test_strict_filter_empties_result(
        self,
        movie_request: StremioStreamRequest,
        mock_title_resolver: AsyncMock,
        mock_index: AsyncMock,
        mock_debrid: AsyncMock,
    ) -> None:
        settings = UserSettings(
            api_key="rd-test-key",
            policy=PreferencePolicy.from_csv(quality="480p"),
            fallback=True,
        )
        uc = _make_use_case(mock_title_resolver, mock_index, mock_debrid)

        result = await uc.execute(movie_request, settings)

        assert result.streams == []
        mock_debrid.instant_availability.assert_not_awaited()
        mock_debrid.add_magnet.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_filter_fn_receives_policy(
        self,
        movie_request: StremioStreamRequest,
        candidates: list[Candidate],
        mock_title_resolver: AsyncMock,
        mock_index: AsyncMock,
        mock_debrid: AsyncMock,
    ) -> None:
        filter_fn = MagicMock(return_value=[])
        policy = PreferencePolicy.from_csv(codec="x265")
        uc = _make_use_case(mock_title_resolver, mock_index, mock_debrid, filter_fn)

        await uc.execute(movie_request, UserSettings(api_key="k", policy=policy))

        filter_fn.assert_called_once_with(candidates, policy)


# ---------------------------------------------------------------------------
# Fallback acquisition
# ---------------------------------------------------------------------------


class TestFallback:
    @pytest.mark.asyncio()
    async def test_disabled_returns_empty(
        self,
        movie_request: StremioStreamRequest,
        user_settings: UserSettings,
        mock_title_resolver: AsyncMock,
        mock_index: AsyncMock,
        mock_debrid: AsyncMock,
    ) -> None:
        uc = _make_use_case(mock_title_resolver, mock_index, mock_debrid)

        result = await uc.execute(movie_request, user_settings)

        assert result.streams == []
        mock_debrid.add_magnet.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_enabled_returns_placeholder(
        self,
        movie_request: StremioStreamRequest,
        candidates: list[Candidate],
        mock_title_resolver: AsyncMock,
        mock_index: AsyncMock,
        mock_debrid: AsyncMock,
    ) -> None:
        mock_debrid.add_magnet.return_value = "JOB42"
        uc = _make_use_case(mock_title_resolver, mock_index, mock_debrid)

        result = await uc.execute(
            movie_request, UserSettings(api_key="rd-test-key", fallback=True)
        )

        assert result.streams == [
            StreamResult(
                title=f"[RD - Downloading]: {candidates[0].title}",
                url="magnet:?xt=urn:btih:JOB42",
            )
        ]

    @pytest.mark.asyncio()
    async def test_enabled_but_cache_hit_skips_fallback(
        self,
        movie_request: StremioStreamRequest,
        candidates: list[Candidate],
        mock_title_resolver: AsyncMock,
        mock_index: AsyncMock,
        mock_debrid: AsyncMock,
    ) -> None:
        _cache_all(mock_debrid, candidates)
        uc = _make_use_case(mock_title_resolver, mock_index, mock_debrid)

        result = await uc.execute(
            movie_request, UserSettings(api_key="rd-test-key", fallback=True)
        )

        assert len(result.streams) == 3
        mock_debrid.add_magnet.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_failed_acquisition_returns_empty(
        self,
        movie_request: StremioStreamRequest,
        mock_title_resolver: AsyncMock,
        mock_index: AsyncMock,
        mock_debrid: AsyncMock,
    ) -> None:
        mock_debrid.add_magnet.return_value = None
        uc = _make_use_case(mock_title_resolver, mock_index, mock_debrid)

        result = await uc.execute(
            movie_request, UserSettings(api_key="rd-test-key", fallback=True)
        )

        assert result.streams == []
        assert result.error is None


# ---------------------------------------------------------------------------
# Internal faults
# ---------------------------------------------------------------------------


class TestInternalFault:
    @pytest.mark.asyncio()
    async def test_unexpected_exception_becomes_fault(
        self,
        movie_request: StremioStreamRequest,
        user_settings: UserSettings,
        mock_title_resolver: AsyncMock,
        mock_index: AsyncMock,
        mock_debrid: AsyncMock,
    ) -> None:
        mock_index.search.side_effect = RuntimeError("index exploded")
        uc = _make_use_case(mock_title_resolver, mock_index, mock_debrid)

        result = await uc.execute(movie_request, user_settings)

        assert result.fault is True
        assert result.error == INTERNAL_FAULT
        assert result.streams == []
