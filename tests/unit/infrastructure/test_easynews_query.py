"""Tests for Easynews search term construction."""

from __future__ import annotations

import pytest

from easystream.domain.entities.stremio import MediaInfo, SearchQuery
from easystream.infrastructure.easynews.query import build_query


class TestBuildQuery:
    def test_episode(self, series_info: MediaInfo) -> None:
        assert build_query(series_info, 1, 5) == SearchQuery("Show S01E05 2020")

    def test_double_digit_season_not_padded_further(
        self, series_info: MediaInfo
    ) -> None:
        assert build_query(series_info, 12, 3).term == "Show S12E03 2020"

    def test_three_digit_numbers_grow(self, series_info: MediaInfo) -> None:
        assert build_query(series_info, 1, 100).term == "Show S01E100 2020"

    def test_whole_season(self, series_info: MediaInfo) -> None:
        assert build_query(series_info, 1).term == "Show S01 2020"

    def test_series_without_season(self, series_info: MediaInfo) -> None:
        assert build_query(series_info).term == "Show 2020"

    def test_episode_without_season_ignored(self, series_info: MediaInfo) -> None:
        assert build_query(series_info, None, 5).term == "Show 2020"

    def test_movie(self, movie_info: MediaInfo) -> None:
        assert build_query(movie_info).term == "Movie 2019"

    @pytest.mark.parametrize(("season", "episode"), [(1, 5), (2, None)])
    def test_movie_ignores_season_episode(
        self, movie_info: MediaInfo, season: int, episode: int | None
    ) -> None:
        assert build_query(movie_info, season, episode).term == "Movie 2019"

    def test_keeps_title_verbatim(self) -> None:
        info = MediaInfo(title="Marvel's Agents of S.H.I.E.L.D.", year="2013–2020", kind="series")
        assert (
            build_query(info, 7, 13).term
            == "Marvel's Agents of S.H.I.E.L.D. S07E13 2013–2020"
        )
