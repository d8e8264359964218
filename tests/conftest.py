"""Shared test fixtures for the easystream test suite."""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from easystream.domain.entities.stremio import (
    EasynewsCredentials,
    FileRecord,
    MediaInfo,
)

# ---------------------------------------------------------------------------
# Domain entity fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def credentials() -> EasynewsCredentials:
    return EasynewsCredentials(username="user", password="secret")


@pytest.fixture()
def movie_info() -> MediaInfo:
    return MediaInfo(title="Movie", year="2019", kind="movie")


@pytest.fixture()
def series_info() -> MediaInfo:
    return MediaInfo(title="Show", year="2020", kind="series")


@pytest.fixture()
def file_record() -> FileRecord:
    """Minimal valid FileRecord."""
    return FileRecord(
        token="4a1b2c3d",
        access_value="a1b2c3d4e5f6.mkv",
        file_url="https://members.easynews.com/dl/a1b2c3d4e5f6.mkv/Movie.2019.mkv",
        display_name="Movie.2019.1080p.BluRay.x264.mkv",
        size_label="8.2 GB",
        codec_label="H264",
        view_count="12",
    )


# ---------------------------------------------------------------------------
# Easynews HTML fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_row() -> Callable[..., str]:
    """Factory rendering one Easynews search result row."""

    def _make_row(
        *,
        index: int = 1,
        token: str = "4a1b2c3d",
        value: str = "a1b2c3d4e5f6.mkv",
        href: str = "https://members.easynews.com/dl/a1b2c3d4e5f6.mkv/Movie.2019.mkv",
        name: str = "Movie.2019.1080p.BluRay.x264.mkv",
        size: str = "8.2 GB",
        codec: str = "H264",
        views: str = "12",
    ) -> str:
        return (
            f'<tr class="rRow{index}">\n'
            f'<td class="chkbox"><input type="checkbox" name="{token}" '
            f'value="{value}" /></td>\n'
            f'<td class="subject"><a href="{href}" target="fileTarget">{name}</a></td>\n'
            f'<td class="fSize" nowrap>{size}</td>\n'
            f'<td class="StatusLink" nowrap>{codec}</td>\n'
            f'<td class="StatusLink" nowrap>{views}</td>\n'
            "</tr>\n"
        )

    return _make_row


@pytest.fixture()
def make_page() -> Callable[[list[str]], str]:
    """Factory wrapping rows into a search result page."""

    def _make_page(rows: list[str]) -> str:
        return (
            "<html><body><form name=\"gsForm\"><table class=\"grid\">\n"
            + "".join(rows)
            + "</table></form></body></html>"
        )

    return _make_page


@pytest.fixture()
def search_page_html(make_row: Callable[..., str], make_page: Callable) -> str:
    """Result page with one full release and one sample file."""
    return make_page(
        [
            make_row(index=1),
            make_row(
                index=2,
                token="5b2c3d4e",
                value="b2c3d4e5f6a7.mkv",
                href="https://members.easynews.com/dl/b2c3d4e5f6a7.mkv/sample.mkv",
                name="Movie.2019.1080p.Sample.mkv",
                size="45.1 MB",
                views="3",
            ),
        ]
    )


# ---------------------------------------------------------------------------
# Mock port fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_metadata(movie_info: MediaInfo) -> AsyncMock:
    """Mock MetadataResolverPort."""
    metadata = AsyncMock()
    metadata.resolve = AsyncMock(return_value=movie_info)
    return metadata


@pytest.fixture()
def mock_search_client() -> AsyncMock:
    """Mock SearchClientPort."""
    client = AsyncMock()
    client.search = AsyncMock(return_value="<html></html>")
    return client


@pytest.fixture()
def mock_extractor() -> MagicMock:
    """Mock ResultExtractorPort (synchronous)."""
    extractor = MagicMock()
    extractor.extract.return_value = []
    return extractor
