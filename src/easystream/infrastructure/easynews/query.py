"""Search term construction for Easynews."""

from __future__ import annotations

from easystream.domain.entities.stremio import MediaInfo, SearchQuery


def build_query(
    info: MediaInfo,
    season: int | None = None,
    episode: int | None = None,
) -> SearchQuery:
    """Build the Easynews search term for a title.

    Series with season and episode search ``Title S01E05 2020``, series
    with only a season search ``Title S01 2020``; everything else searches
    ``Title 2020``. Numbers are zero-padded to two digits, never truncated.
    """
    if info.kind == "series" and season is not None:
        if episode is not None:
            return SearchQuery(f"{info.title} S{season:02d}E{episode:02d} {info.year}")
        return SearchQuery(f"{info.title} S{season:02d} {info.year}")
    return SearchQuery(f"{info.title} {info.year}")
