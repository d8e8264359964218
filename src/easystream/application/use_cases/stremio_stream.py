"""Stremio stream resolution use case.

IMDb ID -> OMDb title -> Easynews search -> parse -> StreamDescriptor list.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from easystream.domain.entities.stremio import (
    ContentRef,
    EasynewsCredentials,
    FileRecord,
    MediaInfo,
    SearchQuery,
    StreamDescriptor,
    StremioContentType,
)
from easystream.domain.ports.metadata import MetadataResolverPort
from easystream.domain.ports.result_extractor import ResultExtractorPort
from easystream.domain.ports.search_client import SearchClientPort

# Type aliases for injected pure functions.
_QueryFn = Callable[[MediaInfo, int | None, int | None], SearchQuery]
_MapFn = Callable[
    [list[FileRecord], StremioContentType, EasynewsCredentials],
    list[StreamDescriptor],
]

log = structlog.get_logger(__name__)


class StremioStreamUseCase:
    """Resolves one Stremio stream request into Easynews streams.

    Flow:
        1. Resolve title/year/kind for the IMDb ID
        2. Build the search term (movie, season or episode)
        3. Search Easynews and parse the result page
        4. Map file records to stream descriptors

    Steps run strictly in sequence. Any error aborts the request; the
    caller never receives partial results.
    """

    def __init__(
        self,
        *,
        metadata: MetadataResolverPort,
        search_client: SearchClientPort,
        extractor: ResultExtractorPort,
        credentials: EasynewsCredentials,
        query_fn: _QueryFn,
        map_fn: _MapFn,
    ) -> None:
        self._metadata = metadata
        self._search_client = search_client
        self._extractor = extractor
        self._credentials = credentials
        self._query_fn = query_fn
        self._map_fn = map_fn

    async def execute(self, ref: ContentRef) -> list[StreamDescriptor]:
        """Return streams for *ref*; an empty list when nothing matched.

        Raises:
            InvalidIdentifier, NotFound, UpstreamUnavailable.
        """
        log.info(
            "stremio_stream_request",
            imdb_id=ref.imdb_id,
            season=ref.season,
            episode=ref.episode,
        )

        info = await self._metadata.resolve(ref.imdb_id)
        query = self._query_fn(info, ref.season, ref.episode)
        html = await self._search_client.search(query)
        records = self._extractor.extract(html)
        streams = self._map_fn(records, info.kind, self._credentials)

        log.info(
            "stremio_stream_response",
            imdb_id=ref.imdb_id,
            kind=info.kind,
            query=query.term,
            streams_returned=len(streams),
        )
        return streams
