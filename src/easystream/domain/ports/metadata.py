"""Port for title metadata lookups."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from easystream.domain.entities.stremio import MediaInfo


@runtime_checkable
class MetadataResolverPort(Protocol):
    """Async interface for resolving an IMDb ID to title metadata."""

    async def resolve(self, imdb_id: str) -> MediaInfo:
        """Return title, year and kind for *imdb_id*.

        Raises InvalidIdentifier, NotFound or UpstreamUnavailable.
        """
        ...
