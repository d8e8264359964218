"""OMDb metadata resolver (async httpx implementation)."""

from __future__ import annotations

import time
from typing import Any, Protocol

import httpx
import structlog

from easystream.domain.entities.errors import NotFound, UpstreamUnavailable
from easystream.domain.entities.stremio import (
    MediaInfo,
    StremioContentType,
    validate_imdb_id,
)

log = structlog.get_logger(__name__)

_PROVIDER = "omdb"
_KINDS: frozenset[str] = frozenset({"movie", "series"})


class _UpstreamRecorder(Protocol):
    def record_upstream(
        self, provider: str, duration_ns: int, *, success: bool
    ) -> None: ...


class OmdbMetadataResolver:
    """Resolves IMDb IDs to title/year/type via the OMDb API.

    Implements ``MetadataResolverPort`` from domain.ports.metadata.
    """

    def __init__(
        self,
        *,
        api_key: str,
        http_client: httpx.AsyncClient,
        base_url: str = "http://www.omdbapi.com/",
        metrics: _UpstreamRecorder | None = None,
    ) -> None:
        self._api_key = api_key
        self._http = http_client
        self._base_url = base_url
        self._metrics = metrics

    async def _fetch(self, imdb_id: str) -> dict[str, Any]:
        """GET the OMDb record. Raises UpstreamUnavailable on any failure."""
        start = time.perf_counter_ns()
        success = False
        try:
            resp = await self._http.get(
                self._base_url, params={"i": imdb_id, "apikey": self._api_key}
            )
            if not resp.is_success:
                log.warning("omdb_http_error", imdb_id=imdb_id, status=resp.status_code)
                raise UpstreamUnavailable(
                    f"HTTP error! status: {resp.status_code}",
                    provider=_PROVIDER,
                    status_code=resp.status_code,
                )
            try:
                data = resp.json()
            except ValueError as exc:
                log.warning("omdb_invalid_json", imdb_id=imdb_id)
                raise UpstreamUnavailable(
                    "Metadata provider returned an unreadable response",
                    provider=_PROVIDER,
                    status_code=resp.status_code,
                ) from exc
            if not isinstance(data, dict):
                log.warning("omdb_unexpected_payload", imdb_id=imdb_id)
                raise UpstreamUnavailable(
                    "Metadata provider returned an unreadable response",
                    provider=_PROVIDER,
                    status_code=resp.status_code,
                )
            success = True
            return data
        except httpx.HTTPError as exc:
            log.warning("omdb_network_error", imdb_id=imdb_id, exc_info=True)
            raise UpstreamUnavailable(
                f"Metadata provider unreachable: {exc}", provider=_PROVIDER
            ) from exc
        finally:
            if self._metrics is not None:
                self._metrics.record_upstream(
                    _PROVIDER, time.perf_counter_ns() - start, success=success
                )

    async def resolve(self, imdb_id: str) -> MediaInfo:
        """Resolve *imdb_id* to title, year and kind.

        Raises:
            InvalidIdentifier: *imdb_id* is not ``tt`` followed by 7-8 digits.
            NotFound: OMDb answered with ``Response: "False"``.
            UpstreamUnavailable: transport error or non-2xx status.
        """
        validate_imdb_id(imdb_id)

        data = await self._fetch(imdb_id)
        if data.get("Response") != "True":
            message = data.get("Error") or "Item not found"
            log.info("omdb_not_found", imdb_id=imdb_id, error=message)
            raise NotFound(message)

        return MediaInfo(
            title=data.get("Title", ""),
            year=data.get("Year", ""),
            kind=_normalize_kind(imdb_id, data.get("Type", "")),
        )


def _normalize_kind(imdb_id: str, raw_type: str) -> StremioContentType:
    """Map the OMDb ``Type`` onto movie/series.

    Anything that is not ``series`` (e.g. ``episode``, ``game``) is
    searched like a movie: plain title and year.
    """
    if raw_type in _KINDS:
        return "series" if raw_type == "series" else "movie"
    log.warning("omdb_unknown_type", imdb_id=imdb_id, type=raw_type)
    return "movie"
