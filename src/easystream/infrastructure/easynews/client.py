"""Easynews global search client (async httpx implementation)."""

from __future__ import annotations

import time
from typing import Protocol

import httpx
import structlog

from easystream.domain.entities.errors import UpstreamUnavailable
from easystream.domain.entities.stremio import EasynewsCredentials, SearchQuery

log = structlog.get_logger(__name__)

_PROVIDER = "easynews"
DEFAULT_SEARCH_URL = "https://members.easynews.com/global5/search.html"

# Advanced-search fields the search form submits empty.
_EMPTY_RANGE_FIELDS: tuple[str, ...] = (
    "d1", "d1t", "d2", "d2t",
    "b1", "b1t", "b2", "b2t",
    "px1", "px1t", "px2", "px2t",
    "fps1", "fps1t", "fps2", "fps2t",
    "bps1", "bps1t", "bps2", "bps2t",
    "hz1", "hz1t", "hz2", "hz2t",
    "rn1", "rn1t", "rn2", "rn2t",
)


class _UpstreamRecorder(Protocol):
    def record_upstream(
        self, provider: str, duration_ns: int, *, success: bool
    ) -> None: ...


def build_search_params(term: str, max_results: int = 500) -> list[tuple[str, str]]:
    """Query parameters of one search request, in form order.

    Video files only, sorted by size (desc), file count (asc), size (desc),
    first page of *max_results* entries, spam filter on.
    """
    params: list[tuple[str, str]] = [
        ("gps", ""),
        ("sbj", ""),
        ("from", ""),
        ("ns", ""),
        ("fil", term),
        ("fex", ""),
        ("vc", ""),
        ("ac", ""),
        ("fty[]", "VIDEO"),
        ("s1", "dsize"),
        ("s1d", "-"),
        ("s2", "nrfile"),
        ("s2d", "+"),
        ("s3", "dsize"),
        ("s3d", "-"),
        ("pby", str(max_results)),
        ("pno", "1"),
        ("sS", "0"),
        ("spamf", "1"),
        ("svL", ""),
    ]
    params.extend((name, "") for name in _EMPTY_RANGE_FIELDS)
    params.extend([("submit", "Search"), ("fly", "2")])
    return params


class EasynewsSearchClient:
    """Runs a search against the Easynews web interface.

    Implements ``SearchClientPort`` from domain.ports.search_client.
    Credentials are injected; this client never reads configuration.
    """

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        credentials: EasynewsCredentials,
        search_url: str = DEFAULT_SEARCH_URL,
        max_results: int = 500,
        metrics: _UpstreamRecorder | None = None,
    ) -> None:
        self._http = http_client
        self._credentials = credentials
        self._search_url = search_url
        self._max_results = max_results
        self._metrics = metrics

    async def search(self, query: SearchQuery) -> str:
        """Return the raw HTML of the first result page for *query*.

        Raises:
            UpstreamUnavailable: transport error or non-2xx status.
        """
        headers = {"Authorization": self._credentials.basic_auth_header()}
        params = build_search_params(query.term, self._max_results)

        start = time.perf_counter_ns()
        success = False
        try:
            resp = await self._http.get(self._search_url, params=params, headers=headers)
            if not resp.is_success:
                log.warning(
                    "easynews_http_error",
                    term=query.term,
                    status=resp.status_code,
                )
                raise UpstreamUnavailable(
                    f"HTTP error! status: {resp.status_code}",
                    provider=_PROVIDER,
                    status_code=resp.status_code,
                )
            success = True
        except httpx.HTTPError as exc:
            log.warning("easynews_network_error", term=query.term, exc_info=True)
            raise UpstreamUnavailable(
                f"Search provider unreachable: {exc}", provider=_PROVIDER
            ) from exc
        finally:
            if self._metrics is not None:
                self._metrics.record_upstream(
                    _PROVIDER, time.perf_counter_ns() - start, success=success
                )

        log.debug("easynews_search_done", term=query.term, bytes=len(resp.content))
        return resp.text
