"""Tests for EasynewsSearchClient (Easynews web search adapter)."""

from __future__ import annotations

from unittest.mock import MagicMock

import httpx
import pytest
import respx

from easystream.domain.entities.errors import UpstreamUnavailable
from easystream.domain.entities.stremio import EasynewsCredentials, SearchQuery
from easystream.infrastructure.easynews.client import (
    DEFAULT_SEARCH_URL,
    EasynewsSearchClient,
    build_search_params,
)


@pytest.fixture()
def http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient()


@pytest.fixture()
def metrics() -> MagicMock:
    return MagicMock()


@pytest.fixture()
def client(
    http_client: httpx.AsyncClient,
    credentials: EasynewsCredentials,
    metrics: MagicMock,
) -> EasynewsSearchClient:
    return EasynewsSearchClient(
        http_client=http_client, credentials=credentials, metrics=metrics
    )


class TestBuildSearchParams:
    def test_term_in_fil(self) -> None:
        params = dict(build_search_params("Show S01E05 2020"))
        assert params["fil"] == "Show S01E05 2020"

    def test_fixed_filters_and_sort(self) -> None:
        params = dict(build_search_params("x"))
        assert params["fty[]"] == "VIDEO"
        assert (params["s1"], params["s1d"]) == ("dsize", "-")
        assert (params["s2"], params["s2d"]) == ("nrfile", "+")
        assert (params["s3"], params["s3d"]) == ("dsize", "-")
        assert params["pby"] == "500"
        assert params["pno"] == "1"
        assert params["spamf"] == "1"
        assert params["submit"] == "Search"
        assert params["fly"] == "2"

    def test_result_cap(self) -> None:
        assert dict(build_search_params("x", max_results=100))["pby"] == "100"

    def test_order_is_stable(self) -> None:
        names = [name for name, _ in build_search_params("x")]
        assert names[:5] == ["gps", "sbj", "from", "ns", "fil"]
        assert names[-2:] == ["submit", "fly"]
        assert len(names) == len(set(names))

    def test_independent_of_term(self) -> None:
        a = [n for n, _ in build_search_params("a")]
        b = [n for n, _ in build_search_params("b c")]
        assert a == b


class TestSearch:
    @respx.mock
    @pytest.mark.asyncio()
    async def test_returns_body_text(self, client: EasynewsSearchClient) -> None:
        respx.get(DEFAULT_SEARCH_URL).respond(text="<html>results</html>")

        html = await client.search(SearchQuery("Movie 2019"))

        assert html == "<html>results</html>"

    @respx.mock
    @pytest.mark.asyncio()
    async def test_sends_basic_auth_and_term(
        self, client: EasynewsSearchClient, credentials: EasynewsCredentials
    ) -> None:
        route = respx.get(DEFAULT_SEARCH_URL).respond(text="")

        await client.search(SearchQuery("Show S02E04 2020"))

        request = route.calls.last.request
        assert request.headers["Authorization"] == credentials.basic_auth_header()
        assert request.url.params["fil"] == "Show S02E04 2020"
        assert request.url.params["fty[]"] == "VIDEO"

    @respx.mock
    @pytest.mark.asyncio()
    async def test_custom_search_url(
        self, http_client: httpx.AsyncClient, credentials: EasynewsCredentials
    ) -> None:
        route = respx.get("https://mirror.example/search.html").respond(text="")
        client = EasynewsSearchClient(
            http_client=http_client,
            credentials=credentials,
            search_url="https://mirror.example/search.html",
            max_results=50,
        )

        await client.search(SearchQuery("x"))

        assert route.calls.last.request.url.params["pby"] == "50"

    @respx.mock
    @pytest.mark.asyncio()
    @pytest.mark.parametrize("status", [401, 403, 500, 502])
    async def test_non_success_status(
        self, client: EasynewsSearchClient, metrics: MagicMock, status: int
    ) -> None:
        respx.get(DEFAULT_SEARCH_URL).respond(status_code=status)

        with pytest.raises(UpstreamUnavailable) as exc_info:
            await client.search(SearchQuery("x"))

        assert exc_info.value.status_code == status
        assert exc_info.value.provider == "easynews"
        assert metrics.record_upstream.call_args[1]["success"] is False

    @respx.mock
    @pytest.mark.asyncio()
    async def test_network_error(self, client: EasynewsSearchClient) -> None:
        respx.get(DEFAULT_SEARCH_URL).mock(side_effect=httpx.ReadTimeout("slow"))

        with pytest.raises(UpstreamUnavailable) as exc_info:
            await client.search(SearchQuery("x"))

        assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)

    @respx.mock
    @pytest.mark.asyncio()
    async def test_success_recorded(
        self, client: EasynewsSearchClient, metrics: MagicMock
    ) -> None:
        respx.get(DEFAULT_SEARCH_URL).respond(text="")

        await client.search(SearchQuery("x"))

        args, kwargs = metrics.record_upstream.call_args
        assert args[0] == "easynews"
        assert kwargs["success"] is True

    @respx.mock
    @pytest.mark.asyncio()
    async def test_redirect_to_login_is_failure(
        self, credentials: EasynewsCredentials, metrics: MagicMock
    ) -> None:
        respx.get(DEFAULT_SEARCH_URL).respond(
            status_code=302,
            headers={"Location": "https://members.easynews.com/login.html"},
        )
        client = EasynewsSearchClient(
            http_client=httpx.AsyncClient(follow_redirects=False),
            credentials=credentials,
            metrics=metrics,
        )

        with pytest.raises(UpstreamUnavailable) as exc_info:
            await client.search(SearchQuery("x"))

        assert exc_info.value.status_code == 302
        assert metrics.record_upstream.call_args[1]["success"] is False
