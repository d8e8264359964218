"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

import functools
from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from easystream.application.use_cases.stremio_stream import StremioStreamUseCase
from easystream.infrastructure.config.schema import AppConfig
from easystream.infrastructure.easynews.client import EasynewsSearchClient
from easystream.infrastructure.easynews.extractor import RegexResultExtractor
from easystream.infrastructure.easynews.query import build_query
from easystream.infrastructure.metrics import MetricsCollector
from easystream.infrastructure.omdb.client import OmdbMetadataResolver
from easystream.infrastructure.stremio.stream_mapper import to_streams
from easystream.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


def build_stream_use_case(
    config: AppConfig,
    http_client: httpx.AsyncClient,
    metrics: MetricsCollector | None = None,
) -> StremioStreamUseCase:
    """Wire the stream use case from config and a shared HTTP client."""
    credentials = config.easynews.credentials
    return StremioStreamUseCase(
        metadata=OmdbMetadataResolver(
            api_key=config.omdb.api_key,
            http_client=http_client,
            base_url=config.omdb.base_url,
            metrics=metrics,
        ),
        search_client=EasynewsSearchClient(
            http_client=http_client,
            credentials=credentials,
            search_url=config.easynews.search_url,
            max_results=config.easynews.max_results,
            metrics=metrics,
        ),
        extractor=RegexResultExtractor(metrics=metrics),
        credentials=credentials,
        query_fn=build_query,
        map_fn=functools.partial(to_streams, user_agent=config.stremio.user_agent),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan Hook: Initialize and cleanup all resources (DI Composition Root).

    Order matters:
        1. Metrics (recorded into by the adapters)
        2. HTTP Client (shared by both upstream adapters)
        3. Stream use case
    """
    state = cast(AppState, app.state)
    config = state.config

    # 1) Metrics collector
    state.metrics = MetricsCollector()

    # 2) HTTP client (no retries; timeout from config)
    state.http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        headers={"User-Agent": config.http_user_agent},
        follow_redirects=config.http_follow_redirects,
    )
    log.info("http_client_initialized", timeout=config.http_timeout_seconds)

    if not config.easynews.credentials.is_configured:
        log.warning("easynews_credentials_missing")
    if not config.omdb.api_key:
        log.warning("omdb_api_key_missing")

    # 3) Stream use case
    state.stremio_stream_uc = build_stream_use_case(
        config, state.http_client, state.metrics
    )
    log.info("app_startup_complete")

    try:
        yield
    finally:
        await state.http_client.aclose()
        log.info("http_client_closed")

        log.info("app_shutdown_complete")
