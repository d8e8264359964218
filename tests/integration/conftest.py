"""Shared fixtures for integration tests.

These tests use real infrastructure components (OmdbMetadataResolver,
EasynewsSearchClient, RegexResultExtractor, MetricsCollector) with mocked
HTTP via respx.
"""

from __future__ import annotations

import httpx
import pytest

from easystream.infrastructure.config.schema import AppConfig
from easystream.infrastructure.metrics import MetricsCollector


@pytest.fixture()
def http_client() -> httpx.AsyncClient:
    """Real httpx.AsyncClient for use with respx mocking."""
    return httpx.AsyncClient()


@pytest.fixture()
def metrics() -> MetricsCollector:
    return MetricsCollector()


@pytest.fixture()
def app_config() -> AppConfig:
    """Config with credentials and an OMDb key set."""
    return AppConfig.model_validate(
        {
            "environment": "test",
            "easynews": {"username": "user", "password": "secret"},
            "omdb": {"api_key": "test-key"},
        }
    )
