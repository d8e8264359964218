"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "easystream",
    "environment": "dev",
    "http": {
        "timeout_seconds": 30.0,
        "follow_redirects": True,
        "user_agent": "easystream/0.1.0",
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "easynews": {
        "search_url": "https://members.easynews.com/global5/search.html",
        "max_results": 500,
    },
    "omdb": {
        "base_url": "http://www.omdbapi.com/",
    },
}
