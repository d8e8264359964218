"""Layered configuration: defaults < YAML < environment < command line."""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides

_SECTIONS: frozenset[str] = frozenset({"http", "logging", "easynews", "omdb", "stremio"})
_TOP_LEVEL: tuple[str, ...] = ("app_name", "environment")

# Flat keys (env vars, CLI flags) and the section field they set.
_FLAT_KEYS: dict[str, tuple[str, str]] = {
    "http_timeout_seconds": ("http", "timeout_seconds"),
    "http_follow_redirects": ("http", "follow_redirects"),
    "http_user_agent": ("http", "user_agent"),
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
    "easynews_username": ("easynews", "username"),
    "easynews_password": ("easynews", "password"),
    "easynews_search_url": ("easynews", "search_url"),
    "easynews_max_results": ("easynews", "max_results"),
    "omdb_api_key": ("omdb", "api_key"),
    "omdb_base_url": ("omdb", "base_url"),
}


def _deep_merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge *override* into *base* in place; nested mappings merge, rest replaces."""
    for key, value in override.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _deep_merge(current, value)
        else:
            base[key] = value
    return base


def _normalize_layer(data: Mapping[str, Any]) -> dict[str, Any]:
    """Bring one layer into the sectioned shape ``AppConfig`` validates.

    Sectioned blocks (``easynews: {username: ...}``) are copied, flat keys
    (``easynews_username``) are moved into their section. Unknown keys are
    dropped.
    """
    layer: dict[str, Any] = {
        name: dict(block)
        for name, block in data.items()
        if name in _SECTIONS and isinstance(block, Mapping)
    }
    layer.update({name: data[name] for name in _TOP_LEVEL if name in data})

    for flat_key, (section, field) in _FLAT_KEYS.items():
        if flat_key in data:
            layer.setdefault(section, {})[field] = data[flat_key]
    return layer


def _yaml_layer(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(config_path)
    parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Config YAML must be a mapping, got: {type(parsed)!r}")
    return _normalize_layer(parsed)


def _env_layer(dotenv_path: Path | None) -> dict[str, Any]:
    # A .env file only fills variables the process environment lacks.
    if dotenv_path is not None:
        if not dotenv_path.exists():
            raise FileNotFoundError(dotenv_path)
        load_dotenv(dotenv_path, override=False)
    return _normalize_layer(EnvOverrides().to_update_dict())


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """Merge all configuration layers and validate the result once.

    Explicitly given paths must exist. Nothing is written to disk.

    Raises:
        FileNotFoundError: *config_path* or *dotenv_path* is missing.
        ValueError: the YAML document is not a mapping.
        pydantic.ValidationError: the merged values are invalid.
    """
    merged = _normalize_layer(deepcopy(DEFAULT_CONFIG))
    layers = [
        _yaml_layer(config_path) if config_path is not None else {},
        _env_layer(dotenv_path),
        _normalize_layer(cli_overrides or {}),
    ]
    for layer in layers:
        _deep_merge(merged, layer)
    return AppConfig.model_validate(merged)
