"""Pydantic configuration models with validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from easystream.domain.entities.stremio import EasynewsCredentials

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


class EasynewsConfig(BaseModel):
    """Easynews account and search endpoint (YAML section: easynews.*)."""

    username: str = Field(default="", description="Easynews account username.")
    password: str = Field(default="", description="Easynews account password.")
    search_url: str = Field(
        default="https://members.easynews.com/global5/search.html",
        description="Global search endpoint returning HTML result pages.",
    )
    max_results: int = Field(
        default=500,
        description="Result cap per search (Easynews 'pby' parameter).",
    )

    @field_validator("max_results")
    @classmethod
    def _validate_max_results(cls, v: int) -> int:
        if not 1 <= v <= 500:
            raise ValueError("max_results must be between 1 and 500")
        return v

    @property
    def credentials(self) -> EasynewsCredentials:
        return EasynewsCredentials(username=self.username, password=self.password)


class OmdbConfig(BaseModel):
    """OMDb metadata provider (YAML section: omdb.*)."""

    api_key: str = Field(default="", description="OMDb API key.")
    base_url: str = Field(
        default="http://www.omdbapi.com/",
        description="OMDb API endpoint.",
    )


class StremioConfig(BaseModel):
    """Stremio addon manifest and stream presentation."""

    addon_id: str = Field(default="org.easystream.easynews")
    addon_version: str = Field(default="1.1.1")
    addon_name: str = Field(default="Easynews Search")
    description: str = Field(default="Search and stream content from Easynews")
    user_agent: str = Field(
        default="Stremio",
        description="User-Agent the player sends when fetching a stream.",
    )


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (http/logging/easynews/omdb/stremio).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="easystream", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # HTTP client (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=30.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="HTTP timeout in seconds for upstream requests.",
    )
    http_follow_redirects: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "http_follow_redirects",
            AliasPath("http", "follow_redirects"),
        ),
        description="Whether HTTP client follows redirects.",
    )
    http_user_agent: str = Field(
        default="easystream/0.1.0",
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for outgoing HTTP requests.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    easynews: EasynewsConfig = Field(default_factory=EasynewsConfig)
    omdb: OmdbConfig = Field(default_factory=OmdbConfig)
    stremio: StremioConfig = Field(default_factory=StremioConfig)

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.

        Secrets are masked.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "follow_redirects": self.http_follow_redirects,
                "user_agent": self.http_user_agent,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
            "easynews": {
                "username": self.easynews.username,
                "password": "***" if self.easynews.password else "",
                "search_url": self.easynews.search_url,
                "max_results": self.easynews.max_results,
            },
            "omdb": {
                "api_key": "***" if self.omdb.api_key else "",
                "base_url": self.omdb.base_url,
            },
            "stremio": self.stremio.model_dump(),
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Intended usage:
    - load.py creates EnvOverrides() to read EASYSTREAM_* variables,
      converts to dict of set values, merges into YAML/defaults,
      then validates AppConfig.

    Supported env var examples (flat, explicit):
    - EASYSTREAM_HTTP_TIMEOUT_SECONDS
    - EASYSTREAM_LOG_LEVEL
    - EASYNEWS_USERNAME / EASYSTREAM_EASYNEWS_USERNAME
    - EASYNEWS_PASSWORD / EASYSTREAM_EASYNEWS_PASSWORD
    - OMDB_API_KEY / EASYSTREAM_OMDB_API_KEY
    """

    model_config = SettingsConfigDict(
        env_prefix="EASYSTREAM_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    http_timeout_seconds: Optional[float] = None
    http_follow_redirects: Optional[bool] = None
    http_user_agent: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    easynews_username: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "EASYSTREAM_EASYNEWS_USERNAME", "EASYNEWS_USERNAME"
        ),
    )
    easynews_password: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "EASYSTREAM_EASYNEWS_PASSWORD", "EASYNEWS_PASSWORD"
        ),
    )
    easynews_search_url: Optional[str] = None
    easynews_max_results: Optional[int] = None

    omdb_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("EASYSTREAM_OMDB_API_KEY", "OMDB_API_KEY"),
    )
    omdb_base_url: Optional[str] = None

    def to_update_dict(self) -> dict[str, Any]:
        """Return only values that were explicitly provided via environment."""
        return self.model_dump(exclude_none=True)
