"""Domain entities for the Stremio stream pipeline.

Pure value objects without framework dependencies.
"""

from __future__ import annotations

import base64
import re
from dataclasses import dataclass
from typing import Literal
from urllib.parse import unquote

from easystream.domain.entities.errors import InvalidIdentifier

StremioContentType = Literal["movie", "series"]

IMDB_ID_RE = re.compile(r"^tt[0-9]{7,8}$")


def validate_imdb_id(imdb_id: str) -> str:
    """Return *imdb_id* unchanged or raise ``InvalidIdentifier``."""
    if not IMDB_ID_RE.fullmatch(imdb_id):
        raise InvalidIdentifier(f"Invalid IMDb ID format: {imdb_id}")
    return imdb_id


def _parse_positive(value: str, label: str, raw: str) -> int:
    # ASCII digits only; int() alone accepts signs, spaces, underscores.
    if not (value.isascii() and value.isdigit()):
        raise InvalidIdentifier(f"Invalid {label} in stream id: {raw}")
    number = int(value)
    if number <= 0:
        raise InvalidIdentifier(f"Invalid {label} in stream id: {raw}")
    return number


@dataclass(frozen=True)
class ContentRef:
    """Parsed Stremio stream request.

    Created from a URL path segment: ``tt1234567`` (movie),
    ``tt1234567:1`` (whole season) or ``tt1234567:1:5``
    (season 1, episode 5).
    """

    imdb_id: str
    season: int | None = None
    episode: int | None = None

    @classmethod
    def parse(cls, raw: str) -> ContentRef:
        """Parse ``{imdbId}[:{season}[:{episode}]]``.

        A trailing ``.json`` is stripped and percent-escapes are decoded
        before splitting.

        Raises:
            InvalidIdentifier: on a malformed id, season or episode.
        """
        value = unquote(raw.removesuffix(".json"))
        parts = value.split(":")
        if len(parts) > 3:
            raise InvalidIdentifier(f"Invalid stream id: {raw}")

        imdb_id = validate_imdb_id(parts[0])
        season = _parse_positive(parts[1], "season", raw) if len(parts) > 1 else None
        episode = _parse_positive(parts[2], "episode", raw) if len(parts) > 2 else None
        return cls(imdb_id=imdb_id, season=season, episode=episode)


@dataclass(frozen=True)
class MediaInfo:
    """Canonical title metadata from the metadata provider."""

    title: str
    year: str
    kind: StremioContentType


@dataclass(frozen=True)
class SearchQuery:
    """Free-text search term sent to Easynews."""

    term: str


@dataclass(frozen=True)
class FileRecord:
    """One row of an Easynews search result page."""

    token: str  # form-field name of the row checkbox
    access_value: str  # form-field value, opaque provider token
    file_url: str  # raw download URL, no credentials yet
    display_name: str
    size_label: str  # "1.2 GB"
    codec_label: str
    view_count: str


@dataclass(frozen=True)
class EasynewsCredentials:
    """Easynews account used for search and playback."""

    username: str
    password: str

    @property
    def is_configured(self) -> bool:
        return bool(self.username and self.password)

    def basic_auth_header(self) -> str:
        token = base64.b64encode(f"{self.username}:{self.password}".encode()).decode()
        return f"Basic {token}"


@dataclass(frozen=True)
class StreamDescriptor:
    """Stremio protocol Stream object for one Easynews file."""

    name: str  # Bold title in Stremio UI
    title: str
    url: str  # Download URL with embedded credentials
    type: StremioContentType
    info_hash: str
    auth_header: str
    file_index: int = 0
    user_agent: str = "Stremio"
    not_web_ready: bool = True
