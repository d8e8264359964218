"""Map Easynews FileRecords onto Stremio stream descriptors.

Pure transformation logic without I/O.
"""

from __future__ import annotations

from typing import Any

from easystream.domain.entities.stremio import (
    EasynewsCredentials,
    FileRecord,
    StreamDescriptor,
    StremioContentType,
)

_HTTPS = "https://"


def embed_credentials(url: str, credentials: EasynewsCredentials) -> str:
    """Insert ``username:password@`` right after a leading ``https://``.

    Examples:
        "https://host/path" -> "https://u:p@host/path"
        "http://host/path" -> "http://host/path" (unchanged)

    Credentials are inserted as-is, without percent-encoding.
    """
    if not url.startswith(_HTTPS):
        return url
    return f"{_HTTPS}{credentials.username}:{credentials.password}@{url[len(_HTTPS):]}"


def to_streams(
    records: list[FileRecord],
    kind: StremioContentType,
    credentials: EasynewsCredentials,
    *,
    user_agent: str = "Stremio",
) -> list[StreamDescriptor]:
    """Convert extracted records into stream descriptors, order preserved."""
    auth_header = credentials.basic_auth_header()
    return [
        StreamDescriptor(
            name=f"Easynews - {record.display_name} ({record.size_label})",
            title=record.display_name,
            url=embed_credentials(record.file_url, credentials),
            type=kind,
            info_hash=record.access_value,
            auth_header=auth_header,
            file_index=0,
            user_agent=user_agent,
        )
        for record in records
    ]


def stream_to_dict(stream: StreamDescriptor) -> dict[str, Any]:
    """Render a StreamDescriptor in Stremio JSON format."""
    return {
        "name": stream.name,
        "title": stream.title,
        "url": stream.url,
        "type": stream.type,
        "infoHash": stream.info_hash,
        "fileIdx": stream.file_index,
        "behaviorHints": {
            "notWebReady": stream.not_web_ready,
            "proxyHeaders": {
                "request": {
                    "User-Agent": stream.user_agent,
                    "Authorization": stream.auth_header,
                }
            },
        },
    }
