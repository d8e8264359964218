from .errors import InvalidIdentifier, NotFound, StreamError, UpstreamUnavailable
from .stremio import (
    ContentRef,
    EasynewsCredentials,
    FileRecord,
    MediaInfo,
    SearchQuery,
    StreamDescriptor,
    StremioContentType,
)

__all__ = [
    "ContentRef",
    "EasynewsCredentials",
    "FileRecord",
    "InvalidIdentifier",
    "MediaInfo",
    "NotFound",
    "SearchQuery",
    "StreamDescriptor",
    "StreamError",
    "StremioContentType",
    "UpstreamUnavailable",
]
