"""Domain errors for stream resolution.

Every failure of a stream request is one of these. Adapters translate
transport errors into them; the router maps them onto HTTP responses.
"""

from __future__ import annotations


class StreamError(Exception):
    """Base error for stream resolution."""

    kind: str = "stream_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidIdentifier(StreamError):
    """The content identifier is malformed."""

    kind = "invalid_identifier"


class NotFound(StreamError):
    """The metadata provider has no record for the identifier."""

    kind = "not_found"


class UpstreamUnavailable(StreamError):
    """Network / non-2xx / unreadable response from an upstream provider."""

    kind = "upstream_unavailable"

    def __init__(
        self,
        message: str,
        *,
        provider: str = "",
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
