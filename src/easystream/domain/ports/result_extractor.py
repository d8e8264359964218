"""Port for turning a search result page into file records."""

from __future__ import annotations

from typing import Protocol

from easystream.domain.entities.stremio import FileRecord


class ResultExtractorPort(Protocol):
    """Parses a search result document.

    Implementations must return records in document order, skip rows
    they cannot read, and drop sample files.
    """

    def extract(self, html: str) -> list[FileRecord]: ...
