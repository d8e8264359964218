"""Easynews search result page parsing.

Pattern-based: each ``<tr class="rRowN">`` block is matched on its own so
a malformed row never bleeds into its neighbour.
"""

from __future__ import annotations

import re
from html import unescape
from typing import Protocol

import structlog

from easystream.domain.entities.stremio import FileRecord

log = structlog.get_logger(__name__)

_ROW_START_RE = re.compile(r'<tr class="rRow\d+">')

# Groups: token, access value, file url, display name, size, codec, views.
_ROW_RE = re.compile(
    r'<input.*?name="([^"]+)".*?value="([^"]+)"'
    r'.*?<a href="([^"]+)".*?>([^<]+)</a>'
    r'.*?<td class="fSize" nowrap>([\d.]+ [GM]B)</td>'
    r'.*?<td class="StatusLink" nowrap>([^<]+)</td>'
    r'.*?<td class="StatusLink" nowrap>([^<]+)</td>',
    re.DOTALL,
)


class _ExtractionRecorder(Protocol):
    def record_extraction(
        self, total: int, samples_filtered: int, kept: int
    ) -> None: ...


def _iter_row_blocks(html: str) -> list[str]:
    """Split *html* into result row blocks, in document order."""
    starts = [m.start() for m in _ROW_START_RE.finditer(html)]
    return [
        html[start : starts[i + 1] if i + 1 < len(starts) else len(html)]
        for i, start in enumerate(starts)
    ]


def _is_sample(display_name: str) -> bool:
    return "sample" in display_name.lower()


class RegexResultExtractor:
    """Extracts FileRecords from an Easynews global search page.

    Implements ``ResultExtractorPort`` from domain.ports.result_extractor.
    """

    def __init__(self, *, metrics: _ExtractionRecorder | None = None) -> None:
        self._metrics = metrics

    def extract(self, html: str) -> list[FileRecord]:
        """Return one record per readable, non-sample row.

        Rows that do not have the expected shape are skipped. An empty or
        unrelated document yields an empty list.
        """
        records: list[FileRecord] = []
        total = 0
        samples = 0

        for block in _iter_row_blocks(html):
            m = _ROW_RE.search(block)
            if m is None:
                continue
            total += 1

            display_name = unescape(m.group(4)).strip()
            if _is_sample(display_name):
                samples += 1
                continue

            records.append(
                FileRecord(
                    token=m.group(1),
                    access_value=m.group(2),
                    file_url=unescape(m.group(3)),
                    display_name=display_name,
                    size_label=m.group(5),
                    codec_label=unescape(m.group(6)).strip(),
                    view_count=unescape(m.group(7)).strip(),
                )
            )

        log.info(
            "easynews_results_parsed",
            total=total,
            samples_filtered=samples,
            kept=len(records),
        )
        if self._metrics is not None:
            self._metrics.record_extraction(total, samples, len(records))
        return records
