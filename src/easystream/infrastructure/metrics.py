"""Zero-impact in-memory runtime metrics.

All counters are plain Python integers manipulated inside the single-threaded
async event loop, so no locks are needed.

``time.perf_counter_ns()`` is used for timing (monotonic, nanosecond
resolution, near-zero overhead).
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field


@dataclass
class UpstreamStats:
    """Accumulated statistics for one upstream provider."""

    requests: int = 0
    successes: int = 0
    failures: int = 0
    total_duration_ns: int = 0

    def snapshot(self) -> dict[str, object]:
        """Return a JSON-serializable summary."""
        avg_ms = (
            round(self.total_duration_ns / self.requests / 1_000_000, 1)
            if self.requests
            else 0.0
        )
        return {
            "requests": self.requests,
            "successes": self.successes,
            "failures": self.failures,
            "avg_duration_ms": avg_ms,
        }


@dataclass
class ExtractionStats:
    """Accumulated counters of search result page parsing."""

    runs: int = 0
    total_rows: int = 0
    samples_filtered: int = 0
    kept: int = 0

    def snapshot(self) -> dict[str, object]:
        return {
            "runs": self.runs,
            "total_rows": self.total_rows,
            "samples_filtered": self.samples_filtered,
            "kept": self.kept,
        }


@dataclass
class MetricsCollector:
    """Central in-memory metrics collector. Not thread-safe."""

    _upstreams: dict[str, UpstreamStats] = field(default_factory=dict)
    _extraction: ExtractionStats = field(default_factory=ExtractionStats)
    _start_ns: int = field(default_factory=time.perf_counter_ns)

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def record_upstream(
        self,
        provider: str,
        duration_ns: int,
        *,
        success: bool,
    ) -> None:
        """Record one request to an upstream provider."""
        stats = self._upstreams.get(provider)
        if stats is None:
            stats = UpstreamStats()
            self._upstreams[provider] = stats

        stats.requests += 1
        stats.total_duration_ns += duration_ns
        if success:
            stats.successes += 1
        else:
            stats.failures += 1

    def record_extraction(self, total: int, samples_filtered: int, kept: int) -> None:
        """Record the diagnostic counters of one parsed result page."""
        self._extraction.runs += 1
        self._extraction.total_rows += total
        self._extraction.samples_filtered += samples_filtered
        self._extraction.kept += kept

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def snapshot(self) -> dict[str, object]:
        """Return a JSON-serializable snapshot of all metrics."""
        uptime_ns = time.perf_counter_ns() - self._start_ns
        uptime_s = round(uptime_ns / 1_000_000_000, 1)

        return {
            "uptime_seconds": uptime_s,
            "upstreams": {
                name: stats.snapshot()
                for name, stats in sorted(self._upstreams.items())
            },
            "extraction": self._extraction.snapshot(),
        }
