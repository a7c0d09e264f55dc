"""Prometheus metrics for metadata requests, the cache and the remote API.

Metrics are registered in the default ``prometheus_client`` registry so the
host process can expose them alongside its own.
"""

from prometheus_client import Counter, Histogram, Info

provider_info = Info("ytmetadata", "YouTube metadata provider information")

metadata_requests_total = Counter(
    "ytmetadata_requests_total",
    "Metadata requests by outcome",
    ["outcome"],
)

cache_lookups_total = Counter(
    "ytmetadata_cache_lookups_total",
    "Cache freshness checks by state",
    ["state"],
)

cache_writes_total = Counter(
    "ytmetadata_cache_writes_total",
    "Cache record writes by result",
    ["result"],
)

remote_attempts_total = Counter(
    "ytmetadata_remote_attempts_total",
    "Remote API attempts by outcome",
    ["outcome"],
)

quota_wait_seconds = Histogram(
    "ytmetadata_quota_wait_seconds",
    "Time scheduled to wait for the API quota to reset",
    buckets=[60.0, 600.0, 3600.0, 4 * 3600.0, 12 * 3600.0, 24 * 3600.0 + 60.0],
)


class MetricsCollector:
    """Records metrics, or nothing when collection is disabled."""

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled

    def record_request(self, outcome: str) -> None:
        """
        Record a finished metadata request.

        Args:
            outcome: "found", "no_identifier", "not_found" or "error"
        """
        if self.enabled:
            metadata_requests_total.labels(outcome=outcome).inc()

    def record_cache_lookup(self, state: str) -> None:
        """
        Record a freshness check.

        Args:
            state: "fresh", "stale" or "missing"
        """
        if self.enabled:
            cache_lookups_total.labels(state=state).inc()

    def record_cache_write(self, result: str) -> None:
        """Record a cache write ("success" or "failed")."""
        if self.enabled:
            cache_writes_total.labels(result=result).inc()

    def record_attempt(self, outcome: str) -> None:
        """
        Record one remote API attempt.

        Args:
            outcome: "success", "quota_exceeded" or "failure"
        """
        if self.enabled:
            remote_attempts_total.labels(outcome=outcome).inc()

    def record_quota_wait(self, seconds: float) -> None:
        """Record a scheduled quota-reset wait."""
        if self.enabled:
            quota_wait_seconds.observe(seconds)


def initialize_metrics(version: str) -> None:
    """Publish provider version information."""
    provider_info.info({"version": version})
