"""Tests for Prometheus metrics collection."""

from typing import Optional

import pytest
from prometheus_client import REGISTRY

from ytmetadata.core.metrics import (
    MetricsCollector,
    cache_lookups_total,
    cache_writes_total,
    initialize_metrics,
    metadata_requests_total,
    remote_attempts_total,
)


def histogram_count() -> float:
    """Current observation count of the quota wait histogram."""
    value: Optional[float] = REGISTRY.get_sample_value("ytmetadata_quota_wait_seconds_count")
    return value or 0.0


class TestMetricsCollector:
    """Tests for MetricsCollector."""

    @pytest.fixture
    def collector(self) -> MetricsCollector:
        return MetricsCollector(enabled=True)

    def test_record_request(self, collector: MetricsCollector) -> None:
        """Test request outcomes are counted per label."""
        before = metadata_requests_total.labels(outcome="found")._value.get()

        collector.record_request("found")
        collector.record_request("found")

        assert metadata_requests_total.labels(outcome="found")._value.get() == before + 2

    def test_record_cache_lookup(self, collector: MetricsCollector) -> None:
        """Test cache lookups are counted by state."""
        before = cache_lookups_total.labels(state="stale")._value.get()

        collector.record_cache_lookup("stale")

        assert cache_lookups_total.labels(state="stale")._value.get() == before + 1

    def test_record_cache_write(self, collector: MetricsCollector) -> None:
        """Test cache writes are counted by result."""
        before = cache_writes_total.labels(result="failed")._value.get()

        collector.record_cache_write("failed")

        assert cache_writes_total.labels(result="failed")._value.get() == before + 1

    def test_record_attempt(self, collector: MetricsCollector) -> None:
        """Test remote attempts are counted by outcome."""
        before = remote_attempts_total.labels(outcome="quota_exceeded")._value.get()

        collector.record_attempt("quota_exceeded")

        assert remote_attempts_total.labels(outcome="quota_exceeded")._value.get() == before + 1

    def test_record_quota_wait(self, collector: MetricsCollector) -> None:
        """Test quota waits are observed in the histogram."""
        before = histogram_count()

        collector.record_quota_wait(3660.0)

        assert histogram_count() == before + 1

    def test_disabled_collector_records_nothing(self) -> None:
        """Test a disabled collector leaves every metric untouched."""
        collector = MetricsCollector(enabled=False)
        requests_before = metadata_requests_total.labels(outcome="error")._value.get()
        writes_before = cache_writes_total.labels(result="success")._value.get()
        waits_before = histogram_count()

        collector.record_request("error")
        collector.record_cache_write("success")
        collector.record_quota_wait(60.0)

        assert metadata_requests_total.labels(outcome="error")._value.get() == requests_before
        assert cache_writes_total.labels(result="success")._value.get() == writes_before
        assert histogram_count() == waits_before


class TestInitializeMetrics:
    """Tests for provider info publication."""

    def test_initialize_metrics_sets_version(self) -> None:
        """Test the version label is published."""
        initialize_metrics("9.9.9")

        assert REGISTRY.get_sample_value("ytmetadata_info", {"version": "9.9.9"}) == 1.0
