"""Tests for Prometheus metrics."""

import pytest
from prometheus_client import REGISTRY

from secure_log.config.options import SecureLogOptions
from secure_log.errors import SecretLeakError
from secure_log.metrics.collectors import (
    CALLS_BLOCKED,
    LEAKS_DETECTED,
    SCAN_FAILURES,
    SCANS_TOTAL,
    record_leaks,
)
from secure_log.sinks.facade import SecureLog


def sample(name, labels):
    return REGISTRY.get_sample_value(name, labels) or 0.0


class TestMetricsDefinition:
    """Tests for metrics definition."""

    def test_names(self):
        assert "secure_log_scans" in SCANS_TOTAL._name
        assert "secure_log_scan_failures" in SCAN_FAILURES._name
        assert "secure_log_leaks_detected" in LEAKS_DETECTED._name
        assert "secure_log_calls_blocked" in CALLS_BLOCKED._name


class TestRecordLeaks:
    """Tests for record_leaks."""

    def test_zero_count_is_ignored(self):
        labels = {"operation": "noop", "action": "abort"}
        before = sample("secure_log_leaks_detected_total", labels)

        record_leaks("noop", 0, warn_only=False)

        assert sample("secure_log_leaks_detected_total", labels) == before


class TestFacadeMetrics:
    """Tests for metrics updated by the facade."""

    def test_abort_counts(self, backend, secret_env):
        leak_labels = {"operation": "log", "action": "abort"}
        blocked_labels = {"operation": "log"}
        leaks_before = sample("secure_log_leaks_detected_total", leak_labels)
        blocked_before = sample("secure_log_calls_blocked_total", blocked_labels)
        scans_before = sample("secure_log_scans_total", blocked_labels)

        with pytest.raises(SecretLeakError):
            SecureLog(backend, environ=secret_env).log("sk-123", ["sk-123"])

        assert sample("secure_log_leaks_detected_total", leak_labels) == leaks_before + 2
        assert sample("secure_log_calls_blocked_total", blocked_labels) == blocked_before + 1
        assert sample("secure_log_scans_total", blocked_labels) == scans_before + 1

    def test_warn_counts(self, backend, secret_env):
        labels = {"operation": "info", "action": "warn"}
        before = sample("secure_log_leaks_detected_total", labels)
        blocked_before = sample("secure_log_calls_blocked_total", {"operation": "info"})

        SecureLog(backend, SecureLogOptions(warn_only=True), environ=secret_env).info("sk-123")

        assert sample("secure_log_leaks_detected_total", labels) == before + 1
        assert sample("secure_log_calls_blocked_total", {"operation": "info"}) == blocked_before

    def test_scan_failure_counts(self, backend, secret_env):
        labels = {"error_type": "ScanDepthExceededError"}
        before = sample("secure_log_scan_failures_total", labels)
        loop = []
        loop.append(loop)

        SecureLog(backend, environ=secret_env).log(loop)

        assert sample("secure_log_scan_failures_total", labels) == before + 1
