"""Metrics module for secure-log."""

from secure_log.metrics.collectors import (
    CALLS_BLOCKED,
    LEAKS_DETECTED,
    SCAN_FAILURES,
    SCANS_TOTAL,
    record_leaks,
    record_scan,
    record_scan_failure,
)

__all__ = [
    "CALLS_BLOCKED",
    "LEAKS_DETECTED",
    "SCAN_FAILURES",
    "SCANS_TOTAL",
    "record_leaks",
    "record_scan",
    "record_scan_failure",
]
