"""Prometheus metrics collectors for secure-log.

Defines the counters updated by the secure console and the logging guard.
"""

from prometheus_client import Counter

# Scan metrics
SCANS_TOTAL = Counter(
    "secure_log_scans_total",
    "Total log calls scanned for secrets",
    ["operation"],
)

SCAN_FAILURES = Counter(
    "secure_log_scan_failures_total",
    "Scans abandoned because of an internal error",
    ["error_type"],
)

# Leak metrics
LEAKS_DETECTED = Counter(
    "secure_log_leaks_detected_total",
    "Total secret values found in log arguments",
    ["operation", "action"],
)

CALLS_BLOCKED = Counter(
    "secure_log_calls_blocked_total",
    "Log calls aborted because they would leak a secret",
    ["operation"],
)


def record_scan(operation: str) -> None:
    """Count one scanned log call."""
    SCANS_TOTAL.labels(operation=operation).inc()


def record_leaks(operation: str, count: int, warn_only: bool) -> None:
    """Record detected leaks and, under the abort policy, the blocked call.

    Args:
        operation: Console operation or logging level name.
        count: Number of leaks found in the call.
        warn_only: Whether the call was allowed to continue.
    """
    if count <= 0:
        return
    action = "warn" if warn_only else "abort"
    LEAKS_DETECTED.labels(operation=operation, action=action).inc(count)
    if not warn_only:
        CALLS_BLOCKED.labels(operation=operation).inc()


def record_scan_failure(error: BaseException) -> None:
    """Count a scan that failed with ``error``."""
    SCAN_FAILURES.labels(error_type=type(error).__name__).inc()
