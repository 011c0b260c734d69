"""
Leak policy

Decides what happens to a log call once its scan result is known.
"""

from secure_log.core.scanner import LeakScanResult
from secure_log.errors import SecretLeakError
from secure_log.metrics.collectors import record_leaks


def leak_warning(secret_name: str) -> str:
    """Warning emitted for every leaked secret."""
    return f'the value of the secret: "{secret_name}", is being leaked!'


def enforce_leak_policy(result: LeakScanResult, *, warn_only: bool, operation: str) -> None:
    """Apply the leak policy to a scan result.

    Args:
        result: Scan result of the call's arguments.
        warn_only: Let calls with leaks continue.
        operation: Console operation or logging level, used for metrics.

    Raises:
        SecretLeakError: If the result has leaks and ``warn_only`` is off.
    """
    if not result.has_leaks:
        return

    record_leaks(operation, len(result.leaks), warn_only)
    if not warn_only:
        raise SecretLeakError(result.secret_names)
