"""
Secret detection core

- ValueKind / classify_value: loggable value classification
- collect_secrets: live secret set from the environment
- scan / SecretScanner: recursive argument scanning
- enforce_leak_policy: warn or abort on detected leaks
"""

from secure_log.core.values import (
    ValueKind,
    as_text,
    child_values,
    classify_value,
    instance_attributes,
)
from secure_log.core.secrets import collect_secrets
from secure_log.core.policy import enforce_leak_policy, leak_warning
from secure_log.core.scanner import (
    DEFAULT_MAX_DEPTH,
    LeakScanResult,
    SecretLeak,
    SecretScanner,
    quick_scan,
    scan,
)

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "LeakScanResult",
    "SecretLeak",
    "SecretScanner",
    "ValueKind",
    "as_text",
    "child_values",
    "classify_value",
    "collect_secrets",
    "enforce_leak_policy",
    "instance_attributes",
    "leak_warning",
    "quick_scan",
    "scan",
]
