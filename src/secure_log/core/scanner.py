"""
Secret scanner

Walks the arguments of a log call and reports every string that contains
the value of a configured secret.
"""

import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

from secure_log.core.secrets import collect_secrets
from secure_log.core.values import CONTAINER_KINDS, ValueKind, as_text, child_values, classify_value
from secure_log.errors import ScanDepthExceededError

DEFAULT_MAX_DEPTH = 64

LeakCallback = Callable[[str, str], None]


def _scan_string(value: str, secrets: Mapping[str, str], on_leak: LeakCallback) -> None:
    # every secret is checked, one string may leak several
    for name, secret in secrets.items():
        if secret and secret in value:
            on_leak(name, value)


def _scan_values(
    values: Iterable[Any],
    secrets: Mapping[str, str],
    on_leak: LeakCallback,
    depth: int,
    max_depth: int,
    path: set[int],
) -> None:
    if depth > max_depth:
        raise ScanDepthExceededError(max_depth)

    for value in values:
        kind = classify_value(value)

        if kind is ValueKind.STRING:
            _scan_string(as_text(value), secrets, on_leak)
        elif kind in CONTAINER_KINDS:
            # a container already on the path is a reference cycle
            if id(value) in path:
                raise ScanDepthExceededError(max_depth)
            path.add(id(value))
            try:
                _scan_values(
                    child_values(value, kind), secrets, on_leak, depth + 1, max_depth, path
                )
            finally:
                path.discard(id(value))


def scan(
    arguments: Iterable[Any],
    secrets: Mapping[str, str],
    on_leak: LeakCallback,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> None:
    """Scan log arguments for secret values.

    Strings and UTF-8 decoded bytes are tested for containment of every
    non-empty secret value. Mappings contribute their values (never their
    keys), sequences their elements, exceptions their ``args`` and other
    objects their attributes. Everything else is skipped. Inputs are never
    modified.

    Args:
        arguments: Positional arguments of the log call.
        secrets: Mapping of secret name to secret value.
        on_leak: Called as ``on_leak(secret_name, leaking_string)`` once per
            secret found in each string.
        max_depth: Maximum container nesting before the scan gives up.

    Raises:
        ScanDepthExceededError: If the arguments nest deeper than
            ``max_depth`` or refer back to themselves.
    """
    _scan_values(arguments, secrets, on_leak, 0, max_depth, set())


@dataclass
class SecretLeak:
    """A secret found in a log argument."""
    secret_name: str
    value: str

    def __repr__(self) -> str:
        return f"SecretLeak({self.secret_name}: {self.redacted()})"

    def redacted(self) -> str:
        """Return the leaking string with its content masked."""
        if len(self.value) <= 8:
            return "*" * len(self.value)
        return self.value[:2] + "****" + self.value[-2:]


@dataclass
class LeakScanResult:
    """Outcome of scanning one argument list."""
    leaks: list[SecretLeak] = field(default_factory=list)
    scan_time_ms: float = 0.0

    @property
    def has_leaks(self) -> bool:
        return bool(self.leaks)

    @property
    def secret_names(self) -> list[str]:
        """Names of the leaked secrets, deduplicated, in detection order."""
        return list(dict.fromkeys(leak.secret_name for leak in self.leaks))


class SecretScanner:
    """Scanner bound to an environment store and secret filters.

    The secret set is read from the store on every scan.

    Example:
        >>> scanner = SecretScanner({"API_KEY": "sk-123"})
        >>> result = scanner.scan(["connecting", {"token": "sk-123"}])
        >>> result.secret_names
        ['API_KEY']
    """

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
        min_secret_length: int = 1,
        ignore_secrets: Iterable[str] = (),
    ):
        """Initialize the scanner.

        Args:
            environ: Environment store, defaults to ``os.environ``.
            max_depth: Maximum container nesting.
            min_secret_length: Shortest value treated as a secret.
            ignore_secrets: Variable names never treated as secrets.
        """
        self._environ = environ
        self._max_depth = max_depth
        self._min_secret_length = min_secret_length
        self._ignore_secrets = frozenset(ignore_secrets)

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def secrets(self) -> dict[str, str]:
        """Read the current secret set."""
        return collect_secrets(
            self._environ,
            min_length=self._min_secret_length,
            ignore=self._ignore_secrets,
        )

    def scan(
        self,
        arguments: Iterable[Any],
        on_leak: Optional[LeakCallback] = None,
    ) -> LeakScanResult:
        """Scan arguments against the current secret set.

        Args:
            arguments: Positional arguments of the log call.
            on_leak: Optional callback invoked for every leak as it is found.

        Returns:
            LeakScanResult with every detected leak.

        Raises:
            ScanDepthExceededError: If the arguments nest too deeply.
        """
        start_time = time.perf_counter()
        result = LeakScanResult()

        def record(name: str, value: str) -> None:
            result.leaks.append(SecretLeak(secret_name=name, value=value))
            if on_leak is not None:
                on_leak(name, value)

        scan(arguments, self.secrets(), record, max_depth=self._max_depth)

        result.scan_time_ms = (time.perf_counter() - start_time) * 1000
        return result


def quick_scan(arguments: Iterable[Any], environ: Optional[Mapping[str, str]] = None) -> list[str]:
    """Return the names of the secrets leaked by ``arguments``.

    Args:
        arguments: Positional arguments of a log call.
        environ: Environment store, defaults to ``os.environ``.

    Returns:
        Deduplicated secret names in detection order.
    """
    return SecretScanner(environ).scan(arguments).secret_names
