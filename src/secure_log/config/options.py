"""Policy configuration for the secure console and the logging guard."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Optional

from secure_log.core.scanner import DEFAULT_MAX_DEPTH, SecretScanner
from secure_log.errors import OptionsError

DEFAULT_ENVIRONMENT_VARIABLE = "APP_ENV"


@dataclass(frozen=True)
class SecureLogOptions:
    """Immutable leak policy.

    Attributes:
        warn_only: Report leaks without aborting the log call.
        disable_on: Environment name in which the guard does not install
            itself and facades stay inert.
        disable_console_on: Environment name in which every scanned
            operation is silently dropped.
        environment_variable: Variable holding the current environment name.
        max_depth: Maximum nesting of scanned arguments.
        min_secret_length: Shortest environment value treated as a secret.
        ignore_secrets: Variable names never treated as secrets.
        strict_surface: Make the non-core console operations raise
            MethodNotImplementedError instead of forwarding.
    """

    warn_only: bool = False
    disable_on: Optional[str] = None
    disable_console_on: Optional[str] = None
    environment_variable: str = DEFAULT_ENVIRONMENT_VARIABLE
    max_depth: int = DEFAULT_MAX_DEPTH
    min_secret_length: int = 1
    ignore_secrets: frozenset[str] = field(default_factory=frozenset)
    strict_surface: bool = False

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not self.environment_variable:
            raise OptionsError("environment_variable cannot be empty")
        if self.max_depth < 1:
            raise OptionsError(f"max_depth must be at least 1, got {self.max_depth}")
        if self.min_secret_length < 1:
            raise OptionsError(
                f"min_secret_length must be at least 1, got {self.min_secret_length}"
            )
        if isinstance(self.ignore_secrets, str):
            raise OptionsError("ignore_secrets must be a collection of names, not a string")
        # normalise lists and sets passed by callers
        object.__setattr__(self, "ignore_secrets", frozenset(self.ignore_secrets))

    def current_environment(self, environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
        """Return the current environment name, read fresh from the store."""
        source = os.environ if environ is None else environ
        return source.get(self.environment_variable)

    def _matches(self, target: Optional[str], environ: Optional[Mapping[str, str]]) -> bool:
        return bool(target) and self.current_environment(environ) == target

    def is_disabled(self, environ: Optional[Mapping[str, str]] = None) -> bool:
        """Whether ``disable_on`` matches the current environment."""
        return self._matches(self.disable_on, environ)

    def is_console_disabled(self, environ: Optional[Mapping[str, str]] = None) -> bool:
        """Whether ``disable_console_on`` matches the current environment."""
        return self._matches(self.disable_console_on, environ)

    def build_scanner(self, environ: Optional[Mapping[str, str]] = None) -> SecretScanner:
        """Create a scanner configured with these options."""
        return SecretScanner(
            environ,
            max_depth=self.max_depth,
            min_secret_length=self.min_secret_length,
            ignore_secrets=self.ignore_secrets,
        )
