"""Exception hierarchy for secure-log."""

from typing import Iterable


class SecureLogError(Exception):
    """Base class for all secure-log errors."""


class SecretLeakError(SecureLogError):
    """Raised when a log call would disclose a secret value.

    Attributes:
        secret_names: Names of the secrets found in the call's arguments,
            in the order they were detected.
    """

    def __init__(self, secret_names: Iterable[str] = ()):
        self.secret_names: tuple[str, ...] = tuple(dict.fromkeys(secret_names))
        super().__init__("potential secret leak")


class MethodNotImplementedError(SecureLogError, NotImplementedError):
    """Raised by console operations disabled with ``strict_surface``."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Method not implemented: {operation}")


class ScanDepthExceededError(SecureLogError):
    """Raised when a logged structure nests deeper than the scan limit."""

    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"Argument nesting exceeds maximum scan depth of {max_depth}")


class OptionsError(SecureLogError, ValueError):
    """Raised for invalid secure-log configuration."""
