"""
secure-log: keep environment secrets out of log output

A console-style logging facade and a standard library logging filter that
refuse to emit any message containing the value of an environment variable.
"""

__version__ = "1.0.0"

from secure_log.config import SecureLogOptions, load_options_from_yaml, options_from_env
from secure_log.sinks import (
    LOG_PREFIX,
    SKIP_VALIDATION,
    LoggingBackend,
    SecureLog,
    console,
    create_secure_log,
    get_console,
    install,
)
from secure_log.core import SecretScanner, scan
from secure_log.errors import (
    MethodNotImplementedError,
    OptionsError,
    ScanDepthExceededError,
    SecretLeakError,
    SecureLogError,
)
from secure_log.logging import SecretGuardFilter, install_logging_guard

__all__ = [
    "LOG_PREFIX",
    "LoggingBackend",
    "MethodNotImplementedError",
    "OptionsError",
    "SKIP_VALIDATION",
    "ScanDepthExceededError",
    "SecretGuardFilter",
    "SecretLeakError",
    "SecretScanner",
    "SecureLog",
    "SecureLogError",
    "SecureLogOptions",
    "console",
    "create_secure_log",
    "get_console",
    "install",
    "install_logging_guard",
    "load_options_from_yaml",
    "options_from_env",
    "scan",
]
