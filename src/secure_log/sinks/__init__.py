"""
Secure console

- ConsoleSink: console capability set
- LoggingBackend: console surface on top of a logging.Logger
- SecureLog: facade scanning every message for secret values
- install / console: process-wide installation and access
"""

from secure_log.core.policy import leak_warning
from secure_log.sinks.backend import ConsoleSink, LoggingBackend, format_table, render_arguments
from secure_log.sinks.facade import (
    LOG_PREFIX,
    SKIP_VALIDATION,
    SKIP_VALIDATION_KEY,
    SecureLog,
    has_skip_marker,
)
from secure_log.sinks.registry import (
    console,
    create_secure_log,
    get_console,
    install,
    is_installed,
)

__all__ = [
    "ConsoleSink",
    "LOG_PREFIX",
    "LoggingBackend",
    "SKIP_VALIDATION",
    "SKIP_VALIDATION_KEY",
    "SecureLog",
    "console",
    "create_secure_log",
    "format_table",
    "get_console",
    "has_skip_marker",
    "install",
    "is_installed",
    "leak_warning",
    "render_arguments",
]
