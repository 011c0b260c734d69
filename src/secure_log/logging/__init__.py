"""Logging configuration and secret guard for secure-log."""

from secure_log.logging.guard import SecretGuardFilter, install_logging_guard
from secure_log.logging.setup import build_formatter, get_logger, setup_logging

__all__ = [
    "SecretGuardFilter",
    "build_formatter",
    "get_logger",
    "install_logging_guard",
    "setup_logging",
]
