"""Configuration module for secure-log."""

from secure_log.config.options import DEFAULT_ENVIRONMENT_VARIABLE, SecureLogOptions
from secure_log.config.loader import (
    load_options_from_yaml,
    options_from_env,
    options_from_mapping,
)

__all__ = [
    "DEFAULT_ENVIRONMENT_VARIABLE",
    "SecureLogOptions",
    "load_options_from_yaml",
    "options_from_env",
    "options_from_mapping",
]
