"""Logging configuration for secure-log.

Routes the root logger through one stdout handler whose records are tagged
with the deployment environment, formatted as JSON or text, and optionally
checked by the secret guard before they are written.
"""

import logging
import os
import sys
from typing import Any, Optional

from pythonjsonlogger import jsonlogger

from secure_log.config.options import DEFAULT_ENVIRONMENT_VARIABLE, SecureLogOptions
from secure_log.logging.guard import install_logging_guard

SERVICE_NAME = "secure-log"

LEVEL_VARIABLE = "SECURE_LOG_LEVEL"
FORMAT_VARIABLE = "SECURE_LOG_FORMAT"

JSON_FIELDS = "%(asctime)s %(levelname)s %(name)s %(message)s"
TEXT_FORMAT = "%(asctime)s %(levelname)-8s [%(environment)s] %(name)s: %(message)s"

# JsonFormatter field name -> emitted name
_RENAMED_FIELDS = {"levelname": "level", "asctime": "timestamp"}


class EnvironmentContextFilter(logging.Filter):
    """Tag records with the environment name they were emitted in."""

    def __init__(self, environment_variable: str = DEFAULT_ENVIRONMENT_VARIABLE):
        super().__init__()
        self.environment_variable = environment_variable

    def filter(self, record: logging.LogRecord) -> bool:
        record.environment = os.getenv(self.environment_variable) or "-"
        return True


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter emitting ``level``, ``timestamp``, ``service`` and
    ``environment`` fields."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        for source, target in _RENAMED_FIELDS.items():
            if source in log_record:
                log_record[target] = log_record.pop(source)

        log_record["service"] = SERVICE_NAME
        log_record["environment"] = getattr(record, "environment", "-")


def build_formatter(json_format: bool) -> logging.Formatter:
    """Return the JSON or plain text formatter."""
    if json_format:
        return CustomJsonFormatter(fmt=JSON_FIELDS, datefmt="%Y-%m-%dT%H:%M:%S%z")
    return logging.Formatter(fmt=TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging(
    level: Optional[str] = None,
    json_format: Optional[bool] = None,
    *,
    options: Optional[SecureLogOptions] = None,
    guard: bool = False,
) -> logging.Handler:
    """Configure the root logger.

    Existing root handlers are replaced by a single stdout handler.

    Args:
        level: Log level name. Defaults to ``SECURE_LOG_LEVEL`` or INFO.
        json_format: Emit JSON lines. Defaults to ``SECURE_LOG_FORMAT``
            being ``json`` (the default) rather than ``text``.
        options: Supplies the environment variable records are tagged
            with and, with ``guard``, the leak policy.
        guard: Attach a SecretGuardFilter to the new handler.

    Returns:
        The installed handler.
    """
    options = options or SecureLogOptions()
    level = (level or os.getenv(LEVEL_VARIABLE, "INFO")).upper()
    if json_format is None:
        json_format = os.getenv(FORMAT_VARIABLE, "json").lower() == "json"

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.addFilter(EnvironmentContextFilter(options.environment_variable))
    handler.setFormatter(build_formatter(json_format))

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    if guard:
        install_logging_guard(root_logger, options)
    return handler


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a secure-log module."""
    return logging.getLogger(name)
