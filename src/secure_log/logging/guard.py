"""Secret guard for the standard library logging hierarchy.

``SecretGuardFilter`` applies the same scan and leak policy as the secure
console to ``LogRecord`` objects, so existing ``logging`` call sites are
covered without changes.
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from secure_log.config.options import SecureLogOptions
from secure_log.core.policy import enforce_leak_policy, leak_warning
from secure_log.metrics.collectors import record_scan, record_scan_failure

GUARD_LOGGER_NAME = "secure_log.guard"


def record_arguments(record: logging.LogRecord) -> list[Any]:
    """Return the values of a record that end up in the formatted message."""
    arguments: list[Any] = [record.msg]
    if isinstance(record.args, Mapping):
        arguments.append(record.args)
    elif record.args:
        arguments.extend(record.args)
    return arguments


class SecretGuardFilter(logging.Filter):
    """Filter that blocks or reports records containing secret values.

    Leaks are reported as WARNING records on the ``secure_log.guard``
    logger. Under the default policy the filter then raises
    SecretLeakError out of the logging call; with ``warn_only`` the record
    is let through.
    """

    def __init__(
        self,
        options: Optional[SecureLogOptions] = None,
        *,
        environ: Optional[Mapping[str, str]] = None,
        reporter: Optional[logging.Logger] = None,
    ):
        """Initialize the filter.

        Args:
            options: Leak policy.
            environ: Environment store, defaults to ``os.environ``.
            reporter: Logger receiving leak warnings and scan failures.
        """
        super().__init__()
        self.options = options or SecureLogOptions()
        self._environ = environ
        self._scanner = self.options.build_scanner(environ)
        self._reporter = reporter or logging.getLogger(GUARD_LOGGER_NAME)

    @property
    def reporter(self) -> logging.Logger:
        return self._reporter

    def _report_leak(self, secret_name: str, value: str) -> None:
        self._reporter.warning(leak_warning(secret_name))

    def filter(self, record: logging.LogRecord) -> bool:
        """Scan the record and apply the leak policy.

        Raises:
            SecretLeakError: If the record leaks a secret and ``warn_only``
                is off.
        """
        # own reports are never re-scanned
        if record.name == self._reporter.name:
            return True
        if self.options.is_console_disabled(self._environ):
            return True

        operation = record.levelname.lower()
        record_scan(operation)
        try:
            result = self._scanner.scan(record_arguments(record), on_leak=self._report_leak)
        except Exception as e:
            record_scan_failure(e)
            self._reporter.error("Secret scan of record from %s abandoned: %s", record.name, e)
            return False

        enforce_leak_policy(result, warn_only=self.options.warn_only, operation=operation)
        return True


def install_logging_guard(
    logger: Optional[logging.Logger] = None,
    options: Optional[SecureLogOptions] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> SecretGuardFilter:
    """Attach a SecretGuardFilter to a logger.

    The filter is added to every handler of the logger, so records
    propagated from child loggers are checked too. A logger without
    handlers gets the filter on the logger itself. If a target already
    carries a guard (a handler shared with another guarded logger, or a
    repeated call), that guard is reused and added to the targets still
    missing one; ``options`` and ``environ`` are then ignored.

    Args:
        logger: Target logger, defaults to the root logger.
        options: Leak policy.
        environ: Environment store, defaults to ``os.environ``.

    Returns:
        The guard now attached to every target.
    """
    logger = logger or logging.getLogger()
    targets: list[logging.Filterer] = list(logger.handlers) or [logger]

    guard = next(
        (f for target in targets for f in target.filters if isinstance(f, SecretGuardFilter)),
        None,
    )
    if guard is None:
        guard = SecretGuardFilter(options, environ=environ)

    for target in targets:
        if not any(isinstance(f, SecretGuardFilter) for f in target.filters):
            target.addFilter(guard)
    return guard
