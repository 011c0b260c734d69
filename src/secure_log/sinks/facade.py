"""
Guarded console facade

``SecureLog`` exposes the full console surface. Message operations are
scanned for secret values before they reach the wrapped backend; a leak
either aborts the call or, with ``warn_only``, is reported and let through.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Iterable, Optional

from secure_log.config.options import SecureLogOptions
from secure_log.core.policy import enforce_leak_policy, leak_warning
from secure_log.errors import MethodNotImplementedError
from secure_log.logging.setup import get_logger
from secure_log.metrics.collectors import record_scan, record_scan_failure
from secure_log.sinks.backend import DEFAULT_LABEL, ConsoleSink

logger = get_logger(__name__)

LOG_PREFIX = "Onboardbase Signatures here:"

SKIP_VALIDATION_KEY = "skip_validation_check"

# camelCase spelling used by existing console callers
SKIP_VALIDATION_ALIASES = (SKIP_VALIDATION_KEY, "skipValidationCheck")

# Pass as the second argument of error() to forward the first one unscanned
SKIP_VALIDATION: Mapping[str, bool] = MappingProxyType({SKIP_VALIDATION_KEY: True})


def has_skip_marker(args: tuple[Any, ...]) -> bool:
    """Whether the second positional argument carries the skip-validation marker."""
    if len(args) < 2:
        return False
    marker = args[1]
    if not isinstance(marker, Mapping):
        return False
    return any(marker.get(key) for key in SKIP_VALIDATION_ALIASES)


class SecureLog:
    """Console facade that refuses to log secret values.

    The facade never touches global state; use
    ``secure_log.sinks.registry.install`` to make it the process-wide
    console.

    Example:
        >>> secure = SecureLog(backend, environ={"API_KEY": "sk-123"})
        >>> secure.log("hello")                   # forwarded with the source marker
        >>> secure.log("connecting with sk-123")  # raises SecretLeakError
    """

    def __init__(
        self,
        backend: Optional[ConsoleSink],
        options: Optional[SecureLogOptions] = None,
        *,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """Initialize the facade.

        Args:
            backend: Sink receiving the forwarded calls.
            options: Leak policy, defaults to abort on leak.
            environ: Environment store for secrets and the environment
                name, defaults to ``os.environ``.
        """
        self.options = options or SecureLogOptions()
        self._environ = environ
        self._scanner = self.options.build_scanner(environ)

        # inert: no backend, every call is a no-op
        if self.options.is_disabled(environ):
            self._backend: Optional[ConsoleSink] = None
        else:
            self._backend = backend

    @property
    def backend(self) -> Optional[ConsoleSink]:
        """The wrapped sink, or None for an inert facade."""
        return self._backend

    @property
    def is_inert(self) -> bool:
        return self._backend is None

    def __repr__(self) -> str:
        return f"SecureLog(backend={self._backend!r}, warn_only={self.options.warn_only})"

    def _silenced(self) -> bool:
        return self._backend is None or self.options.is_console_disabled(self._environ)

    def _report_leak(self, secret_name: str, value: str) -> None:
        self._backend.warn(leak_warning(secret_name))

    def _passes_scan(self, operation: str, args: Iterable[Any]) -> bool:
        """Scan ``args`` and apply the leak policy.

        Returns:
            True if the call may be forwarded, False if it was abandoned
            because the scan itself failed.

        Raises:
            SecretLeakError: If a secret was found and ``warn_only`` is off.
        """
        record_scan(operation)
        try:
            result = self._scanner.scan(args, on_leak=self._report_leak)
        except Exception as e:
            record_scan_failure(e)
            logger.debug("Secret scan of %s() call abandoned", operation, exc_info=True)
            self.error(e, SKIP_VALIDATION)
            return False

        enforce_leak_policy(result, warn_only=self.options.warn_only, operation=operation)
        return True

    def _leveled(self, operation: str, args: tuple[Any, ...]) -> None:
        if self._silenced():
            return
        if not self._passes_scan(operation, args):
            return
        getattr(self._backend, operation)(LOG_PREFIX, *args)

    def _strict(self, operation: str) -> None:
        if self.options.strict_surface:
            raise MethodNotImplementedError(operation)

    # Scanned message operations

    def log(self, *args: Any) -> None:
        self._leveled("log", args)

    def debug(self, *args: Any) -> None:
        self._leveled("debug", args)

    def info(self, *args: Any) -> None:
        self._leveled("info", args)

    def warn(self, *args: Any) -> None:
        self._leveled("warn", args)

    warning = warn

    def error(self, *args: Any) -> None:
        """Scanned like the other levels unless the second argument is
        ``SKIP_VALIDATION``, in which case only the first argument is
        forwarded, unscanned.
        """
        if has_skip_marker(args):
            if self._silenced():
                return
            self._backend.error(LOG_PREFIX, args[0])
            return
        self._leveled("error", args)

    # Forwarded without scanning or policy checks

    def clear(self) -> None:
        if self._backend is not None:
            self._backend.clear()

    def assert_(self, condition: Any = False, *args: Any) -> None:
        if self._backend is not None:
            self._backend.assert_(condition, *args)

    def profile(self, label: Optional[str] = None) -> None:
        if self._backend is not None:
            self._backend.profile(label)

    def profile_end(self, label: Optional[str] = None) -> None:
        if self._backend is not None:
            self._backend.profile_end(label)

    # Remaining console surface, label-only

    def count(self, label: str = DEFAULT_LABEL) -> None:
        self._strict("count")
        if not self._silenced():
            self._backend.count(label)

    def count_reset(self, label: str = DEFAULT_LABEL) -> None:
        self._strict("count_reset")
        if not self._silenced():
            self._backend.count_reset(label)

    def group_end(self) -> None:
        self._strict("group_end")
        if not self._silenced():
            self._backend.group_end()

    def time(self, label: str = DEFAULT_LABEL) -> None:
        self._strict("time")
        if not self._silenced():
            self._backend.time(label)

    def time_end(self, label: str = DEFAULT_LABEL) -> None:
        self._strict("time_end")
        if not self._silenced():
            self._backend.time_end(label)

    def time_stamp(self, label: Optional[str] = None) -> None:
        self._strict("time_stamp")
        if not self._silenced():
            self._backend.time_stamp(label)

    # Remaining console surface, data-carrying and scanned

    def dir(self, obj: Any = None, options: Any = None) -> None:
        self._strict("dir")
        if not self._silenced() and self._passes_scan("dir", (obj,)):
            self._backend.dir(obj, options)

    def dirxml(self, *args: Any) -> None:
        self._strict("dirxml")
        if not self._silenced() and self._passes_scan("dirxml", args):
            self._backend.dirxml(*args)

    def group(self, *label: Any) -> None:
        self._strict("group")
        if not self._silenced() and self._passes_scan("group", label):
            self._backend.group(*label)

    def group_collapsed(self, *label: Any) -> None:
        self._strict("group_collapsed")
        if not self._silenced() and self._passes_scan("group_collapsed", label):
            self._backend.group_collapsed(*label)

    def table(self, tabular_data: Any = None, properties: Optional[Iterable[str]] = None) -> None:
        self._strict("table")
        if not self._silenced() and self._passes_scan("table", (tabular_data,)):
            self._backend.table(tabular_data, properties)

    def time_log(self, label: str = DEFAULT_LABEL, *args: Any) -> None:
        self._strict("time_log")
        if not self._silenced() and self._passes_scan("time_log", args):
            self._backend.time_log(label, *args)

    def trace(self, *args: Any) -> None:
        self._strict("trace")
        if not self._silenced() and self._passes_scan("trace", args):
            self._backend.trace(*args)
