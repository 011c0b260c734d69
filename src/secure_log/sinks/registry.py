"""
Process-wide console slot

Holds the current console sink and whether a SecureLog has been installed
into it. Call sites log through the ``console`` proxy, which always resolves
to the current sink, so installing the guard covers them without changes.
"""

from collections.abc import Mapping
from threading import Lock
from typing import Any, Optional

from secure_log.config.options import SecureLogOptions
from secure_log.logging.setup import get_logger
from secure_log.sinks.backend import ConsoleSink, LoggingBackend
from secure_log.sinks.facade import SecureLog

logger = get_logger(__name__)

_lock = Lock()
_current_sink: ConsoleSink = LoggingBackend()
_installed: bool = False


def get_console() -> ConsoleSink:
    """Return the current process-wide console sink."""
    return _current_sink


def is_installed() -> bool:
    """Whether a SecureLog has been installed as the process-wide console."""
    return _installed


def create_secure_log(
    backend: Optional[ConsoleSink] = None,
    options: Optional[SecureLogOptions] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> SecureLog:
    """Build a SecureLog around an explicit backend.

    Global state is left untouched.

    Args:
        backend: Sink to wrap, defaults to a new LoggingBackend.
        options: Leak policy.
        environ: Environment store, defaults to ``os.environ``.

    Returns:
        A new SecureLog.
    """
    return SecureLog(
        backend if backend is not None else LoggingBackend(),
        options,
        environ=environ,
    )


def install(
    options: Optional[SecureLogOptions] = None,
    backend: Optional[ConsoleSink] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> ConsoleSink:
    """Install a SecureLog as the process-wide console, at most once.

    If ``disable_on`` matches the current environment nothing is installed
    and the current sink is returned. If a SecureLog is already installed
    it is returned as-is and ``options`` and ``backend`` are ignored.

    Args:
        options: Leak policy for the new facade.
        backend: Sink to wrap, defaults to the current console sink.
        environ: Environment store, defaults to ``os.environ``.

    Returns:
        The process-wide console after the call.
    """
    global _current_sink, _installed

    options = options or SecureLogOptions()
    if options.is_disabled(environ):
        logger.debug("secure console not installed: disabled in %s", options.disable_on)
        return _current_sink

    with _lock:
        if _installed:
            return _current_sink

        secure = SecureLog(
            backend if backend is not None else _current_sink,
            options,
            environ=environ,
        )
        _current_sink = secure
        _installed = True

    logger.debug("secure console installed (warn_only=%s)", options.warn_only)
    return secure


class _ConsoleProxy:
    """Forwards attribute access to the current console sink."""

    def __getattr__(self, name: str) -> Any:
        return getattr(_current_sink, name)

    def __repr__(self) -> str:
        return f"<console proxy for {_current_sink!r}>"


console = _ConsoleProxy()
