"""Console sinks.

``ConsoleSink`` describes the console surface the secure facade wraps and
exposes. ``LoggingBackend`` adapts that surface onto a standard library
``logging.Logger`` so console-style calls end up in regular log handlers.
"""

import logging
import pprint
import time
import traceback
from collections.abc import Mapping
from threading import Lock
from typing import Any, Iterable, Optional, Protocol, runtime_checkable

from secure_log.logging.setup import get_logger

DEFAULT_LABEL = "default"


@runtime_checkable
class ConsoleSink(Protocol):
    """Capability set of a console-style log sink.

    ``log``, ``debug``, ``info``, ``warn`` and ``error`` are the core
    message operations; the rest mirror the browser/Node console.
    """

    def log(self, *args: Any) -> None: ...
    def debug(self, *args: Any) -> None: ...
    def info(self, *args: Any) -> None: ...
    def warn(self, *args: Any) -> None: ...
    def error(self, *args: Any) -> None: ...
    def clear(self) -> None: ...
    def assert_(self, condition: Any = False, *args: Any) -> None: ...
    def count(self, label: str = DEFAULT_LABEL) -> None: ...
    def count_reset(self, label: str = DEFAULT_LABEL) -> None: ...
    def dir(self, obj: Any = None, options: Any = None) -> None: ...
    def dirxml(self, *args: Any) -> None: ...
    def group(self, *label: Any) -> None: ...
    def group_collapsed(self, *label: Any) -> None: ...
    def group_end(self) -> None: ...
    def table(self, tabular_data: Any = None, properties: Optional[Iterable[str]] = None) -> None: ...
    def time(self, label: str = DEFAULT_LABEL) -> None: ...
    def time_end(self, label: str = DEFAULT_LABEL) -> None: ...
    def time_log(self, label: str = DEFAULT_LABEL, *args: Any) -> None: ...
    def time_stamp(self, label: Optional[str] = None) -> None: ...
    def trace(self, *args: Any) -> None: ...
    def profile(self, label: Optional[str] = None) -> None: ...
    def profile_end(self, label: Optional[str] = None) -> None: ...


def render_arguments(args: Iterable[Any]) -> str:
    """Join console arguments the way a console prints them.

    Strings are used as-is, everything else through ``repr``.
    """
    return " ".join(arg if isinstance(arg, str) else repr(arg) for arg in args)


def format_table(tabular_data: Any, properties: Optional[Iterable[str]] = None) -> str:
    """Render rows as a plain text table with an ``(index)`` column.

    Args:
        tabular_data: A mapping or an iterable of rows. Rows that are
            mappings contribute one column per key; other rows fill a
            ``Values`` column.
        properties: Restrict the columns to these keys.

    Returns:
        The rendered table, or ``repr`` of the data if it has no rows.
    """
    if isinstance(tabular_data, Mapping):
        rows = list(tabular_data.items())
    elif isinstance(tabular_data, (list, tuple)):
        rows = list(enumerate(tabular_data))
    else:
        return repr(tabular_data)

    columns: list[str] = []
    has_values = False
    for _, row in rows:
        if isinstance(row, Mapping):
            for key in row:
                if str(key) not in columns:
                    columns.append(str(key))
        else:
            has_values = True

    if properties is not None:
        wanted = [str(p) for p in properties]
        columns = [c for c in wanted if c in columns]

    header = ["(index)"] + columns + (["Values"] if has_values else [])
    lines = [header]
    for index, row in rows:
        cells = [str(index)]
        if isinstance(row, Mapping):
            by_name = {str(k): v for k, v in row.items()}
            cells += [repr(by_name[c]) if c in by_name else "" for c in columns]
            if has_values:
                cells.append("")
        else:
            cells += [""] * len(columns)
            cells.append(repr(row))
        lines.append(cells)

    widths = [max(len(line[i]) for line in lines) for i in range(len(header))]
    return "\n".join(
        " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(line)).rstrip()
        for line in lines
    )


class LoggingBackend:
    """Console surface rendered onto a ``logging.Logger``.

    Example:
        >>> backend = LoggingBackend(logging.getLogger("app"))
        >>> backend.log("connected", {"retries": 2})  # INFO "connected {'retries': 2}"
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """Initialize the backend.

        Args:
            logger: Target logger, defaults to the ``secure_log.console`` logger.
        """
        self._logger = logger or get_logger("secure_log.console")
        self._group_depth = 0
        self._counts: dict[str, int] = {}
        self._timers: dict[str, float] = {}
        # guards group depth, counters and timers
        self._lock = Lock()

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def group_depth(self) -> int:
        return self._group_depth

    def _emit(self, level: int, message: str) -> None:
        indent = "  " * self._group_depth
        self._logger.log(level, "%s", indent + message)

    def _emit_args(self, level: int, args: Iterable[Any]) -> None:
        self._emit(level, render_arguments(args))

    # Leveled messages

    def log(self, *args: Any) -> None:
        self._emit_args(logging.INFO, args)

    def debug(self, *args: Any) -> None:
        self._emit_args(logging.DEBUG, args)

    def info(self, *args: Any) -> None:
        self._emit_args(logging.INFO, args)

    def warn(self, *args: Any) -> None:
        self._emit_args(logging.WARNING, args)

    warning = warn

    def error(self, *args: Any) -> None:
        self._emit_args(logging.ERROR, args)

    # Remaining console surface

    def clear(self) -> None:
        """Loggers cannot be cleared; only the group indentation resets."""
        with self._lock:
            self._group_depth = 0

    def assert_(self, condition: Any = False, *args: Any) -> None:
        if condition:
            return
        message = "Assertion failed"
        if args:
            message += ": " + render_arguments(args)
        self._emit(logging.ERROR, message)

    def count(self, label: str = DEFAULT_LABEL) -> None:
        with self._lock:
            current = self._counts.get(label, 0) + 1
            self._counts[label] = current
        self._emit(logging.INFO, f"{label}: {current}")

    def count_reset(self, label: str = DEFAULT_LABEL) -> None:
        with self._lock:
            known = label in self._counts
            if known:
                self._counts[label] = 0
        if not known:
            self._emit(logging.WARNING, f"Count for '{label}' does not exist")

    def dir(self, obj: Any = None, options: Any = None) -> None:
        self._emit(logging.INFO, pprint.pformat(obj))

    def dirxml(self, *args: Any) -> None:
        self._emit_args(logging.INFO, args)

    def group(self, *label: Any) -> None:
        if label:
            self._emit_args(logging.INFO, label)
        with self._lock:
            self._group_depth += 1

    def group_collapsed(self, *label: Any) -> None:
        self.group(*label)

    def group_end(self) -> None:
        with self._lock:
            self._group_depth = max(0, self._group_depth - 1)

    def table(self, tabular_data: Any = None, properties: Optional[Iterable[str]] = None) -> None:
        self._emit(logging.INFO, format_table(tabular_data, properties))

    def time(self, label: str = DEFAULT_LABEL) -> None:
        with self._lock:
            started = label in self._timers
            if not started:
                self._timers[label] = time.perf_counter()
        if started:
            self._emit(logging.WARNING, f"Timer '{label}' already exists")

    def _elapsed_ms(self, label: str, *, stop: bool = False) -> Optional[float]:
        with self._lock:
            started = self._timers.pop(label, None) if stop else self._timers.get(label)
        if started is None:
            self._emit(logging.WARNING, f"Timer '{label}' does not exist")
            return None
        return (time.perf_counter() - started) * 1000

    def time_end(self, label: str = DEFAULT_LABEL) -> None:
        elapsed = self._elapsed_ms(label, stop=True)
        if elapsed is None:
            return
        self._emit(logging.INFO, f"{label}: {elapsed:.3f}ms")

    def time_log(self, label: str = DEFAULT_LABEL, *args: Any) -> None:
        elapsed = self._elapsed_ms(label)
        if elapsed is None:
            return
        message = f"{label}: {elapsed:.3f}ms"
        if args:
            message += " " + render_arguments(args)
        self._emit(logging.INFO, message)

    def time_stamp(self, label: Optional[str] = None) -> None:
        self._emit(logging.DEBUG, f"Timestamp: {label or DEFAULT_LABEL}")

    def trace(self, *args: Any) -> None:
        stack = "".join(traceback.format_stack()[:-1])
        message = "Trace"
        if args:
            message += ": " + render_arguments(args)
        self._emit(logging.INFO, f"{message}\n{stack}".rstrip())

    def profile(self, label: Optional[str] = None) -> None:
        self._emit(logging.DEBUG, f"Profile '{label or DEFAULT_LABEL}' started")

    def profile_end(self, label: Optional[str] = None) -> None:
        self._emit(logging.DEBUG, f"Profile '{label or DEFAULT_LABEL}' finished")
