"""
Loggable value classification

Sorts every value passed to a log call into a small set of kinds so the
scanner can walk arbitrarily nested arguments with a single dispatch.
"""

import dataclasses
from collections import deque
from collections.abc import ItemsView, KeysView, Mapping, ValuesView
from enum import Enum
from types import ModuleType
from typing import Any, Iterable


class ValueKind(str, Enum):
    """Kinds of loggable values."""
    STRING = "string"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    OBJECT = "object"
    EMPTY = "empty"
    OTHER = "other"


SEQUENCE_TYPES = (list, tuple, set, frozenset, deque, KeysView, ValuesView, ItemsView)

TEXT_TYPES = (str, bytes, bytearray)

# Kinds whose children are scanned
CONTAINER_KINDS = frozenset({ValueKind.MAPPING, ValueKind.SEQUENCE, ValueKind.OBJECT})


def _is_dataclass_instance(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _slot_names(cls: type) -> Iterable[str]:
    slots = cls.__dict__.get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    for name in slots:
        if name in ("__dict__", "__weakref__"):
            continue
        # private slots are stored under their mangled name
        if name.startswith("__") and not name.endswith("__"):
            name = f"_{cls.__name__.lstrip('_')}{name}"
        yield name


def instance_attributes(value: Any) -> dict[str, Any]:
    """Return the attributes set on an instance.

    Covers both ``__dict__`` entries and filled ``__slots__``. Classes and
    modules have no instance attributes.
    """
    if isinstance(value, (type, ModuleType)):
        return {}

    attributes = dict(getattr(value, "__dict__", None) or {})
    for cls in type(value).__mro__:
        for name in _slot_names(cls):
            if name not in attributes and hasattr(value, name):
                attributes[name] = getattr(value, name)
    return attributes


def as_text(value: str | bytes | bytearray) -> str:
    """Return a STRING value as text, decoding bytes as UTF-8."""
    if isinstance(value, str):
        return value
    return bytes(value).decode("utf-8", errors="replace")


def classify_value(value: Any) -> ValueKind:
    """Classify a single log argument.

    Empty containers are reported as EMPTY rather than as their container
    kind, so they are skipped without recursion. Exceptions and instances
    carrying attributes are OBJECTs, so whatever their ``repr`` may show
    gets scanned.

    Args:
        value: Any value passed to a log call.

    Returns:
        The ValueKind of the value.

    Example:
        >>> classify_value("token")
        <ValueKind.STRING: 'string'>
        >>> classify_value({})
        <ValueKind.EMPTY: 'empty'>
        >>> classify_value(42)
        <ValueKind.OTHER: 'other'>
    """
    if isinstance(value, TEXT_TYPES):
        return ValueKind.STRING

    if isinstance(value, Mapping):
        return ValueKind.MAPPING if len(value) else ValueKind.EMPTY

    if isinstance(value, SEQUENCE_TYPES):
        return ValueKind.SEQUENCE if len(value) else ValueKind.EMPTY

    if _is_dataclass_instance(value):
        return ValueKind.OBJECT if dataclasses.fields(value) else ValueKind.EMPTY

    if isinstance(value, BaseException):
        return ValueKind.OBJECT if value.args or instance_attributes(value) else ValueKind.EMPTY

    if instance_attributes(value):
        return ValueKind.OBJECT

    return ValueKind.OTHER


def child_values(value: Any, kind: ValueKind | None = None) -> Iterable[Any]:
    """Return the values nested directly inside a container value.

    Only mapping values are returned, never keys. Exceptions contribute
    their ``args`` followed by their attributes.

    Args:
        value: The container value.
        kind: Precomputed kind of ``value``, classified when omitted.

    Returns:
        The direct children, or an empty tuple for non-container kinds.
    """
    if kind is None:
        kind = classify_value(value)

    if kind is ValueKind.MAPPING:
        return list(value.values())
    if kind is ValueKind.SEQUENCE:
        return list(value)
    if kind is ValueKind.OBJECT:
        if _is_dataclass_instance(value):
            return [getattr(value, f.name) for f in dataclasses.fields(value)]
        children = list(instance_attributes(value).values())
        if isinstance(value, BaseException):
            children = list(value.args) + children
        return children
    return ()
